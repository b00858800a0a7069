"""Pydantic Settings model for application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from github_issue_mirror.utils.constants import (
    DEFAULT_CACHE_FILE,
    DEFAULT_GITHUB_API_URL,
    DEFAULT_INTER_TARGET_DELAY,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TARGETS_FILE,
    DEFAULT_USER_AGENT,
)


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # GitHub API settings
    GITHUB_API_URL: str = DEFAULT_GITHUB_API_URL
    GITHUB_PAT_TOKEN: str | None = None
    GITHUB_USER_AGENT: str = DEFAULT_USER_AGENT
    REQUEST_TIMEOUT: float = DEFAULT_REQUEST_TIMEOUT

    # Synchronization settings
    INTER_TARGET_DELAY: float = DEFAULT_INTER_TARGET_DELAY
    TARGETS_FILE: Path = Path(DEFAULT_TARGETS_FILE)
    CACHE_FILE: Path = Path(DEFAULT_CACHE_FILE)


def get_settings() -> Settings:
    """Read settings from the environment and the .env file."""
    return Settings()
