"""Reconcile command line options, environment variables and the targets file."""

from pathlib import Path

from pydantic import ValidationError
from ruamel.yaml.error import YAMLError

from github_issue_mirror.configuration.env import Settings
from github_issue_mirror.configuration.exceptions import GitHubAuthenticationConfigurationUndefinedError, TargetsConfigurationError
from github_issue_mirror.configuration.models import SyncConfig
from github_issue_mirror.schemas.targets import TargetsYAMLModel
from github_issue_mirror.utils.yaml import load_yaml_file


async def validate_github_authentication_configuration(github_pat_token: str | None) -> str:
    """Validates the GitHub authentication configuration.

    Args:
        github_pat_token (str | None): The GitHub PAT token.

    Raises:
        GitHubAuthenticationConfigurationUndefinedError: If no token is configured.

    Returns:
        str: The token, stripped of surrounding whitespace.
    """
    if github_pat_token is None or not github_pat_token.strip():
        raise GitHubAuthenticationConfigurationUndefinedError(
            "No GitHub authentication configuration provided. Please provide a token with --github-pat-token or GITHUB_PAT_TOKEN."
        )
    return github_pat_token.strip()


async def load_targets_configuration(targets_file: Path) -> TargetsYAMLModel:
    """Load and validate the YAML file listing repositories and projects to sync.

    Raises:
        TargetsConfigurationError: If the file is missing, is not valid YAML, or does not match the schema.
    """
    if not targets_file.exists():
        raise TargetsConfigurationError(str(targets_file), "file not found")
    try:
        content = load_yaml_file(targets_file)
    except (OSError, YAMLError) as exc:
        raise TargetsConfigurationError(str(targets_file), f"failed to parse YAML ({exc})") from exc
    try:
        return TargetsYAMLModel.model_validate(content or {})
    except ValidationError as exc:
        raise TargetsConfigurationError(str(targets_file), str(exc)) from exc


async def reconcile_sync_configuration(
    settings: Settings,
    debug: bool | None = None,
    github_api_url: str | None = None,
    github_pat_token: str | None = None,
    github_user_agent: str | None = None,
    request_timeout: float | None = None,
    inter_target_delay: float | None = None,
    targets_file: Path | None = None,
    cache_file: Path | None = None,
    require_token: bool = True,
) -> SyncConfig:
    """Resolve each setting from the command line first, then the environment and .env file.

    Raises:
        GitHubAuthenticationConfigurationUndefinedError: If a token is required but none is configured.
        ValueError: If the request timeout is not positive or the inter-target delay is negative.
    """
    token = github_pat_token if github_pat_token is not None else settings.GITHUB_PAT_TOKEN
    if require_token:
        token = await validate_github_authentication_configuration(token)

    resolved_timeout = request_timeout if request_timeout is not None else settings.REQUEST_TIMEOUT
    if resolved_timeout <= 0:
        raise ValueError(f"Request timeout must be positive, got {resolved_timeout}")
    resolved_delay = inter_target_delay if inter_target_delay is not None else settings.INTER_TARGET_DELAY
    if resolved_delay < 0:
        raise ValueError(f"Inter-target delay must not be negative, got {resolved_delay}")

    return SyncConfig(
        debug=debug if debug is not None else settings.DEBUG,
        github_api_url=github_api_url or settings.GITHUB_API_URL,
        github_pat_token=token or "",
        github_user_agent=github_user_agent or settings.GITHUB_USER_AGENT,
        request_timeout=resolved_timeout,
        inter_target_delay=resolved_delay,
        targets_file=targets_file or settings.TARGETS_FILE,
        cache_file=cache_file or settings.CACHE_FILE,
    )
