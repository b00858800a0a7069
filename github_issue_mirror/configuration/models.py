"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class SyncConfig:
    """Resolved configuration handed explicitly to the sync workflows."""

    debug: bool
    github_api_url: str
    github_pat_token: str
    github_user_agent: str
    request_timeout: float
    inter_target_delay: float
    targets_file: Path
    cache_file: Path
