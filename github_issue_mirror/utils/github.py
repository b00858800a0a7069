"""Contains utility functions for GitHub interactions."""

from collections.abc import Mapping
from datetime import datetime, timezone

from github_issue_mirror.utils.constants import RATE_LIMIT_REMAINING_HEADER


async def split_repository_in_configuration(repo: str | None) -> tuple[str, str]:
    """Splits a repository in 'owner/repo' format into owner and repository."""
    if repo is None:
        raise ValueError("Repository must be provided in 'owner/repo' format.")
    repo = repo.strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Repository must be in the format 'owner/repo' with no leading/trailing slashes or extra parts.")
    owner, repository = parts
    return owner, repository


def parse_rate_limit_remaining(headers: Mapping[str, str] | None) -> int | None:
    """Read the remaining rate-limit budget from response headers.

    Returns None when the header is missing or is not an integer.
    """
    if headers is None:
        return None
    value = headers.get(RATE_LIMIT_REMAINING_HEADER)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with microsecond precision and a 'Z' suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")
