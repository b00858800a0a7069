"""Shared constants used across the application."""

# GitHub API Constants
# --------------------

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Default REST API origin. Override for GitHub Enterprise Server."""

DEFAULT_USER_AGENT = "github-issue-mirror"
"""Client agent string sent with every request."""

GITHUB_V3_ACCEPT = "application/vnd.github.v3+json"
"""Accept header pinning the REST response schema version."""

GITHUB_PROJECTS_PREVIEW_ACCEPT = "application/vnd.github.inertia-preview+json"
"""Accept header required by the classic projects endpoints."""

GITHUB_COMMIT_SEARCH_ACCEPT = "application/vnd.github.cloak-preview+json"
"""Accept header for the commit search endpoint."""

RATE_LIMIT_REMAINING_HEADER = "X-RateLimit-Remaining"
"""Response header carrying the remaining primary rate-limit budget."""

DEFAULT_PER_PAGE = 100
"""Largest page size the REST API allows. Only the first page is fetched per sync cycle."""

DEFAULT_REQUEST_TIMEOUT = 30.0
"""Per-request timeout in seconds. A hung request would otherwise stall the whole batch."""

# Synchronization Constants
# -------------------------

DEFAULT_INTER_TARGET_DELAY = 0.1
"""Seconds awaited between consecutive targets to stay clear of secondary (abuse) rate limits."""

# Default File Settings
# ---------------------

DEFAULT_TARGETS_FILE = "targets.yaml"
"""Default path to the YAML file listing repositories and projects to sync."""

DEFAULT_CACHE_FILE = ".github-issue-mirror/cache.json"
"""Default path to the JSON snapshot cache."""
