"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_INTER_TARGET_DELAY,
    DEFAULT_PER_PAGE,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_USER_AGENT,
    RATE_LIMIT_REMAINING_HEADER,
)

__all__ = [
    "DEFAULT_INTER_TARGET_DELAY",
    "DEFAULT_PER_PAGE",
    "DEFAULT_REQUEST_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "RATE_LIMIT_REMAINING_HEADER",
]
