"""Contains the value returned by transport calls."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class FetchResult(Generic[T]):
    """Decoded response body plus the rate-limit budget GitHub reported with it."""

    data: T
    rate_limit_remaining: int | None = None
