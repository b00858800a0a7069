"""Type hints for the synchronize module."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class HasId(Protocol):
    """Protocol for records that have a provider-assigned id."""

    id: int
