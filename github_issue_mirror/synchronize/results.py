"""Contains results of synchronization runs."""

from dataclasses import dataclass
from typing import Generic, TypeVar

S = TypeVar("S")


@dataclass
class SyncOutcome:
    """Per-target report returned to callers. Never persisted."""

    success: bool
    error: str | None = None
    record_count: int | None = None
    rate_limit_remaining: int | None = None

    @classmethod
    def failure(cls, error: str, rate_limit_remaining: int | None = None) -> "SyncOutcome":
        """Build a failed outcome."""
        return cls(success=False, error=error, rate_limit_remaining=rate_limit_remaining)


class TargetSyncResult(Generic[S]):
    """Contains the result of synchronizing a single target.

    `snapshot` is None when the sync failed; the caller keeps its previous
    snapshot in that case.
    """

    def __init__(self, snapshot: S | None, outcome: SyncOutcome) -> None:
        """Initialize the result with the updated snapshot and the outcome."""
        self.snapshot = snapshot
        self.outcome = outcome


class BatchSyncResult(Generic[S]):
    """Contains the results of synchronizing a batch of targets."""

    def __init__(self, snapshots: dict[str, S], outcomes: dict[str, SyncOutcome]) -> None:
        """Initialize the result with the updated snapshot map and per-target outcomes."""
        self.snapshots = snapshots
        self.outcomes = outcomes

    @property
    def total(self) -> int:
        """Number of targets that were processed."""
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        """Number of targets that synced successfully."""
        return sum(1 for outcome in self.outcomes.values() if outcome.success)

    @property
    def failed(self) -> int:
        """Number of targets that failed."""
        return self.total - self.succeeded

    @property
    def all_succeeded(self) -> bool:
        """Whether every processed target succeeded."""
        return self.failed == 0

    def failures(self) -> dict[str, SyncOutcome]:
        """Outcomes of the targets that failed, keyed by target key."""
        return {key: outcome for key, outcome in self.outcomes.items() if not outcome.success}

    def summary(self) -> str:
        """One-line summary suitable for showing to a user."""
        if self.total == 0:
            return "No targets to sync"
        if self.all_succeeded:
            noun = "target" if self.total == 1 else "targets"
            return f"{self.total} {noun} synced successfully"
        return f"{self.succeeded}/{self.total} succeeded, check details"
