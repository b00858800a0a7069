"""Sync targets and the snapshot-store keys they map to.

A target is one unit of synchronization. Repository issue and repository
project targets for the same repository share a key on purpose: they address
the `issues` and `projects` sub-fields of one repository snapshot.
"""

from dataclasses import dataclass
from enum import Enum


class ProjectKind(str, Enum):
    """Enum for the owner type of an external project."""

    ORG = "org"
    USER = "user"


def _validate_name(value: str, field: str) -> None:
    if not value or "/" in value:
        raise ValueError(f"{field} must be a non-empty name without '/', got '{value}'")


def repository_key(owner: str, repo: str) -> str:
    """Snapshot-store key for a repository."""
    return f"{owner}/{repo}"


def project_key(kind: ProjectKind, owner: str, number: int) -> str:
    """Snapshot-store key for an organization or user project."""
    return f"{kind.value}/{owner}/{number}"


@dataclass(frozen=True)
class RepositoryIssues:
    """The issues of one repository."""

    owner: str
    repo: str
    disabled: bool = False

    def __post_init__(self) -> None:
        """Reject names that would make keys ambiguous."""
        _validate_name(self.owner, "owner")
        _validate_name(self.repo, "repo")

    @property
    def key(self) -> str:
        """Snapshot-store key for this target."""
        return repository_key(self.owner, self.repo)


@dataclass(frozen=True)
class RepositoryProjects:
    """The classic projects attached to one repository."""

    owner: str
    repo: str
    disabled: bool = False

    def __post_init__(self) -> None:
        """Reject names that would make keys ambiguous."""
        _validate_name(self.owner, "owner")
        _validate_name(self.repo, "repo")

    @property
    def key(self) -> str:
        """Snapshot-store key for this target."""
        return repository_key(self.owner, self.repo)


@dataclass(frozen=True)
class ExternalProject:
    """One classic project owned by an organization or a user."""

    owner: str
    number: int
    kind: ProjectKind = ProjectKind.ORG
    disabled: bool = False

    def __post_init__(self) -> None:
        """Reject names that would make keys ambiguous."""
        _validate_name(self.owner, "owner")

    @property
    def key(self) -> str:
        """Snapshot-store key for this target."""
        return project_key(self.kind, self.owner, self.number)


SyncTarget = RepositoryIssues | RepositoryProjects | ExternalProject
