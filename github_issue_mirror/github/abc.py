"""Base ABC for GitHub clients."""

from abc import ABC, abstractmethod
from typing import Any

from github_issue_mirror.github.models import FetchResult
from github_issue_mirror.synchronize.targets import ProjectKind


class GitHubClientBase(ABC):
    """Base ABC for GitHub clients.

    Implementations return raw decoded JSON and raise TransportError on any
    failure. They never retry.
    """

    # Identity
    @abstractmethod
    async def get_authenticated_user(self) -> FetchResult[dict[str, Any]]:
        """Get the account the credential authenticates as."""
        pass

    # Issues
    @abstractmethod
    async def list_repository_issues(self, owner: str, repo: str, since: str | None = None) -> FetchResult[list[dict[str, Any]]]:
        """List the most recently updated issues of a repository, optionally only those updated at or after `since`."""
        pass

    @abstractmethod
    async def count_issue_commits(self, owner: str, repo: str, issue_number: int) -> int:
        """Count commits in a repository that reference an issue number."""
        pass

    # Projects
    @abstractmethod
    async def list_repository_projects(self, owner: str, repo: str) -> FetchResult[list[dict[str, Any]]]:
        """List the classic projects of a repository."""
        pass

    @abstractmethod
    async def list_owner_projects(self, owner: str, kind: ProjectKind) -> FetchResult[list[dict[str, Any]]]:
        """List the classic projects of an organization or a user."""
        pass
