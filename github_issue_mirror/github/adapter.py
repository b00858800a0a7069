"""GitHub client adapter for the githubkit library."""

from functools import wraps
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import RequestError, RequestFailed, RequestTimeout

from github_issue_mirror.synchronize.targets import ProjectKind
from github_issue_mirror.utils.constants import (
    DEFAULT_GITHUB_API_URL,
    DEFAULT_PER_PAGE,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_USER_AGENT,
    GITHUB_COMMIT_SEARCH_ACCEPT,
    GITHUB_PROJECTS_PREVIEW_ACCEPT,
    GITHUB_V3_ACCEPT,
)
from github_issue_mirror.utils.github import parse_rate_limit_remaining

from .abc import GitHubClientBase
from .client import GitHubClient, get_github_pat_client
from .exceptions import TransportError
from .models import FetchResult

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_github_errors(func: F) -> F:
    """Decorator translating githubkit failures into TransportError, logging the details."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            status_code = exc.response.status_code
            reason = getattr(exc.response.raw_response, "reason_phrase", "") or ""
            rate_limit_remaining = parse_rate_limit_remaining(exc.response.headers)
            logger.error(
                "GitHub request failed",
                function=func.__name__,
                status_code=status_code,
                reason=reason,
                rate_limit_remaining=rate_limit_remaining,
            )
            raise TransportError(
                f"GitHub request failed in {func.__name__}: {status_code} {reason}".rstrip(),
                status_code=status_code,
                rate_limit_remaining=rate_limit_remaining,
            ) from exc
        except (RequestError, RequestTimeout) as exc:
            logger.error("GitHub request could not be completed", function=func.__name__, error=str(exc))
            raise TransportError(f"Network error in {func.__name__}: {exc}") from exc

    return wrapper  # type: ignore


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client

    @classmethod
    def create(
        cls,
        github_pat_token: str,
        github_api_url: str = DEFAULT_GITHUB_API_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> Self:
        """Create a new GitHub client adapter.

        Args:
            github_pat_token: Personal access token
            github_api_url: GitHub API URL (defaults to https://api.github.com)
            user_agent: Client agent string sent with every request
            timeout: Per-request timeout in seconds

        Returns:
            Configured GitHubKitAdapter instance
        """
        logger.info("Creating client for GitHub instance", github_api_url=github_api_url, timeout=timeout)
        client = get_github_pat_client(
            github_pat_token=github_pat_token,
            github_api_url=github_api_url,
            user_agent=user_agent,
            timeout=timeout,
        )
        return cls(client)

    async def _get(self, url: str, accept: str = GITHUB_V3_ACCEPT, params: dict[str, Any] | None = None) -> FetchResult[Any]:
        """Issue a GET request and return the decoded body with the rate-limit budget."""
        response: Response[Any] = await self.client.arequest("GET", url, params=params, headers={"Accept": accept})
        rate_limit_remaining = parse_rate_limit_remaining(response.headers)
        logger.debug("GitHub request completed", url=url, status_code=response.status_code, rate_limit_remaining=rate_limit_remaining)
        return FetchResult(data=response.json(), rate_limit_remaining=rate_limit_remaining)

    # Identity
    @handle_github_errors
    async def get_authenticated_user(self) -> FetchResult[dict[str, Any]]:
        """Get the account the token authenticates as."""
        return await self._get("/user")

    # Issues
    @handle_github_errors
    async def list_repository_issues(self, owner: str, repo: str, since: str | None = None) -> FetchResult[list[dict[str, Any]]]:
        """List the first page of a repository's issues, most recently updated first.

        Pull requests are included in this listing; filtering them is the
        mapper's job. Only one page is requested per call.
        """
        kwargs: dict[str, Any] = {}
        if since is not None:
            # Forwarded verbatim as the stored ISO-8601 watermark.
            kwargs["since"] = since
        response: Response[Any] = await self.client.rest.issues.async_list_for_repo(
            owner=owner,
            repo=repo,
            state="all",
            per_page=DEFAULT_PER_PAGE,
            sort="updated",
            direction="desc",
            headers={"Accept": GITHUB_V3_ACCEPT},
            **kwargs,
        )
        rate_limit_remaining = parse_rate_limit_remaining(response.headers)
        logger.debug(
            "Listed repository issues",
            repo_key=f"{owner}/{repo}",
            since=since,
            status_code=response.status_code,
            rate_limit_remaining=rate_limit_remaining,
        )
        return FetchResult(data=response.json(), rate_limit_remaining=rate_limit_remaining)

    @handle_github_errors
    async def count_issue_commits(self, owner: str, repo: str, issue_number: int) -> int:
        """Count commits in a repository whose message mentions an issue number."""
        result = await self._get(
            "/search/commits",
            accept=GITHUB_COMMIT_SEARCH_ACCEPT,
            params={"q": f"repo:{owner}/{repo} {issue_number}"},
        )
        return int(result.data.get("total_count", 0) or 0)

    # Projects
    @handle_github_errors
    async def list_repository_projects(self, owner: str, repo: str) -> FetchResult[list[dict[str, Any]]]:
        """List the classic projects of a repository."""
        return await self._get(f"/repos/{owner}/{repo}/projects", accept=GITHUB_PROJECTS_PREVIEW_ACCEPT)

    @handle_github_errors
    async def list_owner_projects(self, owner: str, kind: ProjectKind) -> FetchResult[list[dict[str, Any]]]:
        """List the classic projects of an organization or a user."""
        scope = "orgs" if kind == ProjectKind.ORG else "users"
        return await self._get(f"/{scope}/{owner}/projects", accept=GITHUB_PROJECTS_PREVIEW_ACCEPT)
