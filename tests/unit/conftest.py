"""Fixtures for unit tests."""

from typing import Any, Callable, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog

from github_issue_mirror.github.abc import GitHubClientBase
from github_issue_mirror.schemas.records import Issue
from github_issue_mirror.synchronize.mapper import map_issue

RawFactory = Callable[..., dict[str, Any]]


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def raw_issue() -> RawFactory:
    """Factory for issue payloads shaped like the GitHub issues listing."""

    def factory(issue_id: int = 1, **overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": issue_id,
            "number": issue_id + 100,
            "title": f"Issue {issue_id}",
            "body": f"Body of issue {issue_id}",
            "state": "open",
            "user": {"login": "octocat", "avatar_url": "https://avatars.example/octocat"},
            "labels": [{"id": 7, "name": "bug", "color": "d73a4a", "default": True}],
            "assignee": None,
            "milestone": None,
            "created_at": "2024-01-01T00:00:00Z",
            "updated_at": "2024-01-02T00:00:00Z",
            "html_url": f"https://github.com/octo/repo/issues/{issue_id + 100}",
            "comments": 0,
            "node_id": "I_kwDOA",
        }
        payload.update(overrides)
        return payload

    return factory


@pytest.fixture
def raw_project() -> RawFactory:
    """Factory for classic project payloads."""

    def factory(project_id: int = 1, **overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": project_id,
            "number": project_id,
            "name": f"Project {project_id}",
            "body": "Roadmap",
            "state": "open",
            "creator": {"login": "hubot", "avatar_url": "https://avatars.example/hubot"},
            "created_at": "2023-06-01T00:00:00Z",
            "updated_at": "2023-06-02T00:00:00Z",
            "html_url": f"https://github.com/orgs/octo/projects/{project_id}",
        }
        payload.update(overrides)
        return payload

    return factory


@pytest.fixture
def issue_record(raw_issue: RawFactory) -> Callable[..., Issue]:
    """Factory for canonical issues belonging to octo/repo."""

    def factory(issue_id: int = 1, **overrides: Any) -> Issue:
        return map_issue(raw_issue(issue_id, **overrides), "octo", "repo")

    return factory


@pytest.fixture
def mock_client() -> MagicMock:
    """A GitHub client double whose transport methods are AsyncMocks."""
    client = MagicMock(spec=GitHubClientBase)
    client.get_authenticated_user = AsyncMock()
    client.list_repository_issues = AsyncMock()
    client.count_issue_commits = AsyncMock()
    client.list_repository_projects = AsyncMock()
    client.list_owner_projects = AsyncMock()
    return client
