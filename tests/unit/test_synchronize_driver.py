"""Contains unit tests for batch orchestration."""

from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from github_issue_mirror.github.exceptions import TransportError
from github_issue_mirror.github.models import FetchResult
from github_issue_mirror.schemas.records import Issue
from github_issue_mirror.schemas.snapshots import RepositorySnapshot
from github_issue_mirror.synchronize.driver import (
    sync_all_repositories,
    sync_all_repository_projects,
    sync_configured_projects,
    validate_credential,
)
from github_issue_mirror.synchronize.exceptions import MalformedRecordError
from github_issue_mirror.synchronize.mapper import map_project
from github_issue_mirror.synchronize.targets import ExternalProject, RepositoryIssues, RepositoryProjects

RawFactory = Callable[..., dict[str, Any]]
IssueFactory = Callable[..., Issue]


@pytest.mark.asyncio
async def test_unexpected_exception_does_not_stop_the_batch(mock_client: MagicMock, raw_issue: RawFactory) -> None:
    """Test that target 2 raising leaves targets 1 and 3 processed and recorded."""
    targets = [RepositoryIssues("octo", "one"), RepositoryIssues("octo", "two"), RepositoryIssues("octo", "three")]

    async def list_issues(owner: str, repo: str, since: str | None = None) -> FetchResult[list[dict[str, Any]]]:
        if repo == "two":
            raise RuntimeError("boom")
        return FetchResult([raw_issue(1)], rate_limit_remaining=4000)

    mock_client.list_repository_issues.side_effect = list_issues

    result = await sync_all_repositories(mock_client, targets, {}, delay=0)

    assert len(result.outcomes) == 3
    assert result.outcomes["octo/one"].success is True
    assert result.outcomes["octo/two"].success is False
    assert result.outcomes["octo/two"].error == "Unexpected error: boom"
    assert result.outcomes["octo/three"].success is True
    assert set(result.snapshots) == {"octo/one", "octo/three"}
    assert result.succeeded == 2
    assert result.failed == 1
    assert result.summary() == "2/3 succeeded, check details"


@pytest.mark.asyncio
async def test_failed_target_keeps_previous_snapshot(mock_client: MagicMock, issue_record: IssueFactory) -> None:
    """Test that a transport failure leaves the target's stored snapshot in the result."""
    existing = {"octo/repo": RepositorySnapshot(last_sync="2024-01-05T00:00:00.000Z", issues={1: issue_record(1)})}
    mock_client.list_repository_issues.side_effect = TransportError("GitHub request failed: 401 Unauthorized", status_code=401)

    result = await sync_all_repositories(mock_client, [RepositoryIssues("octo", "repo")], existing, delay=0)

    assert result.snapshots["octo/repo"] is existing["octo/repo"]
    assert result.outcomes["octo/repo"].error == "GitHub request failed: 401 Unauthorized"


@pytest.mark.asyncio
async def test_disabled_targets_are_skipped(mock_client: MagicMock, raw_issue: RawFactory, issue_record: IssueFactory) -> None:
    """Test that a disabled target gets no transport call, no outcome and no snapshot change."""
    stored = RepositorySnapshot(last_sync="2024-01-05T00:00:00.000Z", issues={1: issue_record(1)})
    existing = {"octo/disabled": stored}
    mock_client.list_repository_issues.return_value = FetchResult([raw_issue(2)])
    targets = [RepositoryIssues("octo", "disabled", disabled=True), RepositoryIssues("octo", "enabled")]

    result = await sync_all_repositories(mock_client, targets, existing, delay=0)

    mock_client.list_repository_issues.assert_awaited_once_with("octo", "enabled", since=None)
    assert "octo/disabled" not in result.outcomes
    assert result.snapshots["octo/disabled"] is stored
    assert list(result.outcomes) == ["octo/enabled"]


@pytest.mark.asyncio
async def test_input_snapshot_map_is_not_mutated(mock_client: MagicMock, raw_issue: RawFactory) -> None:
    """Test that the batch returns a new map instead of writing into the caller's."""
    existing: dict[str, RepositorySnapshot] = {}
    mock_client.list_repository_issues.return_value = FetchResult([raw_issue(1)])

    result = await sync_all_repositories(mock_client, [RepositoryIssues("octo", "repo")], existing, delay=0)

    assert existing == {}
    assert "octo/repo" in result.snapshots


@pytest.mark.asyncio
async def test_delay_is_awaited_between_targets(mock_client: MagicMock, raw_issue: RawFactory) -> None:
    """Test that the inter-target delay is awaited between consecutive targets only."""
    mock_client.list_repository_issues.return_value = FetchResult([raw_issue(1)])
    targets = [RepositoryIssues("octo", "a"), RepositoryIssues("octo", "b"), RepositoryIssues("octo", "c")]

    with patch("github_issue_mirror.synchronize.driver.asyncio.sleep", new=AsyncMock()) as sleep:
        await sync_all_repositories(mock_client, targets, {}, delay=0.1)

    assert sleep.await_count == 2
    sleep.assert_awaited_with(0.1)


@pytest.mark.asyncio
async def test_targets_are_processed_in_order(mock_client: MagicMock, raw_issue: RawFactory) -> None:
    """Test that targets are synced one after another in the given order."""
    mock_client.list_repository_issues.return_value = FetchResult([raw_issue(1)])
    targets = [RepositoryIssues("octo", "b"), RepositoryIssues("octo", "a")]

    await sync_all_repositories(mock_client, targets, {}, delay=0)

    assert [call.args[1] for call in mock_client.list_repository_issues.await_args_list] == ["b", "a"]


@pytest.mark.asyncio
async def test_projects_batch_only_touches_projects(
    mock_client: MagicMock, raw_project: RawFactory, issue_record: IssueFactory
) -> None:
    """Test that a projects batch keeps issues and watermark of every repository snapshot."""
    stored = RepositorySnapshot(last_sync="2024-01-05T00:00:00.000Z", issues={1: issue_record(1)})
    mock_client.list_repository_projects.return_value = FetchResult([raw_project(4)])

    result = await sync_all_repository_projects(mock_client, [RepositoryProjects("octo", "repo")], {"octo/repo": stored}, delay=0)

    snapshot = result.snapshots["octo/repo"]
    assert snapshot.issues == stored.issues
    assert snapshot.last_sync == stored.last_sync
    assert snapshot.projects == [map_project(raw_project(4))]
    assert stored.projects is None


@pytest.mark.asyncio
async def test_configured_projects_batch(mock_client: MagicMock, raw_project: RawFactory) -> None:
    """Test that configured projects are keyed by kind, owner and number."""
    mock_client.list_owner_projects.return_value = FetchResult([raw_project(1), raw_project(2)])
    targets = [ExternalProject("octo", 1), ExternalProject("octo", 3)]

    result = await sync_configured_projects(mock_client, targets, {}, delay=0)

    assert result.outcomes["org/octo/1"].success is True
    assert result.outcomes["org/octo/3"].success is False
    assert set(result.snapshots) == {"org/octo/1"}


@pytest.mark.asyncio
async def test_validate_credential_returns_identity(mock_client: MagicMock) -> None:
    """Test that the identity endpoint is mapped onto an Identity."""
    mock_client.get_authenticated_user.return_value = FetchResult(
        {"login": "octocat", "name": "The Octocat", "avatar_url": "https://avatars.example/octocat"},
        rate_limit_remaining=4321,
    )

    identity = await validate_credential(mock_client)

    assert identity.login == "octocat"
    assert identity.name == "The Octocat"
    assert identity.rate_limit_remaining == 4321


@pytest.mark.asyncio
async def test_validate_credential_propagates_transport_errors(mock_client: MagicMock) -> None:
    """Test that a rejected credential surfaces as a TransportError."""
    mock_client.get_authenticated_user.side_effect = TransportError("GitHub request failed: 401 Unauthorized", status_code=401)
    with pytest.raises(TransportError):
        await validate_credential(mock_client)


@pytest.mark.asyncio
async def test_validate_credential_rejects_payload_without_login(mock_client: MagicMock) -> None:
    """Test that an identity response without a login is reported as malformed."""
    mock_client.get_authenticated_user.return_value = FetchResult({"message": "unexpected"}, rate_limit_remaining=10)
    with pytest.raises(MalformedRecordError):
        await validate_credential(mock_client)
