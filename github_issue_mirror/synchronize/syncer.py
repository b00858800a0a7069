"""Contains synchronization logic for a single sync target.

Each function fetches one target, maps the payload and reconciles it with the
target's previous snapshot. Transport and mapping failures are reported in
the returned outcome instead of being raised, and inputs are never mutated:
the caller decides what to do with the returned snapshot.
"""

import structlog

from github_issue_mirror.github.abc import GitHubClientBase
from github_issue_mirror.github.exceptions import TransportError
from github_issue_mirror.schemas.snapshots import ProjectSnapshot, RepositorySnapshot
from github_issue_mirror.synchronize.exceptions import MalformedRecordError
from github_issue_mirror.synchronize.mapper import map_issues, map_project, map_projects
from github_issue_mirror.synchronize.reconcile import reconcile_records
from github_issue_mirror.synchronize.results import SyncOutcome, TargetSyncResult
from github_issue_mirror.synchronize.targets import ExternalProject, RepositoryIssues, RepositoryProjects
from github_issue_mirror.utils.github import utc_now_iso

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def sync_repository_issues(
    client: GitHubClientBase,
    target: RepositoryIssues,
    existing: RepositorySnapshot | None = None,
) -> TargetSyncResult[RepositorySnapshot]:
    """Fetch a repository's issues and reconcile them with its snapshot.

    With a stored `last_sync` only issues updated since then are requested and
    merged over the stored ones. Without one, the fetched issues replace the
    stored collection. The new `last_sync` is the time of this sync, even when
    nothing changed. The snapshot's projects are carried over untouched.
    """
    since = existing.last_sync if existing is not None else None
    incremental = since is not None
    logger.info("Syncing repository issues", repo_key=target.key, since=since, mode="incremental" if incremental else "full")

    try:
        fetch_result = await client.list_repository_issues(target.owner, target.repo, since=since)
    except TransportError as exc:
        logger.error("Failed to fetch repository issues", repo_key=target.key, error=exc.message, status_code=exc.status_code)
        return TargetSyncResult(None, SyncOutcome.failure(exc.message, exc.rate_limit_remaining))

    try:
        fetched_issues = map_issues(fetch_result.data, target.owner, target.repo)
    except MalformedRecordError as exc:
        logger.error("Repository issues payload is malformed", repo_key=target.key, error=str(exc))
        return TargetSyncResult(None, SyncOutcome.failure(str(exc), fetch_result.rate_limit_remaining))

    issues = reconcile_records(existing.issues if existing is not None else None, fetched_issues, incremental=incremental)
    snapshot = RepositorySnapshot(
        last_sync=utc_now_iso(),
        issues=issues,
        projects=existing.projects if existing is not None else None,
    )
    logger.info(
        "Synced repository issues",
        repo_key=target.key,
        fetched_count=len(fetched_issues),
        record_count=len(issues),
        rate_limit_remaining=fetch_result.rate_limit_remaining,
    )
    return TargetSyncResult(
        snapshot,
        SyncOutcome(success=True, record_count=len(issues), rate_limit_remaining=fetch_result.rate_limit_remaining),
    )


async def sync_repository_projects(
    client: GitHubClientBase,
    target: RepositoryProjects,
    existing: RepositorySnapshot | None = None,
) -> TargetSyncResult[RepositorySnapshot]:
    """Fetch a repository's classic projects and replace them in its snapshot.

    The projects endpoint has no incremental filter, so every call replaces
    the project list. The snapshot's issues and `last_sync` are preserved.
    """
    logger.info("Syncing repository projects", repo_key=target.key)

    try:
        fetch_result = await client.list_repository_projects(target.owner, target.repo)
    except TransportError as exc:
        logger.error("Failed to fetch repository projects", repo_key=target.key, error=exc.message, status_code=exc.status_code)
        return TargetSyncResult(None, SyncOutcome.failure(exc.message, exc.rate_limit_remaining))

    try:
        projects = map_projects(fetch_result.data)
    except MalformedRecordError as exc:
        logger.error("Repository projects payload is malformed", repo_key=target.key, error=str(exc))
        return TargetSyncResult(None, SyncOutcome.failure(str(exc), fetch_result.rate_limit_remaining))

    snapshot = RepositorySnapshot(
        last_sync=existing.last_sync if existing is not None else None,
        issues=dict(existing.issues) if existing is not None else {},
        projects=projects,
    )
    logger.info(
        "Synced repository projects",
        repo_key=target.key,
        record_count=len(projects),
        rate_limit_remaining=fetch_result.rate_limit_remaining,
    )
    return TargetSyncResult(
        snapshot,
        SyncOutcome(success=True, record_count=len(projects), rate_limit_remaining=fetch_result.rate_limit_remaining),
    )


async def sync_external_project(
    client: GitHubClientBase,
    target: ExternalProject,
    existing: ProjectSnapshot | None = None,
) -> TargetSyncResult[ProjectSnapshot]:
    """Fetch one organization or user project and replace its snapshot.

    The owner's project listing is fetched and searched for the configured
    project number. `existing` is accepted for symmetry with the other
    syncers; the fetched project always replaces it.
    """
    logger.info("Syncing project", project_key=target.key, had_snapshot=existing is not None)

    try:
        fetch_result = await client.list_owner_projects(target.owner, target.kind)
    except TransportError as exc:
        logger.error("Failed to fetch projects", project_key=target.key, error=exc.message, status_code=exc.status_code)
        return TargetSyncResult(None, SyncOutcome.failure(exc.message, exc.rate_limit_remaining))

    raw_project = next(
        (raw for raw in fetch_result.data if isinstance(raw, dict) and raw.get("number") == target.number),
        None,
    )
    if raw_project is None:
        error = f"Project #{target.number} not found in {target.kind.value}/{target.owner}"
        logger.error("Configured project not found", project_key=target.key)
        return TargetSyncResult(None, SyncOutcome.failure(error, fetch_result.rate_limit_remaining))

    try:
        project = map_project(raw_project)
    except MalformedRecordError as exc:
        logger.error("Project payload is malformed", project_key=target.key, error=str(exc))
        return TargetSyncResult(None, SyncOutcome.failure(str(exc), fetch_result.rate_limit_remaining))

    logger.info("Synced project", project_key=target.key, project_title=project.title)
    return TargetSyncResult(
        ProjectSnapshot(last_sync=utc_now_iso(), project=project),
        SyncOutcome(success=True, record_count=1, rate_limit_remaining=fetch_result.rate_limit_remaining),
    )
