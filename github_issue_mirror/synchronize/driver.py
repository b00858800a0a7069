"""Orchestrates the synchronization of batches of sync targets.

Targets are processed one at a time. Requests made with one credential share
a single rate-limit budget, so the batch is never fanned out concurrently.
"""

import asyncio
import time
from functools import partial
from typing import Awaitable, Callable, Mapping, Sequence, TypeVar

import structlog

from github_issue_mirror.github.abc import GitHubClientBase
from github_issue_mirror.schemas.records import Identity
from github_issue_mirror.schemas.snapshots import ProjectSnapshot, RepositorySnapshot
from github_issue_mirror.synchronize.results import BatchSyncResult, SyncOutcome, TargetSyncResult
from github_issue_mirror.synchronize.mapper import map_identity
from github_issue_mirror.synchronize.syncer import sync_external_project, sync_repository_issues, sync_repository_projects
from github_issue_mirror.synchronize.targets import ExternalProject, RepositoryIssues, RepositoryProjects, SyncTarget
from github_issue_mirror.utils.constants import DEFAULT_INTER_TARGET_DELAY

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

T = TypeVar("T", bound=SyncTarget)
S = TypeVar("S")


async def run_sequential_batch(
    targets: Sequence[T],
    existing_snapshots: Mapping[str, S],
    sync_target: Callable[[T, S | None], Awaitable[TargetSyncResult[S]]],
    merge_snapshot: Callable[[S | None, S], S] | None = None,
    delay: float = DEFAULT_INTER_TARGET_DELAY,
) -> BatchSyncResult[S]:
    """Synchronize targets one after another and collect their snapshots and outcomes.

    Disabled targets are skipped without an outcome. A target whose sync
    raises is recorded as a failed outcome and the batch moves on. Snapshots of
    targets that were not synced successfully are carried over from
    `existing_snapshots` unchanged.

    Args:
        targets: Targets to synchronize, in order
        existing_snapshots: Previously stored snapshots keyed by target key
        sync_target: Coroutine syncing one target against its previous snapshot
        merge_snapshot: Combines the snapshot held so far with a freshly synced one;
            by default the fresh snapshot replaces it
        delay: Seconds to wait between consecutive targets

    Returns:
        The updated snapshot map and one outcome per processed target
    """
    snapshots: dict[str, S] = dict(existing_snapshots)
    outcomes: dict[str, SyncOutcome] = {}

    active_targets = [target for target in targets if not target.disabled]
    skipped = len(targets) - len(active_targets)
    start_time = time.time()
    logger.info("Starting sync batch", target_count=len(active_targets), skipped_disabled=skipped)

    for index, target in enumerate(active_targets):
        if index > 0 and delay > 0:
            await asyncio.sleep(delay)

        key = target.key
        try:
            result = await sync_target(target, snapshots.get(key))
        except Exception as exc:
            logger.exception("Unexpected error while syncing target", target_key=key)
            outcomes[key] = SyncOutcome.failure(f"Unexpected error: {exc}")
            continue

        outcomes[key] = result.outcome
        if result.outcome.success and result.snapshot is not None:
            if merge_snapshot is not None:
                snapshots[key] = merge_snapshot(snapshots.get(key), result.snapshot)
            else:
                snapshots[key] = result.snapshot
        else:
            logger.error("Failed to sync target", target_key=key, error=result.outcome.error)

    batch_result = BatchSyncResult(snapshots, outcomes)
    logger.info(
        "Finished sync batch",
        succeeded=batch_result.succeeded,
        failed=batch_result.failed,
        duration=round(time.time() - start_time, 2),
    )
    return batch_result


def merge_projects_field(current: RepositorySnapshot | None, synced: RepositorySnapshot) -> RepositorySnapshot:
    """Take only the `projects` sub-field of a projects sync, keeping everything else already held."""
    if current is None:
        return synced
    return current.model_copy(update={"projects": synced.projects})


async def sync_all_repositories(
    client: GitHubClientBase,
    targets: Sequence[RepositoryIssues],
    existing_snapshots: Mapping[str, RepositorySnapshot] | None = None,
    delay: float = DEFAULT_INTER_TARGET_DELAY,
) -> BatchSyncResult[RepositorySnapshot]:
    """Synchronize the issues of every repository target."""
    return await run_sequential_batch(
        targets,
        existing_snapshots or {},
        partial(sync_repository_issues, client),
        delay=delay,
    )


async def sync_all_repository_projects(
    client: GitHubClientBase,
    targets: Sequence[RepositoryProjects],
    existing_snapshots: Mapping[str, RepositorySnapshot] | None = None,
    delay: float = DEFAULT_INTER_TARGET_DELAY,
) -> BatchSyncResult[RepositorySnapshot]:
    """Synchronize the classic projects of every repository target."""
    return await run_sequential_batch(
        targets,
        existing_snapshots or {},
        partial(sync_repository_projects, client),
        merge_snapshot=merge_projects_field,
        delay=delay,
    )


async def sync_configured_projects(
    client: GitHubClientBase,
    targets: Sequence[ExternalProject],
    existing_snapshots: Mapping[str, ProjectSnapshot] | None = None,
    delay: float = DEFAULT_INTER_TARGET_DELAY,
) -> BatchSyncResult[ProjectSnapshot]:
    """Synchronize every configured organization or user project."""
    return await run_sequential_batch(
        targets,
        existing_snapshots or {},
        partial(sync_external_project, client),
        delay=delay,
    )


async def validate_credential(client: GitHubClientBase) -> Identity:
    """Confirm the credential works and return the account it authenticates as.

    Raises:
        TransportError: If the credential is rejected or GitHub is unreachable
        MalformedRecordError: If the response does not describe an account
    """
    result = await client.get_authenticated_user()
    identity = map_identity(result.data, result.rate_limit_remaining)
    logger.info("Validated GitHub credential", login=identity.login, rate_limit_remaining=identity.rate_limit_remaining)
    return identity
