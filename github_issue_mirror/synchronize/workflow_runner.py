# This file is intended to orchestrate the main actions (e.g., sync-issues, sync-projects).

"""Orchestrates the main workflows: load configuration and snapshots, sync, persist."""

import structlog

from github_issue_mirror.configuration.exceptions import TargetsConfigurationError
from github_issue_mirror.configuration.models import SyncConfig
from github_issue_mirror.configuration.reconcile import load_targets_configuration
from github_issue_mirror.github.adapter import GitHubKitAdapter
from github_issue_mirror.persistence.snapshot_store import JSONSnapshotStore
from github_issue_mirror.schemas.records import Identity
from github_issue_mirror.schemas.snapshots import ProjectSnapshot, RepositorySnapshot
from github_issue_mirror.synchronize.driver import (
    sync_all_repositories,
    sync_all_repository_projects,
    sync_configured_projects,
    validate_credential,
)
from github_issue_mirror.synchronize.results import BatchSyncResult
from github_issue_mirror.synchronize.targets import RepositoryIssues
from github_issue_mirror.utils.github import split_repository_in_configuration

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def create_adapter(config: SyncConfig) -> GitHubKitAdapter:
    """Create the GitHub adapter described by the configuration."""
    return GitHubKitAdapter.create(
        github_pat_token=config.github_pat_token,
        github_api_url=config.github_api_url,
        user_agent=config.github_user_agent,
        timeout=config.request_timeout,
    )


async def select_issue_targets(targets: list[RepositoryIssues], only: str | None, targets_file: str) -> list[RepositoryIssues]:
    """Narrow issue targets to a single 'owner/repo' when requested."""
    if only is None:
        return targets
    owner, repo = await split_repository_in_configuration(only)
    selected = [target for target in targets if target.owner == owner and target.repo == repo]
    if not selected:
        raise TargetsConfigurationError(targets_file, f"repository {owner}/{repo} is not configured")
    return selected


async def run_sync_issues_workflow(config: SyncConfig, only: str | None = None) -> BatchSyncResult[RepositorySnapshot]:
    """Sync the issues of the configured repositories and persist the updated cache."""
    targets_model = await load_targets_configuration(config.targets_file)
    targets = await select_issue_targets(targets_model.issue_targets(), only, str(config.targets_file))
    store = JSONSnapshotStore(config.cache_file)
    cache = store.load()

    result = await sync_all_repositories(create_adapter(config), targets, cache.repositories, delay=config.inter_target_delay)

    store.save(cache.model_copy(update={"repositories": result.snapshots}))
    return result


async def run_sync_projects_workflow(config: SyncConfig) -> BatchSyncResult[RepositorySnapshot]:
    """Sync the classic projects of the configured repositories and persist the updated cache."""
    targets_model = await load_targets_configuration(config.targets_file)
    store = JSONSnapshotStore(config.cache_file)
    cache = store.load()

    result = await sync_all_repository_projects(
        create_adapter(config),
        targets_model.repository_project_targets(),
        cache.repositories,
        delay=config.inter_target_delay,
    )

    store.save(cache.model_copy(update={"repositories": result.snapshots}))
    return result


async def run_sync_external_projects_workflow(config: SyncConfig) -> BatchSyncResult[ProjectSnapshot]:
    """Sync the configured organization and user projects and persist the updated cache."""
    targets_model = await load_targets_configuration(config.targets_file)
    store = JSONSnapshotStore(config.cache_file)
    cache = store.load()

    result = await sync_configured_projects(
        create_adapter(config),
        targets_model.external_project_targets(),
        cache.projects,
        delay=config.inter_target_delay,
    )

    store.save(cache.model_copy(update={"projects": result.snapshots}))
    return result


async def run_sync_all_workflow(
    config: SyncConfig,
) -> tuple[BatchSyncResult[RepositorySnapshot], BatchSyncResult[RepositorySnapshot], BatchSyncResult[ProjectSnapshot]]:
    """Sync issues, repository projects and configured projects in turn, persisting once at the end."""
    targets_model = await load_targets_configuration(config.targets_file)
    store = JSONSnapshotStore(config.cache_file)
    cache = store.load()
    adapter = create_adapter(config)

    issues_result = await sync_all_repositories(adapter, targets_model.issue_targets(), cache.repositories, delay=config.inter_target_delay)
    projects_result = await sync_all_repository_projects(
        adapter,
        targets_model.repository_project_targets(),
        issues_result.snapshots,
        delay=config.inter_target_delay,
    )
    external_result = await sync_configured_projects(
        adapter,
        targets_model.external_project_targets(),
        cache.projects,
        delay=config.inter_target_delay,
    )

    store.save(cache.model_copy(update={"repositories": projects_result.snapshots, "projects": external_result.snapshots}))
    return issues_result, projects_result, external_result


async def run_validate_token_workflow(config: SyncConfig) -> Identity:
    """Check the configured token against GitHub."""
    return await validate_credential(create_adapter(config))


async def run_count_issue_commits_workflow(config: SyncConfig, repository: str, issue_number: int) -> int:
    """Count the commits of a repository whose message mentions an issue number."""
    owner, repo = await split_repository_in_configuration(repository)
    count = await create_adapter(config).count_issue_commits(owner, repo, issue_number)
    logger.info("Counted issue commits", repo_key=f"{owner}/{repo}", issue_number=issue_number, commit_count=count)
    return count
