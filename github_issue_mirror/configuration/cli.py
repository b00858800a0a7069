"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from github_issue_mirror.configuration.env import get_settings
from github_issue_mirror.configuration.exceptions import GitHubAuthenticationConfigurationUndefinedError, TargetsConfigurationError
from github_issue_mirror.configuration.models import SyncConfig
from github_issue_mirror.configuration.reconcile import reconcile_sync_configuration
from github_issue_mirror.github.exceptions import TransportError
from github_issue_mirror.persistence.snapshot_store import JSONSnapshotStore, SnapshotStoreError
from github_issue_mirror.synchronize.exceptions import MalformedRecordError
from github_issue_mirror.synchronize.results import BatchSyncResult
from github_issue_mirror.synchronize.workflow_runner import (
    run_count_issue_commits_workflow,
    run_sync_all_workflow,
    run_sync_external_projects_workflow,
    run_sync_issues_workflow,
    run_sync_projects_workflow,
    run_validate_token_workflow,
)
from github_issue_mirror.utils.logging import configure_logging

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Mirror GitHub issues and projects into a local cache.")


@typer_app.callback()
def main_callback(
    ctx: typer.Context,
    debug: Annotated[bool | None, Option("--debug/--no-debug", help="Enable debug logging.")] = None,
    github_api_url: Annotated[str | None, Option(help="GitHub API URL.")] = None,
    github_pat_token: Annotated[str | None, Option(help="GitHub Personal Access Token.")] = None,
    github_user_agent: Annotated[str | None, Option(help="User-Agent sent with every request.")] = None,
    request_timeout: Annotated[float | None, Option(help="Per-request timeout in seconds.")] = None,
    inter_target_delay: Annotated[float | None, Option(help="Seconds to wait between targets.")] = None,
    targets_file: Annotated[Path | None, Option(help="YAML file listing repositories and projects.")] = None,
    cache_file: Annotated[Path | None, Option(help="JSON file holding the snapshot cache.")] = None,
) -> None:
    """Collect options shared by every command. Unset options fall back to environment variables and .env."""
    ctx.ensure_object(dict)
    ctx.obj["options"] = {
        "debug": debug,
        "github_api_url": github_api_url,
        "github_pat_token": github_pat_token,
        "github_user_agent": github_user_agent,
        "request_timeout": request_timeout,
        "inter_target_delay": inter_target_delay,
        "targets_file": targets_file,
        "cache_file": cache_file,
    }


def resolve_config(ctx: typer.Context, require_token: bool = True) -> SyncConfig:
    """Reconcile shared options with settings and configure logging, exiting on invalid configuration."""
    try:
        config = asyncio.run(reconcile_sync_configuration(get_settings(), require_token=require_token, **ctx.obj["options"]))
    except (GitHubAuthenticationConfigurationUndefinedError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    configure_logging(config.debug)
    return config


def report_batch(title: str, result: BatchSyncResult) -> None:
    """Print a batch summary followed by one line per failed target."""
    typer.echo(f"{title}: {result.summary()}")
    for key, outcome in result.outcomes.items():
        if outcome.success:
            rate_limit = f", rate limit remaining {outcome.rate_limit_remaining}" if outcome.rate_limit_remaining is not None else ""
            typer.echo(f"  ok     {key} ({outcome.record_count} records{rate_limit})")
        else:
            typer.echo(f"  failed {key}: {outcome.error}", err=True)


@typer_app.command(name="sync-issues")
def sync_issues_cli(
    ctx: typer.Context,
    only: Annotated[str | None, Option(help="Sync a single configured repository (owner/repo).")] = None,
) -> None:
    """Sync issues of every configured repository into the cache."""
    config = resolve_config(ctx)
    try:
        result = asyncio.run(run_sync_issues_workflow(config, only=only))
    except (TargetsConfigurationError, SnapshotStoreError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    report_batch("Issues", result)
    if not result.all_succeeded:
        raise typer.Exit(1)


@typer_app.command(name="sync-projects")
def sync_projects_cli(ctx: typer.Context) -> None:
    """Sync classic projects of every configured repository into the cache."""
    config = resolve_config(ctx)
    try:
        result = asyncio.run(run_sync_projects_workflow(config))
    except (TargetsConfigurationError, SnapshotStoreError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    report_batch("Repository projects", result)
    if not result.all_succeeded:
        raise typer.Exit(1)


@typer_app.command(name="sync-external-projects")
def sync_external_projects_cli(ctx: typer.Context) -> None:
    """Sync every configured organization or user project into the cache."""
    config = resolve_config(ctx)
    try:
        result = asyncio.run(run_sync_external_projects_workflow(config))
    except (TargetsConfigurationError, SnapshotStoreError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    report_batch("Projects", result)
    if not result.all_succeeded:
        raise typer.Exit(1)


@typer_app.command(name="sync-all")
def sync_all_cli(ctx: typer.Context) -> None:
    """Sync issues, repository projects and configured projects in one run."""
    config = resolve_config(ctx)
    try:
        issues_result, projects_result, external_result = asyncio.run(run_sync_all_workflow(config))
    except (TargetsConfigurationError, SnapshotStoreError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    report_batch("Issues", issues_result)
    report_batch("Repository projects", projects_result)
    report_batch("Projects", external_result)
    if not (issues_result.all_succeeded and projects_result.all_succeeded and external_result.all_succeeded):
        raise typer.Exit(1)


@typer_app.command(name="validate-token")
def validate_token_cli(ctx: typer.Context) -> None:
    """Check that the configured token is accepted by GitHub."""
    config = resolve_config(ctx)
    try:
        identity = asyncio.run(run_validate_token_workflow(config))
    except TransportError as exc:
        typer.echo(f"Token validation failed: {exc.message}", err=True)
        raise typer.Exit(1) from exc
    except MalformedRecordError as exc:
        typer.echo(f"Token validation failed: {exc}", err=True)
        raise typer.Exit(1) from exc
    display_name = f" ({identity.name})" if identity.name else ""
    typer.echo(f"Authenticated as {identity.login}{display_name}")
    if identity.rate_limit_remaining is not None:
        typer.echo(f"Rate limit remaining: {identity.rate_limit_remaining}")


@typer_app.command(name="issue-commits")
def issue_commits_cli(
    ctx: typer.Context,
    repository: Annotated[str, Argument(help="Repository in owner/repo format.")],
    issue_number: Annotated[int, Argument(help="Issue number to look for in commit messages.")],
) -> None:
    """Count commits whose message mentions an issue number."""
    config = resolve_config(ctx)
    try:
        count = asyncio.run(run_count_issue_commits_workflow(config, repository, issue_number))
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    except TransportError as exc:
        typer.echo(f"Commit search failed: {exc.message}", err=True)
        raise typer.Exit(1) from exc
    typer.echo(f"{repository.strip('/')}#{issue_number}: {count} commits")


@typer_app.command(name="status")
def status_cli(ctx: typer.Context) -> None:
    """Show what the cache currently holds for each target."""
    config = resolve_config(ctx, require_token=False)
    try:
        cache = JSONSnapshotStore(config.cache_file).load()
    except SnapshotStoreError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc

    if not cache.repositories and not cache.projects:
        typer.echo("Cache is empty")
        return

    for key, snapshot in sorted(cache.repositories.items()):
        open_count = sum(1 for issue in snapshot.issues.values() if issue.state == "open")
        synced = f"synced {snapshot.last_sync}" if snapshot.last_sync else "never synced"
        projects = f", {len(snapshot.projects)} projects" if snapshot.projects is not None else ""
        typer.echo(f"{key}: {len(snapshot.issues)} issues ({open_count} open){projects}, {synced}")
    for key, project_snapshot in sorted(cache.projects.items()):
        synced = f"synced {project_snapshot.last_sync}" if project_snapshot.last_sync else "never synced"
        typer.echo(f"{key}: {project_snapshot.project.title} [{project_snapshot.project.state}], {synced}")


if __name__ == "__main__":
    typer_app()
