"""Converts GitHub REST payloads into canonical records.

Mapping is all-or-nothing for a fetch: the first record that fails
validation raises MalformedRecordError and nothing is returned.
"""

from typing import Any, Iterable

import structlog
from pydantic import ValidationError

from github_issue_mirror.schemas.records import Identity, Issue, LabelRef, MilestoneRef, Project, RepositoryRef, UserRef
from github_issue_mirror.schemas.wire import RawIdentity, RawIssue, RawProject, RawUser
from github_issue_mirror.synchronize.exceptions import MalformedRecordError

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def _record_id(raw: Any) -> object:
    if isinstance(raw, dict):
        return raw.get("id")
    return None


def _validation_detail(exc: ValidationError) -> str:
    return "; ".join(f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}" for error in exc.errors())


def _map_user(raw: RawUser) -> UserRef:
    return UserRef(login=raw.login, avatar_url=raw.avatar_url)


def is_real_issue(raw: dict[str, Any]) -> bool:
    """Return False for pull requests, which the issues listing returns alongside issues."""
    return raw.get("pull_request") is None


def map_issue(raw: dict[str, Any], owner: str, repo: str) -> Issue:
    """Map one issue payload onto the canonical Issue shape."""
    try:
        wire = RawIssue.model_validate(raw)
    except ValidationError as exc:
        raise MalformedRecordError("issue", _record_id(raw), _validation_detail(exc)) from exc

    return Issue(
        id=wire.id,
        number=wire.number,
        title=wire.title,
        body=wire.body or "",
        state=wire.state,
        user=_map_user(wire.user),
        labels=[LabelRef(name=label.name, color=label.color) for label in wire.labels],
        assignee=_map_user(wire.assignee) if wire.assignee is not None else None,
        milestone=(
            MilestoneRef(
                title=wire.milestone.title,
                description=wire.milestone.description,
                state=wire.milestone.state,
            )
            if wire.milestone is not None
            else None
        ),
        created_at=wire.created_at,
        updated_at=wire.updated_at,
        html_url=wire.html_url,
        comments=wire.comments,
        repository=RepositoryRef(owner=owner, name=repo),
    )


def map_issues(raws: Iterable[dict[str, Any]], owner: str, repo: str) -> list[Issue]:
    """Map an issues listing, dropping pull requests before mapping."""
    issues: list[Issue] = []
    skipped_pull_requests = 0
    for raw in raws:
        if not isinstance(raw, dict):
            raise MalformedRecordError("issue", None, f"expected an object, got {type(raw).__name__}")
        if not is_real_issue(raw):
            skipped_pull_requests += 1
            continue
        issues.append(map_issue(raw, owner, repo))
    logger.debug(
        "Mapped issues listing",
        repo_key=f"{owner}/{repo}",
        issue_count=len(issues),
        skipped_pull_requests=skipped_pull_requests,
    )
    return issues


def map_project(raw: dict[str, Any]) -> Project:
    """Map one classic project payload onto the canonical Project shape."""
    try:
        wire = RawProject.model_validate(raw)
    except ValidationError as exc:
        raise MalformedRecordError("project", _record_id(raw), _validation_detail(exc)) from exc

    return Project(
        id=wire.id,
        number=wire.number,
        title=wire.name,
        body=wire.body,
        state=wire.state,
        creator=_map_user(wire.creator),
        created_at=wire.created_at,
        updated_at=wire.updated_at,
        html_url=wire.html_url,
    )


def map_projects(raws: Iterable[dict[str, Any]]) -> list[Project]:
    """Map a projects listing."""
    projects: list[Project] = []
    for raw in raws:
        if not isinstance(raw, dict):
            raise MalformedRecordError("project", None, f"expected an object, got {type(raw).__name__}")
        projects.append(map_project(raw))
    return projects


def map_identity(raw: Any, rate_limit_remaining: int | None = None) -> Identity:
    """Map the authenticated user payload onto an Identity."""
    try:
        wire = RawIdentity.model_validate(raw)
    except ValidationError as exc:
        raise MalformedRecordError("user", _record_id(raw), _validation_detail(exc)) from exc
    return Identity(login=wire.login, name=wire.name, avatar_url=wire.avatar_url, rate_limit_remaining=rate_limit_remaining)
