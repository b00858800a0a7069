"""Pydantic schema for persisted per-target snapshots."""

from pydantic import BaseModel

from github_issue_mirror.schemas.records import Issue, Project


class RepositorySnapshot(BaseModel):
    """Last known state of one repository.

    Issues and projects are independent sub-fields: an issue sync never
    touches `projects` and a projects sync never touches `issues` or
    `last_sync`. A `last_sync` of None forces the next issue sync to be a
    full fetch.
    """

    last_sync: str | None = None
    issues: dict[int, Issue] = {}
    projects: list[Project] | None = None


class ProjectSnapshot(BaseModel):
    """Last known state of one externally configured (org or user) project."""

    last_sync: str | None = None
    project: Project


class SnapshotCache(BaseModel):
    """Everything the snapshot store persists, keyed by target key."""

    repositories: dict[str, RepositorySnapshot] = {}
    projects: dict[str, ProjectSnapshot] = {}
