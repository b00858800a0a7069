"""Pydantic schema for the canonical records stored in snapshots."""

from typing import Literal

from pydantic import BaseModel

RecordState = Literal["open", "closed"]


class UserRef(BaseModel):
    """A GitHub account referenced by a record."""

    login: str
    avatar_url: str


class LabelRef(BaseModel):
    """A label attached to an issue."""

    name: str
    color: str


class MilestoneRef(BaseModel):
    """A milestone an issue belongs to."""

    title: str
    description: str | None = None
    state: RecordState


class RepositoryRef(BaseModel):
    """The repository owning an issue."""

    owner: str
    name: str


class Issue(BaseModel):
    """Pydantic model for a cached GitHub issue.

    `id` is assigned by GitHub and is the merge key within a repository's
    snapshot. `number` is only unique within one repository.
    """

    id: int
    number: int
    title: str
    body: str = ""
    state: RecordState
    user: UserRef
    labels: list[LabelRef] = []
    assignee: UserRef | None = None
    milestone: MilestoneRef | None = None
    created_at: str
    updated_at: str
    html_url: str
    comments: int = 0
    repository: RepositoryRef


class Project(BaseModel):
    """Pydantic model for a cached classic GitHub project."""

    id: int
    number: int
    title: str
    body: str | None = None
    state: RecordState
    creator: UserRef
    created_at: str
    updated_at: str
    html_url: str


class Identity(BaseModel):
    """The account a credential authenticates as."""

    login: str
    name: str | None = None
    avatar_url: str | None = None
    rate_limit_remaining: int | None = None
