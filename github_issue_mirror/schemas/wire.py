"""Pydantic schema for records as returned by the GitHub REST API.

These models are the only place where untyped JSON from the API is accepted.
They are validated once by the record mapper and never passed further.
Fields the mirror does not use are ignored.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict


class RawUser(BaseModel):
    """Pydantic model for a GitHub user as embedded in issue and project payloads."""

    model_config = ConfigDict(extra="ignore")

    login: str
    avatar_url: str


class RawLabel(BaseModel):
    """Pydantic model for a GitHub label."""

    model_config = ConfigDict(extra="ignore")

    name: str
    color: str


class RawMilestone(BaseModel):
    """Pydantic model for a GitHub milestone."""

    model_config = ConfigDict(extra="ignore")

    title: str
    description: str | None = None
    state: Literal["open", "closed"]


class RawIssue(BaseModel):
    """Pydantic model for an entry of the repository issues listing.

    The listing mixes pull requests in with issues; those carry a non-null
    `pull_request` object.
    """

    model_config = ConfigDict(extra="ignore")

    id: int
    number: int
    title: str
    body: str | None = None
    state: Literal["open", "closed"]
    user: RawUser
    labels: list[RawLabel] = []
    assignee: RawUser | None = None
    milestone: RawMilestone | None = None
    created_at: str
    updated_at: str
    html_url: str
    comments: int = 0
    pull_request: dict[str, Any] | None = None


class RawProject(BaseModel):
    """Pydantic model for a classic GitHub project."""

    model_config = ConfigDict(extra="ignore")

    id: int
    number: int
    name: str
    body: str | None = None
    state: Literal["open", "closed"]
    creator: RawUser
    created_at: str
    updated_at: str
    html_url: str


class RawIdentity(BaseModel):
    """Pydantic model for the account returned by the authenticated user endpoint."""

    model_config = ConfigDict(extra="ignore")

    login: str
    name: str | None = None
    avatar_url: str | None = None
