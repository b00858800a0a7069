"""Pydantic schema for the YAML file listing what to synchronize."""

from typing import Any

from pydantic import BaseModel, field_validator

from github_issue_mirror.synchronize.targets import ExternalProject, ProjectKind, RepositoryIssues, RepositoryProjects


class RepositoryModel(BaseModel):
    """Pydantic model for a configured repository."""

    owner: str
    repo: str
    name: str | None = None
    is_default: bool = False
    is_disabled: bool = False

    @field_validator("owner", "repo")
    @classmethod
    def validate_name(cls, value: str) -> str:
        """Owner and repository names are single path segments."""
        value = value.strip()
        if not value or "/" in value:
            raise ValueError("must be a non-empty name without '/'")
        return value

    @property
    def display_name(self) -> str:
        """Name shown to users, falling back to 'owner/repo'."""
        return self.name or f"{self.owner}/{self.repo}"


class ProjectModel(BaseModel):
    """Pydantic model for a configured organization or user project."""

    owner: str
    number: int
    type: ProjectKind = ProjectKind.ORG
    is_disabled: bool = False

    @field_validator("owner")
    @classmethod
    def validate_owner(cls, value: str) -> str:
        """Owner names are single path segments."""
        value = value.strip()
        if not value or "/" in value:
            raise ValueError("must be a non-empty name without '/'")
        return value


class TargetsYAMLModel(BaseModel):
    """Pydantic model for the targets file.

    Repositories may be given either as mappings or as 'owner/repo' strings.
    """

    repositories: list[RepositoryModel] = []
    projects: list[ProjectModel] = []

    @field_validator("repositories", mode="before")
    @classmethod
    def expand_repository_shorthand(cls, value: Any) -> Any:
        """Expand 'owner/repo' strings into repository mappings."""
        if not isinstance(value, list):
            return value
        expanded: list[Any] = []
        for item in value:
            if isinstance(item, str):
                parts = item.strip("/").split("/")
                if len(parts) != 2 or not all(parts):
                    raise ValueError(f"Repository must be in the format 'owner/repo', got '{item}'")
                expanded.append({"owner": parts[0], "repo": parts[1]})
            else:
                expanded.append(item)
        return expanded

    def issue_targets(self) -> list[RepositoryIssues]:
        """Issue sync targets for every configured repository."""
        return [RepositoryIssues(owner=r.owner, repo=r.repo, disabled=r.is_disabled) for r in self.repositories]

    def repository_project_targets(self) -> list[RepositoryProjects]:
        """Project sync targets for every configured repository."""
        return [RepositoryProjects(owner=r.owner, repo=r.repo, disabled=r.is_disabled) for r in self.repositories]

    def external_project_targets(self) -> list[ExternalProject]:
        """Sync targets for every configured organization or user project."""
        return [ExternalProject(owner=p.owner, number=p.number, kind=p.type, disabled=p.is_disabled) for p in self.projects]
