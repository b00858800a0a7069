"""Contains unit tests for sync targets and their snapshot-store keys."""

import pytest

from github_issue_mirror.synchronize.targets import ExternalProject, ProjectKind, RepositoryIssues, RepositoryProjects


def test_repository_targets_use_owner_and_repo_as_key() -> None:
    """Test that repository issue and project targets map to 'owner/repo'."""
    assert RepositoryIssues("octo", "repo").key == "octo/repo"
    assert RepositoryProjects("octo", "repo").key == "octo/repo"


def test_issues_and_projects_of_one_repository_share_a_snapshot_key() -> None:
    """Test that issues and projects address the same repository snapshot."""
    assert RepositoryIssues("octo", "repo").key == RepositoryProjects("octo", "repo").key


def test_external_project_key_includes_kind_owner_and_number() -> None:
    """Test the key format of organization and user projects."""
    assert ExternalProject("octo", 3, ProjectKind.ORG).key == "org/octo/3"
    assert ExternalProject("octo", 3, ProjectKind.USER).key == "user/octo/3"


@pytest.mark.parametrize(
    "first, second",
    [
        pytest.param(RepositoryIssues("octo", "repo"), RepositoryIssues("octo", "other"), id="different repo"),
        pytest.param(RepositoryIssues("octo", "repo"), RepositoryIssues("hubot", "repo"), id="different owner"),
        pytest.param(RepositoryIssues("a", "bc"), RepositoryIssues("ab", "c"), id="shifted boundary"),
        pytest.param(ExternalProject("octo", 1), ExternalProject("octo", 2), id="different project number"),
        pytest.param(ExternalProject("octo", 1, ProjectKind.ORG), ExternalProject("octo", 1, ProjectKind.USER), id="different project kind"),
        pytest.param(RepositoryIssues("org", "octo"), ExternalProject("octo", 1, ProjectKind.ORG), id="repository vs project"),
    ],
)
def test_distinct_targets_never_share_a_key(first: object, second: object) -> None:
    """Test that the key function is injective across distinct targets."""
    assert first.key != second.key  # type: ignore[attr-defined]


@pytest.mark.parametrize(
    "owner, repo",
    [
        pytest.param("", "repo", id="empty owner"),
        pytest.param("octo", "", id="empty repo"),
        pytest.param("octo/extra", "repo", id="slash in owner"),
        pytest.param("octo", "re/po", id="slash in repo"),
    ],
)
def test_repository_target_rejects_ambiguous_names(owner: str, repo: str) -> None:
    """Test that names which would make keys collide are rejected."""
    with pytest.raises(ValueError):
        RepositoryIssues(owner, repo)


def test_targets_default_to_enabled() -> None:
    """Test the default of the disabled flag."""
    assert RepositoryIssues("octo", "repo").disabled is False
    assert ExternalProject("octo", 1).disabled is False
