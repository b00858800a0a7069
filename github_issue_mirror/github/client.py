# This file is intended to hold the setup for the authenticated githubkit client.

"""Sets up the authenticated githubkit client."""

from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy

from github_issue_mirror.utils.constants import DEFAULT_GITHUB_API_URL, DEFAULT_REQUEST_TIMEOUT, DEFAULT_USER_AGENT

GitHubClient = GitHub[TokenAuthStrategy]


def get_github_pat_client(
    github_pat_token: str,
    github_api_url: str = DEFAULT_GITHUB_API_URL,
    user_agent: str = DEFAULT_USER_AGENT,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
) -> GitHubClient:
    """Returns an authenticated GitHub client using a personal access token.

    HTTP caching and githubkit's automatic rate-limit retries are disabled:
    every sync must see fresh data and retry policy belongs to the caller.
    """
    if not github_pat_token:
        raise RuntimeError("GitHub authentication requires github_pat_token in config.")
    return GitHub(
        auth=TokenAuthStrategy(github_pat_token),
        base_url=github_api_url,
        user_agent=user_agent,
        timeout=timeout,
        http_cache=False,
        auto_retry=False,
    )
