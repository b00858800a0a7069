"""Contains exceptions raised when reconciling application configuration."""


class GitHubAuthenticationConfigurationUndefinedError(Exception):
    """Raised when no GitHub credential is configured."""

    pass


class TargetsConfigurationError(Exception):
    """Raised when the targets file is missing or invalid."""

    def __init__(self, path: str, reason: str) -> None:
        """Initializes the exception with the targets file path and what is wrong with it."""
        super().__init__(f"Invalid targets file {path}: {reason}")
        self.path = path
        self.reason = reason
