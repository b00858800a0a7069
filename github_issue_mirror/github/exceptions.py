"""Contains exceptions raised by the GitHub transport."""


class TransportError(Exception):
    """Raised on a connectivity failure or a non-2xx response from GitHub.

    The transport never retries. `status_code` is None when no response was
    received.
    """

    def __init__(self, message: str, status_code: int | None = None, rate_limit_remaining: int | None = None) -> None:
        """Initializes the exception with a readable message, the HTTP status and the remaining rate limit when known."""
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.rate_limit_remaining = rate_limit_remaining
