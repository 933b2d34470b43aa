"""Exceptions for GitHub service."""


class GitHubAPIError(Exception):
    """Error from GitHub API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        rate_limit_reset: int | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.rate_limit_reset = rate_limit_reset  # Unix timestamp when rate limit resets
        super().__init__(message)


class GitHubConflictError(GitHubAPIError):
    """A write was rejected because the target changed underneath it.

    Raised for 409 responses (stale file SHA, branch already exists) and for
    pull requests that GitHub refuses to merge (405).
    """

    def __init__(self, message: str, status_code: int = 409):
        super().__init__(message, status_code=status_code)
