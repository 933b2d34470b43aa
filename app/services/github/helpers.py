"""
GitHub API helper utilities.

Provides rate limit handling and error response processing for GitHub API calls.
"""

import base64
import logging
from collections.abc import Iterator
from contextlib import contextmanager

import httpx

from app.services.github.exceptions import GitHubAPIError, GitHubConflictError

logger = logging.getLogger(__name__)

SUCCESS_STATUSES = frozenset({200, 201, 204})


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


def extract_error_message(response: httpx.Response) -> str | None:
    """Pull GitHub's human-readable message out of an error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None

    message = body.get("message")
    errors = body.get("errors")
    if message and isinstance(errors, list) and errors:
        first = errors[0]
        detail = first.get("message") if isinstance(first, dict) else str(first)
        if detail:
            return f"{message}: {detail}"
    return message


def handle_error_response(response: httpx.Response, repo_name: str) -> None:
    """
    Handle common error responses from GitHub API.

    Args:
        response: The HTTP response from GitHub API
        repo_name: Repository name for error context (format: "owner/repo")

    Raises:
        GitHubConflictError: For 409 conflicts and 405 merge refusals
        GitHubAPIError: For authentication, authorization, or other API errors
    """
    if response.status_code in SUCCESS_STATUSES:
        return

    rate_info = RateLimitInfo(response)
    github_message = extract_error_message(response)

    if response.status_code == 401:
        raise GitHubAPIError("Invalid or expired GitHub token", 401)
    elif response.status_code == 403:
        if rate_info.is_exhausted:
            raise GitHubAPIError(
                "GitHub API rate limit exceeded",
                403,
                rate_limit_reset=rate_info.reset_timestamp,
            )
        raise GitHubAPIError(github_message or "GitHub API forbidden", 403)
    elif response.status_code == 404:
        raise GitHubAPIError(f"Repository or resource not found: {repo_name}", 404)
    elif response.status_code in (405, 409):
        raise GitHubConflictError(
            github_message or f"Conflict updating {repo_name}",
            response.status_code,
        )
    elif response.status_code == 422:
        raise GitHubAPIError(github_message or "Validation failed", 422)

    logger.warning(f"Unexpected GitHub response for {repo_name}: {response.status_code}")
    raise GitHubAPIError(
        github_message or f"GitHub API error: {response.status_code}",
        response.status_code,
    )


@contextmanager
def transport_errors(repo_name: str) -> Iterator[None]:
    """
    Re-raise network-level failures as GitHubAPIError.

    Timeouts and connection errors carry no status code, so callers see them
    as a GitHubAPIError with status_code None.
    """
    try:
        yield
    except httpx.TimeoutException as e:
        logger.warning(f"GitHub request for {repo_name} timed out: {e}")
        raise GitHubAPIError(f"GitHub request timed out: {e}") from e
    except httpx.RequestError as e:
        logger.warning(f"GitHub request for {repo_name} failed: {e}")
        raise GitHubAPIError(f"GitHub request failed: {e}") from e


def encode_content(content: str) -> str:
    """Base64-encode UTF-8 text for the contents API."""
    return base64.b64encode(content.encode("utf-8")).decode("ascii")


def decode_content(content_b64: str) -> str:
    """Decode a base64 contents-API payload back into text.

    GitHub wraps the payload at 60 columns; b64decode ignores the newlines.
    """
    return base64.b64decode(content_b64).decode("utf-8")
