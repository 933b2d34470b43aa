"""
Shared HTTP client for GitHub API operations.

One pooled AsyncClient serves every read and write against the docs and
product repositories, so a demo run reuses a single connection instead of
paying a TLS handshake per commit.
"""

import logging

import httpx

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"

# Module-level singleton client
_client: httpx.AsyncClient | None = None


async def _log_request(request: httpx.Request) -> None:
    logger.debug(f"GitHub {request.method} {request.url.path}")


def get_github_client() -> httpx.AsyncClient:
    """
    Get or create the shared HTTP client for GitHub API calls.

    Auth headers are passed per-request, not stored on the client.

    Returns:
        Shared httpx.AsyncClient rooted at the GitHub API
    """
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(
            base_url=GITHUB_API_URL,
            timeout=httpx.Timeout(30.0, connect=5.0),
            limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            http2=True,
            event_hooks={"request": [_log_request]},
        )
        logger.debug("Created GitHub HTTP client")
    return _client


async def close_github_client() -> None:
    """Close the shared HTTP client. Called from the app lifespan on shutdown."""
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
        _client = None
        logger.debug("Closed GitHub HTTP client")
