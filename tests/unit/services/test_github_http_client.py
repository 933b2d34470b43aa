"""Unit tests for GitHub HTTP client and helpers.

Tests the shared HTTP client singleton, rate limit parsing, error response
mapping, and the base64 codecs used by the contents API.
"""

from __future__ import annotations

import httpx
import pytest

from app.services.github.exceptions import GitHubAPIError, GitHubConflictError
from app.services.github.helpers import (
    RateLimitInfo,
    decode_content,
    encode_content,
    extract_error_message,
    handle_error_response,
)
from app.services.github.http_client import GITHUB_API_URL, close_github_client, get_github_client

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_response(
    status_code: int = 200,
    json_data: object = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build a fake httpx.Response."""
    return httpx.Response(
        status_code=status_code,
        json=json_data,
        headers=headers or {},
    )


# ═══════════════════════════════════════════════════════════════════════════
# RateLimitInfo
# ═══════════════════════════════════════════════════════════════════════════


class TestRateLimitInfo:
    """Tests for rate limit header parsing."""

    def test_extracts_remaining_and_reset(self):
        resp = _make_response(
            headers={
                "X-RateLimit-Remaining": "42",
                "X-RateLimit-Reset": "1700000000",
            }
        )
        info = RateLimitInfo(resp)

        assert info.remaining == "42"
        assert info.reset_timestamp == 1700000000
        assert info.is_exhausted is False

    def test_detects_exhausted(self):
        resp = _make_response(headers={"X-RateLimit-Remaining": "0"})

        assert RateLimitInfo(resp).is_exhausted is True

    def test_missing_headers(self):
        info = RateLimitInfo(_make_response(headers={}))

        assert info.remaining is None
        assert info.reset_timestamp is None
        assert info.is_exhausted is False


# ═══════════════════════════════════════════════════════════════════════════
# extract_error_message
# ═══════════════════════════════════════════════════════════════════════════


class TestExtractErrorMessage:
    def test_plain_message(self):
        resp = _make_response(status_code=403, json_data={"message": "Resource not accessible"})
        assert extract_error_message(resp) == "Resource not accessible"

    def test_appends_first_validation_error(self):
        resp = _make_response(
            status_code=422,
            json_data={
                "message": "Validation Failed",
                "errors": [{"message": "A pull request already exists for acme:docs-update"}],
            },
        )
        assert (
            extract_error_message(resp)
            == "Validation Failed: A pull request already exists for acme:docs-update"
        )

    def test_non_json_body_returns_none(self):
        resp = httpx.Response(status_code=502, text="<html>Bad gateway</html>")
        assert extract_error_message(resp) is None


# ═══════════════════════════════════════════════════════════════════════════
# handle_error_response
# ═══════════════════════════════════════════════════════════════════════════


class TestHandleErrorResponse:
    """Tests for mapping GitHub status codes onto GitHubAPIError."""

    @pytest.mark.parametrize("status_code", [200, 201, 204])
    def test_success_does_nothing(self, status_code):
        handle_error_response(_make_response(status_code=status_code), "acme/docs")

    def test_401_raises_auth_error(self):
        with pytest.raises(GitHubAPIError, match="Invalid or expired") as exc_info:
            handle_error_response(_make_response(status_code=401), "acme/docs")
        assert exc_info.value.status_code == 401

    def test_404_raises_not_found(self):
        with pytest.raises(GitHubAPIError, match="not found: acme/docs"):
            handle_error_response(_make_response(status_code=404), "acme/docs")

    def test_403_with_rate_limit_exhausted(self):
        resp = _make_response(
            status_code=403,
            headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1700000000"},
        )
        with pytest.raises(GitHubAPIError, match="rate limit") as exc_info:
            handle_error_response(resp, "acme/docs")

        assert exc_info.value.rate_limit_reset == 1700000000

    def test_403_without_rate_limit_uses_github_message(self):
        resp = _make_response(status_code=403, json_data={"message": "Resource not accessible"})
        with pytest.raises(GitHubAPIError, match="Resource not accessible"):
            handle_error_response(resp, "acme/docs")

    @pytest.mark.parametrize("status_code", [405, 409])
    def test_conflicts_raise_conflict_error(self, status_code):
        resp = _make_response(status_code=status_code, json_data={"message": "Pull Request is not mergeable"})
        with pytest.raises(GitHubConflictError, match="not mergeable") as exc_info:
            handle_error_response(resp, "acme/docs")

        assert exc_info.value.status_code == status_code

    def test_422_raises_validation_error(self):
        with pytest.raises(GitHubAPIError, match="Validation failed") as exc_info:
            handle_error_response(_make_response(status_code=422), "acme/docs")
        assert exc_info.value.status_code == 422

    def test_500_raises_generic_error(self):
        with pytest.raises(GitHubAPIError, match="GitHub API error: 500"):
            handle_error_response(_make_response(status_code=500), "acme/docs")


# ═══════════════════════════════════════════════════════════════════════════
# Content codecs
# ═══════════════════════════════════════════════════════════════════════════


class TestContentCodecs:
    def test_encode_is_base64_utf8(self):
        assert encode_content("héllo") == "aMOpbGxv"

    def test_decode_ignores_line_wrapping(self):
        # GitHub wraps base64 payloads at 60 columns
        assert decode_content("aMOp\nbGxv\n") == "héllo"


# ═══════════════════════════════════════════════════════════════════════════
# HTTP Client Singleton
# ═══════════════════════════════════════════════════════════════════════════


class TestGitHubHttpClient:
    """Tests for the shared HTTP client singleton."""

    @pytest.mark.anyio
    async def test_client_is_rooted_at_github_api(self):
        import app.services.github.http_client as mod

        original = mod._client
        mod._client = None

        try:
            client = get_github_client()
            assert isinstance(client, httpx.AsyncClient)
            assert str(client.base_url).rstrip("/") == GITHUB_API_URL
            assert client.timeout.connect == 5.0
            assert client.timeout.pool == 30.0
        finally:
            await close_github_client()
            mod._client = original

    @pytest.mark.anyio
    async def test_returns_same_instance_until_closed(self):
        import app.services.github.http_client as mod

        original = mod._client
        mod._client = None

        try:
            a = get_github_client()
            b = get_github_client()
            assert a is b

            await close_github_client()
            assert a.is_closed
            assert mod._client is None

            c = get_github_client()
            assert c is not a
        finally:
            await close_github_client()
            mod._client = original
