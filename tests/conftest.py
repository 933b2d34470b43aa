"""Root conftest — shared fixtures for all agent tests.

Provides:
- Settings with delays disabled and an admin secret configured
- A fake GitHubService (AsyncMock methods, no network)
- A recording broadcaster for service-level tests
- The wired service graph, FastAPI app, and API client
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.content import INITIAL_DOCS
from app.main import create_app
from app.services.container import build_services
from app.services.docs import InMemoryReviewStore
from app.services.events import EventBroadcaster
from app.services.github import GitHubService, MergeResult, PullRequest
from tests.helpers.fakes import (
    ADMIN_SECRET,
    DOCS_REPO,
    PR_NUMBER,
    PR_URL,
    PRODUCT_REPO,
    WEBHOOK_SECRET,
)

# ─────────────────────────────────────────────────────────────────────────────
# Configuration
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        github_token="ghp_test_token_12345",
        docs_repo_owner=DOCS_REPO.owner,
        docs_repo=DOCS_REPO.name,
        product_repo_owner=PRODUCT_REPO.owner,
        product_repo=PRODUCT_REPO.name,
        webhook_secret=WEBHOOK_SECRET,
        admin_secret=ADMIN_SECRET,
        agent_access_level="medium",
        analysis_delay_scale=0,
        trigger_delay_seconds=0,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Fakes
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def fake_github() -> MagicMock:
    """GitHubService stand-in. Reads serve the initial docs; writes succeed."""
    github = MagicMock(spec=GitHubService)

    async def _get_file_content(repo, path, branch="main"):
        return INITIAL_DOCS.get(path)

    github.get_file_content = AsyncMock(side_effect=_get_file_content)
    github.commit_file = AsyncMock(return_value="c0ffee1")
    github.create_branch_from = AsyncMock(return_value="base5ha")
    github.create_pull_request = AsyncMock(
        return_value=PullRequest(number=PR_NUMBER, url=PR_URL, state="open")
    )
    github.merge_pull_request = AsyncMock(
        return_value=MergeResult(merged=True, sha="m3rged1", message="Pull Request successfully merged")
    )
    github.delete_branch = AsyncMock(return_value=None)
    github.list_open_pull_requests = AsyncMock(return_value=[])
    github.close_pull_request = AsyncMock()
    return github


@pytest.fixture
def store() -> InMemoryReviewStore:
    return InMemoryReviewStore()


@pytest.fixture
def broadcaster() -> MagicMock:
    """Broadcaster that records events instead of sending them."""
    fake = MagicMock(spec=EventBroadcaster)
    fake.broadcast = AsyncMock(return_value={})
    return fake


# ─────────────────────────────────────────────────────────────────────────────
# App + API client
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def services(test_settings, fake_github, store):
    return build_services(test_settings, github=fake_github, store=store)


@pytest.fixture
def app(test_settings, services):
    return create_app(test_settings, services=services)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_SECRET}"}


@pytest.fixture
async def api_client(app):
    """Async HTTP client against the app. The lifespan isn't run; services are injected."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
