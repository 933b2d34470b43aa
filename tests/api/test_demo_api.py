"""API tests for the demo control endpoints: trigger, reset, access level."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from app.content import DEMO_CODE_PATH
from app.main import create_app
from app.services.github import GitHubAPIError, PullRequest
from tests.helpers.fakes import PRODUCT_REPO

ADMIN_ENDPOINTS = [
    ("post", "/trigger"),
    ("post", "/reset"),
    ("post", "/access-level"),
    ("get", "/analyze"),
    ("get", "/analyze/stream"),
    ("post", "/fix-gaps"),
]


# ═══════════════════════════════════════════════════════════════════════════
# Admin auth
# ═══════════════════════════════════════════════════════════════════════════


class TestAdminAuth:
    @pytest.mark.anyio
    @pytest.mark.parametrize("method,path", ADMIN_ENDPOINTS)
    async def test_missing_token_is_401(self, api_client, method, path):
        response = await api_client.request(method, path)

        assert response.status_code == 401
        assert response.json() == {"detail": "Unauthorized"}

    @pytest.mark.anyio
    async def test_disabled_without_admin_secret(self, test_settings, services, fake_github):
        open_settings = test_settings.model_copy(update={"admin_secret": ""})
        app = create_app(open_settings, services=services)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.post("/access-level", json={"level": "high"})

        assert response.status_code == 200


# ═══════════════════════════════════════════════════════════════════════════
# Access level
# ═══════════════════════════════════════════════════════════════════════════


class TestAccessLevel:
    @pytest.mark.anyio
    async def test_switches_level(self, api_client, admin_headers, services):
        response = await api_client.post("/access-level", json={"level": "high"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"accessLevel": "high"}
        assert services.orchestrator.access_level.value == "high"
        assert (await api_client.get("/status")).json()["accessLevel"] == "high"

    @pytest.mark.anyio
    @pytest.mark.parametrize("body", [{"level": "low"}, {"level": "HIGH"}, {}])
    async def test_invalid_level(self, api_client, admin_headers, services, body):
        response = await api_client.post("/access-level", json=body, headers=admin_headers)

        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid access level"}
        assert services.orchestrator.access_level.value == "medium"

    @pytest.mark.anyio
    async def test_high_mode_webhook_commits_directly(self, api_client, admin_headers, store, fake_github):
        await api_client.post("/access-level", json={"level": "high"}, headers=admin_headers)

        response = await api_client.post(
            "/webhook",
            json={"changed_files": DEMO_CODE_PATH},
            headers={"X-Webhook-Secret": "demo-secret"},
        )

        assert response.status_code == 200
        assert store.count() == 0
        fake_github.create_pull_request.assert_not_awaited()
        assert fake_github.commit_file.await_count == 2


# ═══════════════════════════════════════════════════════════════════════════
# Trigger / reset
# ═══════════════════════════════════════════════════════════════════════════


class TestTrigger:
    @pytest.mark.anyio
    async def test_pushes_code_then_processes_in_background(self, api_client, admin_headers, fake_github, store):
        response = await api_client.post("/trigger", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"triggered": True, "accessLevel": "medium"}

        first_commit = fake_github.commit_file.await_args_list[0]
        assert first_commit.args[0] == PRODUCT_REPO
        assert first_commit.args[1] == DEMO_CODE_PATH

        # Background task runs before the ASGI call completes
        assert len(store.list_pending()) == 1

    @pytest.mark.anyio
    async def test_push_failure_is_500(self, api_client, admin_headers, fake_github):
        fake_github.commit_file.side_effect = GitHubAPIError("Repository or resource not found: acme/product", 404)

        response = await api_client.post("/trigger", headers=admin_headers)

        assert response.status_code == 500
        assert response.json() == {"detail": "Repository or resource not found: acme/product"}


class TestReset:
    @pytest.mark.anyio
    async def test_resets_everything(self, api_client, admin_headers, services, fake_github, store):
        await services.orchestrator.handle_changes([DEMO_CODE_PATH])
        fake_github.list_open_pull_requests.return_value = [
            PullRequest(number=42, url="https://github.com/acme/docs/pull/42", state="open")
        ]

        response = await api_client.post("/reset", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True}
        fake_github.close_pull_request.assert_awaited_once()
        assert (await api_client.get("/reviews")).json() == []
        assert (await api_client.get("/status")).json()["pendingReviews"] == 0
