"""Unit tests for DemoController — scripted trigger and reset."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from app.content import DEMO_CODE_AFTER, DEMO_CODE_BEFORE, DEMO_CODE_PATH, INITIAL_DOCS
from app.services.docs import ChangeOrchestrator, DemoController, FileChange
from app.services.docs.demo import RESET_MESSAGE
from app.services.github import GitHubAPIError, PullRequest
from tests.helpers.fakes import DOCS_REPO, PRODUCT_REPO, broadcast_payloads, broadcast_types


@pytest.fixture
def orchestrator(fake_github, store, broadcaster):
    return ChangeOrchestrator(fake_github, store, broadcaster, DOCS_REPO)


@pytest.fixture
def demo(fake_github, store, orchestrator, broadcaster):
    return DemoController(
        fake_github, store, orchestrator, broadcaster, DOCS_REPO, PRODUCT_REPO, trigger_delay=0
    )


class TestTrigger:
    @pytest.mark.anyio
    async def test_pushes_demo_code_to_product_repo(self, demo, fake_github, broadcaster):
        changed = await demo.push_demo_change()

        assert changed == [DEMO_CODE_PATH]
        fake_github.commit_file.assert_awaited_once_with(
            PRODUCT_REPO,
            DEMO_CODE_PATH,
            DEMO_CODE_AFTER,
            "feat: add user update and delete endpoints, rate limiting",
        )
        assert broadcast_types(broadcaster) == ["DEMO_STARTED", "CODE_PUSHED"]
        assert broadcast_payloads(broadcaster, "CODE_PUSHED") == [{"file": DEMO_CODE_PATH}]

    @pytest.mark.anyio
    async def test_process_after_delay_runs_orchestrator(self, demo, store):
        await demo.process_after_delay([DEMO_CODE_PATH])

        pending = store.list_pending()
        assert len(pending) == 1
        assert sorted(pending[0].files) == ["docs/getting-started.md", "docs/how-to-guide.md"]

    @pytest.mark.anyio
    async def test_process_after_delay_logs_github_failure(self, demo, fake_github, store, caplog):
        fake_github.create_branch_from.side_effect = GitHubAPIError("GitHub API forbidden", 403)

        await demo.process_after_delay([DEMO_CODE_PATH])

        assert store.count() == 0
        assert "GitHub API forbidden" in caplog.text


class TestReset:
    @pytest.mark.anyio
    async def test_closes_prs_restores_content_and_clears_store(self, demo, fake_github, store, broadcaster):
        store.create({"docs/a.md": FileChange(before="", after="x")}, pr_number=7)
        fake_github.list_open_pull_requests.return_value = [
            PullRequest(number=7, url="https://github.com/acme/docs/pull/7", state="open"),
            PullRequest(number=9, url="https://github.com/acme/docs/pull/9", state="open"),
        ]

        await demo.reset()

        assert [call.args for call in fake_github.close_pull_request.await_args_list] == [
            (DOCS_REPO, 7),
            (DOCS_REPO, 9),
        ]

        commits = [call.args for call in fake_github.commit_file.await_args_list]
        assert commits[:-1] == [
            (DOCS_REPO, path, content, RESET_MESSAGE) for path, content in INITIAL_DOCS.items()
        ]
        assert commits[-1] == (PRODUCT_REPO, DEMO_CODE_PATH, DEMO_CODE_BEFORE, RESET_MESSAGE)

        assert store.list_pending() == []
        assert store.count() == 0
        assert broadcast_types(broadcaster) == ["RESET_STARTED", "PR_CLOSED", "PR_CLOSED", "DEMO_RESET"]

    @pytest.mark.anyio
    async def test_review_ids_keep_increasing_after_reset(self, demo, store):
        first = await demo.orchestrator.handle_changes([DEMO_CODE_PATH])
        await demo.reset()

        second = await demo.orchestrator.handle_changes([DEMO_CODE_PATH])

        assert second.id > first.id

    @pytest.mark.anyio
    async def test_failure_stops_before_clearing(self, demo, fake_github, store):
        store.create({"docs/a.md": FileChange(before="", after="x")}, pr_number=7)
        fake_github.commit_file = AsyncMock(side_effect=GitHubAPIError("Invalid or expired GitHub token", 401))

        with pytest.raises(GitHubAPIError):
            await demo.reset()

        assert store.count() == 1
