"""
DemoController - Drives the scripted demo against the product and docs repos.

- trigger: push the canned code change, then feed it to the orchestrator
  as if the product repo's webhook had fired
- reset: close open PRs and put both repos back to their initial content
"""

import asyncio
import logging

from app.content import DEMO_CODE_AFTER, DEMO_CODE_BEFORE, DEMO_CODE_PATH, INITIAL_DOCS
from app.services.docs.orchestrator import ChangeOrchestrator
from app.services.docs.review_store import ReviewStore
from app.services.events import EventBroadcaster, EventType
from app.services.github import GitHubAPIError, GitHubService, RepoRef

logger = logging.getLogger(__name__)

RESET_MESSAGE = "chore: reset to initial state"


class DemoController:
    """Scripted trigger/reset actions for the live demo."""

    def __init__(
        self,
        github: GitHubService,
        store: ReviewStore,
        orchestrator: ChangeOrchestrator,
        broadcaster: EventBroadcaster,
        docs_repo: RepoRef,
        product_repo: RepoRef,
        trigger_delay: float = 1.0,
    ) -> None:
        self.github = github
        self.store = store
        self.orchestrator = orchestrator
        self.broadcaster = broadcaster
        self.docs_repo = docs_repo
        self.product_repo = product_repo
        self.trigger_delay = trigger_delay

    async def push_demo_change(self) -> list[str]:
        """
        Commit the "after" version of the demo source file to the product repo.

        Returns:
            The changed paths to hand to the orchestrator
        """
        await self.broadcaster.broadcast(EventType.DEMO_STARTED)

        await self.github.commit_file(
            self.product_repo,
            DEMO_CODE_PATH,
            DEMO_CODE_AFTER,
            "feat: add user update and delete endpoints, rate limiting",
        )
        await self.broadcaster.broadcast(EventType.CODE_PUSHED, {"file": DEMO_CODE_PATH})
        return [DEMO_CODE_PATH]

    async def process_after_delay(self, changed_files: list[str]) -> None:
        """Run the orchestrator once the simulated webhook delay has passed.

        Runs as a background task, so failures are logged rather than raised.
        """
        await asyncio.sleep(self.trigger_delay)
        try:
            await self.orchestrator.handle_changes(changed_files)
        except GitHubAPIError as e:
            logger.error(f"Triggered change handling failed: {e.message}")

    async def reset(self) -> None:
        """Close open PRs, restore initial docs and code, and clear reviews."""
        await self.broadcaster.broadcast(EventType.RESET_STARTED)

        for pr in await self.github.list_open_pull_requests(self.docs_repo):
            await self.github.close_pull_request(self.docs_repo, pr.number)
            await self.broadcaster.broadcast(EventType.PR_CLOSED, {"prNumber": pr.number})

        for path, content in INITIAL_DOCS.items():
            await self.github.commit_file(self.docs_repo, path, content, RESET_MESSAGE)

        await self.github.commit_file(
            self.product_repo, DEMO_CODE_PATH, DEMO_CODE_BEFORE, RESET_MESSAGE
        )

        self.store.clear()
        logger.info("Demo reset complete")
        await self.broadcaster.broadcast(EventType.DEMO_RESET)
