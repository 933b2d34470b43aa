"""
ChangeOrchestrator - Propagates code changes into documentation updates.

Given the source files touched by a push, looks up the documentation updates
mapped to them and, depending on the access level:
1. HIGH: commits each updated doc straight to main
2. MEDIUM: opens one branch + pull request with every update and records a
   Review that an operator can edit and approve

Remote sequences (branch -> commits -> pull request) are best effort with no
rollback: if a step fails, whatever was already created on GitHub stays
there. The completed steps are logged before the error propagates.
"""

import logging
import time
from collections.abc import Mapping, Sequence

from app.content import INITIAL_DOCS, UPDATE_MAPPINGS
from app.services.docs.review_store import ReviewStateError, ReviewStore
from app.services.docs.types import AccessLevel, FileChange, Review, ReviewStatus
from app.services.events import EventBroadcaster, EventType
from app.services.github import GitHubAPIError, GitHubService, RepoRef

logger = logging.getLogger(__name__)

REVIEW_PR_TITLE = "docs: update documentation based on code changes"
PR_FOOTER = "Generated by Oqoqo Demo"


def timestamped_branch(prefix: str) -> str:
    """Branch name with an epoch-milliseconds suffix, e.g. docs-update-1700000000000."""
    return f"{prefix}-{int(time.time() * 1000)}"


def format_file_list(paths: Sequence[str]) -> str:
    return "\n".join(f"- `{path}`" for path in paths)


class ChangeOrchestrator:
    """
    Turns changed source paths into documentation commits or reviews.

    The access level is held on the instance and can be switched at runtime,
    so both modes are reachable without restarting the process.
    """

    def __init__(
        self,
        github: GitHubService,
        store: ReviewStore,
        broadcaster: EventBroadcaster,
        docs_repo: RepoRef,
        access_level: AccessLevel = AccessLevel.MEDIUM,
        update_mappings: Mapping[str, Mapping[str, str]] = UPDATE_MAPPINGS,
        initial_docs: Mapping[str, str] = INITIAL_DOCS,
    ) -> None:
        self.github = github
        self.store = store
        self.broadcaster = broadcaster
        self.docs_repo = docs_repo
        self.access_level = access_level
        self.update_mappings = update_mappings
        self.initial_docs = initial_docs

    async def set_access_level(self, level: AccessLevel) -> None:
        self.access_level = level
        logger.info(f"Access level set to {level.value}")
        await self.broadcaster.broadcast(EventType.ACCESS_LEVEL_CHANGED, {"level": level.value})

    def collect_updates(self, changed_files: Sequence[str]) -> dict[str, str]:
        """Merge the doc updates for every mapped changed file.

        Unmapped files contribute nothing. When two changed files update the
        same doc, the later one wins.
        """
        updates: dict[str, str] = {}
        for path in changed_files:
            updates.update(self.update_mappings.get(path, {}))
        return updates

    async def handle_changes(self, changed_files: Sequence[str]) -> Review | None:
        """Dispatch on the current access level."""
        if self.access_level == AccessLevel.HIGH:
            await self.commit_directly(changed_files)
            return None
        return await self.propose_review(changed_files)

    async def commit_directly(self, changed_files: Sequence[str]) -> None:
        """Commit every mapped doc update to main, one commit per file."""
        await self.broadcaster.broadcast(EventType.ANALYZING_CHANGES, {"files": list(changed_files)})
        completed: list[str] = []

        try:
            for path in changed_files:
                for doc_path, content in self.update_mappings.get(path, {}).items():
                    await self.broadcaster.broadcast(EventType.COMMITTING, {"file": doc_path})
                    await self.github.commit_file(
                        self.docs_repo,
                        doc_path,
                        content,
                        f"docs: auto-update {doc_path} based on code changes",
                    )
                    completed.append(f"commit {doc_path}")
                    await self.broadcaster.broadcast(EventType.COMMITTED, {"file": doc_path})
        except GitHubAPIError as e:
            logger.error(
                f"Direct commit for {list(changed_files)} failed ({e.message}); "
                f"left on {self.docs_repo.full_name}: {completed or 'nothing'}"
            )
            raise

        # GitHub Pages redeploys on its own once main changes
        await self.broadcaster.broadcast(EventType.DEPLOYMENT_STARTED)

    async def propose_review(self, changed_files: Sequence[str]) -> Review | None:
        """
        Open one pull request carrying every mapped doc update.

        Returns:
            The created Review, or None if no changed file maps to a doc update
        """
        await self.broadcaster.broadcast(EventType.ANALYZING_CHANGES, {"files": list(changed_files)})

        updates = self.collect_updates(changed_files)
        if not updates:
            await self.broadcaster.broadcast(EventType.NO_UPDATES_NEEDED)
            return None

        files = {
            doc_path: FileChange(before=self.initial_docs.get(doc_path, ""), after=content)
            for doc_path, content in updates.items()
        }
        branch = timestamped_branch("docs-update")
        completed: list[str] = []

        try:
            await self.github.create_branch_from(self.docs_repo, branch)
            completed.append(f"branch {branch}")
            await self.broadcaster.broadcast(EventType.BRANCH_CREATED, {"branch": branch})

            for doc_path, change in files.items():
                await self.github.commit_file(
                    self.docs_repo, doc_path, change.after, f"docs: update {doc_path}", branch
                )
                completed.append(f"commit {doc_path}")

            pr = await self.github.create_pull_request(
                self.docs_repo,
                title=REVIEW_PR_TITLE,
                head=branch,
                body=(
                    "## Automated Documentation Update\n\n"
                    "This PR was automatically generated based on code changes.\n\n"
                    f"### Files Updated\n{format_file_list(list(files))}\n\n"
                    f"---\n{PR_FOOTER}"
                ),
            )
        except GitHubAPIError as e:
            logger.error(
                f"Review for {list(changed_files)} failed ({e.message}); "
                f"left on {self.docs_repo.full_name}: {completed or 'nothing'}"
            )
            raise

        await self.broadcaster.broadcast(EventType.PR_CREATED, {"prNumber": pr.number, "prUrl": pr.url})

        return self.store.create(files, pr_number=pr.number, pr_url=pr.url, branch=branch)

    async def approve(self, review_id: int) -> Review:
        """
        Squash-merge a review's pull request and mark it merged.

        Raises:
            ReviewNotFoundError: Unknown review id
            ReviewStateError: No pull request, or the review isn't pending
            GitHubAPIError: The merge itself failed (status is left unchanged)
        """
        review = self.store.get(review_id)
        if not review.pr_number:
            raise ReviewStateError("No PR associated with this review")
        if review.status != ReviewStatus.PENDING:
            raise ReviewStateError(f"Review is already {review.status.value}")

        await self.github.merge_pull_request(self.docs_repo, review.pr_number)
        await self.broadcaster.broadcast(EventType.PR_MERGED, {"prNumber": review.pr_number})

        if review.branch:
            try:
                await self.github.delete_branch(self.docs_repo, review.branch)
            except GitHubAPIError as e:
                logger.info(f"Branch {review.branch} not deleted: {e.message}")

        merged = self.store.mark_merged(review_id)
        await self.broadcaster.broadcast(EventType.DEPLOYMENT_STARTED)
        return merged

    async def edit(self, review_id: int, path: str, content: str) -> Review:
        """Replace one file's proposed content and push it to the review branch."""
        review = self.store.get(review_id)
        if path not in review.files:
            raise ReviewStateError("File not part of this review")
        if review.status != ReviewStatus.PENDING or not review.branch:
            raise ReviewStateError("Review is no longer open for edits")

        await self.github.commit_file(
            self.docs_repo, path, content, f"docs: manual edit to {path}", review.branch
        )
        updated = self.store.update_file(review_id, path, content)
        await self.broadcaster.broadcast(EventType.REVIEW_UPDATED, {"reviewId": review_id, "file": path})
        return updated
