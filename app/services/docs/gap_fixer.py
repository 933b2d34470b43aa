"""
GapFixApplicator - Opens one pull request resolving a batch of gaps.

Each target file is fetched from main once, every selected gap for it is
applied in catalogue order, and the results land as one commit per file on
a fresh branch. A gap whose `before` text isn't in the live file leaves that
file unchanged; it is still committed and listed in the PR.
"""

import logging
from collections.abc import Sequence

from app.content import PREDETERMINED_GAPS
from app.schemas.gaps import DocGap
from app.services.docs.gaps import apply_gap_fix, group_by_file, select_gaps
from app.services.docs.orchestrator import format_file_list, timestamped_branch
from app.services.docs.review_store import ReviewStore
from app.services.docs.types import FileChange, GapFixResult
from app.services.events import EventBroadcaster, EventType
from app.services.github import GitHubAPIError, GitHubService, RepoRef

logger = logging.getLogger(__name__)

ANALYZER_FOOTER = "Generated by Oqoqo Doc Analyzer"


class NoValidGapsError(ValueError):
    """Nothing in the requested batch can be fixed (unknown ids or unreadable files)."""


def pluralize_gaps(count: int) -> str:
    return f"{count} documentation gap{'s' if count != 1 else ''}"


class GapFixApplicator:
    """Applies suggested fixes for selected gaps as a reviewable PR."""

    def __init__(
        self,
        github: GitHubService,
        store: ReviewStore,
        broadcaster: EventBroadcaster,
        docs_repo: RepoRef,
        gaps: Sequence[DocGap] = PREDETERMINED_GAPS,
    ) -> None:
        self.github = github
        self.store = store
        self.broadcaster = broadcaster
        self.docs_repo = docs_repo
        self.gaps = gaps

    async def fix(self, gap_ids: Sequence[str]) -> GapFixResult:
        """
        Fix the requested gaps in a single pull request.

        Raises:
            NoValidGapsError: No requested id matches a known gap (nothing is created)
            GitHubAPIError: Any remote step failed; FIX_ERROR is broadcast first
        """
        selected = select_gaps(gap_ids, self.gaps)
        if not selected:
            raise NoValidGapsError("No valid gaps found for provided IDs")

        await self.broadcaster.broadcast(EventType.FIX_STARTED, {"gapCount": len(selected)})

        try:
            return await self._open_fix_pr(selected)
        except GitHubAPIError as e:
            logger.error(f"Fix gaps error: {e.message}")
            await self.broadcaster.broadcast(EventType.FIX_ERROR, {"error": e.message})
            raise

    async def _load_fixed_files(self, selected: list[DocGap]) -> dict[str, str]:
        fixed: dict[str, str] = {}
        for path, file_gaps in group_by_file(selected).items():
            content = await self.github.get_file_content(self.docs_repo, path)
            if not content:
                logger.warning(f"Could not fetch {path}; skipping {len(file_gaps)} gap(s)")
                continue

            for gap in file_gaps:
                updated = apply_gap_fix(gap, content)
                if updated == content:
                    logger.info(f"{gap.id}: expected text not found in {path}")
                content = updated
            fixed[path] = content
        return fixed

    async def _open_fix_pr(self, selected: list[DocGap]) -> GapFixResult:
        fixed = await self._load_fixed_files(selected)
        if not fixed:
            raise NoValidGapsError("None of the selected gaps target a file that could be fetched")

        branch = timestamped_branch("docs-fix-gaps")
        gap_lines = "\n".join(
            f"- **{gap.gap_type}** ({gap.severity}): {gap.description}" for gap in selected
        )
        completed: list[str] = []

        try:
            await self.github.create_branch_from(self.docs_repo, branch)
            completed.append(f"branch {branch}")
            await self.broadcaster.broadcast(EventType.BRANCH_CREATED, {"branch": branch})

            for path, content in fixed.items():
                await self.github.commit_file(
                    self.docs_repo,
                    path,
                    content,
                    f"docs: fix {path} - address documentation gaps",
                    branch,
                )
                completed.append(f"commit {path}")
                await self.broadcaster.broadcast(EventType.FILE_COMMITTED, {"file": path})

            pr = await self.github.create_pull_request(
                self.docs_repo,
                title=f"docs: fix {pluralize_gaps(len(selected))}",
                head=branch,
                body=(
                    "## Documentation Gap Fixes\n\n"
                    f"This PR addresses {pluralize_gaps(len(selected))} identified by the doc analyzer.\n\n"
                    f"### Gaps Fixed\n{gap_lines}\n\n"
                    f"### Files Updated\n{format_file_list(list(fixed))}\n\n"
                    f"---\n{ANALYZER_FOOTER}"
                ),
            )
        except GitHubAPIError as e:
            logger.error(
                f"Gap fix PR failed ({e.message}); "
                f"left on {self.docs_repo.full_name}: {completed or 'nothing'}"
            )
            raise
        await self.broadcaster.broadcast(EventType.PR_CREATED, {"prNumber": pr.number, "prUrl": pr.url})

        # The pre-fix content isn't kept on this path, so `before` stays empty
        review = self.store.create(
            {path: FileChange(before="", after=content) for path, content in fixed.items()},
            pr_number=pr.number,
            pr_url=pr.url,
            branch=branch,
        )

        return GapFixResult(
            review=review,
            pr_number=pr.number,
            pr_url=pr.url,
            fixed_gaps=len(selected),
            files_updated=len(fixed),
        )
