"""
GitHub service facade used by the documentation agent.

Wraps the read and write operation classes behind repository-level helpers
(commit a file, branch from main, open/merge/close a pull request) that take
a RepoRef instead of separate owner/name strings. Pure pass-through: nothing
is cached or retried, and GitHubAPIError propagates to the caller.
"""

import logging

from app.services.github.read_operations import GitHubReadOperations
from app.services.github.types import MergeResult, PullRequest, RepoFile, RepoRef
from app.services.github.write_operations import GitHubWriteOperations

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "main"


class GitHubService:
    """Service for interacting with GitHub REST API."""

    def __init__(self, token: str):
        self.token = token
        self.reader = GitHubReadOperations(token)
        self.writer = GitHubWriteOperations(token)

    # --- Reads ---

    async def get_file(self, repo: RepoRef, path: str, branch: str = DEFAULT_BRANCH) -> RepoFile | None:
        return await self.reader.get_file(repo.owner, repo.name, path, branch)

    async def get_file_content(
        self, repo: RepoRef, path: str, branch: str = DEFAULT_BRANCH
    ) -> str | None:
        return await self.reader.get_file_content(repo.owner, repo.name, path, branch)

    async def get_branch_sha(self, repo: RepoRef, branch: str = DEFAULT_BRANCH) -> str:
        return await self.reader.get_branch_sha(repo.owner, repo.name, branch)

    async def list_open_pull_requests(self, repo: RepoRef) -> list[PullRequest]:
        return await self.reader.list_pull_requests(repo.owner, repo.name, state="open")

    # --- Writes ---

    async def commit_file(
        self,
        repo: RepoRef,
        path: str,
        content: str,
        message: str,
        branch: str = DEFAULT_BRANCH,
    ) -> str:
        """
        Create or update a file on a branch with a single commit.

        Looks up the current blob SHA first so existing files are overwritten
        rather than rejected.

        Returns:
            The new commit SHA
        """
        sha = await self.reader.get_file_sha(repo.owner, repo.name, path, branch)
        return await self.writer.put_file(
            repo.owner,
            repo.name,
            path,
            content,
            message,
            branch=branch,
            sha=sha,
        )

    async def create_branch_from(
        self, repo: RepoRef, branch: str, base: str = DEFAULT_BRANCH
    ) -> str:
        """Create `branch` at the current tip of `base`. Returns the base SHA."""
        base_sha = await self.get_branch_sha(repo, base)
        await self.writer.create_branch(repo.owner, repo.name, branch, base_sha)
        logger.info(f"Created branch {branch} on {repo.full_name} from {base}@{base_sha[:7]}")
        return base_sha

    async def delete_branch(self, repo: RepoRef, branch: str) -> None:
        await self.writer.delete_branch(repo.owner, repo.name, branch)

    async def create_pull_request(
        self,
        repo: RepoRef,
        title: str,
        head: str,
        body: str,
        base: str = DEFAULT_BRANCH,
    ) -> PullRequest:
        pr = await self.writer.create_pull_request(repo.owner, repo.name, title, head, body, base)
        logger.info(f"Opened PR #{pr.number} on {repo.full_name}: {title}")
        return pr

    async def merge_pull_request(
        self, repo: RepoRef, number: int, merge_method: str = "squash"
    ) -> MergeResult:
        return await self.writer.merge_pull_request(repo.owner, repo.name, number, merge_method)

    async def close_pull_request(self, repo: RepoRef, number: int) -> PullRequest:
        return await self.writer.close_pull_request(repo.owner, repo.name, number)
