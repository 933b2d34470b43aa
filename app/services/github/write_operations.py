"""
GitHub API write operations.

Provides all write operations the agent performs against a repository:
- Creating or updating single files (one commit per file)
- Creating and deleting branches
- Opening, merging, and closing pull requests

Every call is attempted exactly once; failures surface as GitHubAPIError.
"""

import logging

from app.services.github.exceptions import GitHubAPIError
from app.services.github.helpers import encode_content, handle_error_response, transport_errors
from app.services.github.http_client import get_github_client
from app.services.github.read_operations import normalize_pull_request
from app.services.github.types import MergeResult, PullRequest

logger = logging.getLogger(__name__)


class GitHubWriteOperations:
    """
    Write operations for GitHub API.

    Uses the contents API for commits, so each file change becomes its own
    commit on the target branch.
    """

    API_VERSION = "2022-11-28"

    def __init__(self, token: str):
        self.token = token
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.API_VERSION,
        }

    async def put_file(
        self,
        owner: str,
        repo: str,
        path: str,
        content: str,
        message: str,
        branch: str = "main",
        sha: str | None = None,
    ) -> str:
        """
        Create or update a file with a single commit.

        Args:
            owner: Repository owner
            repo: Repository name
            path: File path
            content: New file text
            message: Commit message
            branch: Branch name (default: "main")
            sha: Current blob SHA when overwriting; None creates the file

        Returns:
            The new commit SHA
        """
        payload: dict[str, str] = {
            "message": message,
            "content": encode_content(content),
            "branch": branch,
        }
        if sha:
            payload["sha"] = sha

        client = get_github_client()
        with transport_errors(f"{owner}/{repo}"):
            response = await client.put(
                f"/repos/{owner}/{repo}/contents/{path}",
                headers=self._headers,
                json=payload,
            )
        handle_error_response(response, f"{owner}/{repo}")

        commit_sha: str = response.json()["commit"]["sha"]
        logger.debug(f"Committed {path} to {owner}/{repo}@{branch}: {commit_sha[:7]}")
        return commit_sha

    async def create_branch(self, owner: str, repo: str, branch: str, from_sha: str) -> None:
        """Create a branch pointing at the given commit SHA."""
        client = get_github_client()
        with transport_errors(f"{owner}/{repo}"):
            response = await client.post(
                f"/repos/{owner}/{repo}/git/refs",
                headers=self._headers,
                json={"ref": f"refs/heads/{branch}", "sha": from_sha},
            )
        if response.status_code == 422:
            raise GitHubAPIError(f"Branch '{branch}' already exists", 422)
        handle_error_response(response, f"{owner}/{repo}")

    async def delete_branch(self, owner: str, repo: str, branch: str) -> None:
        """Delete a branch. Raises GitHubAPIError if it's already gone."""
        client = get_github_client()
        with transport_errors(f"{owner}/{repo}"):
            response = await client.delete(
                f"/repos/{owner}/{repo}/git/refs/heads/{branch}",
                headers=self._headers,
            )
        if response.status_code == 422:
            raise GitHubAPIError(f"Branch '{branch}' does not exist", 422)
        handle_error_response(response, f"{owner}/{repo}")

    async def create_pull_request(
        self,
        owner: str,
        repo: str,
        title: str,
        head: str,
        body: str,
        base: str = "main",
    ) -> PullRequest:
        """Open a pull request from head into base."""
        client = get_github_client()
        with transport_errors(f"{owner}/{repo}"):
            response = await client.post(
                f"/repos/{owner}/{repo}/pulls",
                headers=self._headers,
                json={"title": title, "head": head, "base": base, "body": body},
            )
        handle_error_response(response, f"{owner}/{repo}")

        return normalize_pull_request(response.json())

    async def merge_pull_request(
        self,
        owner: str,
        repo: str,
        number: int,
        merge_method: str = "squash",
    ) -> MergeResult:
        """
        Merge a pull request.

        Raises:
            GitHubConflictError: If GitHub refuses the merge (405/409)
        """
        client = get_github_client()
        with transport_errors(f"{owner}/{repo}"):
            response = await client.put(
                f"/repos/{owner}/{repo}/pulls/{number}/merge",
                headers=self._headers,
                json={"merge_method": merge_method},
            )
        handle_error_response(response, f"{owner}/{repo}")

        data = response.json()
        return MergeResult(
            merged=bool(data.get("merged", False)),
            sha=data.get("sha"),
            message=data.get("message", ""),
        )

    async def close_pull_request(self, owner: str, repo: str, number: int) -> PullRequest:
        """Close a pull request without merging."""
        client = get_github_client()
        with transport_errors(f"{owner}/{repo}"):
            response = await client.patch(
                f"/repos/{owner}/{repo}/pulls/{number}",
                headers=self._headers,
                json={"state": "closed"},
            )
        handle_error_response(response, f"{owner}/{repo}")

        return normalize_pull_request(response.json())
