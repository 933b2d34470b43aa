"""
GitHub API read operations.

Provides the read-only operations the agent needs:
- File contents and blob SHAs
- Branch tip lookups
- Open pull request listings
"""

import logging
from typing import Any

from app.services.github.exceptions import GitHubAPIError
from app.services.github.helpers import decode_content, handle_error_response, transport_errors
from app.services.github.http_client import get_github_client
from app.services.github.types import PullRequest, RepoFile

logger = logging.getLogger(__name__)


def normalize_pull_request(data: dict[str, Any]) -> PullRequest:
    """Convert GitHub API response to PullRequest dataclass."""
    head = data.get("head") or {}
    return PullRequest(
        number=data["number"],
        url=data.get("html_url", ""),
        state=data.get("state", "open"),
        head_ref=head.get("ref"),
        title=data.get("title"),
    )


class GitHubReadOperations:
    """
    Read-only operations for GitHub API.

    Uses the shared HTTP client singleton for connection pooling.
    """

    API_VERSION = "2022-11-28"

    def __init__(self, token: str):
        self.token = token
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.API_VERSION,
        }

    async def get_file(
        self,
        owner: str,
        repo: str,
        path: str,
        branch: str = "main",
    ) -> RepoFile | None:
        """
        Fetch a file's decoded content and blob SHA.

        Args:
            owner: Repository owner
            repo: Repository name
            path: File path within the repository
            branch: Branch name (default: "main")

        Returns:
            RepoFile, or None if the path doesn't exist or isn't a text file
        """
        client = get_github_client()
        with transport_errors(f"{owner}/{repo}"):
            response = await client.get(
                f"/repos/{owner}/{repo}/contents/{path}",
                headers=self._headers,
                params={"ref": branch},
            )

        if response.status_code == 404:
            return None

        handle_error_response(response, f"{owner}/{repo}")

        data = response.json()
        if not isinstance(data, dict) or data.get("type") != "file":
            return None

        content_b64 = data.get("content")
        if content_b64 is None or data.get("encoding") != "base64":
            return None

        try:
            content = decode_content(content_b64)
        except (ValueError, UnicodeDecodeError):
            logger.warning(f"Could not decode {owner}/{repo}:{path}")
            return None

        return RepoFile(
            path=path,
            content=content,
            size=data.get("size", 0),
            sha=data["sha"],
        )

    async def get_file_content(
        self,
        owner: str,
        repo: str,
        path: str,
        branch: str = "main",
    ) -> str | None:
        """Fetch just the decoded text of a file, or None if unavailable."""
        file = await self.get_file(owner, repo, path, branch)
        return file.content if file else None

    async def get_file_sha(
        self,
        owner: str,
        repo: str,
        path: str,
        branch: str = "main",
    ) -> str | None:
        """
        Get the blob SHA of a file, or None if the file doesn't exist yet.

        Required by the contents API when overwriting an existing file.
        """
        client = get_github_client()
        with transport_errors(f"{owner}/{repo}"):
            response = await client.get(
                f"/repos/{owner}/{repo}/contents/{path}",
                headers=self._headers,
                params={"ref": branch},
            )

        if response.status_code == 404:
            return None

        handle_error_response(response, f"{owner}/{repo}")

        data = response.json()
        if not isinstance(data, dict):
            return None
        sha: str | None = data.get("sha")
        return sha

    async def get_branch_sha(self, owner: str, repo: str, branch: str = "main") -> str:
        """
        Get the commit SHA at the tip of a branch.

        Raises:
            GitHubAPIError: If the branch doesn't exist
        """
        client = get_github_client()
        with transport_errors(f"{owner}/{repo}"):
            response = await client.get(
                f"/repos/{owner}/{repo}/git/ref/heads/{branch}",
                headers=self._headers,
            )

        if response.status_code == 404:
            raise GitHubAPIError(f"Branch '{branch}' not found", 404)
        handle_error_response(response, f"{owner}/{repo}")

        sha: str = response.json()["object"]["sha"]
        return sha

    async def list_pull_requests(
        self,
        owner: str,
        repo: str,
        state: str = "open",
    ) -> list[PullRequest]:
        """List pull requests in the given state (first 100)."""
        client = get_github_client()
        with transport_errors(f"{owner}/{repo}"):
            response = await client.get(
                f"/repos/{owner}/{repo}/pulls",
                headers=self._headers,
                params={"state": state, "per_page": 100},
            )
        handle_error_response(response, f"{owner}/{repo}")

        return [normalize_pull_request(item) for item in response.json()]
