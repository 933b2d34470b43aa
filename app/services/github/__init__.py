"""
GitHub service package.

Usage: `from app.services.github import GitHubService, RepoRef`

Module structure:
- service.py: GitHubService facade keyed by RepoRef
- read_operations.py: File, branch, and pull request reads
- write_operations.py: Commits, branches, and pull request mutations
- helpers.py: Rate limit handling, error mapping, base64 codecs
- http_client.py: Shared pooled AsyncClient
- types.py: Data types and response models
- exceptions.py: Custom exceptions
"""

from app.services.github.exceptions import GitHubAPIError, GitHubConflictError
from app.services.github.helpers import RateLimitInfo, handle_error_response
from app.services.github.http_client import close_github_client
from app.services.github.read_operations import GitHubReadOperations
from app.services.github.service import DEFAULT_BRANCH, GitHubService
from app.services.github.types import MergeResult, PullRequest, RepoFile, RepoRef
from app.services.github.write_operations import GitHubWriteOperations

__all__ = [
    # Service (main entry point)
    "GitHubService",
    "DEFAULT_BRANCH",
    # Operation classes
    "GitHubReadOperations",
    "GitHubWriteOperations",
    # HTTP client lifecycle
    "close_github_client",
    # Utilities
    "handle_error_response",
    "RateLimitInfo",
    # Exceptions
    "GitHubAPIError",
    "GitHubConflictError",
    # Types
    "MergeResult",
    "PullRequest",
    "RepoFile",
    "RepoRef",
]
