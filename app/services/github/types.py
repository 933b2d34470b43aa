"""Data types for GitHub API responses."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RepoRef:
    """Owner/name pair identifying a repository."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass
class RepoFile:
    """Contents of a single file from a repository."""

    path: str
    content: str  # Decoded text content
    size: int
    sha: str  # Blob SHA, required when updating the file


@dataclass
class PullRequest:
    """Normalized pull request data."""

    number: int
    url: str  # html_url, the link shown to reviewers
    state: str  # "open" or "closed"
    head_ref: str | None = None
    title: str | None = None


@dataclass
class MergeResult:
    """Outcome of merging a pull request."""

    merged: bool
    sha: str | None
    message: str
