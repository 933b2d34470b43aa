"""
Shared data types for the documentation agent services.

These dataclasses are used across the ChangeOrchestrator, GapFixApplicator,
and the review store.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum


class ReviewStatus(str, Enum):
    """Lifecycle of a documentation change proposal.

    Only PENDING -> MERGED is ever exercised. APPROVED is part of the
    dashboard's vocabulary but no code path sets it.
    """

    PENDING = "pending"
    APPROVED = "approved"
    MERGED = "merged"


class AccessLevel(str, Enum):
    """How much the agent may change without a human in the loop."""

    HIGH = "high"  # commit straight to main
    MEDIUM = "medium"  # open a pull request for review


@dataclass
class FileChange:
    """Before/after text of one documentation file in a review."""

    before: str
    after: str


@dataclass
class Review:
    """A proposed documentation change, usually backed by a pull request."""

    id: int
    files: dict[str, FileChange]
    status: ReviewStatus = ReviewStatus.PENDING
    pr_number: int | None = None
    pr_url: str | None = None
    branch: str | None = None
    created_at: str = field(default_factory=lambda: datetime.now(UTC).isoformat())


@dataclass
class GapFixResult:
    """Result of opening a PR for a batch of gap fixes."""

    review: Review
    pr_number: int
    pr_url: str
    fixed_gaps: int
    files_updated: int
