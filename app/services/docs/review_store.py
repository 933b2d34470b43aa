"""
Review storage.

The orchestrator depends on ReviewStore, not on a concrete backend, so a
persistent implementation can replace the in-memory one without touching
the orchestration code. Callers always receive copies: mutating a returned
Review never changes stored state.
"""

import copy
import logging
from abc import ABC, abstractmethod
from itertools import count

from app.services.docs.types import FileChange, Review, ReviewStatus

logger = logging.getLogger(__name__)


class ReviewNotFoundError(LookupError):
    """No review exists with the requested id."""

    def __init__(self, review_id: int):
        self.review_id = review_id
        super().__init__(f"Review {review_id} not found")


class ReviewStateError(Exception):
    """A status transition or edit isn't valid for the review's current state."""


class ReviewStore(ABC):
    """Pluggable registry of documentation change proposals."""

    @abstractmethod
    def create(
        self,
        files: dict[str, FileChange],
        pr_number: int | None = None,
        pr_url: str | None = None,
        branch: str | None = None,
    ) -> Review:
        """Record a new pending review and return it with its assigned id."""

    @abstractmethod
    def get(self, review_id: int) -> Review:
        """Return a review. Raises ReviewNotFoundError if absent."""

    @abstractmethod
    def list_pending(self) -> list[Review]:
        """Return pending reviews in id order. Empty list if none."""

    @abstractmethod
    def mark_merged(self, review_id: int) -> Review:
        """Move a review from pending to merged.

        Raises ReviewStateError if the review isn't pending anymore.
        """

    @abstractmethod
    def update_file(self, review_id: int, path: str, after: str) -> Review:
        """Replace the proposed content of one file already in the review."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every review. Ids handed out before are never reused."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored reviews, any status."""


class InMemoryReviewStore(ReviewStore):
    """Process-lifetime store keyed by an incrementing integer id.

    Each method completes without awaiting, so concurrent requests on the
    event loop never observe a half-applied change.
    """

    def __init__(self) -> None:
        self._reviews: dict[int, Review] = {}
        self._ids = count(1)

    def create(
        self,
        files: dict[str, FileChange],
        pr_number: int | None = None,
        pr_url: str | None = None,
        branch: str | None = None,
    ) -> Review:
        if not files:
            raise ValueError("A review must contain at least one file")

        review = Review(
            id=next(self._ids),
            files=copy.deepcopy(files),
            pr_number=pr_number,
            pr_url=pr_url,
            branch=branch,
        )
        self._reviews[review.id] = review
        logger.info(f"Created review {review.id} ({len(files)} files, PR #{pr_number})")
        return copy.deepcopy(review)

    def _get_stored(self, review_id: int) -> Review:
        review = self._reviews.get(review_id)
        if review is None:
            raise ReviewNotFoundError(review_id)
        return review

    def get(self, review_id: int) -> Review:
        return copy.deepcopy(self._get_stored(review_id))

    def list_pending(self) -> list[Review]:
        return [
            copy.deepcopy(review)
            for _, review in sorted(self._reviews.items())
            if review.status == ReviewStatus.PENDING
        ]

    def mark_merged(self, review_id: int) -> Review:
        review = self._get_stored(review_id)
        if review.status != ReviewStatus.PENDING:
            raise ReviewStateError(f"Review {review_id} is already {review.status.value}")
        review.status = ReviewStatus.MERGED
        return copy.deepcopy(review)

    def update_file(self, review_id: int, path: str, after: str) -> Review:
        review = self._get_stored(review_id)
        if path not in review.files:
            raise ReviewStateError("File not part of this review")
        review.files[path].after = after
        return copy.deepcopy(review)

    def clear(self) -> None:
        cleared = len(self._reviews)
        self._reviews.clear()
        logger.info(f"Cleared {cleared} reviews")

    def count(self) -> int:
        return len(self._reviews)
