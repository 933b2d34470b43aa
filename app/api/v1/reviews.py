"""
Review endpoints: list, inspect, edit, and approve proposed doc changes.
"""

import logging

from fastapi import APIRouter, Depends

from app.api.deps import Services, require_admin
from app.core.exceptions import NotFoundError, UpstreamError, ValidationError
from app.schemas.reviews import (
    ApproveReviewResponse,
    EditReviewRequest,
    ReviewResponse,
    SuccessResponse,
)
from app.services.docs import ReviewNotFoundError, ReviewStateError
from app.services.github import GitHubAPIError

router = APIRouter(prefix="/reviews", tags=["reviews"])
logger = logging.getLogger(__name__)


@router.get("", response_model=list[ReviewResponse])
async def list_pending_reviews(services: Services) -> list[ReviewResponse]:
    """List reviews still waiting for approval."""
    return [ReviewResponse.from_review(review) for review in services.store.list_pending()]


@router.get("/{review_id}", response_model=ReviewResponse)
async def get_review(review_id: int, services: Services) -> ReviewResponse:
    """Fetch one review, whatever its status."""
    try:
        review = services.store.get(review_id)
    except ReviewNotFoundError:
        raise NotFoundError("Review") from None
    return ReviewResponse.from_review(review)


@router.post(
    "/{review_id}/approve",
    response_model=ApproveReviewResponse,
    dependencies=[Depends(require_admin)],
)
async def approve_review(review_id: int, services: Services) -> ApproveReviewResponse:
    """
    Merge the review's pull request and mark it merged.

    The branch is deleted on a best-effort basis; a failure there doesn't
    fail the approval.
    """
    try:
        await services.orchestrator.approve(review_id)
    except ReviewNotFoundError:
        raise NotFoundError("Review") from None
    except ReviewStateError as e:
        raise ValidationError(str(e)) from None
    except GitHubAPIError as e:
        logger.error(f"Approve review {review_id} failed: {e.message}")
        raise UpstreamError(e.message) from e

    return ApproveReviewResponse()


@router.post(
    "/{review_id}/edit",
    response_model=SuccessResponse,
    dependencies=[Depends(require_admin)],
)
async def edit_review(
    review_id: int,
    body: EditReviewRequest,
    services: Services,
) -> SuccessResponse:
    """Replace one file's proposed content and push it to the review branch."""
    try:
        services.store.get(review_id)
    except ReviewNotFoundError:
        raise NotFoundError("Review") from None

    if not body.file or not body.content:
        raise ValidationError("file and content required")

    try:
        await services.orchestrator.edit(review_id, body.file, body.content)
    except ReviewStateError as e:
        raise ValidationError(str(e)) from None
    except GitHubAPIError as e:
        logger.error(f"Edit review {review_id} failed: {e.message}")
        raise UpstreamError(e.message) from e

    return SuccessResponse()
