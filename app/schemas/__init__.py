"""Pydantic schemas for API request/response validation."""

from app.schemas.gaps import (
    AnalysisResult,
    DocGap,
    FixGapsRequest,
    FixGapsResponse,
    GapSummary,
    SuggestedFix,
)
from app.schemas.reviews import (
    AccessLevelRequest,
    AccessLevelResponse,
    ApproveReviewResponse,
    EditReviewRequest,
    ReviewResponse,
    StatusResponse,
    SuccessResponse,
    TriggerResponse,
    WebhookPayload,
)

__all__ = [
    "AccessLevelRequest",
    "AccessLevelResponse",
    "AnalysisResult",
    "ApproveReviewResponse",
    "DocGap",
    "EditReviewRequest",
    "FixGapsRequest",
    "FixGapsResponse",
    "GapSummary",
    "ReviewResponse",
    "StatusResponse",
    "SuccessResponse",
    "SuggestedFix",
    "TriggerResponse",
    "WebhookPayload",
]
