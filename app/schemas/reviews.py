"""Pydantic schemas for review, webhook, and demo control endpoints.

Responses use camelCase field names, which is what the dashboard reads.
"""

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from app.services.docs.types import Review


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FileChangeResponse(BaseModel):
    before: str
    after: str


class ReviewResponse(CamelModel):
    """A documentation change proposal as shown on the dashboard."""

    id: int
    pr_number: int | None = None
    pr_url: str | None = None
    branch: str | None = None
    files: dict[str, FileChangeResponse]
    status: str
    created_at: str

    @classmethod
    def from_review(cls, review: "Review") -> "ReviewResponse":
        return cls(
            id=review.id,
            pr_number=review.pr_number,
            pr_url=review.pr_url,
            branch=review.branch,
            files={
                path: FileChangeResponse(before=change.before, after=change.after)
                for path, change in review.files.items()
            },
            status=review.status.value,
            created_at=review.created_at,
        )


class EditReviewRequest(BaseModel):
    """Request body for POST /reviews/{id}/edit.

    Both fields are optional here so a missing one yields the dashboard's
    400 message rather than a 422.
    """

    file: str | None = None
    content: str | None = None


class ApproveReviewResponse(BaseModel):
    success: bool = True
    message: str = "PR merged successfully"


class SuccessResponse(BaseModel):
    success: bool = True


class WebhookPayload(BaseModel):
    """Change notification from the product repo's CI.

    `changed_files` is a comma-separated list of source paths.
    """

    model_config = ConfigDict(extra="allow")

    changed_files: str = ""

    def changed_paths(self) -> list[str]:
        return [path for path in self.changed_files.split(",") if path]


class AccessLevelRequest(BaseModel):
    level: str | None = None


class AccessLevelResponse(CamelModel):
    access_level: str


class TriggerResponse(CamelModel):
    triggered: bool = True
    access_level: str


class StatusResponse(CamelModel):
    """Process and configuration snapshot for GET /status."""

    status: str = "ok"
    access_level: str
    pending_reviews: int = Field(description="Reviews held in the store, any status")
    docs_repo: str
    product_repo: str
