"""Unauthenticated status snapshot for the dashboard header."""

from fastapi import APIRouter

from app.api.deps import Services
from app.schemas.reviews import StatusResponse

router = APIRouter(tags=["status"])


@router.get("/status", response_model=StatusResponse)
async def get_status(services: Services) -> StatusResponse:
    return StatusResponse(
        access_level=services.orchestrator.access_level.value,
        pending_reviews=services.store.count(),
        docs_repo=services.docs_repo.full_name,
        product_repo=services.product_repo.full_name,
    )
