"""Demo control endpoints: trigger, reset, and access level switching."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends

from app.api.deps import Services, require_admin
from app.core.exceptions import UpstreamError, ValidationError
from app.schemas.reviews import (
    AccessLevelRequest,
    AccessLevelResponse,
    SuccessResponse,
    TriggerResponse,
)
from app.services.docs import AccessLevel
from app.services.github import GitHubAPIError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["demo"], dependencies=[Depends(require_admin)])


@router.post("/trigger", response_model=TriggerResponse)
async def trigger_demo(
    services: Services,
    background_tasks: BackgroundTasks,
) -> TriggerResponse:
    """
    Push the canned code change, then process it in the background as if
    the product repo's webhook had fired.
    """
    try:
        changed = await services.demo.push_demo_change()
    except GitHubAPIError as e:
        logger.error(f"Demo trigger failed: {e.message}")
        raise UpstreamError(e.message) from e

    background_tasks.add_task(services.demo.process_after_delay, changed)

    return TriggerResponse(access_level=services.orchestrator.access_level.value)


@router.post("/reset", response_model=SuccessResponse)
async def reset_demo(services: Services) -> SuccessResponse:
    """Close open PRs, restore initial docs and code, and clear reviews."""
    try:
        await services.demo.reset()
    except GitHubAPIError as e:
        logger.error(f"Demo reset failed: {e.message}")
        raise UpstreamError(e.message) from e

    return SuccessResponse()


@router.post("/access-level", response_model=AccessLevelResponse)
async def set_access_level(body: AccessLevelRequest, services: Services) -> AccessLevelResponse:
    try:
        level = AccessLevel(body.level)
    except ValueError:
        raise ValidationError("Invalid access level") from None

    await services.orchestrator.set_access_level(level)
    return AccessLevelResponse(access_level=level.value)
