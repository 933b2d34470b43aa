"""Change webhook called by the product repo's CI.

Protected by the X-Webhook-Secret header rather than the admin token.
"""

import logging

from fastapi import APIRouter, Depends

from app.api.deps import Services, verify_webhook_secret
from app.core.exceptions import UpstreamError
from app.schemas.reviews import SuccessResponse, WebhookPayload
from app.services.events import EventType
from app.services.github import GitHubAPIError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["webhook"])


@router.post(
    "/webhook",
    response_model=SuccessResponse,
    dependencies=[Depends(verify_webhook_secret)],
)
async def receive_webhook(payload: WebhookPayload, services: Services) -> SuccessResponse:
    """
    Hand the changed source files to the orchestrator.

    Runs inline: the response is only sent once the docs have been committed
    (high) or the review PR opened (medium).
    """
    await services.broadcaster.broadcast(
        EventType.WEBHOOK_RECEIVED, {"payload": payload.model_dump()}
    )

    changed = payload.changed_paths()
    logger.info(f"Webhook received for {len(changed)} changed file(s)")

    try:
        await services.orchestrator.handle_changes(changed)
    except GitHubAPIError as e:
        logger.error(f"Webhook processing failed: {e.message}")
        raise UpstreamError(e.message) from e

    return SuccessResponse()
