"""Shared-secret authentication dependencies.

This module provides:
- Bearer token check for admin endpoints (static ADMIN_SECRET comparison)
- X-Webhook-Secret header check for the change webhook
"""

import logging
import secrets

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.deps.services import AppSettings
from app.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _matches(provided: str | None, expected: str) -> bool:
    return provided is not None and secrets.compare_digest(provided.encode(), expected.encode())


async def require_admin(
    config: AppSettings,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> None:
    """
    Require `Authorization: Bearer <ADMIN_SECRET>`.

    With no admin secret configured every request is allowed, which keeps
    local development frictionless.
    """
    if not config.admin_auth_enabled:
        return

    token = credentials.credentials if credentials else None
    if not _matches(token, config.admin_secret):
        logger.warning("Rejected admin request with missing or invalid token")
        raise UnauthorizedError()


async def verify_webhook_secret(
    config: AppSettings,
    x_webhook_secret: str | None = Header(default=None),
) -> None:
    """Validate the X-Webhook-Secret header against the configured secret."""
    if not _matches(x_webhook_secret, config.webhook_secret):
        raise UnauthorizedError("Invalid webhook secret")
