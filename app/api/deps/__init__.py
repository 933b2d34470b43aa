"""API dependencies - re-exports from submodules."""

from .auth import require_admin, security, verify_webhook_secret
from .services import AppSettings, Services, get_services, get_settings

__all__ = [
    "AppSettings",
    "Services",
    "get_services",
    "get_settings",
    "require_admin",
    "security",
    "verify_webhook_secret",
]
