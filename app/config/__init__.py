"""Configuration package."""

from app.config.settings import AccessLevelName, Settings, settings

__all__ = [
    "AccessLevelName",
    "Settings",
    "settings",
]
