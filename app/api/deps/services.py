"""Dependencies that hand route handlers the app's settings and services."""

from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings
from app.services.container import AgentServices


def get_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    config: Settings = request.app.state.settings
    return config


def get_services(request: Request) -> AgentServices:
    """Service graph built in the app lifespan (or injected by tests)."""
    services: AgentServices = request.app.state.services
    return services


AppSettings = Annotated[Settings, Depends(get_settings)]
Services = Annotated[AgentServices, Depends(get_services)]
