"""Real-time event broadcasting."""

from app.services.events.broadcaster import EventBroadcaster
from app.services.events.types import EventType

__all__ = [
    "EventBroadcaster",
    "EventType",
]
