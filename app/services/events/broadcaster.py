"""
Real-time event fan-out to connected dashboard clients.

Every state transition in the agent (commits, PRs, analysis progress) is
pushed to all open WebSocket connections as a JSON object with a `type`
and a server-stamped `timestamp`. There is no history: a client that
connects late only sees events broadcast after it joined.
"""

import json
import logging
from datetime import UTC, datetime
from typing import Any

from starlette.websockets import WebSocket, WebSocketDisconnect, WebSocketState

from app.services.events.types import EventType

logger = logging.getLogger(__name__)


class EventBroadcaster:
    """Tracks open WebSocket subscribers and sends each event to all of them."""

    def __init__(self) -> None:
        self._clients: set[WebSocket] = set()

    @property
    def client_count(self) -> int:
        return len(self._clients)

    async def connect(self, websocket: WebSocket) -> None:
        """Accept a WebSocket handshake and start sending it events."""
        await websocket.accept()
        self._clients.add(websocket)
        logger.info(f"Client connected ({len(self._clients)} open)")

    def disconnect(self, websocket: WebSocket) -> None:
        """Forget a subscriber. Called from the socket's own close handler."""
        self._clients.discard(websocket)
        logger.info(f"Client disconnected ({len(self._clients)} open)")

    async def broadcast(
        self,
        event_type: EventType,
        payload: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Stamp an event and send it to every open subscriber.

        A failed send only skips that subscriber; the event is not queued or
        retried for it.

        Returns:
            The event exactly as it was serialized
        """
        event: dict[str, Any] = {"type": event_type.value, **(payload or {})}
        event["timestamp"] = datetime.now(UTC).isoformat()
        message = json.dumps(event)

        for websocket in list(self._clients):
            if websocket.client_state != WebSocketState.CONNECTED:
                continue
            try:
                await websocket.send_text(message)
            except (WebSocketDisconnect, RuntimeError, OSError) as e:
                logger.warning(f"Dropped {event_type.value} for one client: {e}")

        logger.info(f"Broadcast: {event_type.value} {payload or ''}".rstrip())
        return event
