"""WebSocket feed of agent events for the dashboard."""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

router = APIRouter(tags=["events"])


@router.websocket("/ws")
async def event_feed(websocket: WebSocket) -> None:
    """
    Subscribe to broadcast events until the client goes away.

    Inbound messages are read and ignored; the socket is push-only.
    """
    broadcaster = websocket.app.state.services.broadcaster
    await broadcaster.connect(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        broadcaster.disconnect(websocket)
