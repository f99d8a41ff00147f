"""
WebSocket routes for the live roster display.
"""
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from typing import Any, Dict
import json
import logging
from datetime import datetime, timezone

from app.core.dependencies import get_broadcaster, get_roster_provider
from app.services.broadcast import Broadcaster, RosterProvider, WebSocketViewer

router = APIRouter()
logger = logging.getLogger(__name__)


@router.websocket("/running")
async def running_feed(
    websocket: WebSocket,
    roster_provider: RosterProvider = Depends(get_roster_provider),
    broadcaster: Broadcaster = Depends(get_broadcaster),
):
    """
    WebSocket endpoint streaming the active roster.

    Clients receive:
    - ``running:init`` with the current roster once, right after connecting
    - ``running:update`` with the full roster after every change
    """
    await websocket.accept()
    viewer = WebSocketViewer(websocket)
    try:
        if not await broadcaster.subscribe(viewer, roster_provider):
            return

        while True:
            data = await websocket.receive_text()
            try:
                message = json.loads(data)
            except json.JSONDecodeError:
                logger.debug("Ignoring non-JSON message from viewer")
                continue
            await handle_client_message(websocket, message)

    except WebSocketDisconnect:
        broadcaster.unsubscribe(viewer)
    except Exception as e:
        logger.error(f"WebSocket error: {str(e)}")
        broadcaster.unsubscribe(viewer)
        if viewer.is_open:
            await websocket.close(code=status.WS_1011_INTERNAL_ERROR)


async def handle_client_message(websocket: WebSocket, message: Dict[str, Any]):
    """
    Handle incoming messages from viewers. Only ``ping`` is answered.
    """
    message_type = message.get("type", "unknown") if isinstance(message, dict) else "unknown"
    logger.debug(f"Received WebSocket message: {message_type}")

    if message_type == "ping":
        await websocket.send_text(json.dumps({
            "type": "pong",
            "timestamp": datetime.now(timezone.utc).isoformat()
        }))


@router.get("/connections")
async def get_connection_stats(broadcaster: Broadcaster = Depends(get_broadcaster)):
    """Get statistics about current WebSocket connections."""
    return broadcaster.stats()
