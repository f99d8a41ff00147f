"""
Fan-out of the live roster to connected viewers.
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Set
import asyncio
import json
import logging

from fastapi import WebSocket
from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)

INIT_EVENT = "running:init"
UPDATE_EVENT = "running:update"

RosterProvider = Callable[[], List[Dict[str, Any]]]


class Viewer(ABC):
    """A connected display that can receive roster messages."""

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """Whether the viewer can currently be written to."""

    @abstractmethod
    async def send(self, message: str) -> None:
        ...


class WebSocketViewer(Viewer):
    """Viewer backed by an accepted WebSocket connection."""

    def __init__(self, websocket: WebSocket):
        self.websocket = websocket

    @property
    def is_open(self) -> bool:
        return (
            self.websocket.client_state == WebSocketState.CONNECTED
            and self.websocket.application_state == WebSocketState.CONNECTED
        )

    async def send(self, message: str) -> None:
        await self.websocket.send_text(message)

    def __repr__(self) -> str:
        return f"<WebSocketViewer(client={self.websocket.client})>"


def encode(event: str, payload: Any) -> str:
    return json.dumps({"event": event, "payload": payload}, default=str)


class Broadcaster:
    """
    Keeps every subscribed viewer in sync with the active roster.

    Each message carries the whole roster, never a diff. Sends are serialized
    so that a new viewer gets its init message before any update.
    """

    def __init__(self):
        self.viewers: Set[Viewer] = set()
        self._lock = asyncio.Lock()

    @property
    def connection_count(self) -> int:
        return len(self.viewers)

    async def subscribe(self, viewer: Viewer, roster_provider: RosterProvider) -> bool:
        """
        Send a viewer the current roster and register it for updates.

        The viewer is only registered once its init message went out. Errors
        reading the roster propagate to the caller.

        Returns:
            True if the viewer was registered
        """
        async with self._lock:
            roster = roster_provider()
            if not await self._send(viewer, encode(INIT_EVENT, roster)):
                return False
            self.viewers.add(viewer)
        logger.info(f"Viewer subscribed. Total viewers: {len(self.viewers)}")
        return True

    def unsubscribe(self, viewer: Viewer) -> None:
        """Forget a viewer."""
        if viewer in self.viewers:
            self.viewers.discard(viewer)
            logger.info(f"Viewer unsubscribed. Total viewers: {len(self.viewers)}")

    async def publish(self, roster: List[Dict[str, Any]]) -> None:
        """Send the roster to every open viewer; closed ones are skipped."""
        message = encode(UPDATE_EVENT, roster)
        async with self._lock:
            for viewer in list(self.viewers):
                if not viewer.is_open:
                    continue
                await self._send(viewer, message)

    async def _send(self, viewer: Viewer, message: str) -> bool:
        try:
            await viewer.send(message)
        except Exception as e:
            self.viewers.discard(viewer)
            logger.error(
                f"Failed to send to viewer {viewer!r}, dropping it: {str(e)}. "
                f"Total viewers: {len(self.viewers)}"
            )
            return False
        return True

    def stats(self) -> Dict[str, Any]:
        """Statistics about the current viewers."""
        return {
            "total_connections": len(self.viewers),
            "open_connections": sum(1 for viewer in self.viewers if viewer.is_open),
        }
