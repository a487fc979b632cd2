"""
WebSocket connection registry for the local table.

Maintains a mapping: viewer_id → (seat, WebSocket).
Every viewer gets its own payload so only its seat's hole cards are shown.
"""
from __future__ import annotations
import asyncio
import logging
from typing import Callable, Dict, Optional, Tuple

from fastapi import WebSocket

from holdem.models.events import ServerEvent

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self) -> None:
        # viewer_id → (seat, WebSocket)
        self._connections: Dict[str, Tuple[int, WebSocket]] = {}

    async def connect(self, viewer_id: str, websocket: WebSocket, seat: int = 0) -> None:
        await websocket.accept()
        self._connections[viewer_id] = (seat, websocket)
        logger.info(f"Connected: viewer {viewer_id} (seat {seat})")

    def disconnect(self, viewer_id: str) -> None:
        if self._connections.pop(viewer_id, None) is not None:
            logger.info(f"Disconnected: viewer {viewer_id}")

    async def send_personal(self, viewer_id: str, event_type: str, payload: dict) -> None:
        """Send a message to a single viewer."""
        entry = self._connections.get(viewer_id)
        if entry:
            await self._safe_send(entry[1], viewer_id, event_type, payload)

    async def broadcast(
        self,
        event_type: str,
        payload_factory: Callable[[int], Optional[dict]],
    ) -> None:
        """
        Send to every viewer, with a payload built for its seat.

        payload_factory(seat) → dict | None
        If factory returns None, skip that viewer.
        """
        tasks = []
        for viewer_id, (seat, ws) in list(self._connections.items()):
            payload = payload_factory(seat)
            if payload is None:
                continue
            tasks.append(self._safe_send(ws, viewer_id, event_type, payload))
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _safe_send(
        self,
        ws: WebSocket,
        viewer_id: str,
        event_type: str,
        payload: dict,
    ) -> None:
        try:
            await ws.send_json(ServerEvent(type=event_type, payload=payload).model_dump())
        except Exception as e:
            logger.warning(f"WS send failed {viewer_id}: {e}")
            self.disconnect(viewer_id)

    def is_connected(self, viewer_id: str) -> bool:
        return viewer_id in self._connections

    def viewer_count(self) -> int:
        return len(self._connections)


# Global singleton
connection_manager = ConnectionManager()
