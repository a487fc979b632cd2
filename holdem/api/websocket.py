"""WebSocket endpoint for real-time table events."""
from __future__ import annotations
import logging
import uuid

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from holdem.game.game_state import snapshot_payload
from holdem.managers.connection_manager import connection_manager
from holdem.managers.table_manager import table_manager
from holdem.models.events import ActionPayload, ClientAction

logger = logging.getLogger(__name__)
ws_router = APIRouter()

HUMAN_SEAT = 0


@ws_router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    viewer_id = uuid.uuid4().hex[:8]
    game = table_manager.game
    await connection_manager.connect(viewer_id, websocket, seat=HUMAN_SEAT)

    # Send current table state immediately on connect
    await connection_manager.send_personal(
        viewer_id, "game_state", snapshot_payload(game.get_state(), viewer_id=HUMAN_SEAT)
    )

    try:
        while True:
            data = await websocket.receive_json()
            try:
                msg = ClientAction.model_validate(data)
            except ValidationError:
                await connection_manager.send_personal(viewer_id, "error", {"message": "Malformed message"})
                continue
            game = table_manager.game

            if msg.type == "action":
                try:
                    payload = ActionPayload.model_validate(msg.payload)
                except ValidationError:
                    await connection_manager.send_personal(viewer_id, "error", {"message": "Malformed action"})
                    continue
                outcome = game.perform_action(payload.action, payload.amount, player_id=HUMAN_SEAT)
                if outcome.applied:
                    await connection_manager.send_personal(viewer_id, "action_result", {"outcome": outcome.value})
                else:
                    await connection_manager.send_personal(viewer_id, "error", {"message": outcome.value})

            elif msg.type == "start_hand":
                if not game.start_hand():
                    await connection_manager.send_personal(
                        viewer_id, "error", {"message": "Hand already in progress"}
                    )

            elif msg.type == "ping":
                await websocket.send_json({"type": "pong"})

            else:
                await connection_manager.send_personal(
                    viewer_id, "error", {"message": f"Unknown message type: {msg.type}"}
                )

    except WebSocketDisconnect:
        connection_manager.disconnect(viewer_id)
        logger.info(f"Viewer {viewer_id} disconnected")
    except Exception as e:
        logger.error(f"WebSocket error for {viewer_id}: {e}")
        connection_manager.disconnect(viewer_id)
