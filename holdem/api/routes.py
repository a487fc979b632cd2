"""REST API routes: table setup, hand control, human actions, stats."""
from __future__ import annotations
from typing import Any, Dict

from fastapi import APIRouter, HTTPException

from holdem.game.config import Speed
from holdem.game.game_state import snapshot_payload
from holdem.managers.table_manager import table_manager
from holdem.models.requests import ActionRequest, CreateTableRequest

router = APIRouter()

HUMAN_SEAT = 0


@router.get("/api/table")
async def get_table() -> Dict[str, Any]:
    return table_manager.table_info()


@router.post("/api/table")
async def create_table(req: CreateTableRequest) -> Dict[str, Any]:
    table_manager.create_table(player_count=req.player_count, speed=Speed(req.speed))
    return table_manager.table_info()


@router.post("/api/table/hand")
async def start_hand() -> Dict[str, Any]:
    game = table_manager.game
    if not game.start_hand():
        raise HTTPException(status_code=409, detail="Hand already in progress")
    return snapshot_payload(game.get_state(), viewer_id=HUMAN_SEAT)


@router.post("/api/table/action")
async def perform_action(req: ActionRequest) -> Dict[str, Any]:
    game = table_manager.game
    outcome = game.perform_action(req.action, req.amount, player_id=HUMAN_SEAT)
    if not outcome.applied:
        raise HTTPException(status_code=409, detail=outcome.value)
    return {
        "outcome": outcome.value,
        "state": snapshot_payload(game.get_state(), viewer_id=HUMAN_SEAT),
    }


@router.get("/api/stats")
async def get_stats() -> Dict[str, Any]:
    stats = table_manager.game.stats
    return {**stats.model_dump(), "win_rate": stats.win_rate}


@router.get("/api/leaderboard")
async def get_leaderboard() -> Dict[str, Any]:
    return {"entries": [e.model_dump() for e in table_manager.game.leaderboard]}
