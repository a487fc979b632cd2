"""Pydantic models for WebSocket events."""
from __future__ import annotations
from typing import Any, Dict

from pydantic import BaseModel, Field


class ClientAction(BaseModel):
    """Client → Server message."""
    type: str  # "action" | "start_hand" | "ping"
    payload: Dict[str, Any] = Field(default_factory=dict)


class ActionPayload(BaseModel):
    action: str  # "fold" | "check" | "call" | "raise"
    amount: int = 0


class ServerEvent(BaseModel):
    """Server → Client event envelope."""
    type: str  # "game_state" | "hand_complete" | "action_result" | "error" | "pong"
    payload: Dict[str, Any] = Field(default_factory=dict)
