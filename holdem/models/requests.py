"""Pydantic request models for REST endpoints."""
from __future__ import annotations
from pydantic import BaseModel, Field


class CreateTableRequest(BaseModel):
    player_count: int = Field(default=6, ge=2, le=9)
    speed: int = Field(default=1, ge=0, le=2)  # 0 instant, 1 normal, 2 slow


class ActionRequest(BaseModel):
    action: str = Field(pattern="^(fold|check|call|raise)$")
    amount: int = Field(default=0, ge=0)
