"""Pydantic models for persisted session statistics and leaderboard entries."""
from __future__ import annotations
from typing import List

from pydantic import BaseModel, Field, RootModel


class SessionStats(BaseModel):
    hands_played: int = Field(default=0, ge=0)
    hands_won: int = Field(default=0, ge=0)
    total_profit: int = 0

    @property
    def win_rate(self) -> float:
        if self.hands_played == 0:
            return 0.0
        return self.hands_won / self.hands_played


class LeaderboardEntry(BaseModel):
    date: str
    profit: int


class Leaderboard(RootModel[List[LeaderboardEntry]]):
    pass
