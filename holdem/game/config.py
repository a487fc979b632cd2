"""Table configuration and pacing presets."""
from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum


class Speed(IntEnum):
    INSTANT = 0
    NORMAL = 1
    SLOW = 2

    @property
    def delay(self) -> float:
        """Seconds between automated steps (bot turns, all-in run-outs)."""
        return _DELAYS[self]


_DELAYS = {Speed.INSTANT: 0.05, Speed.NORMAL: 0.6, Speed.SLOW: 1.2}


@dataclass
class TableConfig:
    small_blind: int = 1
    big_blind: int = 2
    starting_stack: int = 200   # every seat is restored to this at each hand start
    speed: Speed = Speed.NORMAL
    leaderboard_size: int = 20
    auto_play_bots: bool = True

    def __post_init__(self) -> None:
        if self.small_blind < 1 or self.big_blind < self.small_blind:
            raise ValueError(
                f"Invalid blinds {self.small_blind}/{self.big_blind}"
            )
        if self.starting_stack < 1:
            raise ValueError(f"Starting stack must be positive: {self.starting_stack}")
