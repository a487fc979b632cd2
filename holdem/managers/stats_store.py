"""
Statistics and leaderboard persistence.

The engine only sees StatsStore, which reads and writes JSON documents
through a two-operation key-value store (get/set). Corrupt or missing data
falls back to a fresh record instead of failing the hand.
"""
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from pydantic import ValidationError

from holdem.models.records import Leaderboard, LeaderboardEntry, SessionStats

logger = logging.getLogger(__name__)

STATS_KEY = "holdem_stats"
LEADERBOARD_KEY = "holdem_leaderboard"
LEADERBOARD_SIZE = 20


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryStore:
    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """All keys in one JSON object on disk, rewritten on every set."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Unreadable store {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed store {self.path}")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp.replace(self.path)


class StatsStore:
    """Storage port injected into PokerGame."""

    def __init__(self, kv: Optional[KeyValueStore] = None,
                 leaderboard_size: int = LEADERBOARD_SIZE) -> None:
        self._kv: KeyValueStore = kv if kv is not None else InMemoryStore()
        self.leaderboard_size = leaderboard_size

    def load_stats(self) -> SessionStats:
        raw = self._kv.get(STATS_KEY)
        if raw is None:
            return SessionStats()
        try:
            return SessionStats.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding corrupt stats record: {e.error_count()} error(s)")
            return SessionStats()

    def save_stats(self, stats: SessionStats) -> None:
        self._kv.set(STATS_KEY, stats.model_dump_json())

    def load_leaderboard(self) -> List[LeaderboardEntry]:
        raw = self._kv.get(LEADERBOARD_KEY)
        if raw is None:
            return []
        try:
            return list(Leaderboard.model_validate_json(raw).root)
        except ValidationError as e:
            logger.warning(f"Discarding corrupt leaderboard: {e.error_count()} error(s)")
            return []

    def save_leaderboard(self, entries: List[LeaderboardEntry]) -> List[LeaderboardEntry]:
        """Persist the best entries by profit, highest first. Returns what was kept."""
        kept = sorted(entries, key=lambda e: e.profit, reverse=True)[:self.leaderboard_size]
        self._kv.set(LEADERBOARD_KEY, Leaderboard(kept).model_dump_json())
        return kept

    def add_to_leaderboard(self, entry: LeaderboardEntry) -> List[LeaderboardEntry]:
        return self.save_leaderboard(self.load_leaderboard() + [entry])
