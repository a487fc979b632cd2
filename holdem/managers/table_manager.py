"""
Owns the session's PokerGame for the web adapter.

Engine hooks are synchronous; they are turned into WebSocket broadcasts
scheduled on the running event loop. The table's Scheduler is pumped by a
background asyncio task started on demand.
"""
from __future__ import annotations
import asyncio
import logging
import random
from typing import Any, Awaitable, Dict, Optional

from holdem.game.config import Speed, TableConfig
from holdem.game.game import PokerGame
from holdem.game.game_state import HandOutcome, outcome_payload, snapshot_payload
from holdem.game.scheduler import Scheduler
from holdem.managers.connection_manager import ConnectionManager, connection_manager
from holdem.managers.stats_store import StatsStore

logger = logging.getLogger(__name__)


class TableManager:
    def __init__(
        self,
        store: Optional[StatsStore] = None,
        connections: Optional[ConnectionManager] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.store = store or StatsStore()
        self.connections = connections or connection_manager
        self.scheduler = Scheduler()
        self._rng = rng
        self._game: Optional[PokerGame] = None
        self._pump: Optional[asyncio.Task] = None

    def create_table(self, player_count: int = 6, speed: Speed = Speed.NORMAL) -> PokerGame:
        """Replace the current table. Pending continuations of the old one are dropped."""
        self.scheduler.cancel_all()
        game = PokerGame(
            player_count=player_count,
            config=TableConfig(speed=speed),
            store=self.store,
            scheduler=self.scheduler,
            rng=self._rng,
        )
        game.on_state_change = self._publish_state
        game.on_hand_complete = self._publish_outcome
        self._game = game
        logger.info(f"Created table: {player_count} players, speed {speed.name.lower()}")
        return game

    @property
    def game(self) -> PokerGame:
        if self._game is None:
            return self.create_table()
        return self._game

    def table_info(self) -> Dict[str, Any]:
        game = self.game
        return {
            "players": len(game.players),
            "speed": int(game.speed),
            "hand_in_progress": game.hand_in_progress,
            "state": snapshot_payload(game.get_state(), viewer_id=0),
        }

    # ------------------------------------------------------------------
    # Scheduler pump
    # ------------------------------------------------------------------

    def ensure_pump(self) -> None:
        """Start the scheduler pump on the running loop if it is not running."""
        if self._pump is not None and not self._pump.done():
            return
        loop = asyncio.get_running_loop()
        self._pump = loop.create_task(self.scheduler.run_forever())
        logger.debug("Scheduler pump started")

    async def shutdown(self) -> None:
        self.scheduler.cancel_all()
        if self._pump is not None:
            self._pump.cancel()
            try:
                await self._pump
            except asyncio.CancelledError:
                pass
            self._pump = None

    # ------------------------------------------------------------------
    # Engine hooks → broadcasts
    # ------------------------------------------------------------------

    def _publish_state(self) -> None:
        if self._game is None:
            return
        snapshot = self._game.get_state()
        self._dispatch(lambda: self.connections.broadcast(
            "game_state", lambda seat: snapshot_payload(snapshot, seat)
        ))

    def _publish_outcome(self, outcome: HandOutcome) -> None:
        payload = outcome_payload(outcome)
        self._dispatch(lambda: self.connections.broadcast("hand_complete", lambda seat: payload))

    def _dispatch(self, make_coro) -> Optional[Awaitable[None]]:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # no loop (sync caller): nobody is listening
            return None
        return loop.create_task(make_coro())


# Global singleton
table_manager = TableManager()
