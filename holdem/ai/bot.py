"""BotPlayer — wires the strength heuristics and StrategyEngine together."""
from __future__ import annotations
import random
from typing import Optional

from holdem.ai.hand_strength import estimate_strength
from holdem.ai.strategy import Decision, StrategyEngine
from holdem.game.game_state import PlayerSnapshot, TableSnapshot

NOISE = 0.15          # symmetric, so +/- 0.075
POSITION_WEIGHT = 0.05


class BotPlayer:
    """
    Stateless bot decision-maker.

    The decision is a pure function of the snapshot and the injected RNG;
    nothing is remembered between calls.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()
        self._strategy = StrategyEngine(self._rng)

    def decide(self, snapshot: TableSnapshot, seat: Optional[int] = None) -> Optional[Decision]:
        """
        Return (action, amount) for `seat` (default: the acting seat), or None
        when there is nothing legal to do.
        """
        idx = snapshot.current_player_index if seat is None else seat
        if idx != snapshot.current_player_index or not snapshot.valid_actions:
            return None
        player = snapshot.players[idx]
        if not player.hole_cards:
            return None

        strength = self.strength(snapshot, player)
        return self._strategy.decide(snapshot, player, strength)

    def strength(self, snapshot: TableSnapshot, player: PlayerSnapshot) -> float:
        strength = estimate_strength(player.hole_cards, snapshot.community_cards)
        strength += (self._rng.random() - 0.5) * NOISE
        strength += self.position_bonus(snapshot, player)
        return max(0.0, min(1.0, strength))

    @staticmethod
    def position_bonus(snapshot: TableSnapshot, player: PlayerSnapshot) -> float:
        """Later position relative to the dealer earns a slightly higher score."""
        n = len(snapshot.players)
        pos = (player.player_id - snapshot.dealer_index) % n
        return pos / n * POSITION_WEIGHT
