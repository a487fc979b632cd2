"""
Strategy engine for AI bots.

Unopened pot:  raise strong hands, bluff-raise occasionally, otherwise check.
Facing a bet:  pot-odds aware calling, value raises, cheap bluffs, and a
               loose call with marginal hands when the price is small.
"""
from __future__ import annotations
import random
from typing import Optional, Tuple

from holdem.game.betting import BettingAction
from holdem.game.game_state import PlayerSnapshot, TableSnapshot

Decision = Tuple[BettingAction, int]

RAISE_UNOPENED = 0.65
BLUFF_UNOPENED = 0.12
RAISE_FACING_BET = 0.8
CALL_MARGIN = 0.05
CALL_FLOOR = 0.45
RERAISE_THRESHOLD = 0.7
RERAISE_FREQUENCY = 0.3
BLUFF_FACING_BET = 0.08
BLUFF_MAX_PRICE = 0.3       # fraction of the pot
MARGINAL_FLOOR = 0.3
MARGINAL_MAX_BLINDS = 3
SHOVE_THRESHOLD = 0.9
SHOVE_BLUFF = 0.08
POT_RAISE_THRESHOLD = 0.75
HALF_POT_THRESHOLD = 0.6


class StrategyEngine:
    """Decides the bot action given an estimated strength and the table snapshot."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def decide(
        self,
        snapshot: TableSnapshot,
        player: PlayerSnapshot,
        strength: float,
    ) -> Optional[Decision]:
        """
        Return (action, amount) where amount is the total bet for raises,
        or None when the player has no legal action.
        """
        valid = snapshot.valid_actions
        if not valid:
            return None
        can_raise = BettingAction.RAISE in valid
        to_call = snapshot.call_amount

        if to_call == 0 and BettingAction.CHECK in valid:
            if strength > RAISE_UNOPENED and can_raise:
                return self.make_raise(strength, snapshot, player)
            if self._rng.random() < BLUFF_UNOPENED and can_raise:
                return self.make_raise(0.4, snapshot, player)
            return BettingAction.CHECK, 0

        pot_odds = self.pot_odds(snapshot)

        if strength > RAISE_FACING_BET and can_raise and player.chips > to_call:
            return self.make_raise(strength, snapshot, player)

        if strength > pot_odds + CALL_MARGIN or strength > CALL_FLOOR:
            if BettingAction.CALL in valid:
                if (strength > RERAISE_THRESHOLD and can_raise
                        and self._rng.random() < RERAISE_FREQUENCY):
                    return self.make_raise(strength, snapshot, player)
                return BettingAction.CALL, to_call

        if (self._rng.random() < BLUFF_FACING_BET and can_raise
                and to_call < snapshot.pot * BLUFF_MAX_PRICE):
            return self.make_raise(0.5, snapshot, player)

        if (strength > MARGINAL_FLOOR and BettingAction.CALL in valid
                and to_call <= snapshot.big_blind * MARGINAL_MAX_BLINDS):
            return BettingAction.CALL, to_call

        return BettingAction.FOLD, 0

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def make_raise(
        self,
        strength: float,
        snapshot: TableSnapshot,
        player: PlayerSnapshot,
    ) -> Decision:
        """Size a raise as a total bet for the round."""
        pot = snapshot.pot
        max_bet = snapshot.current_max_bet
        all_in = player.bet + player.chips

        if strength > SHOVE_THRESHOLD or self._rng.random() < SHOVE_BLUFF:
            total = all_in
        elif strength > POT_RAISE_THRESHOLD:
            total = max_bet + pot
        elif strength > HALF_POT_THRESHOLD:
            total = max_bet + pot // 2
        else:
            total = max_bet + snapshot.min_raise

        total = max(total, max_bet + snapshot.min_raise)
        total = min(total, all_in)
        return BettingAction.RAISE, total

    @staticmethod
    def pot_odds(snapshot: TableSnapshot) -> float:
        """Minimum equity needed to make a call breakeven."""
        call = snapshot.call_amount
        if call == 0:
            return 0.0
        return call / (snapshot.pot + call)
