"""PlayerState dataclass and the fixed bot roster."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from holdem.core.card import Card
from holdem.core.hand_evaluator import HandEvaluation

BOT_NAMES = ["Alice", "Bob", "Charlie", "Diana", "Eve", "Frank", "Grace", "Hank", "Ivy"]
HUMAN_NAME = "You"
MIN_PLAYERS = 2
MAX_PLAYERS = 9


@dataclass
class PlayerState:
    """One seat. Identity and chips persist across hands; the rest is per hand."""
    player_id: int
    name: str
    is_human: bool = False
    chips: int = 0
    hole_cards: List[Card] = field(default_factory=list)
    bet: int = 0              # chips committed in the current betting round
    folded: bool = False
    all_in: bool = False
    sitting_out: bool = False
    has_acted: bool = False   # scoped to the current betting round
    hand_result: Optional[HandEvaluation] = None

    @property
    def is_bot(self) -> bool:
        return not self.is_human

    @property
    def can_act(self) -> bool:
        return not (self.folded or self.all_in or self.sitting_out)

    def reset_for_hand(self, starting_stack: int) -> None:
        self.chips = starting_stack
        self.hole_cards = []
        self.bet = 0
        self.folded = False
        self.all_in = False
        self.has_acted = False
        self.hand_result = None

    def commit(self, amount: int) -> int:
        """Move up to `amount` chips from the stack into the round bet."""
        actual = max(0, min(amount, self.chips))
        self.chips -= actual
        self.bet += actual
        if self.chips == 0:
            self.all_in = True
        return actual


def build_players(count: int) -> List[PlayerState]:
    """Seat 0 is the human; remaining seats are bots named from the roster."""
    if not MIN_PLAYERS <= count <= MAX_PLAYERS:
        raise ValueError(f"Player count must be {MIN_PLAYERS}–{MAX_PLAYERS}, got {count}")
    players = [PlayerState(player_id=0, name=HUMAN_NAME, is_human=True)]
    for i in range(1, count):
        players.append(PlayerState(player_id=i, name=BOT_NAMES[i - 1]))
    return players
