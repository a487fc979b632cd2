"""TableState, GamePhase, and the read-only snapshots handed to collaborators."""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from holdem.core.card import Card
from holdem.core.hand_evaluator import HandEvaluation
from holdem.game.player import PlayerState

if TYPE_CHECKING:
    from holdem.game.betting import BettingAction


class GamePhase(Enum):
    WAITING = "waiting"
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"
    SHOWDOWN = "showdown"


BETTING_PHASES = (GamePhase.PREFLOP, GamePhase.FLOP, GamePhase.TURN, GamePhase.RIVER)


@dataclass
class TableState:
    small_blind: int
    big_blind: int
    players: List[PlayerState] = field(default_factory=list)
    community_cards: List[Card] = field(default_factory=list)
    pot: int = 0                   # chips swept in from closed betting rounds
    phase: GamePhase = GamePhase.WAITING
    dealer_index: int = 0
    current_player_index: int = -1
    min_raise: int = 0             # size of the last raise increment this round
    last_raise: int = 0            # total bet of the last raise this round
    hand_number: int = 0

    def __post_init__(self) -> None:
        if not self.min_raise:
            self.min_raise = self.big_blind

    @property
    def active_players(self) -> List[PlayerState]:
        """Players still contesting the pot (not folded, not sitting out)."""
        return [p for p in self.players if not p.folded and not p.sitting_out]

    @property
    def seated_players(self) -> List[PlayerState]:
        return [p for p in self.players if not p.sitting_out]

    @property
    def players_still_acting(self) -> List[PlayerState]:
        return [p for p in self.active_players if not p.all_in]

    @property
    def current_player(self) -> Optional[PlayerState]:
        if 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None

    @property
    def current_max_bet(self) -> int:
        return max((p.bet for p in self.players), default=0)

    @property
    def total_pot(self) -> int:
        """Everything committed this hand, including live round bets."""
        return self.pot + sum(p.bet for p in self.players)

    @property
    def chips_in_play(self) -> int:
        return self.pot + sum(p.bet + p.chips for p in self.players)


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PlayerSnapshot:
    player_id: int
    name: str
    is_human: bool
    chips: int
    hole_cards: Tuple[Card, ...]
    bet: int
    folded: bool
    all_in: bool
    sitting_out: bool
    hand_result: Optional[HandEvaluation] = None

    @classmethod
    def of(cls, p: PlayerState) -> "PlayerSnapshot":
        return cls(
            player_id=p.player_id,
            name=p.name,
            is_human=p.is_human,
            chips=p.chips,
            hole_cards=tuple(p.hole_cards),
            bet=p.bet,
            folded=p.folded,
            all_in=p.all_in,
            sitting_out=p.sitting_out,
            hand_result=p.hand_result,
        )


@dataclass(frozen=True)
class TableSnapshot:
    players: Tuple[PlayerSnapshot, ...]
    community_cards: Tuple[Card, ...]
    pot: int                      # total pot including live round bets
    phase: GamePhase
    dealer_index: int
    current_player_index: int
    hand_number: int
    small_blind: int
    big_blind: int
    min_raise: int
    valid_actions: Tuple["BettingAction", ...]
    call_amount: int
    min_raise_total: int
    max_raise_total: int
    can_check: bool
    current_max_bet: int

    @property
    def current_player(self) -> Optional[PlayerSnapshot]:
        if 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None


@dataclass(frozen=True)
class HandOutcome:
    """Payload of on_hand_complete."""
    hand_number: int
    winners: Tuple[PlayerSnapshot, ...]
    ranked: Tuple[PlayerSnapshot, ...]
    payouts: Dict[int, int]
    profit: int
    human_won: bool

    @property
    def winning_hand(self) -> Optional[HandEvaluation]:
        return self.winners[0].hand_result if self.winners else None


# ---------------------------------------------------------------------------
# JSON payloads
# ---------------------------------------------------------------------------

def _player_payload(p: PlayerSnapshot, reveal: bool) -> Dict[str, Any]:
    return {
        "player_id": p.player_id,
        "name": p.name,
        "is_human": p.is_human,
        "chips": p.chips,
        "bet": p.bet,
        "folded": p.folded,
        "all_in": p.all_in,
        "sitting_out": p.sitting_out,
        "hole_cards": [str(c) if reveal else "??" for c in p.hole_cards],
        "hand": p.hand_result.name if (reveal and p.hand_result) else None,
    }


def snapshot_payload(snapshot: TableSnapshot, viewer_id: int = 0) -> Dict[str, Any]:
    """
    Build a game_state payload for `viewer_id`.

    Opponents' hole cards stay hidden until showdown, and folded hands are
    never revealed.
    """
    showdown = snapshot.phase == GamePhase.SHOWDOWN
    return {
        "phase": snapshot.phase.value,
        "players": [
            _player_payload(p, p.player_id == viewer_id or (showdown and not p.folded))
            for p in snapshot.players
        ],
        "community_cards": [str(c) for c in snapshot.community_cards],
        "pot": snapshot.pot,
        "hand_number": snapshot.hand_number,
        "dealer_index": snapshot.dealer_index,
        "current_player_index": snapshot.current_player_index,
        "small_blind": snapshot.small_blind,
        "big_blind": snapshot.big_blind,
        "valid_actions": [a.value for a in snapshot.valid_actions],
        "call_amount": snapshot.call_amount,
        "min_raise_total": snapshot.min_raise_total,
        "max_raise_total": snapshot.max_raise_total,
        "can_check": snapshot.can_check,
        "current_max_bet": snapshot.current_max_bet,
    }


def outcome_payload(outcome: HandOutcome) -> Dict[str, Any]:
    hand = outcome.winning_hand
    return {
        "hand_number": outcome.hand_number,
        "winners": [
            {"player_id": w.player_id, "name": w.name, "amount": outcome.payouts.get(w.player_id, 0)}
            for w in outcome.winners
        ],
        "ranked": [
            {
                "player_id": p.player_id,
                "name": p.name,
                "hole_cards": [str(c) for c in p.hole_cards] if p.hand_result else [],
                "hand": p.hand_result.name if p.hand_result else None,
            }
            for p in outcome.ranked
        ],
        "hand": hand.name if hand else None,
        "profit": outcome.profit,
        "human_won": outcome.human_won,
    }
