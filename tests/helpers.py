"""Table builders shared by the test suites."""
import random
from typing import Sequence

from holdem.core.card import Card, Deck, full_deck, parse_cards
from holdem.game.betting import BettingAction
from holdem.game.config import Speed, TableConfig
from holdem.game.game import PokerGame
from holdem.game.game_state import GamePhase, PlayerSnapshot, TableSnapshot
from holdem.managers.stats_store import InMemoryStore, StatsStore


class StackedDeck(Deck):
    """Deck that deals a fixed sequence every hand, then the rest of a full deck."""

    def __init__(self, deal_order: Sequence[Card]) -> None:
        self._deal_order = list(deal_order)
        super().__init__(random.Random(0))

    def reset(self) -> None:
        rest = [c for c in full_deck() if c not in self._deal_order]
        # draw() pops from the end
        self.stack(rest + list(reversed(self._deal_order)))


def stacked(text: str) -> StackedDeck:
    return StackedDeck(parse_cards(text))


def make_game(
    players: int = 3,
    deck: Deck = None,
    auto_play_bots: bool = False,
    store: StatsStore = None,
    bot=None,
    seed: int = 7,
) -> PokerGame:
    """Table with instant pacing; bots only move on their own when auto_play_bots is set."""
    config = TableConfig(speed=Speed.INSTANT, auto_play_bots=auto_play_bots)
    return PokerGame(
        player_count=players,
        config=config,
        store=store or StatsStore(InMemoryStore()),
        bot=bot,
        rng=random.Random(seed),
        deck=deck,
    )


class FixedRandom(random.Random):
    """random() always returns `value`; everything else behaves normally."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def make_player(player_id=1, chips=190, bet=0, cards="Ah Kd") -> PlayerSnapshot:
    return PlayerSnapshot(
        player_id=player_id,
        name=f"P{player_id}",
        is_human=player_id == 0,
        chips=chips,
        hole_cards=tuple(parse_cards(cards)),
        bet=bet,
        folded=False,
        all_in=False,
        sitting_out=False,
    )


def make_snapshot(
    player: PlayerSnapshot = None,
    pot: int = 20,
    call: int = 0,
    max_bet: int = 0,
    min_raise: int = 2,
    community: str = "",
    dealer: int = 0,
    num_players: int = 3,
) -> TableSnapshot:
    """Snapshot with `player` to act, facing `call` more chips."""
    player = player or make_player()
    actions = [BettingAction.FOLD, BettingAction.CHECK if call == 0 else BettingAction.CALL]
    if player.chips > call:
        actions.append(BettingAction.RAISE)
    players = tuple(
        player if i == player.player_id else make_player(player_id=i, chips=200, cards="")
        for i in range(num_players)
    )
    board = tuple(parse_cards(community))
    all_in = player.chips + player.bet
    return TableSnapshot(
        players=players,
        community_cards=board,
        pot=pot,
        phase=GamePhase.FLOP if board else GamePhase.PREFLOP,
        dealer_index=dealer,
        current_player_index=player.player_id,
        hand_number=1,
        small_blind=1,
        big_blind=2,
        min_raise=min_raise,
        valid_actions=tuple(actions),
        call_amount=min(call, player.chips),
        min_raise_total=min(max_bet + min_raise, all_in),
        max_raise_total=all_in,
        can_check=call == 0,
        current_max_bet=max_bet,
    )
