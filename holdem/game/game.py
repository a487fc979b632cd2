"""
PokerGame — the table state machine for single-table No-Limit Hold'em.

State machine:
  WAITING → PREFLOP → FLOP → TURN → RIVER → SHOWDOWN → (start_hand) PREFLOP ...

Only start_hand() and perform_action() drive transitions. Bot turns and the
all-in run-out are continuations on the injected Scheduler, each guarded so a
stale one never acts on a hand that has already moved on.
"""
from __future__ import annotations
import logging
import random
from datetime import date
from functools import cmp_to_key
from typing import Callable, Dict, List, Optional, Union

from holdem.ai.bot import BotPlayer
from holdem.core.card import Deck
from holdem.core.hand_evaluator import compare_hands, evaluate
from holdem.core.pot import split_pot
from holdem.game.betting import (
    NO_ACTIONS,
    ActionOutcome,
    BettingAction,
    ValidActions,
    apply_action,
    get_valid_actions,
)
from holdem.game.config import Speed, TableConfig
from holdem.game.game_state import (
    BETTING_PHASES,
    GamePhase,
    HandOutcome,
    PlayerSnapshot,
    TableSnapshot,
    TableState,
)
from holdem.game.player import PlayerState, build_players
from holdem.game.rules import (
    advance_dealer,
    first_to_act_postflop,
    first_to_act_preflop,
    is_betting_round_complete,
    next_active_seat,
    normalize_dealer,
    post_blinds,
    reset_acted,
)
from holdem.game.scheduler import Scheduler
from holdem.managers.stats_store import StatsStore
from holdem.models.records import LeaderboardEntry, SessionStats

logger = logging.getLogger(__name__)

_STREET_CARDS = {
    GamePhase.PREFLOP: (GamePhase.FLOP, 3),
    GamePhase.FLOP: (GamePhase.TURN, 1),
    GamePhase.TURN: (GamePhase.RIVER, 1),
}


class PokerGame:
    """
    Manages one table for a session: seats, pot, phase, and turn pointer.

    Collaborators register on_state_change(), on_action(player, action, bet)
    and on_hand_complete(outcome), and read the table through get_state();
    they never touch self.state.
    """

    def __init__(
        self,
        player_count: int = 6,
        config: Optional[TableConfig] = None,
        store: Optional[StatsStore] = None,
        scheduler: Optional[Scheduler] = None,
        bot: Optional[BotPlayer] = None,
        rng: Optional[random.Random] = None,
        deck: Optional[Deck] = None,
    ) -> None:
        self.config = config or TableConfig()
        self._rng = rng or random.Random()
        self._deck = deck if deck is not None else Deck(self._rng)
        self.store = store or StatsStore(leaderboard_size=self.config.leaderboard_size)
        self.scheduler = scheduler or Scheduler()
        self.bot = bot or BotPlayer(self._rng)
        self.speed: Speed = self.config.speed
        self.state = TableState(
            small_blind=self.config.small_blind,
            big_blind=self.config.big_blind,
        )
        self.stats: SessionStats = self.store.load_stats()
        self.leaderboard: List[LeaderboardEntry] = self.store.load_leaderboard()
        self.on_state_change: Optional[Callable[[], None]] = None
        self.on_hand_complete: Optional[Callable[[HandOutcome], None]] = None
        self.on_action: Optional[Callable[[PlayerSnapshot, BettingAction, int], None]] = None
        self.hand_in_progress = False
        self.last_outcome: Optional[HandOutcome] = None
        self._action_count = 0
        self.init_players(player_count)

    # ------------------------------------------------------------------
    # Seating
    # ------------------------------------------------------------------

    def init_players(self, count: int) -> None:
        """Rebuild the seat list: seat 0 human, the rest bots from the roster."""
        players = build_players(count)
        for p in players:
            p.chips = self.config.starting_stack
        self.scheduler.cancel_all()
        self.hand_in_progress = False
        self.state.players = players
        self.state.community_cards = []
        self.state.pot = 0
        self.state.phase = GamePhase.WAITING
        self.state.dealer_index = 0
        self.state.current_player_index = -1
        logger.info(f"Seated {count} players")
        self._emit_state()

    def set_sitting_out(self, player_id: int, sitting_out: bool = True) -> bool:
        """Toggle a seat between hands. Returns False if refused."""
        if self.hand_in_progress or not 0 <= player_id < len(self.state.players):
            return False
        self.state.players[player_id].sitting_out = sitting_out
        self._emit_state()
        return True

    @property
    def players(self) -> List[PlayerState]:
        return self.state.players

    @property
    def delay(self) -> float:
        return self.speed.delay

    # ------------------------------------------------------------------
    # Hand lifecycle
    # ------------------------------------------------------------------

    def start_hand(self) -> bool:
        """Deal a new hand. Returns False (no-op) while a hand is in progress."""
        if self.hand_in_progress:
            return False
        state = self.state
        if len(state.seated_players) < 2:
            logger.warning("Cannot start a hand with fewer than two seated players")
            return False

        self.hand_in_progress = True
        state.hand_number += 1
        self._deck.reset()
        state.community_cards = []
        state.pot = 0
        state.min_raise = state.big_blind
        state.last_raise = 0
        for p in state.players:
            p.reset_for_hand(self.config.starting_stack)

        normalize_dealer(state)
        _, bb_idx = post_blinds(state)

        for _ in range(2):
            for p in state.seated_players:
                p.hole_cards.append(self._deck.draw())

        state.phase = GamePhase.PREFLOP
        reset_acted(state.players)
        # the big blind keeps its option to raise
        state.players[bb_idx].has_acted = False
        state.current_player_index = first_to_act_preflop(state, bb_idx)

        logger.info(
            f"Hand #{state.hand_number} started: dealer={state.dealer_index} "
            f"players={len(state.seated_players)}"
        )
        self._emit_state()
        if is_betting_round_complete(state):
            self.advance_phase()
        else:
            self._prompt_current_player()
        return True

    def perform_action(
        self,
        action: Union[BettingAction, str],
        amount: int = 0,
        player_id: Optional[int] = None,
    ) -> ActionOutcome:
        """
        Apply an action for the seat currently to act.

        player_id, when given, must name that seat. Nothing here raises:
        calls that cannot be honoured come back as ActionOutcome.IGNORED_*.
        """
        state = self.state
        if not self.hand_in_progress or state.phase not in BETTING_PHASES:
            return ActionOutcome.IGNORED_NO_HAND
        player = state.current_player
        if player is None or not player.can_act:
            return ActionOutcome.IGNORED_INVALID_ACTOR
        if player_id is not None and player_id != player.player_id:
            logger.debug(f"Ignoring action from seat {player_id}; seat {player.player_id} to act")
            return ActionOutcome.IGNORED_INVALID_ACTOR
        if not isinstance(action, BettingAction):
            try:
                action = BettingAction(action)
            except ValueError:
                return ActionOutcome.IGNORED_ILLEGAL_ACTION

        outcome = apply_action(state, player, action, int(amount or 0))
        if not outcome.applied:
            logger.debug(f"Ignoring {action.value} from {player.name}: {outcome.value}")
            return outcome

        self._action_count += 1
        logger.debug(
            f"Hand #{state.hand_number} {state.phase.value}: {player.name} {action.value}"
            f"{f' to {player.bet}' if action == BettingAction.RAISE else ''} "
            f"(pot {state.total_pot})"
        )
        self._notify_action(player, action)

        if len(state.active_players) == 1:
            self._award_pot_to_winner()
            return outcome

        if is_betting_round_complete(state):
            self.advance_phase()
        else:
            state.current_player_index = next_active_seat(state.players, state.current_player_index)
            self._emit_state()
            self._prompt_current_player()
        return outcome

    def advance_phase(self) -> None:
        """Close the betting round and deal the next street (or go to showdown)."""
        state = self.state
        if not self.hand_in_progress or state.phase not in BETTING_PHASES:
            return

        self._collect_bets()
        state.min_raise = state.big_blind
        state.last_raise = 0

        if state.phase == GamePhase.RIVER:
            state.phase = GamePhase.SHOWDOWN
            state.current_player_index = -1
            self.resolve_showdown()
            return

        next_phase, n_cards = _STREET_CARDS[state.phase]
        state.phase = next_phase
        for _ in range(n_cards):
            state.community_cards.append(self._deck.draw())

        if len(state.players_still_acting) <= 1:
            # nobody left to bet against: run the board out on a delay
            state.current_player_index = -1
            self._emit_state()
            hand = state.hand_number
            self.scheduler.schedule(
                self.delay,
                self.advance_phase,
                guard=lambda: (self.hand_in_progress
                               and state.hand_number == hand
                               and state.phase in BETTING_PHASES),
                label=f"run-out hand #{hand}",
            )
            return

        reset_acted(state.players)
        state.current_player_index = first_to_act_postflop(state)
        self._emit_state()
        self._prompt_current_player()

    def resolve_showdown(self) -> None:
        """Rank every remaining hand and split the pot among the best."""
        state = self.state
        self._collect_bets()
        contenders = state.active_players
        for p in contenders:
            p.hand_result = evaluate(p.hole_cards + state.community_cards)

        ranked = sorted(
            contenders,
            key=cmp_to_key(lambda a, b: compare_hands(a.hand_result, b.hand_result)),
            reverse=True,
        )
        winners = [ranked[0]]
        for p in ranked[1:]:
            if compare_hands(p.hand_result, ranked[0].hand_result) != 0:
                break
            winners.append(p)

        payouts = split_pot(state.pot, [w.player_id for w in winners])
        for w in winners:
            w.chips += payouts[w.player_id]
        state.pot = 0

        logger.info(
            f"Hand #{state.hand_number} showdown: "
            + ", ".join(f"{w.name} wins {payouts[w.player_id]} with {w.hand_result.name}"
                        for w in winners)
        )
        self._finish_hand(winners, ranked, payouts)

    def _award_pot_to_winner(self) -> None:
        """Everyone else folded: the last player takes the pot, no more cards."""
        state = self.state
        self._collect_bets()
        winner = state.active_players[0]
        amount = state.pot
        winner.chips += amount
        state.pot = 0
        state.phase = GamePhase.SHOWDOWN
        state.current_player_index = -1
        logger.info(f"Hand #{state.hand_number}: {winner.name} wins {amount} uncontested")
        self._finish_hand([winner], [winner], {winner.player_id: amount})

    def _finish_hand(
        self,
        winners: List[PlayerState],
        ranked: List[PlayerState],
        payouts: Dict[int, int],
    ) -> None:
        state = self.state
        human = next((p for p in state.players if p.is_human), state.players[0])
        human_won = any(w.player_id == human.player_id for w in winners)
        profit = human.chips - self.config.starting_stack

        self.stats.hands_played += 1
        if human_won:
            self.stats.hands_won += 1
        self.stats.total_profit += profit

        self.hand_in_progress = False
        outcome = HandOutcome(
            hand_number=state.hand_number,
            winners=tuple(PlayerSnapshot.of(w) for w in winners),
            ranked=tuple(PlayerSnapshot.of(p) for p in ranked),
            payouts=dict(payouts),
            profit=profit,
            human_won=human_won,
        )
        self.last_outcome = outcome
        advance_dealer(state)
        self._persist_results(profit)

        self._emit_state()
        if self.on_hand_complete:
            try:
                self.on_hand_complete(outcome)
            except Exception:
                logger.exception("on_hand_complete callback failed")

    def _persist_results(self, profit: int) -> None:
        """Write stats and the leaderboard entry; a failing store never blocks the table."""
        entry = LeaderboardEntry(date=date.today().isoformat(), profit=profit)
        try:
            self.store.save_stats(self.stats)
            self.leaderboard = self.store.add_to_leaderboard(entry)
        except Exception:
            logger.exception(f"Could not persist results of hand #{self.state.hand_number}")
            # keep the in-session board current even when the store is down
            self.leaderboard = sorted(
                self.leaderboard + [entry], key=lambda e: e.profit, reverse=True
            )[:self.config.leaderboard_size]

    def _collect_bets(self) -> None:
        for p in self.state.players:
            self.state.pot += p.bet
            p.bet = 0

    # ------------------------------------------------------------------
    # Bot pacing
    # ------------------------------------------------------------------

    def _prompt_current_player(self) -> None:
        """Schedule the acting bot's turn; humans are left to act in their own time."""
        if not self.config.auto_play_bots:
            return
        state = self.state
        player = state.current_player
        if player is None or not player.is_bot or not player.can_act:
            return
        hand, seat, count = state.hand_number, state.current_player_index, self._action_count
        self.scheduler.schedule(
            self.delay,
            lambda: self._play_bot_turn(seat),
            guard=lambda: (self.hand_in_progress
                           and state.hand_number == hand
                           and state.current_player_index == seat
                           and self._action_count == count),
            label=f"{player.name} hand #{hand}",
        )

    def _play_bot_turn(self, seat: int) -> None:
        try:
            decision = self.bot.decide(self.get_state(), seat)
        except Exception as e:
            logger.error(f"Bot decision error for seat {seat}: {e}")
            decision = (BettingAction.FOLD, 0)
        if decision is None:
            return
        action, amount = decision
        self.perform_action(action, amount, player_id=seat)

    # ------------------------------------------------------------------
    # Snapshot & notifications
    # ------------------------------------------------------------------

    def get_valid_actions(self) -> ValidActions:
        state = self.state
        player = state.current_player
        if not self.hand_in_progress or state.phase not in BETTING_PHASES or player is None:
            return NO_ACTIONS
        return get_valid_actions(state, player)

    def get_state(self) -> TableSnapshot:
        state = self.state
        valid = self.get_valid_actions()
        return TableSnapshot(
            players=tuple(PlayerSnapshot.of(p) for p in state.players),
            community_cards=tuple(state.community_cards),
            pot=state.total_pot,
            phase=state.phase,
            dealer_index=state.dealer_index,
            current_player_index=state.current_player_index,
            hand_number=state.hand_number,
            small_blind=state.small_blind,
            big_blind=state.big_blind,
            min_raise=state.min_raise,
            valid_actions=valid.actions,
            call_amount=valid.call_amount,
            min_raise_total=valid.min_raise,
            max_raise_total=valid.max_raise,
            can_check=valid.can_check,
            current_max_bet=state.current_max_bet,
        )

    def _notify_action(self, player: PlayerState, action: BettingAction) -> None:
        if self.on_action:
            try:
                self.on_action(PlayerSnapshot.of(player), action, player.bet)
            except Exception:
                logger.exception("on_action callback failed")

    def _emit_state(self) -> None:
        if self.on_state_change:
            try:
                self.on_state_change()
            except Exception:
                logger.exception("on_state_change callback failed")
