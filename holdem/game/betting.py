"""
Betting actions for No-Limit Hold'em.

Actions are applied to the current actor of a TableState. Calls that cannot
be honoured are reported through ActionOutcome instead of raising, so late or
duplicate UI events never corrupt the table.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from holdem.game.game_state import TableState
from holdem.game.player import PlayerState
from holdem.game.rules import reset_acted


class BettingAction(Enum):
    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    RAISE = "raise"


class ActionOutcome(Enum):
    APPLIED = "applied"
    CLAMPED = "clamped"                         # raise applied after clamping the amount
    IGNORED_NO_HAND = "ignored:no_hand"
    IGNORED_INVALID_ACTOR = "ignored:invalid_actor"
    IGNORED_ILLEGAL_ACTION = "ignored:illegal_action"

    @property
    def applied(self) -> bool:
        return self in (ActionOutcome.APPLIED, ActionOutcome.CLAMPED)


@dataclass(frozen=True)
class ValidActions:
    actions: Tuple[BettingAction, ...]
    can_check: bool
    call_amount: int        # 0 if can check; capped at the stack
    min_raise: int          # minimum total bet after a raise, capped at all-in
    max_raise: int          # all-in total
    player_stack: int

    @property
    def can_raise(self) -> bool:
        return BettingAction.RAISE in self.actions


NO_ACTIONS = ValidActions(actions=(), can_check=False, call_amount=0,
                          min_raise=0, max_raise=0, player_stack=0)


def get_valid_actions(state: TableState, player: PlayerState) -> ValidActions:
    if not player.can_act:
        return NO_ACTIONS

    max_bet = state.current_max_bet
    to_call = max(0, max_bet - player.bet)
    actions = [BettingAction.FOLD]
    actions.append(BettingAction.CHECK if to_call == 0 else BettingAction.CALL)
    if player.chips > to_call:
        actions.append(BettingAction.RAISE)

    all_in_total = player.chips + player.bet
    min_total = max_bet + max(state.min_raise, state.big_blind)
    return ValidActions(
        actions=tuple(actions),
        can_check=(to_call == 0),
        call_amount=min(to_call, player.chips),
        min_raise=min(min_total, all_in_total),
        max_raise=all_in_total,
        player_stack=player.chips,
    )


def apply_action(
    state: TableState,
    player: PlayerState,
    action: BettingAction,
    amount: int = 0,
) -> ActionOutcome:
    """
    Apply `action` for `player` and mark them as having acted.

    amount: for RAISE, the new total bet for the round (not the increment).
    Out-of-range raise totals are clamped to [current max bet, all-in].
    """
    valid = get_valid_actions(state, player)
    if action not in valid.actions:
        return ActionOutcome.IGNORED_ILLEGAL_ACTION

    outcome = ActionOutcome.APPLIED

    if action == BettingAction.FOLD:
        player.folded = True

    elif action == BettingAction.CALL:
        player.commit(valid.call_amount)

    elif action == BettingAction.RAISE:
        max_bet = state.current_max_bet
        all_in_total = player.chips + player.bet
        total = min(max(amount, max_bet), all_in_total)
        if total != amount:
            outcome = ActionOutcome.CLAMPED
        player.commit(total - player.bet)
        if player.bet > max_bet:
            state.min_raise = player.bet - max_bet
            state.last_raise = player.bet
            # any raise reopens the action for everyone else
            reset_acted(state.players)

    player.has_acted = True
    return outcome
