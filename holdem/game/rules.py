"""Seat navigation, blind posting, dealer rotation, and round-completion rules."""
from __future__ import annotations
from typing import List, Tuple

from holdem.game.game_state import TableState
from holdem.game.player import PlayerState


def next_active_seat(players: List[PlayerState], from_index: int) -> int:
    """Return the index of the next seat that can still act, or -1 if none can."""
    n = len(players)
    for offset in range(1, n + 1):
        idx = (from_index + offset) % n
        if players[idx].can_act:
            return idx
    return -1


def next_seated(players: List[PlayerState], from_index: int) -> int:
    """Return the next seat that is not sitting out, starting after from_index."""
    n = len(players)
    for offset in range(1, n + 1):
        idx = (from_index + offset) % n
        if not players[idx].sitting_out:
            return idx
    return -1


def normalize_dealer(state: TableState) -> int:
    """Place the dealer button on a seated player at or after its current index."""
    n = len(state.players)
    idx = state.dealer_index % n
    if state.players[idx].sitting_out:
        idx = next_seated(state.players, idx)
    state.dealer_index = idx
    return idx


def advance_dealer(state: TableState) -> int:
    """Move the dealer button one seat clockwise for the next hand."""
    state.dealer_index = (state.dealer_index + 1) % len(state.players)
    return state.dealer_index


def get_blind_indices(state: TableState) -> Tuple[int, int]:
    """
    Return (small_blind_index, big_blind_index) given the current dealer.
    Heads-up rule: dealer posts SB, other player posts BB.
    """
    players = state.players
    if len(state.seated_players) == 2:
        sb_index = state.dealer_index
    else:
        sb_index = next_active_seat(players, state.dealer_index)
    bb_index = next_active_seat(players, sb_index)
    return sb_index, bb_index


def post_blind(player: PlayerState, amount: int) -> int:
    """Post a forced bet, capped at the player's stack. Returns chips posted."""
    return player.commit(amount)


def post_blinds(state: TableState) -> Tuple[int, int]:
    """Post small then big blind. Returns (sb_index, bb_index)."""
    sb_idx, bb_idx = get_blind_indices(state)
    post_blind(state.players[sb_idx], state.small_blind)
    post_blind(state.players[bb_idx], state.big_blind)
    return sb_idx, bb_idx


def first_to_act_preflop(state: TableState, bb_index: int) -> int:
    """Index of first player to act preflop (the seat after the big blind)."""
    return next_active_seat(state.players, bb_index)


def first_to_act_postflop(state: TableState) -> int:
    """First eligible seat after the dealer; rotates with the button each hand."""
    return next_active_seat(state.players, state.dealer_index)


def reset_acted(players: List[PlayerState]) -> None:
    """Seats that cannot act count as having acted."""
    for p in players:
        p.has_acted = not p.can_act


def is_betting_round_complete(state: TableState) -> bool:
    """Everyone who can still act has acted and matched the current maximum bet."""
    max_bet = state.current_max_bet
    for p in state.players:
        if not p.can_act:
            continue
        if not p.has_acted or p.bet < max_bet:
            return False
    return True
