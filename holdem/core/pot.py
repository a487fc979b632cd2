"""Single-pot settlement.

All chips committed during a hand are pooled into one pot and split among the
showdown winners. There is no side-pot isolation: a player all-in for less
than the others can still win chips they never matched.
"""
from __future__ import annotations
from typing import Dict, Sequence


def split_pot(amount: int, winner_ids: Sequence[int]) -> Dict[int, int]:
    """
    Divide `amount` among `winner_ids` by integer division.

    The indivisible remainder goes entirely to the first winner, so the
    returned payouts always sum to `amount` exactly.
    """
    if amount < 0:
        raise ValueError(f"Pot cannot be negative: {amount}")
    if not winner_ids:
        raise ValueError("Cannot split a pot with no winners")
    share, remainder = divmod(amount, len(winner_ids))
    payouts: Dict[int, int] = {}
    for i, pid in enumerate(winner_ids):
        payouts[pid] = payouts.get(pid, 0) + share + (remainder if i == 0 else 0)
    return payouts
