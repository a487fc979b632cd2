"""
Hand strength heuristics for AI bots.

Preflop: closed-form score over the two hole-card ranks.
Postflop: evaluated hand category mapped to a base value, then adjusted for
board pairs, top pair, and flush/straight draws.

All strengths are floats in [0, 1].
"""
from __future__ import annotations
from collections import Counter
from typing import List, Sequence

from holdem.core.card import Card, Rank
from holdem.core.hand_evaluator import HandCategory, evaluate

_LOW = Rank.TWO.value
_SPAN = Rank.ACE.value - Rank.TWO.value   # 12

BASE_STRENGTHS = {
    HandCategory.HIGH_CARD: 0.15,
    HandCategory.PAIR: 0.35,
    HandCategory.TWO_PAIR: 0.55,
    HandCategory.THREE_OF_A_KIND: 0.7,
    HandCategory.STRAIGHT: 0.78,
    HandCategory.FLUSH: 0.83,
    HandCategory.FULL_HOUSE: 0.9,
    HandCategory.FOUR_OF_A_KIND: 0.96,
    HandCategory.STRAIGHT_FLUSH: 0.98,
    HandCategory.ROYAL_FLUSH: 1.0,
}

BOARD_PAIR_PENALTY = 0.1
TOP_PAIR_BONUS = 0.08
FLUSH_DRAW_BONUS = 0.1
STRAIGHT_DRAW_BONUS = 0.06


def _clamp(x: float) -> float:
    return max(0.0, min(1.0, x))


def preflop_strength(hole_cards: Sequence[Card]) -> float:
    if len(hole_cards) != 2:
        return 0.0

    c1, c2 = hole_cards
    high = max(c1.rank.value, c2.rank.value) - _LOW
    low = min(c1.rank.value, c2.rank.value) - _LOW
    gap = high - low
    pair = gap == 0
    suited = c1.suit == c2.suit

    if pair:
        # 22 = 0.5 ... AA = 1.0
        strength = 0.5 + (high / _SPAN) * 0.5
    else:
        strength = (high + low) / (2 * _SPAN) * 0.6
        if suited:
            strength += 0.06
        if gap == 1:
            strength += 0.04
        elif gap == 2:
            strength += 0.02
        if gap > 4:
            strength -= 0.05

    ace = Rank.ACE.value - _LOW
    if pair and high >= Rank.TEN.value - _LOW:
        strength = max(strength, 0.85)
    if high == ace and low >= Rank.JACK.value - _LOW:
        strength = max(strength, 0.75)
    if high == ace and low == Rank.KING.value - _LOW:
        strength = max(strength, 0.8)

    return _clamp(strength)


def has_flush_draw(cards: Sequence[Card]) -> bool:
    """Exactly four cards of one suit."""
    return any(n == 4 for n in Counter(c.suit for c in cards).values())


def has_straight_draw(cards: Sequence[Card]) -> bool:
    """Four distinct ranks within a five-rank window (open-ended or gutshot)."""
    ranks = sorted({c.rank.value for c in cards})
    for i in range(len(ranks) - 3):
        if ranks[i + 3] - ranks[i] <= 4:
            return True
    return False


def postflop_strength(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> float:
    all_cards: List[Card] = list(hole_cards) + list(community_cards)
    result = evaluate(all_cards)
    strength = BASE_STRENGTHS[result.category]

    if result.category == HandCategory.PAIR:
        hole_ranks = {c.rank.value for c in hole_cards}
        board_counts = Counter(c.rank.value for c in community_cards)
        board_paired = any(n >= 2 for n in board_counts.values())
        if board_paired and not hole_ranks & set(board_counts):
            strength -= BOARD_PAIR_PENALTY
        pair_rank = result.values[0]
        if pair_rank in hole_ranks and pair_rank >= max(board_counts):
            strength += TOP_PAIR_BONUS

    if result.category < HandCategory.STRAIGHT and len(community_cards) < 5:
        if has_flush_draw(all_cards):
            strength += FLUSH_DRAW_BONUS
        if has_straight_draw(all_cards):
            strength += STRAIGHT_DRAW_BONUS

    return _clamp(strength)


def estimate_strength(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> float:
    """Preflop heuristic before the flop, evaluated strength afterwards."""
    if not hole_cards:
        return 0.0
    if len(community_cards) < 3:
        return preflop_strength(hole_cards)
    return postflop_strength(hole_cards, community_cards)
