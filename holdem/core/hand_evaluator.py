"""
Combinatorial hand evaluator — pure Python, no lookup tables.

Every 5-card subset of the 5–7 available cards is classified and the best
one is kept. Results compare by category first, then by the tie-break rank
sequence (most significant first):

  Royal / Straight Flush: [high card of straight]   (wheel A-5 is 5-high)
  Four of a Kind:         [quad rank, kicker]
  Full House:             [trips rank, pair rank]
  Flush / High Card:      all five ranks descending
  Straight:               [high card of straight]
  Three of a Kind:        [trips rank, kickers descending]
  Two Pair:               [high pair, low pair, kicker]
  Pair:                   [pair rank, kickers descending]
"""
from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from functools import cmp_to_key
from itertools import combinations
from typing import Sequence, Tuple

from holdem.core.card import Card, Rank


class HandCategory(IntEnum):
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9


_CATEGORY_NAMES = {
    HandCategory.HIGH_CARD: "High Card",
    HandCategory.PAIR: "Pair",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.FLUSH: "Flush",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.ROYAL_FLUSH: "Royal Flush",
}

_WHEEL = (Rank.ACE.value, 5, 4, 3, 2)


@dataclass(frozen=True)
class HandEvaluation:
    category: HandCategory
    values: Tuple[int, ...]
    cards: Tuple[Card, ...] = ()

    @property
    def name(self) -> str:
        return _CATEGORY_NAMES[self.category]

    def __str__(self) -> str:
        return f"{self.name} ({' '.join(str(c) for c in self.cards)})"


def hand_name(category: HandCategory) -> str:
    return _CATEGORY_NAMES[category]


def _straight_high(ranks: Sequence[int]) -> int:
    """Return the straight's high card for five descending ranks, or 0."""
    if len(set(ranks)) != 5:
        return 0
    if ranks[0] - ranks[4] == 4:
        return ranks[0]
    if tuple(ranks) == _WHEEL:
        return 5
    return 0


def evaluate5(cards: Sequence[Card]) -> HandEvaluation:
    """Classify exactly five cards."""
    if len(cards) != 5:
        raise ValueError(f"evaluate5 requires exactly 5 cards, got {len(cards)}")

    ranks = sorted((c.rank.value for c in cards), reverse=True)
    is_flush = len({c.suit for c in cards}) == 1
    straight_high = _straight_high(ranks)

    # (count desc, rank desc) resolves kicker order for every paired category
    groups = sorted(Counter(ranks).items(), key=lambda g: (g[1], g[0]), reverse=True)
    counts = [count for _, count in groups]
    grouped = [rank for rank, _ in groups]
    best = tuple(cards)

    if straight_high and is_flush:
        if straight_high == Rank.ACE.value:
            return HandEvaluation(HandCategory.ROYAL_FLUSH, (straight_high,), best)
        return HandEvaluation(HandCategory.STRAIGHT_FLUSH, (straight_high,), best)
    if counts[0] == 4:
        return HandEvaluation(HandCategory.FOUR_OF_A_KIND, (grouped[0], grouped[1]), best)
    if counts[0] == 3 and counts[1] == 2:
        return HandEvaluation(HandCategory.FULL_HOUSE, (grouped[0], grouped[1]), best)
    if is_flush:
        return HandEvaluation(HandCategory.FLUSH, tuple(ranks), best)
    if straight_high:
        return HandEvaluation(HandCategory.STRAIGHT, (straight_high,), best)
    if counts[0] == 3:
        return HandEvaluation(HandCategory.THREE_OF_A_KIND, tuple(grouped), best)
    if counts[0] == 2 and counts[1] == 2:
        return HandEvaluation(HandCategory.TWO_PAIR, tuple(grouped), best)
    if counts[0] == 2:
        return HandEvaluation(HandCategory.PAIR, tuple(grouped), best)
    return HandEvaluation(HandCategory.HIGH_CARD, tuple(ranks), best)


def compare_hands(a: HandEvaluation, b: HandEvaluation) -> int:
    """Return 1 if a beats b, -1 if b beats a, 0 on an exact tie."""
    if a.category != b.category:
        return 1 if a.category > b.category else -1
    for va, vb in zip(a.values, b.values):
        if va != vb:
            return 1 if va > vb else -1
    return 0


def evaluate(cards: Sequence[Card]) -> HandEvaluation:
    """Best 5-card hand from 5–7 cards."""
    n = len(cards)
    if not 5 <= n <= 7:
        raise ValueError(f"evaluate requires 5–7 cards, got {n}")
    # max() keeps the first of equal hands
    return max(map(evaluate5, combinations(cards, 5)), key=cmp_to_key(compare_hands))
