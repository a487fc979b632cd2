"""Card, Rank, Suit, and Deck definitions."""
from __future__ import annotations
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional


class EmptyDeckError(ValueError):
    """Raised when drawing from an exhausted deck (a dealing-logic bug)."""


class Suit(Enum):
    def __new__(cls, symbol: str, label: str):
        obj = object.__new__(cls)
        obj._value_ = symbol
        obj.label = label
        return obj

    HEARTS = ("h", "hearts")
    DIAMONDS = ("d", "diamonds")
    CLUBS = ("c", "clubs")
    SPADES = ("s", "spades")

    @property
    def symbol(self) -> str:
        return self._value_

    def __str__(self) -> str:
        return self._value_


class Rank(Enum):
    def __new__(cls, rank_value: int, symbol: str):
        obj = object.__new__(cls)
        obj._value_ = rank_value
        obj.symbol = symbol
        return obj

    TWO   = (2,  "2")
    THREE = (3,  "3")
    FOUR  = (4,  "4")
    FIVE  = (5,  "5")
    SIX   = (6,  "6")
    SEVEN = (7,  "7")
    EIGHT = (8,  "8")
    NINE  = (9,  "9")
    TEN   = (10, "T")
    JACK  = (11, "J")
    QUEEN = (12, "Q")
    KING  = (13, "K")
    ACE   = (14, "A")

    def __str__(self) -> str:
        return self.symbol

    def __lt__(self, other: "Rank") -> bool:
        return self._value_ < other._value_


_RANKS_BY_SYMBOL = {r.symbol: r for r in Rank}
_SUITS_BY_SYMBOL = {s.symbol: s for s in Suit}


@dataclass(frozen=True)
class Card:
    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self})"


def parse_card(text: str) -> Card:
    """Parse 'Ah', 'Td' or '10c' into a Card."""
    text = text.strip()
    rank_part, suit_part = text[:-1].upper(), text[-1:].lower()
    if rank_part == "10":
        rank_part = "T"
    try:
        return Card(_RANKS_BY_SYMBOL[rank_part], _SUITS_BY_SYMBOL[suit_part])
    except KeyError:
        raise ValueError(f"Invalid card: {text!r}") from None


def parse_cards(text: str) -> List[Card]:
    """Parse a whitespace separated list such as 'As Ks Qs'."""
    return [parse_card(token) for token in text.split()]


def full_deck() -> List[Card]:
    return [Card(rank, suit) for suit in Suit for rank in Rank]


class Deck:
    """Ordered 52-card deck; cards are drawn from the end of the list."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()
        self._cards: List[Card] = []
        self.reset()

    def reset(self) -> None:
        self._cards = full_deck()
        self.shuffle()

    def shuffle(self) -> None:
        self._rng.shuffle(self._cards)

    def stack(self, cards: Iterable[Card]) -> None:
        """Replace the deck contents; the last card given is drawn first."""
        self._cards = list(cards)

    def draw(self) -> Card:
        if not self._cards:
            raise EmptyDeckError("Cannot draw from an empty deck")
        return self._cards.pop()

    def draw_many(self, n: int) -> List[Card]:
        if n > len(self._cards):
            raise EmptyDeckError(f"Not enough cards: requested {n}, have {len(self._cards)}")
        return [self._cards.pop() for _ in range(n)]

    @property
    def cards(self) -> List[Card]:
        return list(self._cards)

    def __len__(self) -> int:
        return len(self._cards)
