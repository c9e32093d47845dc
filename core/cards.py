from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, TypeVar

T = TypeVar("T")

RANK_LABELS = "23456789TJQKA"
RANKS = tuple(range(2, 15))  # 11=J, 12=Q, 13=K, 14=A

# LCG constants for the reproducible quick-play shuffle.
_LCG_MULTIPLIER = 9301
_LCG_INCREMENT = 49297
_LCG_MODULUS = 233280


class Suit(str, Enum):
    SPADES = "spades"
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"

    @property
    def letter(self) -> str:
        return self.value[0]


SUITS = (Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS)
_SUIT_BY_LETTER = {suit.letter: suit for suit in SUITS}


@dataclass(frozen=True)
class Card:
    suit: Suit
    rank: int

    def __post_init__(self) -> None:
        if self.rank not in RANKS:
            raise ValueError(f"Invalid rank: {self.rank}")
        if not isinstance(self.suit, Suit):
            try:
                object.__setattr__(self, "suit", Suit(self.suit))
            except ValueError:
                raise ValueError(f"Invalid suit: {self.suit}") from None

    @property
    def label(self) -> str:
        return f"{RANK_LABELS[self.rank - 2]}{self.suit.letter}"


def create_deck() -> List[Card]:
    return [Card(suit, rank) for suit in SUITS for rank in RANKS]


def shuffle_deck(deck: Sequence[T], seed: int) -> List[T]:
    """Fisher-Yates driven by a seeded LCG. Reproducible, not secure."""
    shuffled = list(deck)
    state = seed
    for i in range(len(shuffled) - 1, 0, -1):
        state = (state * _LCG_MULTIPLIER + _LCG_INCREMENT) % _LCG_MODULUS
        j = (state * (i + 1)) // _LCG_MODULUS
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def new_seed() -> int:
    return int(time.time() * 1000) & 0xFFFFFFFF


def deal(deck: List[Card], count: int) -> List[Card]:
    if len(deck) < count:
        raise ValueError("Not enough cards left in deck")
    cards = deck[:count]
    del deck[:count]
    return cards


def cards_to_labels(cards: Sequence[Card]) -> List[str]:
    return [card.label for card in cards]


def parse_label(label: str) -> Card:
    if len(label) != 2:
        raise ValueError(f"Invalid card label: {label}")
    rank_char, suit_char = label[0].upper(), label[1].lower()
    if rank_char not in RANK_LABELS:
        raise ValueError(f"Invalid rank: {label[0]}")
    if suit_char not in _SUIT_BY_LETTER:
        raise ValueError(f"Invalid suit: {label[1]}")
    return Card(_SUIT_BY_LETTER[suit_char], RANK_LABELS.index(rank_char) + 2)


def parse_cards(labels: Sequence[str]) -> List[Card]:
    return [parse_label(label) for label in labels]
