"""Card primitives and error types shared by the Spades and Omaha engines."""

from .cards import (
    RANKS,
    SUITS,
    Card,
    Suit,
    cards_to_labels,
    create_deck,
    deal,
    new_seed,
    parse_cards,
    parse_label,
    shuffle_deck,
)
from .errors import (
    GameError,
    IllegalActionError,
    IllegalCardError,
    IllegalPhaseError,
    NoActiveSessionError,
    PlayerNotFoundError,
    SessionBusyError,
)

__all__ = [
    "Card",
    "RANKS",
    "SUITS",
    "Suit",
    "cards_to_labels",
    "create_deck",
    "deal",
    "new_seed",
    "parse_cards",
    "parse_label",
    "shuffle_deck",
    "GameError",
    "IllegalActionError",
    "IllegalCardError",
    "IllegalPhaseError",
    "NoActiveSessionError",
    "PlayerNotFoundError",
    "SessionBusyError",
]
