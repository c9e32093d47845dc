"""Four-card, single-pot Omaha: streets, betting and showdown evaluation."""

from .bots import choose_bot_action
from .engine import (
    call_amount,
    can_call,
    can_check,
    community_cards_for_street,
    initialize_game,
    perform_action,
    start_next_hand,
)
from .evaluator import HandRank, determine_winner, evaluate_five, evaluate_omaha_hand
from .models import OmahaActionType, OmahaGameState, OmahaPlayer, Street

__all__ = [
    "choose_bot_action",
    "call_amount",
    "can_call",
    "can_check",
    "community_cards_for_street",
    "initialize_game",
    "perform_action",
    "start_next_hand",
    "HandRank",
    "determine_winner",
    "evaluate_five",
    "evaluate_omaha_hand",
    "OmahaActionType",
    "OmahaGameState",
    "OmahaPlayer",
    "Street",
]
