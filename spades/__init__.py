"""Four-player Spades: bidding, trick play, scoring and multi-hand progression."""

from .bots import choose_bot_bid, choose_bot_card
from .engine import (
    can_play_card,
    check_card_play,
    determine_trick_winner,
    initialize_game,
    legal_cards,
    play_card,
    submit_bid,
)
from .models import HUMAN_PLAYER_ID, HandResult, PlayedCard, RenegePenalty, SpadesGameState, SpadesPlayer, Trick
from .scoring import RENEGE_PENALTY, TARGET_SCORE, calculate_hand_score

__all__ = [
    "choose_bot_bid",
    "choose_bot_card",
    "can_play_card",
    "check_card_play",
    "determine_trick_winner",
    "initialize_game",
    "legal_cards",
    "play_card",
    "submit_bid",
    "HUMAN_PLAYER_ID",
    "HandResult",
    "PlayedCard",
    "RenegePenalty",
    "SpadesGameState",
    "SpadesPlayer",
    "Trick",
    "RENEGE_PENALTY",
    "TARGET_SCORE",
    "calculate_hand_score",
]
