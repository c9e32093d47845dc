from __future__ import annotations

import random
from collections import Counter
from typing import List, Optional, Tuple

from core.cards import Card

from .engine import can_call, can_check, community_cards_for_street, find_player
from .evaluator import evaluate_omaha_hand
from .models import OmahaActionType, OmahaGameState

BOT_BET_SIZE = 50

_RNG = random.Random()


def _rough_hand_strength(hole: List[Card], board: List[Card]) -> float:
    """Very rough 0..1 proxy for hand quality used to tilt the bot's odds."""
    if len(board) >= 3:
        # Post-flop the real made hand is known: trips score 0.75 and a straight or better 1.0.
        return min(evaluate_omaha_hand(hole, board).tier / 4.0, 1.0)

    ranks = Counter(card.rank for card in hole)
    suits = Counter(card.suit for card in hole)
    score = sum(card.rank for card in hole) / 56.0  # four aces == 1.0
    if any(count >= 2 for count in ranks.values()):
        score += 0.2
    if any(count == 2 for count in suits.values()):
        score += 0.1  # a suited pair can make a flush; more suited cards cannot help
    return min(score, 1.0)


def choose_bot_action(
    state: OmahaGameState,
    bot_id: str,
    rng: Optional[random.Random] = None,
) -> Tuple[OmahaActionType, Optional[int]]:
    """Check/bet when unopposed, call/fold when facing a bet. Never illegal."""
    rng = rng or _RNG
    bot = find_player(state, bot_id)
    strength = _rough_hand_strength(bot.hole_cards, community_cards_for_street(state))
    roll = rng.random()

    if can_check(state, bot_id):
        # Baseline 30% bet, more with a strong hand.
        bet_probability = 0.15 + 0.3 * strength
        if bot.chips > 0 and roll < bet_probability:
            return OmahaActionType.BET, bot.current_bet + min(BOT_BET_SIZE, bot.chips)
        return OmahaActionType.CHECK, None

    if can_call(state, bot_id):
        owed = state.current_bet - bot.current_bet
        # Baseline 60% call, rising with hand strength.
        call_probability = 0.45 + 0.3 * strength
        if owed <= bot.chips and roll < call_probability:
            return OmahaActionType.CALL, None
        return OmahaActionType.FOLD, None

    return OmahaActionType.FOLD, None
