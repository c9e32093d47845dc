from __future__ import annotations

from collections import Counter
from typing import List, Optional

from core.cards import Card, Suit
from core.errors import IllegalActionError

from .engine import find_player, legal_cards
from .models import MAX_BID, SpadesGameState, Trick


def _estimate_winners(hand: List[Card]) -> float:
    """Rough count of tricks a hand should take: side honours plus trump length."""
    suit_lengths = Counter(card.suit for card in hand)
    estimate = 0.0
    for card in hand:
        if card.suit == Suit.SPADES:
            if card.rank >= 12:  # A, K, Q of trump
                estimate += 1.0 if card.rank >= 13 else 0.5
            continue
        if card.rank == 14:
            estimate += 1.0
        elif card.rank == 13 and suit_lengths[card.suit] >= 2:
            estimate += 0.5
    # Long trump wins tricks late in the hand.
    estimate += max(0, suit_lengths[Suit.SPADES] - 3)
    return estimate


def choose_bot_bid(state: SpadesGameState, bot_id: str) -> int:
    bot = find_player(state, bot_id)
    return max(1, min(MAX_BID, round(_estimate_winners(bot.hand))))


def _current_winning_card(trick: Trick) -> Optional[Card]:
    if not trick.cards:
        return None
    spades = [played.card for played in trick.cards if played.card.suit == Suit.SPADES]
    if spades:
        return max(spades, key=lambda card: card.rank)
    return max(
        (played.card for played in trick.cards if played.card.suit == trick.lead_suit),
        key=lambda card: card.rank,
    )


def _beats(card: Card, best: Card) -> bool:
    if card.suit == best.suit:
        return card.rank > best.rank
    return card.suit == Suit.SPADES


def choose_bot_card(state: SpadesGameState, bot_id: str) -> Card:
    bot = find_player(state, bot_id)
    legal = legal_cards(state, bot_id)
    if not legal:
        raise IllegalActionError("No legal cards available")

    # Lowest rank first; prefer shedding side suits over trump at equal rank.
    legal.sort(key=lambda card: (card.rank, card.suit == Suit.SPADES))
    needs_tricks = bot.bid is None or bot.tricks_won < bot.bid
    best = _current_winning_card(state.current_trick)

    if needs_tricks and best is not None:
        winners = [card for card in legal if _beats(card, best)]
        if winners:
            return winners[0]
    return legal[0]
