from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from core.cards import Card

HOLE_CARDS_USED = 2
BOARD_CARDS_USED = 3

TIER_NAMES = {
    8: "Straight Flush",
    7: "Four of a Kind",
    6: "Full House",
    5: "Flush",
    4: "Straight",
    3: "Three of a Kind",
    2: "Two Pair",
    1: "One Pair",
    0: "High Card",
}


@dataclass(frozen=True, order=True)
class HandRank:
    # Ordered by tier, then tiebreakers element by element.
    tier: int
    tiebreakers: Tuple[int, ...]
    description: str = field(default="", compare=False)


def _rank(tier: int, tiebreakers: Iterable[int]) -> HandRank:
    return HandRank(tier, tuple(tiebreakers), TIER_NAMES[tier])


def evaluate_omaha_hand(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> HandRank:
    """Best five-card hand using exactly two hole cards and three board cards."""
    if len(hole_cards) < HOLE_CARDS_USED:
        raise ValueError("Need at least two hole cards")
    if len(community_cards) < BOARD_CARDS_USED:
        raise ValueError("Need at least three community cards")

    best: Optional[HandRank] = None
    for hole in itertools.combinations(hole_cards, HOLE_CARDS_USED):
        for board in itertools.combinations(community_cards, BOARD_CARDS_USED):
            rank = evaluate_five(hole + board)
            if best is None or rank > best:
                best = rank
    assert best is not None
    return best


def evaluate_five(cards: Sequence[Card]) -> HandRank:
    ranks = sorted((card.rank for card in cards), reverse=True)
    is_flush = len({card.suit for card in cards}) == 1
    straight_high = _straight_high(ranks)

    counts: Dict[int, int] = {}
    for rank in ranks:
        counts[rank] = counts.get(rank, 0) + 1
    # Most frequent first, higher rank breaking ties.
    grouped = sorted(counts.items(), key=lambda item: (item[1], item[0]), reverse=True)
    shape = [count for _, count in grouped]
    ordered = [rank for rank, _ in grouped]

    if straight_high and is_flush:
        return _rank(8, [straight_high])
    if shape[0] == 4:
        return _rank(7, ordered)
    if shape[:2] == [3, 2]:
        return _rank(6, ordered)
    if is_flush:
        return _rank(5, ranks)
    if straight_high:
        return _rank(4, [straight_high])
    if shape[0] == 3:
        return _rank(3, ordered)
    if shape[:2] == [2, 2]:
        return _rank(2, ordered)
    if shape[0] == 2:
        return _rank(1, ordered)
    return _rank(0, ranks)


def _straight_high(ranks: List[int]) -> Optional[int]:
    unique = sorted(set(ranks), reverse=True)
    if len(unique) != 5:
        return None
    if unique[0] - unique[4] == 4:
        return unique[0]
    if unique == [14, 5, 4, 3, 2]:  # wheel
        return 5
    return None


def determine_winner(
    players: Sequence[Tuple[str, Sequence[Card]]],
    community_cards: Sequence[Card],
) -> Tuple[str, HandRank]:
    """Return (player_id, rank) of the best hand.

    Equal hands are not split: the first maximum in seat order keeps the pot.
    """
    if not players:
        raise ValueError("No players to evaluate")
    best_id: Optional[str] = None
    best_rank: Optional[HandRank] = None
    for player_id, hole_cards in players:
        rank = evaluate_omaha_hand(hole_cards, community_cards)
        if best_rank is None or rank > best_rank:
            best_id, best_rank = player_id, rank
    assert best_id is not None and best_rank is not None
    return best_id, best_rank
