from __future__ import annotations

from typing import Sequence

from .models import SpadesPlayer

TARGET_SCORE = 500
RENEGE_PENALTY = -100
NIL_BONUS = 100


def calculate_hand_score(player: SpadesPlayer) -> int:
    """Score one player's hand from their bid and tricks won.

    Nil (bid 0) is worth +100 when no trick is taken and -100 otherwise.
    Making the bid scores 10 per bid trick plus 1 per overtrick (bag);
    falling short scores -10 per bid trick.
    """
    bid = player.bid if player.bid is not None else 0
    tricks = player.tricks_won

    if bid == 0:
        return NIL_BONUS if tricks == 0 else -NIL_BONUS
    if tricks >= bid:
        return bid * 10 + (tricks - bid)
    return -bid * 10


def has_reached_target(players: Sequence[SpadesPlayer]) -> bool:
    return any(player.total_score >= TARGET_SCORE for player in players)


def determine_winner(players: Sequence[SpadesPlayer]) -> SpadesPlayer:
    # Strict comparison keeps the earliest seat on a tie.
    winner = players[0]
    for player in players[1:]:
        if player.total_score > winner.total_score:
            winner = player
    return winner
