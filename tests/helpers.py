from __future__ import annotations

import random
from typing import Dict, Optional

from core.cards import parse_cards
from omaha.engine import perform_action
from omaha.models import OmahaActionType, OmahaGameState
from spades.bots import choose_bot_bid, choose_bot_card
from spades.engine import play_card, submit_bid
from spades.models import BOT_IDS, HUMAN_PLAYER_ID, SpadesGameState, SpadesPlayer

SEAT_IDS = (HUMAN_PLAYER_ID,) + BOT_IDS


class FixedRandom(random.Random):
    """Random source whose random() always returns the same roll."""

    def __init__(self, roll: float) -> None:
        super().__init__(0)
        self.roll = roll

    def random(self) -> float:
        return self.roll


def spades_state(
    hands: Dict[str, str],
    *,
    bids: Optional[Dict[str, int]] = None,
    current: str = HUMAN_PLAYER_ID,
    seed: int = 1,
) -> SpadesGameState:
    """Build a trick-play Spades state from space-separated card labels per seat."""
    players = []
    for idx, player_id in enumerate(SEAT_IDS):
        name = "You" if player_id == HUMAN_PLAYER_ID else f"Bot {idx}"
        player = SpadesPlayer(id=player_id, name=name, is_bot=player_id != HUMAN_PLAYER_ID)
        player.hand = parse_cards(hands.get(player_id, "").split())
        player.bid = (bids or {}).get(player_id, 1)
        players.append(player)
    return SpadesGameState(
        players=players,
        seed=seed,
        current_player_index=SEAT_IDS.index(current),
        bidding_phase=False,
        bidding_complete=True,
    )


def omaha_act(state: OmahaGameState, *moves) -> OmahaGameState:
    """Apply (player_id, action[, amount]) moves in order."""
    for move in moves:
        player_id, action, *rest = move
        state = perform_action(state, player_id, OmahaActionType(action), *rest)
    return state


def play_spades_hand(state: SpadesGameState) -> SpadesGameState:
    """Finish the current hand, letting the bot heuristics choose for every seat."""
    hand_number = state.hand_number
    while state.hand_number == hand_number and not state.game_over:
        actor = state.current_player
        if state.bidding_phase:
            state = submit_bid(state, actor.id, choose_bot_bid(state, actor.id))
        else:
            state = play_card(state, actor.id, choose_bot_card(state, actor.id))
    return state
