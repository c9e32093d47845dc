from __future__ import annotations

import copy
from typing import List, Optional, Sequence, Union

from core.cards import Card, create_deck, deal, new_seed, shuffle_deck
from core.errors import IllegalActionError, IllegalPhaseError, PlayerNotFoundError

from .evaluator import determine_winner
from .models import (
    BOT_IDS,
    COMMUNITY_CARD_COUNT,
    HOLE_CARD_COUNT,
    HUMAN_PLAYER_ID,
    REVEALED_BY_STREET,
    OmahaActionType,
    OmahaGameState,
    OmahaPlayer,
    Street,
)

# Pure single-pot Omaha rules. Validation always runs against the incoming
# state before a deep copy is mutated, so a raised error changes nothing.
# There is no all-in or side-pot handling: a short stack facing a bet it
# cannot cover may only fold.

FOLD_WIN_DESCRIPTION = "All others folded"

_NEXT_STREET = {
    Street.PREFLOP: Street.FLOP,
    Street.FLOP: Street.TURN,
    Street.TURN: Street.RIVER,
}


def _deal(players: Sequence[OmahaPlayer], seed: int) -> List[Card]:
    deck = shuffle_deck(create_deck(), seed)
    holes: List[List[Card]] = [[] for _ in players]
    for _ in range(HOLE_CARD_COUNT):
        for hole in holes:
            hole.extend(deal(deck, 1))
    for player, hole in zip(players, holes):
        player.reset_for_hand(hole)
    return deal(deck, COMMUNITY_CARD_COUNT)


def _next_active_index(state: OmahaGameState, start: int) -> int:
    count = len(state.players)
    idx = (start + 1) % count
    while state.players[idx].folded and idx != start:
        idx = (idx + 1) % count
    return idx


def initialize_game(player_name: str, seed: Optional[int] = None) -> OmahaGameState:
    if seed is None:
        seed = new_seed()
    players = [OmahaPlayer(id=HUMAN_PLAYER_ID, name=player_name, is_bot=False)]
    for idx, bot_id in enumerate(BOT_IDS, start=1):
        players.append(OmahaPlayer(id=bot_id, name=f"Bot {idx}", is_bot=True))

    state = OmahaGameState(players=players, seed=seed)
    state.community_cards = _deal(players, seed)
    state.current_player_index = _next_active_index(state, state.dealer_index)
    return state


def start_next_hand(state: OmahaGameState, seed: Optional[int] = None) -> OmahaGameState:
    if not state.game_over:
        raise IllegalPhaseError("Hand still in progress")
    if seed is None:
        seed = (state.seed + 1) & 0xFFFFFFFF

    new_state = copy.deepcopy(state)
    new_state.seed = seed
    new_state.hand_number += 1
    new_state.dealer_index = (state.dealer_index + 1) % len(state.players)
    new_state.street = Street.PREFLOP
    new_state.pot = 0
    new_state.current_bet = 0
    new_state.last_raiser_index = None
    new_state.game_over = False
    new_state.winner = None
    new_state.winning_hand = None
    new_state.community_cards = _deal(new_state.players, seed)
    new_state.current_player_index = _next_active_index(new_state, new_state.dealer_index)
    return new_state


def find_player(state: OmahaGameState, player_id: str) -> OmahaPlayer:
    for player in state.players:
        if player.id == player_id:
            return player
    raise PlayerNotFoundError(f"Player not found: {player_id}")


def _player_index(state: OmahaGameState, player_id: str) -> int:
    for idx, player in enumerate(state.players):
        if player.id == player_id:
            return idx
    raise PlayerNotFoundError(f"Player not found: {player_id}")


def can_check(state: OmahaGameState, player_id: str) -> bool:
    player = find_player(state, player_id)
    return not player.folded and player.current_bet == state.current_bet


def can_call(state: OmahaGameState, player_id: str) -> bool:
    # Affordability is checked when the call is applied, not here.
    player = find_player(state, player_id)
    return not player.folded and state.current_bet > 0 and player.current_bet < state.current_bet


def call_amount(state: OmahaGameState, player_id: str) -> int:
    player = find_player(state, player_id)
    return max(state.current_bet - player.current_bet, 0)


def community_cards_for_street(state: OmahaGameState) -> List[Card]:
    return list(state.community_cards[: REVEALED_BY_STREET[state.street]])


def perform_action(
    state: OmahaGameState,
    player_id: str,
    action: Union[OmahaActionType, str],
    amount: Optional[int] = None,
) -> OmahaGameState:
    if state.game_over:
        raise IllegalPhaseError("Hand is over")
    seat_idx = _player_index(state, player_id)
    player = state.players[seat_idx]
    if player.folded:
        raise IllegalActionError("Player already folded")
    try:
        action = OmahaActionType(action)
    except ValueError:
        raise IllegalActionError(f"Unsupported action {action}") from None

    # Validate everything against the untouched state first.
    if action == OmahaActionType.CHECK and not can_check(state, player_id):
        raise IllegalActionError("Cannot check - must call or fold")
    if action == OmahaActionType.CALL:
        if not can_call(state, player_id):
            raise IllegalActionError("Cannot call")
        if state.current_bet - player.current_bet > player.chips:
            raise IllegalActionError("Not enough chips to call")
    if action == OmahaActionType.BET:
        if amount is None or isinstance(amount, bool) or not isinstance(amount, int):
            raise IllegalActionError("Invalid bet amount")
        contributed = amount - player.current_bet
        if contributed <= 0:
            raise IllegalActionError("Bet must raise your total for this street")
        if contributed > player.chips:
            raise IllegalActionError("Not enough chips to bet")

    new_state = copy.deepcopy(state)
    actor = new_state.players[seat_idx]

    if action == OmahaActionType.FOLD:
        actor.folded = True
    elif action == OmahaActionType.CALL:
        owed = new_state.current_bet - actor.current_bet
        actor.chips -= owed
        actor.current_bet = new_state.current_bet
        new_state.pot += owed
    elif action == OmahaActionType.BET:
        assert amount is not None
        contributed = amount - actor.current_bet
        actor.chips -= contributed
        actor.current_bet = amount
        new_state.pot += contributed
        new_state.current_bet = max(new_state.current_bet, amount)
        new_state.last_raiser_index = seat_idx
        # A raise reopens the action for everyone still in the hand.
        for other in new_state.players:
            if other is not actor and not other.folded:
                other.has_acted_this_street = False
    actor.has_acted_this_street = True

    new_state.current_player_index = _next_active_index(new_state, seat_idx)
    if _is_betting_round_complete(new_state):
        _advance_street(new_state)
    return new_state


def _is_betting_round_complete(state: OmahaGameState) -> bool:
    active = state.active_players()
    if len(active) == 1:
        return True
    if not all(player.has_acted_this_street for player in active):
        return False
    return len({player.current_bet for player in active}) == 1


def _advance_street(state: OmahaGameState) -> None:
    for player in state.players:
        player.reset_for_street()
    state.current_bet = 0
    state.last_raiser_index = None

    active = state.active_players()
    if len(active) == 1:
        _award_pot(state, active[0], FOLD_WIN_DESCRIPTION)
        return

    if state.street == Street.RIVER:
        state.street = Street.SHOWDOWN
        winner_id, rank = determine_winner(
            [(player.id, player.hole_cards) for player in active],
            community_cards_for_street(state),
        )
        _award_pot(state, find_player(state, winner_id), rank.description)
        return

    state.street = _NEXT_STREET[state.street]
    state.current_player_index = _next_active_index(state, state.dealer_index)


def _award_pot(state: OmahaGameState, winner: OmahaPlayer, description: str) -> None:
    winner.chips += state.pot
    state.pot = 0
    state.game_over = True
    state.winner = winner.id
    state.winning_hand = description
