from __future__ import annotations

import copy
from typing import List, Optional

from core.cards import SUITS, Card, Suit, create_deck, new_seed, shuffle_deck
from core.errors import IllegalActionError, IllegalCardError, IllegalPhaseError, PlayerNotFoundError

from .models import (
    BOT_IDS,
    CARDS_PER_HAND,
    HUMAN_PLAYER_ID,
    MAX_BID,
    PLAYER_COUNT,
    HandResult,
    PlayedCard,
    RenegePenalty,
    SpadesGameState,
    SpadesPlayer,
    Trick,
)
from .scoring import RENEGE_PENALTY, calculate_hand_score, determine_winner, has_reached_target

# Every transition validates against the incoming state, then mutates a deep
# copy. A raised error therefore never leaves a half-applied state behind.

_SUIT_ORDER = {suit: idx for idx, suit in enumerate(SUITS)}


def _sort_hand(hand: List[Card]) -> List[Card]:
    return sorted(hand, key=lambda card: (_SUIT_ORDER[card.suit], -card.rank))


def _deal_hands(seed: int) -> List[List[Card]]:
    deck = shuffle_deck(create_deck(), seed)
    hands: List[List[Card]] = [[] for _ in range(PLAYER_COUNT)]
    for i in range(CARDS_PER_HAND):
        for p in range(PLAYER_COUNT):
            hands[p].append(deck[i * PLAYER_COUNT + p])
    return [_sort_hand(hand) for hand in hands]


def _opening_seat(hand_number: int) -> int:
    return (hand_number - 1) % PLAYER_COUNT


def initialize_game(player_name: str, seed: Optional[int] = None) -> SpadesGameState:
    if seed is None:
        seed = new_seed()
    players = [SpadesPlayer(id=HUMAN_PLAYER_ID, name=player_name, is_bot=False)]
    for idx, bot_id in enumerate(BOT_IDS, start=1):
        players.append(SpadesPlayer(id=bot_id, name=f"Bot {idx}", is_bot=True))

    for player, hand in zip(players, _deal_hands(seed)):
        player.reset_for_hand(hand)

    return SpadesGameState(players=players, seed=seed, current_player_index=_opening_seat(1))


def find_player(state: SpadesGameState, player_id: str) -> SpadesPlayer:
    for player in state.players:
        if player.id == player_id:
            return player
    raise PlayerNotFoundError(f"Player not found: {player_id}")


def _player_index(state: SpadesGameState, player_id: str) -> int:
    for idx, player in enumerate(state.players):
        if player.id == player_id:
            return idx
    raise PlayerNotFoundError(f"Player not found: {player_id}")


# Bidding ---------------------------------------------------------------------

def submit_bid(state: SpadesGameState, player_id: str, bid: int) -> SpadesGameState:
    # Seat order is enforced by the session layer; here any seat may bid once.
    if state.game_over:
        raise IllegalPhaseError("Game is over")
    if not state.bidding_phase:
        raise IllegalPhaseError("Bidding is closed")
    player = find_player(state, player_id)
    if not isinstance(bid, int) or isinstance(bid, bool) or not 0 <= bid <= MAX_BID:
        raise IllegalActionError(f"Bid must be between 0 and {MAX_BID}")
    if player.bid is not None:
        raise IllegalActionError(f"{player.name} has already bid")

    new_state = copy.deepcopy(state)
    find_player(new_state, player_id).bid = bid

    if all(p.bid is not None for p in new_state.players):
        new_state.bidding_phase = False
        new_state.bidding_complete = True
        new_state.current_player_index = _opening_seat(new_state.hand_number)
    else:
        new_state.current_player_index = (new_state.current_player_index + 1) % PLAYER_COUNT
    return new_state


# Trick play ------------------------------------------------------------------

def check_card_play(state: SpadesGameState, player_id: str, card: Card) -> None:
    if state.game_over:
        raise IllegalPhaseError("Game is over")
    if state.bidding_phase:
        raise IllegalPhaseError("Cannot play cards during bidding")
    player = find_player(state, player_id)
    if card not in player.hand:
        raise IllegalCardError("Card not in hand")

    trick = state.current_trick
    if not trick.cards:
        if card.suit == Suit.SPADES and not state.spades_broken:
            if any(c.suit != Suit.SPADES for c in player.hand):
                raise IllegalCardError("Spades not broken yet")
        return

    if trick.lead_suit and player.holds_suit(trick.lead_suit) and card.suit != trick.lead_suit:
        raise IllegalCardError(f"Must follow {trick.lead_suit.value}")


def can_play_card(state: SpadesGameState, player_id: str, card: Card) -> bool:
    try:
        check_card_play(state, player_id, card)
    except (IllegalCardError, IllegalPhaseError):
        return False
    return True


def legal_cards(state: SpadesGameState, player_id: str) -> List[Card]:
    player = find_player(state, player_id)
    return [card for card in player.hand if can_play_card(state, player_id, card)]


def play_card(state: SpadesGameState, player_id: str, card: Card) -> SpadesGameState:
    check_card_play(state, player_id, card)

    new_state = copy.deepcopy(state)
    player = find_player(new_state, player_id)
    trick = new_state.current_trick

    # Renege bookkeeping. check_card_play already rejects this exact case, so
    # the branch never fires; kept until the intended rule is settled.
    if trick.lead_suit and card.suit != trick.lead_suit and player.holds_suit(trick.lead_suit):
        new_state.renege_penalties.append(
            RenegePenalty(
                player_id=player.id,
                player_name=player.name,
                trick_number=len(new_state.completed_tricks) + 1,
                message=f"{player.name} reneged on {trick.lead_suit.value}",
            )
        )
        player.total_score += RENEGE_PENALTY

    player.hand = [c for c in player.hand if c != card]
    if not trick.cards:
        trick.lead_suit = card.suit
    trick.cards.append(PlayedCard(player_id=player_id, card=card))
    if card.suit == Suit.SPADES:
        new_state.spades_broken = True

    if len(trick.cards) < PLAYER_COUNT:
        new_state.current_player_index = (new_state.current_player_index + 1) % PLAYER_COUNT
        return new_state

    winner_id = determine_trick_winner(trick)
    trick.winner = winner_id
    find_player(new_state, winner_id).tricks_won += 1
    new_state.completed_tricks.append(trick)
    new_state.current_trick = Trick()
    new_state.current_player_index = _player_index(new_state, winner_id)

    if len(new_state.completed_tricks) == CARDS_PER_HAND:
        _complete_hand(new_state)
    return new_state


def determine_trick_winner(trick: Trick) -> str:
    if not trick.cards:
        raise ValueError("Trick has no cards")
    spades = [played for played in trick.cards if played.card.suit == Suit.SPADES]
    contenders = spades or [played for played in trick.cards if played.card.suit == trick.lead_suit]
    return max(contenders, key=lambda played: played.card.rank).player_id


# Hand lifecycle --------------------------------------------------------------

def _complete_hand(state: SpadesGameState) -> None:
    for player in state.players:
        player.hand_score = calculate_hand_score(player)
        player.total_score += player.hand_score
        player.last_hand_score = player.hand_score

    state.hand_history.append(
        HandResult(
            hand_number=state.hand_number,
            bids={p.id: p.bid if p.bid is not None else 0 for p in state.players},
            tricks_won={p.id: p.tricks_won for p in state.players},
            scores={p.id: p.hand_score for p in state.players},
            tricks=tuple(state.completed_tricks),
        )
    )

    if has_reached_target(state.players):
        state.game_over = True
        state.winner = determine_winner(state.players).id
        return

    _deal_next_hand(state)


def _deal_next_hand(state: SpadesGameState) -> None:
    state.seed = (state.seed + 1) & 0xFFFFFFFF
    state.hand_number += 1
    for player, hand in zip(state.players, _deal_hands(state.seed)):
        player.reset_for_hand(hand)
    state.current_trick = Trick()
    state.completed_tricks = []
    state.spades_broken = False
    state.bidding_phase = True
    state.bidding_complete = False
    state.current_player_index = _opening_seat(state.hand_number)
