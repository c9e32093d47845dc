import copy

import pytest

from core.cards import parse_cards, parse_label
from core.errors import IllegalActionError, IllegalCardError, IllegalPhaseError
from spades.engine import (
    can_play_card,
    determine_trick_winner,
    initialize_game,
    legal_cards,
    play_card,
    submit_bid,
)
from spades.models import PlayedCard, Trick

from .helpers import play_spades_hand, spades_state


def bid_all(state, bids=(3, 3, 3, 3)):
    for player, bid in zip(list(state.players), bids):
        state = submit_bid(state, player.id, bid)
    return state


def test_initialize_deals_thirteen_unique_cards_each():
    state = initialize_game("Ada", seed=42)
    hands = [card for player in state.players for card in player.hand]
    assert [len(p.hand) for p in state.players] == [13, 13, 13, 13]
    assert len(set(hands)) == 52
    assert state.bidding_phase and not state.bidding_complete
    assert state.current_player_index == 0
    assert state.seed == 42
    assert [p.id for p in state.players] == ["player", "bot1", "bot2", "bot3"]
    assert initialize_game("Bob", seed=42).players[2].hand == state.players[2].hand


def test_bidding_advances_then_opening_seat_leads():
    state = initialize_game("Ada", seed=42)
    state = submit_bid(state, "player", 4)
    assert state.current_player_index == 1
    state = bid_all(initialize_game("Ada", seed=42), (4, 3, 2, 0))
    assert not state.bidding_phase
    assert state.bidding_complete
    assert state.current_player_index == 0
    assert [p.bid for p in state.players] == [4, 3, 2, 0]


@pytest.mark.parametrize("bid", [-1, 14, "3", True])
def test_invalid_bid_rejected_without_mutation(bid):
    state = initialize_game("Ada", seed=3)
    before = copy.deepcopy(state)
    with pytest.raises(IllegalActionError, match="between 0 and 13"):
        submit_bid(state, "player", bid)
    assert state == before


def test_rebid_and_bid_after_bidding_are_rejected():
    state = submit_bid(initialize_game("Ada", seed=3), "player", 2)
    with pytest.raises(IllegalActionError, match="already bid"):
        submit_bid(state, "player", 5)
    done = bid_all(initialize_game("Ada", seed=3))
    with pytest.raises(IllegalPhaseError, match="Bidding is closed"):
        submit_bid(done, "bot1", 1)


def test_cannot_play_during_bidding():
    state = initialize_game("Ada", seed=3)
    card = state.players[0].hand[0]
    assert not can_play_card(state, "player", card)
    with pytest.raises(IllegalPhaseError, match="during bidding"):
        play_card(state, "player", card)


def test_card_not_in_hand_rejected():
    state = spades_state({"player": "5h 9c"})
    with pytest.raises(IllegalCardError, match="not in hand"):
        play_card(state, "player", parse_label("Ah"))


def test_spade_lead_requires_broken_spades_unless_only_spades_held():
    state = spades_state({"player": "As 2h"})
    with pytest.raises(IllegalCardError, match="Spades not broken"):
        play_card(state, "player", parse_label("As"))
    assert legal_cards(state, "player") == parse_cards(["2h"])

    only_spades = spades_state({"player": "As Ks"})
    after = play_card(only_spades, "player", parse_label("As"))
    assert after.spades_broken
    assert after.current_trick.lead_suit.value == "spades"


def test_must_follow_suit_and_no_renege_is_recorded():
    state = spades_state({"player": "5h 9c", "bot1": "Kh 2c"})
    state = play_card(state, "player", parse_label("5h"))
    before = copy.deepcopy(state)
    with pytest.raises(IllegalCardError, match="Must follow hearts"):
        play_card(state, "bot1", parse_label("2c"))
    assert state == before
    assert state.renege_penalties == []
    assert legal_cards(state, "bot1") == parse_cards(["Kh"])


def test_trump_wins_trick_and_winner_leads_next():
    state = spades_state({"player": "5h 9c", "bot1": "Kh 3c", "bot2": "2s 3d", "bot3": "Ah 4d"})
    for player_id, label in (("player", "5h"), ("bot1", "Kh"), ("bot2", "2s"), ("bot3", "Ah")):
        state = play_card(state, player_id, parse_label(label))
    assert state.completed_tricks[-1].winner == "bot2"
    assert state.players[2].tricks_won == 1
    assert state.current_player_index == 2
    assert state.current_trick.cards == []
    assert state.spades_broken


def test_highest_lead_suit_card_wins_without_trump():
    trick = Trick(lead_suit=parse_label("5h").suit)
    for player_id, label in (("player", "5h"), ("bot1", "Ac"), ("bot2", "Jh"), ("bot3", "9h")):
        trick.cards.append(PlayedCard(player_id, parse_label(label)))
    assert determine_trick_winner(trick) == "bot2"


def test_full_hand_scores_and_deals_next_hand():
    state = play_spades_hand(initialize_game("Ada", seed=2024))

    assert state.hand_number == 2
    result = state.hand_history[0]
    assert sum(result.tricks_won.values()) == 13
    assert len(result.tricks) == 13
    for player in state.players:
        assert player.total_score == result.scores[player.id]
        assert player.last_hand_score == result.scores[player.id]
        assert len(player.hand) == 13
        assert player.bid is None and player.tricks_won == 0
    assert state.seed == 2025
    assert state.bidding_phase and not state.spades_broken
    assert state.current_player_index == 1
    assert state.completed_tricks == []


def test_reaching_target_ends_game_and_blocks_further_play():
    state = spades_state(
        {"player": "2h", "bot1": "3h", "bot2": "Ah", "bot3": "4h"},
        bids={"player": 0, "bot1": 1, "bot2": 1, "bot3": 1},
    )
    state.players[2].total_score = 495
    state.completed_tricks = [Trick() for _ in range(12)]
    for player_id, label in (("player", "2h"), ("bot1", "3h"), ("bot2", "Ah"), ("bot3", "4h")):
        state = play_card(state, player_id, parse_label(label))

    assert state.game_over
    assert state.winner == "bot2"
    assert [p.total_score for p in state.players] == [100, -10, 505, -10]
    assert len(state.hand_history) == 1
    with pytest.raises(IllegalPhaseError, match="Game is over"):
        submit_bid(state, "player", 1)


def test_completed_hands_are_shared_not_copied():
    state = play_spades_hand(initialize_game("Ada", seed=2024))
    record = state.hand_history[0]
    assert isinstance(record.tricks, tuple)
    after_bid = submit_bid(state, "bot1", 2)
    assert after_bid.hand_history[0] is record
    assert copy.deepcopy(state).hand_history[0] is record
    assert after_bid.hand_history is not state.hand_history
