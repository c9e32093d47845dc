import pytest

from core.cards import parse_cards
from omaha.evaluator import determine_winner, evaluate_five, evaluate_omaha_hand


def test_evaluate_five_identifies_all_hand_categories():
    cases = [
        (["As", "Ks", "Qs", "Js", "Ts"], 8, "Straight Flush"),
        (["9c", "9d", "9h", "9s", "2c"], 7, "Four of a Kind"),
        (["Kc", "Kd", "Kh", "2s", "2c"], 6, "Full House"),
        (["Ah", "Jh", "8h", "4h", "2h"], 5, "Flush"),
        (["9c", "Td", "Jh", "Qs", "Kc"], 4, "Straight"),
        (["5c", "5d", "5h", "Ks", "2c"], 3, "Three of a Kind"),
        (["5c", "5d", "9h", "9s", "2c"], 2, "Two Pair"),
        (["Jc", "Jd", "4h", "7s", "2c"], 1, "One Pair"),
        (["Ac", "Jd", "8h", "4s", "2c"], 0, "High Card"),
    ]
    ranks = []
    for labels, tier, description in cases:
        rank = evaluate_five(parse_cards(labels))
        assert rank.tier == tier
        assert rank.description == description
        ranks.append(rank)
    assert all(stronger > weaker for stronger, weaker in zip(ranks, ranks[1:]))


def test_wheel_is_five_high_straight():
    wheel = evaluate_five(parse_cards(["Ac", "2d", "3h", "4s", "5c"]))
    six_high = evaluate_five(parse_cards(["2c", "3d", "4h", "5s", "6c"]))
    assert wheel.tier == 4
    assert wheel.tiebreakers == (5,)
    assert wheel < six_high
    assert wheel > evaluate_five(parse_cards(["Ac", "Ad", "Ah", "Ks", "Qc"]))


def test_kickers_break_equal_pairs():
    ace_kicker = evaluate_five(parse_cards(["Jc", "Jd", "Ah", "7s", "2c"]))
    king_kicker = evaluate_five(parse_cards(["Jh", "Js", "Kh", "7d", "2d"]))
    assert ace_kicker > king_kicker


def test_omaha_requires_two_hole_cards_for_a_flush():
    board = parse_cards(["2s", "5s", "8s", "Ts", "Js"])
    one_spade_short = evaluate_omaha_hand(parse_cards(["Ah", "Kc", "Qd", "Jd"]), board)
    assert one_spade_short.tier == 1
    two_spades = evaluate_omaha_hand(parse_cards(["As", "Ks", "2c", "3d"]), board)
    assert two_spades.tier == 5


def test_omaha_cannot_play_four_board_cards():
    board = parse_cards(["9c", "9d", "9h", "9s", "2c"])
    rank = evaluate_omaha_hand(parse_cards(["Ac", "Kd", "3h", "4s"]), board)
    assert rank.tier == 3
    assert rank.tiebreakers == (9, 14, 13)


def test_omaha_rejects_short_inputs():
    with pytest.raises(ValueError, match="hole cards"):
        evaluate_omaha_hand(parse_cards(["As"]), parse_cards(["2c", "3c", "4c"]))
    with pytest.raises(ValueError, match="community cards"):
        evaluate_omaha_hand(parse_cards(["As", "Ks"]), parse_cards(["2c", "3c"]))


def test_determine_winner_picks_best_and_keeps_first_on_tie():
    board = parse_cards(["9c", "9d", "9h", "2s", "5c"])
    p1 = parse_cards(["Ac", "Kd", "3h", "4s"])
    p2 = parse_cards(["Ad", "Kc", "3s", "4h"])
    assert determine_winner([("p1", p1), ("p2", p2)], board)[0] == "p1"
    assert determine_winner([("p2", p2), ("p1", p1)], board)[0] == "p2"

    quads = parse_cards(["9s", "Qc", "Jc", "2d"])
    winner_id, rank = determine_winner([("p1", p1), ("p3", quads)], board)
    assert winner_id == "p3"
    assert rank.description == "Four of a Kind"
