from __future__ import annotations

from typing import Dict, List

from core.cards import cards_to_labels
from omaha.engine import call_amount, can_call, can_check, community_cards_for_street
from omaha.models import HUMAN_PLAYER_ID, OmahaGameState
from spades.engine import legal_cards
from spades.models import SpadesGameState, Trick

from .models import GameType, Session

# Read-only views for renderers. Other players' cards stay hidden, so the
# payload can go straight to a client.


def snapshot_payload(session: Session, viewer_id: str = HUMAN_PLAYER_ID) -> Dict[str, object]:
    if session.game_type == GameType.SPADES:
        assert isinstance(session.state, SpadesGameState)
        body = _spades_snapshot(session.state, viewer_id)
    else:
        assert isinstance(session.state, OmahaGameState)
        body = _omaha_snapshot(session.state, viewer_id)
    return {
        "session_id": session.session_id,
        "game": session.game_type.value,
        "version": session.version,
        **body,
    }


def _trick_payload(trick: Trick) -> Dict[str, object]:
    return {
        "lead_suit": trick.lead_suit.value if trick.lead_suit else None,
        "cards": [{"player_id": played.player_id, "card": played.card.label} for played in trick.cards],
        "winner": trick.winner,
    }


def _spades_snapshot(state: SpadesGameState, viewer_id: str) -> Dict[str, object]:
    players: List[Dict[str, object]] = []
    for player in state.players:
        entry: Dict[str, object] = {
            "id": player.id,
            "name": player.name,
            "is_bot": player.is_bot,
            "card_count": len(player.hand),
            "bid": player.bid,
            "tricks_won": player.tricks_won,
            "total_score": player.total_score,
            "hand_score": player.hand_score,
            "last_hand_score": player.last_hand_score,
        }
        if player.id == viewer_id:
            entry["hand"] = cards_to_labels(player.hand)
        players.append(entry)

    current = state.current_player
    your_turn = not state.game_over and current.id == viewer_id
    viewer = next((p for p in state.players if p.id == viewer_id), None)
    can_bid = bool(viewer and state.bidding_phase and not state.game_over and viewer.bid is None)
    playable = cards_to_labels(legal_cards(state, viewer_id)) if your_turn and not state.bidding_phase else []

    return {
        "players": players,
        "current_player": current.id,
        "hand_number": state.hand_number,
        "bidding_phase": state.bidding_phase,
        "bidding_complete": state.bidding_complete,
        "spades_broken": state.spades_broken,
        "current_trick": _trick_payload(state.current_trick),
        "completed_tricks": len(state.completed_tricks),
        "last_trick": _trick_payload(state.completed_tricks[-1]) if state.completed_tricks else None,
        "renege_penalties": [
            {"player_id": p.player_id, "player_name": p.player_name, "trick_number": p.trick_number, "message": p.message}
            for p in state.renege_penalties
        ],
        "hand_history": [
            {"hand_number": result.hand_number, "bids": result.bids, "tricks_won": result.tricks_won, "scores": result.scores}
            for result in state.hand_history
        ],
        "game_over": state.game_over,
        "winner": state.winner,
        "legal": {"your_turn": your_turn, "can_bid": can_bid, "playable": playable},
    }


def _omaha_snapshot(state: OmahaGameState, viewer_id: str) -> Dict[str, object]:
    players: List[Dict[str, object]] = []
    for idx, player in enumerate(state.players):
        entry: Dict[str, object] = {
            "id": player.id,
            "name": player.name,
            "is_bot": player.is_bot,
            "chips": player.chips,
            "current_bet": player.current_bet,
            "folded": player.folded,
            "has_acted": player.has_acted_this_street,
            "is_dealer": idx == state.dealer_index,
        }
        # Hole cards open up once the hand is settled, except folded hands.
        if player.id == viewer_id or (state.game_over and not player.folded):
            entry["hole"] = cards_to_labels(player.hole_cards)
        players.append(entry)

    your_turn = not state.game_over and state.current_player.id == viewer_id
    return {
        "players": players,
        "current_player": state.current_player.id,
        "hand_number": state.hand_number,
        "street": state.street.value,
        "community": cards_to_labels(community_cards_for_street(state)),
        "pot": state.pot,
        "current_bet": state.current_bet,
        "last_raiser_index": state.last_raiser_index,
        "game_over": state.game_over,
        "winner": state.winner,
        "winning_hand": state.winning_hand,
        "legal": {
            "your_turn": your_turn,
            "can_check": your_turn and can_check(state, viewer_id),
            "can_call": your_turn and can_call(state, viewer_id),
            "call_amount": call_amount(state, viewer_id) if your_turn else 0,
            "can_next_hand": state.game_over,
        },
    }
