from __future__ import annotations

import random
import uuid
from dataclasses import replace
from typing import Dict, Optional, Protocol

import omaha
import spades
from core.cards import new_seed
from core.errors import IllegalActionError, IllegalPhaseError
from omaha.models import HUMAN_PLAYER_ID, OmahaGameState
from spades.models import SpadesGameState

from .models import Action, GameState, GameType, NextHand, OmahaMove, PlayCard, Session, SubmitBid

# Synchronous transitions for one quick-play session. The async pacing and
# reentrancy guard live in session.runner; nothing here sleeps or locks.


class BotPolicy(Protocol):
    def decide(self, state: GameState, bot_id: str) -> Action:
        ...


class SpadesBotPolicy:
    def decide(self, state: GameState, bot_id: str) -> Action:
        assert isinstance(state, SpadesGameState)
        if state.bidding_phase:
            return SubmitBid(spades.choose_bot_bid(state, bot_id))
        return PlayCard(spades.choose_bot_card(state, bot_id))


class OmahaBotPolicy:
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng

    def decide(self, state: GameState, bot_id: str) -> Action:
        assert isinstance(state, OmahaGameState)
        action, amount = omaha.choose_bot_action(state, bot_id, rng=self.rng)
        return OmahaMove(action, amount)


BOT_POLICIES: Dict[GameType, BotPolicy] = {
    GameType.SPADES: SpadesBotPolicy(),
    GameType.OMAHA: OmahaBotPolicy(),
}


def create_session(game_type: GameType, player_name: str, seed: Optional[int] = None) -> Session:
    game_type = GameType(game_type)
    name = player_name.strip()
    if not name:
        raise IllegalActionError("Player name required")
    if seed is None:
        seed = new_seed()

    if game_type == GameType.SPADES:
        state: GameState = spades.initialize_game(name, seed)
    else:
        state = omaha.initialize_game(name, seed)
    return Session(session_id=uuid.uuid4().hex, game_type=game_type, state=state)


def _apply(session: Session, player_id: str, action: Action) -> Session:
    state = session.state
    if session.game_type == GameType.SPADES:
        assert isinstance(state, SpadesGameState)
        if isinstance(action, SubmitBid):
            new_state: GameState = spades.submit_bid(state, player_id, action.bid)
        elif isinstance(action, PlayCard):
            new_state = spades.play_card(state, player_id, action.card)
        else:
            raise IllegalActionError("Invalid action for game type")
    else:
        assert isinstance(state, OmahaGameState)
        if isinstance(action, OmahaMove):
            new_state = omaha.perform_action(state, player_id, action.action, action.amount)
        elif isinstance(action, NextHand):
            new_state = omaha.start_next_hand(state)
        else:
            raise IllegalActionError("Invalid action for game type")
    return replace(session, state=new_state, version=session.version + 1)


def _require_human_turn(session: Session) -> None:
    state = session.state
    if state.game_over:
        raise IllegalPhaseError("Game is over")
    if state.current_player.id != HUMAN_PLAYER_ID:
        raise IllegalPhaseError("Not your turn")


def execute_action(session: Session, action: Action) -> Session:
    """Apply a human action. Raises GameError and leaves `session` untouched."""
    # The Spades engine takes bids in any seat order; turn order is held here.
    if isinstance(action, (SubmitBid, PlayCard, OmahaMove)):
        _require_human_turn(session)
    return _apply(session, HUMAN_PLAYER_ID, action)


def bot_turn_pending(session: Session) -> bool:
    state = session.state
    return not state.game_over and state.current_player.is_bot


def execute_bot_action(session: Session, policy: Optional[BotPolicy] = None) -> Optional[Session]:
    """Run one bot decision, or return None when no bot is due to act."""
    if not bot_turn_pending(session):
        return None
    bot_id = session.state.current_player.id
    policy = policy or BOT_POLICIES[session.game_type]
    return _apply(session, bot_id, policy.decide(session.state, bot_id))
