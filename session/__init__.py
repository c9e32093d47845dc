"""Quick-play session orchestration: human actions, bot turns, and pacing."""

from .models import Action, GameType, NextHand, OmahaMove, PlayCard, Session, SessionConfig, SubmitBid
from .quickplay import (
    BOT_POLICIES,
    BotPolicy,
    OmahaBotPolicy,
    SpadesBotPolicy,
    bot_turn_pending,
    create_session,
    execute_action,
    execute_bot_action,
)
from .runner import SessionRunner
from .snapshot import snapshot_payload

__all__ = [
    "Action",
    "GameType",
    "NextHand",
    "OmahaMove",
    "PlayCard",
    "Session",
    "SessionConfig",
    "SubmitBid",
    "BOT_POLICIES",
    "BotPolicy",
    "OmahaBotPolicy",
    "SpadesBotPolicy",
    "bot_turn_pending",
    "create_session",
    "execute_action",
    "execute_bot_action",
    "SessionRunner",
    "snapshot_payload",
]
