from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from core.cards import Card
from omaha.models import OmahaActionType, OmahaGameState
from spades.models import SpadesGameState


class GameType(str, Enum):
    SPADES = "spades"
    OMAHA = "omaha4Card"


GameState = Union[SpadesGameState, OmahaGameState]


@dataclass
class SessionConfig:
    bot_delay_ms: int = 700
    max_bot_iterations: int = 100


@dataclass(frozen=True)
class Session:
    # game_type tags which variant `state` holds; dispatch always goes through it.
    session_id: str
    game_type: GameType
    state: GameState
    version: int = 0


@dataclass(frozen=True)
class SubmitBid:
    bid: int


@dataclass(frozen=True)
class PlayCard:
    card: Card


@dataclass(frozen=True)
class OmahaMove:
    action: OmahaActionType
    amount: Optional[int] = None


@dataclass(frozen=True)
class NextHand:
    pass


Action = Union[SubmitBid, PlayCard, OmahaMove, NextHand]
