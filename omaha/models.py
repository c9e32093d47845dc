from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from core.cards import Card

HUMAN_PLAYER_ID = "player"
BOT_IDS = ("bot1", "bot2", "bot3")
HOLE_CARD_COUNT = 4
COMMUNITY_CARD_COUNT = 5
STARTING_CHIPS = 1_000


class Street(str, Enum):
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"
    SHOWDOWN = "showdown"


class OmahaActionType(str, Enum):
    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    BET = "bet"


# Board cards visible on each street; the rest stay pre-allocated but hidden.
REVEALED_BY_STREET = {
    Street.PREFLOP: 0,
    Street.FLOP: 3,
    Street.TURN: 4,
    Street.RIVER: 5,
    Street.SHOWDOWN: 5,
}


@dataclass
class OmahaPlayer:
    id: str
    name: str
    is_bot: bool
    hole_cards: List[Card] = field(default_factory=list)
    chips: int = STARTING_CHIPS
    current_bet: int = 0
    folded: bool = False
    has_acted_this_street: bool = False

    def reset_for_hand(self, hole_cards: List[Card]) -> None:
        self.hole_cards = hole_cards
        self.current_bet = 0
        self.folded = False
        self.has_acted_this_street = False

    def reset_for_street(self) -> None:
        self.current_bet = 0
        self.has_acted_this_street = False


@dataclass
class OmahaGameState:
    players: List[OmahaPlayer]
    seed: int
    current_player_index: int = 1
    dealer_index: int = 0
    street: Street = Street.PREFLOP
    community_cards: List[Card] = field(default_factory=list)
    pot: int = 0
    current_bet: int = 0
    last_raiser_index: Optional[int] = None
    game_over: bool = False
    winner: Optional[str] = None
    winning_hand: Optional[str] = None
    hand_number: int = 1

    @property
    def current_player(self) -> OmahaPlayer:
        return self.players[self.current_player_index]

    def active_players(self) -> List[OmahaPlayer]:
        return [player for player in self.players if not player.folded]
