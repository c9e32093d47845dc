from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from core.cards import Card, Suit

HUMAN_PLAYER_ID = "player"
BOT_IDS = ("bot1", "bot2", "bot3")
PLAYER_COUNT = 4
CARDS_PER_HAND = 13
MAX_BID = 13


@dataclass
class SpadesPlayer:
    id: str
    name: str
    is_bot: bool
    hand: List[Card] = field(default_factory=list)
    tricks_won: int = 0
    bid: Optional[int] = None
    total_score: int = 0  # cumulative across hands
    hand_score: int = 0  # current or just-completed hand
    last_hand_score: int = 0  # previous completed hand, for display

    def reset_for_hand(self, hand: List[Card]) -> None:
        self.hand = hand
        self.tricks_won = 0
        self.bid = None
        self.hand_score = 0

    def holds_suit(self, suit: Optional[Suit]) -> bool:
        return any(card.suit == suit for card in self.hand)


@dataclass
class PlayedCard:
    player_id: str
    card: Card


@dataclass
class Trick:
    lead_suit: Optional[Suit] = None
    cards: List[PlayedCard] = field(default_factory=list)
    winner: Optional[str] = None


@dataclass
class RenegePenalty:
    player_id: str
    player_name: str
    trick_number: int
    message: str


@dataclass(frozen=True)
class HandResult:
    # Recorded once per finished hand and never changed, so every later
    # state copy shares the same record.
    hand_number: int
    bids: Dict[str, int]
    tricks_won: Dict[str, int]
    scores: Dict[str, int]
    tricks: Tuple[Trick, ...]

    def __deepcopy__(self, memo: Dict[int, object]) -> HandResult:
        return self


@dataclass
class SpadesGameState:
    players: List[SpadesPlayer]
    seed: int
    current_player_index: int = 0
    current_trick: Trick = field(default_factory=Trick)
    completed_tricks: List[Trick] = field(default_factory=list)
    spades_broken: bool = False
    bidding_phase: bool = True
    bidding_complete: bool = False
    hand_number: int = 1
    game_over: bool = False
    winner: Optional[str] = None
    renege_penalties: List[RenegePenalty] = field(default_factory=list)
    hand_history: List[HandResult] = field(default_factory=list)

    @property
    def current_player(self) -> SpadesPlayer:
        return self.players[self.current_player_index]
