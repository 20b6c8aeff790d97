"""
OFC Pineapple Wire Models (Pydantic)

Inbound turn actions and the events the engine publishes to listeners.
Cards cross this boundary as two-character strings ("As", "Td").
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .board import Row
from .card import Card
from .timer import PhaseType


def _check_card(value: str) -> str:
    return str(Card.from_string(value))


class PlacementModel(BaseModel):
    card: str
    row: Row

    @field_validator('card')
    @classmethod
    def _valid_card(cls, v: str) -> str:
        return _check_card(v)


class TurnAction(BaseModel):
    placements: list[PlacementModel] = []
    discard: Optional[str] = None      # None lets the engine infer it

    @field_validator('discard')
    @classmethod
    def _valid_discard(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _check_card(v)

    def to_domain(self) -> tuple[list[tuple[Row, Card]], Optional[Card]]:
        placements = [(p.row, Card.from_string(p.card)) for p in self.placements]
        discard = Card.from_string(self.discard) if self.discard else None
        return placements, discard


class BoardModel(BaseModel):
    top: list[str] = []       # max 3 cards
    middle: list[str] = []    # max 5 cards
    bottom: list[str] = []    # max 5 cards


# Outbound events

class RoundStarted(BaseModel):
    type: Literal["round_started"] = "round_started"
    room_id: str
    hand_number: int
    seed: str


class CardsDealt(BaseModel):
    type: Literal["cards_dealt"] = "cards_dealt"
    player_id: str
    cards: list[str]
    phase_type: PhaseType
    round: int


class TurnApplied(BaseModel):
    type: Literal["turn_applied"] = "turn_applied"
    player_id: str
    placements: list[PlacementModel]
    discard: Optional[str] = None
    auto_committed: bool = False
    board: BoardModel
    hand: list[str] = []
    discards: list[str] = []


class TimerStarted(BaseModel):
    type: Literal["timer_started"] = "timer_started"
    player_id: Optional[str] = None    # None for the room-wide reveal pause
    phase_type: Optional[PhaseType] = None
    deadline_ms: int
    duration_ms: int


class TimerExpired(BaseModel):
    type: Literal["timer_expired"] = "timer_expired"
    player_id: str
    phase_type: PhaseType


class PairwiseModel(BaseModel):
    a_id: str
    b_id: str
    a: dict
    b: dict


class Reveal(BaseModel):
    type: Literal["reveal"] = "reveal"
    hand_number: int
    boards: dict[str, BoardModel]
    pairwise: list[PairwiseModel]
    points: dict[str, int]
    chip_changes: dict[str, int]
    chips: dict[str, int]
    fantasyland: list[str] = []        # Players in fantasyland next hand
    fantasyland_entered: list[str] = []


class GameEnded(BaseModel):
    type: Literal["game_ended"] = "game_ended"
    winner_id: Optional[str] = None
    loser_id: Optional[str] = None
    final_chips: dict[str, int]


class PlayerSummary(BaseModel):
    id: str
    name: str
    placed: dict[str, int]
    ready: bool
    in_fantasyland: bool
    table_chips: int


class RoomStateEvent(BaseModel):
    type: Literal["room_state"] = "room_state"
    room_id: str
    phase: str
    hand_number: int
    players: list[PlayerSummary] = Field(default_factory=list)


class StatsRecorded(BaseModel):
    type: Literal["stats_recorded"] = "stats_recorded"
    hand_number: int
    deltas: dict[str, dict]
