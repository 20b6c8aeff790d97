from typing import Callable, List, Type

import pytest

from ofc.auto_placement import auto_place
from ofc.board import Board
from ofc.engine import GameEngine


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, now: int = 1_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


class EventRecorder:
    """Engine listener that keeps every event it receives."""

    def __init__(self):
        self.events: List = []

    def __call__(self, event):
        self.events.append(event)

    def of_type(self, event_type: Type) -> List:
        return [e for e in self.events if isinstance(e, event_type)]

    def clear(self):
        self.events.clear()


@pytest.fixture
def make_board() -> Callable[[str, str, str], Board]:
    """Factory for boards written as space separated card strings."""

    def _factory(top: str, middle: str, bottom: str) -> Board:
        return Board.from_strings(top, middle, bottom)

    return _factory


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def engine(clock, recorder) -> GameEngine:
    """Two seated players, lobby phase."""
    eng = GameEngine("room-1", clock=clock, listeners=[recorder])
    eng.add_player("p1", "Alice")
    eng.add_player("p2", "Bob")
    return eng


@pytest.fixture
def started(engine) -> GameEngine:
    """Two players with the first hand dealt."""
    engine.signal_ready("p1")
    engine.signal_ready("p2")
    return engine


def play_turn(engine: GameEngine, player_id: str, with_discard: bool = True):
    """Submit the deterministic fill-order turn for a player."""
    player = engine.state.players[player_id]
    result = auto_place(player, player.phase_type)
    discard = result.discard if with_discard else None
    return engine.submit_turn(player_id, result.placements, discard)


def play_out_normal(engine: GameEngine, player_id: str):
    """Play a normal player's turns until they have nothing left this hand."""
    player = engine.state.players[player_id]
    while not player.ready:
        play_turn(engine, player_id)
