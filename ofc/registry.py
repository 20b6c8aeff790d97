"""Room registry owned by the transport layer."""
import logging
import threading
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, Optional

from .config import DEFAULT_CONFIG, GameConfig
from .engine import GameEngine

logger = logging.getLogger(__name__)


class RoomRegistry:
    """
    Room id -> engine store with create-on-first-use and delete-when-empty.

    Each room has its own re-entrant lock; hold ``locked(room_id)`` while
    delivering an event so transitions for one room never interleave.
    Different rooms share nothing.
    """

    def __init__(self, config: GameConfig = DEFAULT_CONFIG,
                 engine_factory: Optional[Callable[[str], GameEngine]] = None):
        self.config = config
        self._factory = engine_factory or (lambda room_id: GameEngine(room_id, self.config))
        self._rooms: Dict[str, GameEngine] = {}
        self._locks: Dict[str, threading.RLock] = {}
        self._guard = threading.Lock()

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, room_id: str) -> bool:
        return room_id in self._rooms

    def get(self, room_id: str) -> Optional[GameEngine]:
        return self._rooms.get(room_id)

    def get_or_create(self, room_id: str) -> GameEngine:
        with self._guard:
            engine = self._rooms.get(room_id)
            if engine is None:
                engine = self._factory(room_id)
                self._rooms[room_id] = engine
                self._locks[room_id] = threading.RLock()
                logger.info("Created room %s", room_id)
            return engine

    def remove(self, room_id: str) -> Optional[GameEngine]:
        with self._guard:
            self._locks.pop(room_id, None)
            engine = self._rooms.pop(room_id, None)
        if engine is not None:
            logger.info("Removed room %s", room_id)
        return engine

    def discard_if_empty(self, room_id: str) -> bool:
        """Remove the room if nobody is seated. Returns True if removed."""
        engine = self.get(room_id)
        if engine is None or engine.state.players:
            return False
        self.remove(room_id)
        return True

    @contextmanager
    def locked(self, room_id: str) -> Iterator[GameEngine]:
        """Exclusive access to a room's engine, creating the room if needed."""
        engine = self.get_or_create(room_id)
        with self._guard:
            lock = self._locks[room_id]
        with lock:
            yield engine

    def room_ids(self):
        return list(self._rooms)
