"""Per-player turn timers."""
import math
from dataclasses import dataclass
from enum import Enum

from .config import DEFAULT_CONFIG, GameConfig


class PhaseType(str, Enum):
    """Kind of turn a player is taking. Each has its own time limit."""
    INITIAL_SET = "initial-set"
    ROUND = "round"
    FANTASYLAND = "fantasyland"


def phase_duration_ms(phase_type: PhaseType, config: GameConfig = DEFAULT_CONFIG) -> int:
    timers = config.timers
    durations = {
        PhaseType.INITIAL_SET: timers.initial_set_ms,
        PhaseType.ROUND: timers.round_ms,
        PhaseType.FANTASYLAND: timers.fantasyland_ms,
    }
    try:
        return durations[PhaseType(phase_type)]
    except (KeyError, ValueError):
        raise ValueError(f"Unknown phase type: {phase_type!r}") from None


@dataclass
class TimerState:
    """
    Countdown for one player's turn.

    Times are epoch milliseconds supplied by the caller; the timer never
    reads a clock itself. A stopped timer is never restarted.
    """
    duration_ms: int
    phase_type: PhaseType
    start_ms: int
    is_active: bool = True

    @property
    def deadline(self) -> int:
        return self.start_ms + self.duration_ms

    @classmethod
    def for_phase(cls, phase_type: PhaseType, now_ms: int,
                  config: GameConfig = DEFAULT_CONFIG) -> 'TimerState':
        """Start a timer with the duration configured for ``phase_type``."""
        return cls(phase_duration_ms(phase_type, config), PhaseType(phase_type), now_ms)

    def is_expired(self, now_ms: int) -> bool:
        return self.is_active and now_ms >= self.deadline

    def time_remaining(self, now_ms: int) -> int:
        if not self.is_active:
            return 0
        return max(0, self.deadline - now_ms)

    def time_remaining_seconds(self, now_ms: int) -> int:
        """Remaining time in whole seconds, rounded up."""
        return math.ceil(self.time_remaining(now_ms) / 1000)

    def progress(self, now_ms: int) -> float:
        """Elapsed fraction from 0.0 to 1.0."""
        if not self.is_active:
            return 1.0
        elapsed = now_ms - self.start_ms
        return min(1.0, max(0.0, elapsed / self.duration_ms))

    def stop(self):
        self.is_active = False

    def to_client_info(self, now_ms: int) -> dict:
        return {
            'phase_type': self.phase_type.value,
            'deadline_ms': self.deadline,
            'duration_ms': self.duration_ms,
            'time_remaining': self.time_remaining(now_ms),
            'time_remaining_seconds': self.time_remaining_seconds(now_ms),
            'progress': self.progress(now_ms),
        }
