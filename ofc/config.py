"""
OFC Pineapple - Game Configuration

All tunable rule parameters: scoring, chips, timers and royalties.
"""
import os
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional

from .errors import ConfigError
from .royalty import RoyaltyTable


@dataclass(frozen=True)
class ScoringConfig:
    """Pairwise settlement points."""
    row_win: int = 1                  # Points for winning a row
    scoop_bonus: int = 3              # Bonus for winning all 3 rows


@dataclass(frozen=True)
class ChipConfig:
    """Point-to-chip conversion and match thresholds."""
    points_per_chip: int = 10         # 1 point = 10 chips
    starting_chips: int = 500
    win_threshold: int = 1000
    lose_threshold: int = 0


@dataclass(frozen=True)
class TimerConfig:
    """Per-phase turn durations in milliseconds."""
    initial_set_ms: int = 20000
    round_ms: int = 10000
    fantasyland_ms: int = 50000
    reveal_ms: int = 10000            # Pause between reveal and the next hand


@dataclass(frozen=True)
class GameConfig:
    """Complete rule set for a room."""
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    chips: ChipConfig = field(default_factory=ChipConfig)
    timers: TimerConfig = field(default_factory=TimerConfig)
    royalties: RoyaltyTable = field(default_factory=RoyaltyTable)

    min_players: int = 2
    max_players: int = 5
    hand_cards: int = 17              # 5 + 4 x 3
    fantasyland_cards: int = 14


# Global defaults
DEFAULT_CONFIG = GameConfig()


# Environment variable -> (section, field)
_ENV_FIELDS = {
    'OFC_ROW_WIN': ('scoring', 'row_win'),
    'OFC_SCOOP_BONUS': ('scoring', 'scoop_bonus'),
    'OFC_POINTS_PER_CHIP': ('chips', 'points_per_chip'),
    'OFC_STARTING_CHIPS': ('chips', 'starting_chips'),
    'OFC_WIN_THRESHOLD': ('chips', 'win_threshold'),
    'OFC_LOSE_THRESHOLD': ('chips', 'lose_threshold'),
    'OFC_INITIAL_SET_MS': ('timers', 'initial_set_ms'),
    'OFC_ROUND_MS': ('timers', 'round_ms'),
    'OFC_FANTASYLAND_MS': ('timers', 'fantasyland_ms'),
    'OFC_REVEAL_MS': ('timers', 'reveal_ms'),
}


def load_config(environ: Optional[Mapping[str, str]] = None,
                base: GameConfig = DEFAULT_CONFIG) -> GameConfig:
    """
    Build a GameConfig from OFC_* environment variables.

    Unset variables keep the value from ``base``.

    Raises:
        ConfigError: if a variable is set to something other than an integer.
    """
    if environ is None:
        environ = os.environ

    overrides = {'scoring': {}, 'chips': {}, 'timers': {}}
    for name, (section, attr) in _ENV_FIELDS.items():
        raw = environ.get(name)
        if raw is None or raw.strip() == '':
            continue
        try:
            overrides[section][attr] = int(raw)
        except ValueError:
            raise ConfigError(f"{name} must be an integer, got {raw!r}") from None

    config = replace(
        base,
        scoring=replace(base.scoring, **overrides['scoring']),
        chips=replace(base.chips, **overrides['chips']),
        timers=replace(base.timers, **overrides['timers']),
    )
    _check(config)
    return config


def _check(config: GameConfig):
    if config.chips.points_per_chip <= 0:
        raise ConfigError("points_per_chip must be positive")
    if config.chips.lose_threshold >= config.chips.win_threshold:
        raise ConfigError("lose_threshold must be below win_threshold")
    for name in ('initial_set_ms', 'round_ms', 'fantasyland_ms', 'reveal_ms'):
        if getattr(config.timers, name) <= 0:
            raise ConfigError(f"{name} must be positive")
