"""Game state management for OFC Pineapple."""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .board import Board
from .card import Card, cards_to_str
from .config import DEFAULT_CONFIG, GameConfig
from .timer import PhaseType, TimerState

logger = logging.getLogger(__name__)

# Cumulative cards dealt at the end of each normal round
ROUND_CARD_LIMITS = (5, 8, 11, 14, 17)
INITIAL_SET_CARDS = 5
ROUND_CARDS = 3


class RoomPhase(str, Enum):
    """Current phase of the room."""
    LOBBY = "lobby"           # Waiting for players to signal ready
    PLAYING = "playing"       # Cards dealt, placements in progress
    REVEAL = "reveal"         # Hand settled, waiting for the next one
    FINISHED = "finished"     # Chip threshold reached, match over


@dataclass
class PlayerState:
    """State for a single player. Reset every hand except fantasyland and chips."""
    id: str
    name: str
    in_fantasyland: bool = False
    table_chips: int = DEFAULT_CONFIG.chips.starting_chips
    board: Board = field(default_factory=Board)
    hand: List[Card] = field(default_factory=list)  # Dealt cards not yet placed
    discards: List[Card] = field(default_factory=list)
    current_deal: List[Card] = field(default_factory=list)
    cards_dealt: int = 0
    ready: bool = False
    lobby_ready: bool = False
    has_played_fantasyland_hand: bool = False

    def reset_for_new_hand(self):
        self.board = Board()
        self.hand = []
        self.discards = []
        self.current_deal = []
        self.cards_dealt = 0
        self.ready = False
        self.has_played_fantasyland_hand = False

    def add_cards(self, cards: List[Card]):
        """Deal a tranche of cards. Clears the ready flag."""
        self.ready = False
        self.hand.extend(cards)
        self.current_deal = list(cards)
        self.cards_dealt += len(cards)

    def mark_ready(self):
        self.ready = True
        if self.in_fantasyland and self.cards_dealt > 0:
            self.has_played_fantasyland_hand = True

    @property
    def current_round(self) -> int:
        """
        Round number derived from cards dealt.

        Normal players go 1-5, fantasyland players play a single round 1.
        Returns 0 once the player has nothing left to do this hand.
        """
        if self.in_fantasyland:
            return 0 if self.has_played_fantasyland_hand else 1
        for round_number, limit in enumerate(ROUND_CARD_LIMITS, start=1):
            if self.cards_dealt <= limit:
                return round_number
        return 0

    def is_complete(self) -> bool:
        """True when the player has been dealt everything for this hand."""
        if self.in_fantasyland:
            return self.has_played_fantasyland_hand
        return self.cards_dealt >= ROUND_CARD_LIMITS[-1]

    def cards_needed_for_next_round(self, config: GameConfig = DEFAULT_CONFIG) -> int:
        if self.in_fantasyland:
            return config.fantasyland_cards if self.cards_dealt == 0 else 0
        if self.cards_dealt == 0:
            return INITIAL_SET_CARDS
        if self.cards_dealt < ROUND_CARD_LIMITS[-1]:
            return ROUND_CARDS
        return 0

    @property
    def phase_type(self) -> PhaseType:
        if self.in_fantasyland:
            return PhaseType.FANTASYLAND
        if self.current_round == 1:
            return PhaseType.INITIAL_SET
        return PhaseType.ROUND

    @property
    def turn_cap(self) -> int:
        """Cards that must be placed to finish the current turn."""
        caps = {
            PhaseType.INITIAL_SET: 5,
            PhaseType.ROUND: 2,
            PhaseType.FANTASYLAND: 13,
        }
        return caps[self.phase_type]

    def to_public_view(self) -> dict:
        """What opponents may see."""
        return {
            'id': self.id,
            'name': self.name,
            'placed': {
                'top': len(self.board.top),
                'middle': len(self.board.middle),
                'bottom': len(self.board.bottom),
            },
            'ready': self.ready,
            'in_fantasyland': self.in_fantasyland,
            'table_chips': self.table_chips,
        }

    def to_client_state(self) -> dict:
        """Full state for the owning player."""
        return {
            'id': self.id,
            'name': self.name,
            'board': self.board.to_dict(),
            'hand': cards_to_str(self.hand),
            'discards': cards_to_str(self.discards),
            'current_deal': cards_to_str(self.current_deal),
            'ready': self.ready,
            'in_fantasyland': self.in_fantasyland,
            'table_chips': self.table_chips,
            'round': self.current_round,
        }


class GameState:
    """
    Room state for OFC Pineapple.

    Hand flow:
    1. Every player is dealt from the same 17-card slice of a seeded deck
    2. Normal players: 5 cards, then 4 rounds of 3 (place 2, discard 1)
    3. Fantasyland players: 14 cards at once, place 13, discard 1
    4. Reveal once every player is complete and ready
    """

    def __init__(self, room_id: str, config: GameConfig = DEFAULT_CONFIG):
        self.room_id = room_id
        self.config = config
        self.players: Dict[str, PlayerState] = {}
        self.timers: Dict[str, TimerState] = {}
        self.phase = RoomPhase.LOBBY
        self.hand_number = 0
        self.hand_cards: List[Card] = []
        self.seed: Optional[str] = None
        self.reveal_deadline: Optional[int] = None

    def add_player(self, player_id: str, name: str, in_fantasyland: bool = False) -> PlayerState:
        player = PlayerState(id=player_id, name=name, in_fantasyland=in_fantasyland,
                             table_chips=self.config.chips.starting_chips)
        self.players[player_id] = player
        return player

    def remove_player(self, player_id: str) -> Optional[PlayerState]:
        self.timers.pop(player_id, None)
        return self.players.pop(player_id, None)

    def get_player(self, player_id: str) -> Optional[PlayerState]:
        return self.players.get(player_id)

    def normal_players(self) -> List[PlayerState]:
        return [p for p in self.players.values() if not p.in_fantasyland]

    def fantasyland_players(self) -> List[PlayerState]:
        return [p for p in self.players.values() if p.in_fantasyland]

    @property
    def is_mixed_mode(self) -> bool:
        """Both fantasyland and normal players are seated."""
        return bool(self.normal_players()) and bool(self.fantasyland_players())

    def start_timer(self, player_id: str, phase_type: PhaseType, now_ms: int) -> TimerState:
        timer = TimerState.for_phase(phase_type, now_ms, self.config)
        self.timers[player_id] = timer
        logger.debug("Started %s timer for %s (%dms)", phase_type.value, player_id,
                     timer.duration_ms)
        return timer

    def stop_timer(self, player_id: str):
        timer = self.timers.get(player_id)
        if timer is not None:
            timer.stop()

    def stop_all_timers(self):
        for timer in self.timers.values():
            timer.stop()

    def get_expired_timers(self, now_ms: int) -> List[Tuple[str, TimerState]]:
        return [(pid, timer) for pid, timer in self.timers.items()
                if timer.is_expired(now_ms)]

    def all_ready(self) -> bool:
        return bool(self.players) and all(p.ready for p in self.players.values())

    def all_complete(self) -> bool:
        return bool(self.players) and all(p.is_complete() for p in self.players.values())

    def should_proceed_to_reveal(self) -> bool:
        """Every player has been dealt their full allotment and has submitted."""
        if self.phase != RoomPhase.PLAYING:
            return False
        if self.is_mixed_mode:
            normal_done = all(p.is_complete() and p.ready for p in self.normal_players())
            fantasyland_done = all(p.ready for p in self.fantasyland_players())
            return normal_done and fantasyland_done
        return self.all_complete() and self.all_ready()

    def to_public_state(self) -> dict:
        return {
            'room_id': self.room_id,
            'phase': self.phase.value,
            'hand_number': self.hand_number,
            'players': [p.to_public_view() for p in self.players.values()],
        }

    def get_debug_info(self, now_ms: int) -> dict:
        return {
            'room_id': self.room_id,
            'phase': self.phase.value,
            'hand_number': self.hand_number,
            'seed': self.seed,
            'is_mixed_mode': self.is_mixed_mode,
            'players': [
                {
                    'id': p.id,
                    'name': p.name,
                    'in_fantasyland': p.in_fantasyland,
                    'ready': p.ready,
                    'cards_dealt': p.cards_dealt,
                    'current_round': p.current_round,
                    'is_complete': p.is_complete(),
                    'has_timer': p.id in self.timers,
                    'timer_expired': (p.id in self.timers and
                                      self.timers[p.id].is_expired(now_ms)),
                }
                for p in self.players.values()
            ],
        }
