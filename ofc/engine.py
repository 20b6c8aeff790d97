"""
OFC Pineapple Game Engine
Handles dealing, turn validation, timeouts, progression and reveal
"""

import logging
import time
from collections import Counter
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel

from .auto_placement import AutoPlacementResult, apply_auto_placement, auto_place
from .board import Board, Row
from .card import Card, cards_to_str
from .chips import apply_chip_changes, calculate_chip_changes, check_game_end
from .config import DEFAULT_CONFIG, GameConfig
from .deck import deal_hand_cards, make_hand_seed
from .errors import GameStateError, InvalidActionError
from .fantasyland import next_fantasyland_status
from .game_state import GameState, PlayerState, RoomPhase
from .models import (
    BoardModel, CardsDealt, GameEnded, PairwiseModel, PlacementModel, Reveal,
    RoomStateEvent, RoundStarted, StatsRecorded, TimerExpired, TimerStarted,
    TurnApplied,
)
from .stats import compute_stat_deltas
from .timer import PhaseType, TimerState

logger = logging.getLogger(__name__)

Listener = Callable[[BaseModel], None]


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class GameEngine:
    """
    Drives one room.

    Not thread safe: the caller must serialize calls for a room (see
    ``RoomRegistry.locked``). Outbound events are delivered synchronously to
    every listener, in order, after the state change they describe.
    """

    def __init__(self, room_id: str, config: GameConfig = DEFAULT_CONFIG,
                 clock: Optional[Callable[[], int]] = None,
                 listeners: Iterable[Listener] = ()):
        self.state = GameState(room_id, config)
        self.config = config
        self.clock = clock or _epoch_ms
        self.listeners: List[Listener] = list(listeners)
        self.last_reveal: Optional[Reveal] = None
        self.game_result: Optional[GameEnded] = None

    @property
    def room_id(self) -> str:
        return self.state.room_id

    # ------------------------------------------------------------------
    # Events

    def add_listener(self, listener: Listener):
        self.listeners.append(listener)

    def _emit(self, event: BaseModel):
        for listener in self.listeners:
            listener(event)

    def _emit_room_state(self):
        self._emit(RoomStateEvent(**self.state.to_public_state()))

    # ------------------------------------------------------------------
    # Seating

    def add_player(self, player_id: str, name: str, in_fantasyland: bool = False) -> PlayerState:
        """
        Seat a player in the lobby.

        Raises:
            GameStateError: if the room is full, already playing, or the
                player is already seated
        """
        if self.state.phase != RoomPhase.LOBBY:
            raise GameStateError(f"Room {self.room_id} is {self.state.phase.value}, cannot join")
        if player_id in self.state.players:
            raise GameStateError(f"Player {player_id} is already seated")
        if len(self.state.players) >= self.config.max_players:
            raise GameStateError(f"Room {self.room_id} is full")

        player = self.state.add_player(player_id, name, in_fantasyland)
        logger.info("Player %s joined room %s", player_id, self.room_id)
        self._emit_room_state()
        return player

    def remove_player(self, player_id: str) -> bool:
        """Remove a player. Mid-hand, the others may now be able to advance."""
        if self.state.remove_player(player_id) is None:
            return False
        logger.info("Player %s left room %s", player_id, self.room_id)
        short = len(self.state.players) < self.config.min_players
        if self.state.phase in (RoomPhase.PLAYING, RoomPhase.REVEAL) and short:
            self.state.stop_all_timers()
            self.state.reveal_deadline = None
            self.state.phase = RoomPhase.LOBBY
            logger.warning("Room %s back to lobby: not enough players", self.room_id)
        elif self.state.phase == RoomPhase.PLAYING:
            self._check_progression()
        self._emit_room_state()
        return True

    def signal_ready(self, player_id: str) -> bool:
        """
        Lobby ready toggle. Starts the first hand once every seated player
        is ready and the room has enough players.

        Returns:
            True if a hand was started
        """
        player = self._require_player(player_id, GameStateError)
        if self.state.phase != RoomPhase.LOBBY:
            raise GameStateError(f"Room {self.room_id} is not in the lobby")
        player.lobby_ready = True
        self._emit_room_state()

        players = self.state.players.values()
        if len(players) >= self.config.min_players and all(p.lobby_ready for p in players):
            self.start_hand()
            return True
        return False

    # ------------------------------------------------------------------
    # Dealing

    def start_hand(self, now_ms: Optional[int] = None):
        """
        Start a new hand: seed, shuffle, deal the first tranche to everyone.

        Raises:
            GameStateError: if the match is over, a hand is in progress, or
                too few players are seated
        """
        state = self.state
        if state.phase in (RoomPhase.FINISHED, RoomPhase.PLAYING):
            raise GameStateError(f"Cannot start a hand while {state.phase.value}")
        if len(state.players) < self.config.min_players:
            raise GameStateError(
                f"Need {self.config.min_players} players, have {len(state.players)}")

        now = self.clock() if now_ms is None else now_ms
        state.hand_number += 1
        state.seed = make_hand_seed(state.room_id, state.hand_number, now)
        state.hand_cards = deal_hand_cards(state.seed, self.config.hand_cards)
        state.timers.clear()
        state.reveal_deadline = None
        for player in state.players.values():
            player.reset_for_new_hand()
        state.phase = RoomPhase.PLAYING

        logger.info("Room %s hand %d started (seed=%s, mixed=%s)", state.room_id,
                    state.hand_number, state.seed, state.is_mixed_mode)
        self._emit(RoundStarted(room_id=state.room_id, hand_number=state.hand_number,
                                seed=state.seed))

        for player in state.players.values():
            self._deal(player, now)
        self._emit_room_state()

    def _deal(self, player: PlayerState, now: int):
        """Deal the player's next tranche from the shared slice and start their timer."""
        count = player.cards_needed_for_next_round(self.config)
        if count == 0:
            return
        # Tranches are laid out back to back, so the next one starts where
        # the player's cards dealt count stops
        start = player.cards_dealt
        cards = self.state.hand_cards[start:start + count]
        player.add_cards(cards)
        timer = self.state.start_timer(player.id, player.phase_type, now)

        logger.debug("Dealt %s to %s (round %d)", ' '.join(map(str, cards)),
                     player.id, player.current_round)
        self._emit(CardsDealt(player_id=player.id, cards=cards_to_str(cards),
                              phase_type=player.phase_type, round=player.current_round))
        self._emit(TimerStarted(player_id=player.id, phase_type=timer.phase_type,
                                deadline_ms=timer.deadline, duration_ms=timer.duration_ms))

    # ------------------------------------------------------------------
    # Turns

    def _require_player(self, player_id: str, error=InvalidActionError) -> PlayerState:
        player = self.state.get_player(player_id)
        if player is None:
            raise error(f"Unknown player {player_id}")
        return player

    def _build_turn(self, player: PlayerState, placements: Sequence[Tuple[Row, Card]],
                    discard: Optional[Card]) -> Tuple[Board, List[Card], List[Card]]:
        """Validate a turn against copies; returns (board, hand, discards) to commit."""
        if self.state.phase != RoomPhase.PLAYING:
            raise InvalidActionError("No hand in progress")
        if player.ready:
            raise InvalidActionError("Turn already submitted")
        if not player.hand:
            raise InvalidActionError("No cards to place")

        cap = player.turn_cap
        if len(placements) != cap:
            raise InvalidActionError(f"Expected {cap} placements, got {len(placements)}")

        named = [card for _, card in placements]
        if discard is not None:
            named.append(discard)
        duplicates = [str(c) for c, n in Counter(named).items() if n > 1]
        if duplicates:
            raise InvalidActionError(f"Card named twice: {', '.join(duplicates)}")

        hand = list(player.hand)
        board = player.board.copy()
        for row, card in placements:
            try:
                row = Row(row)
            except ValueError:
                raise InvalidActionError(f"Unknown row {row!r}") from None
            if card not in hand:
                raise InvalidActionError(f"Card {card} is not in hand")
            if not board.place_card(row, card):
                raise InvalidActionError(f"Row {row.value} is full")
            hand.remove(card)

        phase = player.phase_type
        if phase == PhaseType.INITIAL_SET:
            if discard is not None:
                raise InvalidActionError("No discard allowed in the initial set")
        else:
            # Round and fantasyland turns leave exactly one card to discard
            if len(hand) != 1:
                raise InvalidActionError(f"Expected 1 card left to discard, have {len(hand)}")
            leftover = hand[0]
            if discard is not None and discard != leftover:
                if discard not in player.hand:
                    raise InvalidActionError(f"Discard {discard} is not in hand")
                raise InvalidActionError(f"Discard must be the remaining card {leftover}")
            discard = leftover
            hand.remove(leftover)

        discards = list(player.discards)
        if discard is not None:
            discards.append(discard)
        return board, hand, discards

    def submit_turn(self, player_id: str, placements: Sequence[Tuple[Row, Card]],
                    discard: Optional[Card] = None) -> dict:
        """
        Apply a player's turn.

        In rounds after the initial set the discard may be omitted; the one
        card left after the placements is discarded.

        Returns:
            The player's client state after the turn

        Raises:
            InvalidActionError: if the turn is rejected; nothing is applied
        """
        player = self._require_player(player_id)
        try:
            board, hand, discards = self._build_turn(player, placements, discard)
        except InvalidActionError as e:
            logger.info("Rejected turn from %s: %s", player_id, e.reason)
            raise

        applied_discard = discards[-1] if len(discards) > len(player.discards) else None
        player.board, player.hand, player.discards = board, hand, discards
        self.state.stop_timer(player_id)
        player.mark_ready()
        logger.info("Player %s placed %d card(s), board %d/13", player_id,
                    len(placements), board.total_cards())

        self._emit_turn_applied(player, placements, applied_discard, auto_committed=False)
        self._check_progression()
        return player.to_client_state()

    def _emit_turn_applied(self, player: PlayerState, placements, discard: Optional[Card],
                           auto_committed: bool):
        self._emit(TurnApplied(
            player_id=player.id,
            placements=[PlacementModel(card=str(card), row=Row(row)) for row, card in placements],
            discard=str(discard) if discard is not None else None,
            auto_committed=auto_committed,
            board=BoardModel(**player.board.to_dict()),
            hand=cards_to_str(player.hand),
            discards=cards_to_str(player.discards),
        ))

    # ------------------------------------------------------------------
    # Timers

    def handle_timer_expiration(self, player_id: str,
                                now_ms: Optional[int] = None) -> Optional[AutoPlacementResult]:
        """Auto-place for a player whose turn timer ran out. Runs once per timer."""
        player = self.state.get_player(player_id)
        timer = self.state.timers.get(player_id)
        if player is None or timer is None or not timer.is_active:
            return None
        timer.stop()
        self._emit(TimerExpired(player_id=player_id, phase_type=timer.phase_type))

        if player.ready or self.state.phase != RoomPhase.PLAYING:
            return None

        result = auto_place(player, timer.phase_type)
        apply_auto_placement(player, result)
        discard = result.discard
        self._emit_turn_applied(player, result.placements, discard, auto_committed=True)
        self._check_progression(now_ms)
        return result

    def check_expired_timers(self, now_ms: Optional[int] = None) -> List[Tuple[str, TimerState]]:
        """
        Periodic tick from the scheduler.

        Auto-places for every expired player timer, and starts the next hand
        once the reveal pause is over.

        Returns:
            The (player id, timer) pairs that expired on this tick
        """
        now = self.clock() if now_ms is None else now_ms
        state = self.state

        if state.phase == RoomPhase.REVEAL:
            if state.reveal_deadline is not None and now >= state.reveal_deadline:
                self.start_hand(now)
            return []

        if state.phase != RoomPhase.PLAYING:
            return []

        expired = state.get_expired_timers(now)
        for player_id, _ in expired:
            logger.info("Timer expired for %s", player_id)
            self.handle_timer_expiration(player_id, now)
        return expired

    # ------------------------------------------------------------------
    # Progression

    def _check_progression(self, now_ms: Optional[int] = None):
        if self.state.phase != RoomPhase.PLAYING:
            return
        now = self.clock() if now_ms is None else now_ms
        if self.state.should_proceed_to_reveal():
            self._reveal(now)
            return

        if self.state.is_mixed_mode:
            self._mixed_mode_progression(now)
        else:
            self._normal_mode_progression(now)

    def _mixed_mode_progression(self, now: int):
        # Normal players move on as soon as they submit; the reveal waits
        # for the fantasyland players
        for player in self.state.normal_players():
            if player.ready and not player.is_complete():
                self._deal(player, now)

    def _normal_mode_progression(self, now: int):
        if not self.state.all_ready():
            return
        for player in self.state.players.values():
            if not player.is_complete():
                self._deal(player, now)

    # ------------------------------------------------------------------
    # Reveal

    def _reveal(self, now: int):
        state = self.state
        state.phase = RoomPhase.REVEAL
        state.stop_all_timers()
        players = state.players

        settlement = calculate_chip_changes(players, self.config)
        apply_chip_changes(players, settlement.chip_changes)

        entered = []
        for player in players.values():
            qualifies = next_fantasyland_status(player.board, player.in_fantasyland)
            if qualifies and not player.in_fantasyland:
                entered.append(player.id)
            if player.in_fantasyland and not qualifies:
                logger.info("Player %s leaves fantasyland", player.id)
            player.in_fantasyland = qualifies

        deltas = compute_stat_deltas(players.keys(), settlement.pairwise, entered)

        self.last_reveal = Reveal(
            hand_number=state.hand_number,
            boards={pid: BoardModel(**p.board.to_dict()) for pid, p in players.items()},
            pairwise=[PairwiseModel(a_id=a, b_id=b, **r.to_dict())
                      for a, b, r in settlement.pairwise],
            points=settlement.points,
            chip_changes=settlement.chip_changes,
            chips={pid: p.table_chips for pid, p in players.items()},
            fantasyland=[p.id for p in players.values() if p.in_fantasyland],
            fantasyland_entered=entered,
        )
        logger.info("Room %s hand %d revealed: points %s", state.room_id,
                    state.hand_number, settlement.points)
        self._emit(self.last_reveal)
        self._emit(StatsRecorded(hand_number=state.hand_number,
                                 deltas={pid: d.to_dict() for pid, d in deltas.items()}))

        end = check_game_end(players, self.config)
        if end is not None:
            state.phase = RoomPhase.FINISHED
            self.game_result = GameEnded(
                winner_id=end.winner_id, loser_id=end.loser_id,
                final_chips={pid: p.table_chips for pid, p in players.items()})
            logger.info("Room %s finished: winner=%s", state.room_id, end.winner_id)
            self._emit(self.game_result)
        else:
            state.reveal_deadline = now + self.config.timers.reveal_ms
            self._emit(TimerStarted(deadline_ms=state.reveal_deadline,
                                    duration_ms=self.config.timers.reveal_ms))
        self._emit_room_state()

    # ------------------------------------------------------------------
    # Views

    def get_player_state(self, player_id: str) -> dict:
        return self._require_player(player_id).to_client_state()

    def get_timer_info(self, player_id: str) -> Optional[dict]:
        timer = self.state.timers.get(player_id)
        return timer.to_client_info(self.clock()) if timer is not None else None

    def get_debug_info(self) -> dict:
        return self.state.get_debug_info(self.clock())
