"""
Deterministic placement used when a turn timer runs out.

Held cards fill the first empty slots in top, middle, bottom order, left to
right, in the order they sit in the hand. No randomness is involved.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .board import Board, Row
from .card import Card
from .timer import PhaseType

logger = logging.getLogger(__name__)


@dataclass
class AutoPlacementResult:
    placements: List[Tuple[Row, Card]] = field(default_factory=list)
    discard: Optional[Card] = None
    # Cards that had no free slot; they are discarded rather than dropped
    forced_discards: List[Card] = field(default_factory=list)

    @property
    def cards_placed(self) -> int:
        return len(self.placements)

    @property
    def cards_discarded(self) -> int:
        return len(self.forced_discards) + (1 if self.discard is not None else 0)

    def to_dict(self) -> dict:
        return {
            'placements': [{'row': row.value, 'card': str(card)}
                           for row, card in self.placements],
            'discard': str(self.discard) if self.discard is not None else None,
            'forced_discards': [str(c) for c in self.forced_discards],
            'cards_placed': self.cards_placed,
            'cards_discarded': self.cards_discarded,
        }


def scan_empty_slots(board: Board) -> List[Tuple[Row, int]]:
    """Empty slots in fill order."""
    return board.empty_slots()


def _split_hand(hand: List[Card], phase_type: PhaseType) -> Tuple[List[Card], Optional[Card]]:
    phase_type = PhaseType(phase_type)
    if phase_type == PhaseType.INITIAL_SET:
        return hand[:5], None
    if phase_type == PhaseType.ROUND:
        return hand[:2], (hand[2] if len(hand) > 2 else None)
    if phase_type == PhaseType.FANTASYLAND:
        if len(hand) > 1:
            return hand[:-1], hand[-1]
        return [], (hand[0] if hand else None)
    raise ValueError(f"Unknown phase type for auto-placement: {phase_type!r}")


def auto_place(player, phase_type: PhaseType) -> AutoPlacementResult:
    """
    Choose placements for ``player`` without changing anything.

    - initial-set: first 5 held cards, no discard
    - round: first 2 held cards, the 3rd is discarded
    - fantasyland: all but the last held card, the last is discarded
    """
    to_place, discard = _split_hand(list(player.hand), phase_type)
    slots = scan_empty_slots(player.board)

    result = AutoPlacementResult(discard=discard)
    for card, (row, _) in zip(to_place, slots):
        result.placements.append((row, card))
    result.forced_discards = to_place[len(result.placements):]
    if result.forced_discards:
        logger.warning("Player %s: no slot for %s, discarding", player.id,
                       ' '.join(str(c) for c in result.forced_discards))
    return result


def apply_auto_placement(player, result: AutoPlacementResult) -> AutoPlacementResult:
    """Apply an auto-placement to ``player`` and mark them ready."""
    for row, card in result.placements:
        player.board.place_card(row, card)
        player.hand.remove(card)

    for card in result.forced_discards + ([result.discard] if result.discard is not None else []):
        player.discards.append(card)
        if card in player.hand:
            player.hand.remove(card)

    player.mark_ready()
    logger.info("Auto-placed %d card(s) for %s, board %d/13",
                result.cards_placed, player.id, player.board.total_cards())
    return result
