"""Player board for OFC Pineapple."""
from enum import Enum
from typing import Dict, Iterable, List, Tuple

from .card import Card, cards_from_str


class Row(str, Enum):
    """Board rows."""
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"

    @property
    def capacity(self) -> int:
        return ROW_CAPACITY[self]


ROW_CAPACITY = {Row.TOP: 3, Row.MIDDLE: 5, Row.BOTTOM: 5}

# Fill order used by auto-placement and board scans
ROW_ORDER = (Row.TOP, Row.MIDDLE, Row.BOTTOM)


class Board:
    """
    Represents a player's OFC board with three rows:
    - Top: 3 cards
    - Middle: 5 cards
    - Bottom: 5 cards
    """

    MAX_TOP = 3
    MAX_MIDDLE = 5
    MAX_BOTTOM = 5

    def __init__(self, top: Iterable[Card] = (), middle: Iterable[Card] = (),
                 bottom: Iterable[Card] = ()):
        self.top: List[Card] = list(top)
        self.middle: List[Card] = list(middle)
        self.bottom: List[Card] = list(bottom)

    def get_row(self, row: Row) -> List[Card]:
        """Get the card list for a row."""
        if row == Row.TOP:
            return self.top
        elif row == Row.MIDDLE:
            return self.middle
        return self.bottom

    def place_card(self, row: Row, card: Card) -> bool:
        """
        Place a card in a row.

        Returns:
            True if successful, False if row is full
        """
        target = self.get_row(row)
        if len(target) >= row.capacity:
            return False
        target.append(card)
        return True

    def row_count(self, row: Row) -> int:
        """Get number of cards in a row."""
        return len(self.get_row(row))

    def is_complete(self) -> bool:
        """Check if all rows are complete (13 cards total)."""
        return (len(self.top) == self.MAX_TOP and
                len(self.middle) == self.MAX_MIDDLE and
                len(self.bottom) == self.MAX_BOTTOM)

    def total_cards(self) -> int:
        return len(self.top) + len(self.middle) + len(self.bottom)

    def empty_slots(self) -> List[Tuple[Row, int]]:
        """Empty (row, index) slots, top to bottom, left to right."""
        slots = []
        for row in ROW_ORDER:
            for i in range(self.row_count(row), row.capacity):
                slots.append((row, i))
        return slots

    def is_fouled(self) -> bool:
        """Check if the board is fouled. Incomplete boards count as fouled."""
        from .validator import validate_board
        return validate_board(self).fouled

    def get_royalties(self) -> Dict[str, int]:
        """
        Get royalty points for each row.

        Returns:
            Dict with 'top', 'middle', 'bottom', 'total' keys; all zero for
            a fouled board
        """
        from .royalty import royalty_breakdown
        if self.is_fouled():
            return {'top': 0, 'middle': 0, 'bottom': 0, 'total': 0}
        return royalty_breakdown(self)

    def copy(self) -> 'Board':
        return Board(self.top, self.middle, self.bottom)

    def clear(self):
        """Remove all cards from the board."""
        self.top = []
        self.middle = []
        self.bottom = []

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'top': [str(c) for c in self.top],
            'middle': [str(c) for c in self.middle],
            'bottom': [str(c) for c in self.bottom],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Board':
        """Create from dictionary of card strings."""
        return cls(
            top=[Card.from_string(c) for c in data.get('top', [])],
            middle=[Card.from_string(c) for c in data.get('middle', [])],
            bottom=[Card.from_string(c) for c in data.get('bottom', [])],
        )

    @classmethod
    def from_strings(cls, top: str, middle: str, bottom: str) -> 'Board':
        """Create from space separated rows, e.g. ('As Ad 7c', ...)."""
        return cls(cards_from_str(top), cards_from_str(middle), cards_from_str(bottom))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.top == other.top and self.middle == other.middle and
                self.bottom == other.bottom)

    def __repr__(self) -> str:
        top_str = ' '.join(str(c) for c in self.top) or '---'
        mid_str = ' '.join(str(c) for c in self.middle) or '-----'
        bot_str = ' '.join(str(c) for c in self.bottom) or '-----'
        return f"Board(top=[{top_str}], middle=[{mid_str}], bottom=[{bot_str}])"
