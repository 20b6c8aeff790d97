"""Card value type for OFC Pineapple."""
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable, List

from .errors import InputError


class Rank(IntEnum):
    """Card ranks, ordered low to high (0-12)."""
    TWO = 0
    THREE = 1
    FOUR = 2
    FIVE = 3
    SIX = 4
    SEVEN = 5
    EIGHT = 6
    NINE = 7
    TEN = 8
    JACK = 9
    QUEEN = 10
    KING = 11
    ACE = 12

    @property
    def symbol(self) -> str:
        return RANKS[self.value]

    @classmethod
    def from_symbol(cls, symbol: str) -> 'Rank':
        value = RANK_VALUES.get(symbol.upper())
        if value is None:
            raise InputError(f"Invalid rank: {symbol!r}")
        return cls(value)


class Suit(Enum):
    """Card suits. Suits carry no ranking value."""
    CLUBS = 'c'
    DIAMONDS = 'd'
    HEARTS = 'h'
    SPADES = 's'

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self]


# Ranks: 2-9, T, J, Q, K, A
RANKS = '23456789TJQKA'
RANK_VALUES = {r: i for i, r in enumerate(RANKS)}

SUITS = [Suit.CLUBS, Suit.DIAMONDS, Suit.HEARTS, Suit.SPADES]
SUIT_SYMBOLS = {
    Suit.CLUBS: '♣',
    Suit.DIAMONDS: '♦',
    Suit.HEARTS: '♥',
    Suit.SPADES: '♠',
}


@dataclass(frozen=True)
class Card:
    """Represents a playing card. Equality is by (rank, suit)."""
    rank: Rank
    suit: Suit

    def __post_init__(self):
        if not isinstance(self.rank, Rank):
            raise InputError(f"Invalid rank: {self.rank!r}")
        if not isinstance(self.suit, Suit):
            raise InputError(f"Invalid suit: {self.suit!r}")

    @property
    def rank_value(self) -> int:
        """Numeric value of rank (0-12)."""
        return int(self.rank)

    def pretty(self) -> str:
        """Display form with suit symbol, e.g. 'A♠'."""
        return f"{self.rank.symbol}{self.suit.symbol}"

    def __str__(self) -> str:
        return f"{self.rank.symbol}{self.suit.value}"

    def __repr__(self) -> str:
        return f"Card.from_string('{self}')"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'rank': self.rank.symbol,
            'suit': self.suit.value,
            'display': self.pretty(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Card':
        """Create from dictionary."""
        return cls.from_string(f"{data['rank']}{data['suit']}")

    @classmethod
    def from_string(cls, s: str) -> 'Card':
        """Create from string like 'As' or 'Th'."""
        if not isinstance(s, str) or len(s) != 2:
            raise InputError(f"Invalid card string: {s!r}")
        try:
            suit = Suit(s[1].lower())
        except ValueError:
            raise InputError(f"Invalid suit in card string: {s!r}") from None
        return cls(Rank.from_symbol(s[0]), suit)


def cards_from_str(text: str) -> List[Card]:
    """Parse a whitespace separated card list, e.g. 'As Kd 7h'."""
    return [Card.from_string(token) for token in text.split()]


def cards_to_str(cards: Iterable[Card]) -> List[str]:
    """Canonical string encoding for serialization."""
    return [str(c) for c in cards]
