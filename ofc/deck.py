"""
Deterministic deck and shuffle.

The seed string is hashed with xmur3 into a 32-bit state for a mulberry32
generator, whose output is strictly below 1.0, then Fisher-Yates shuffles
from the last index down. The same seed always gives the same order, so a
hand can be replayed from its seed alone.
"""
import struct
from typing import Callable, List, Sequence

from .card import Card, Rank, SUITS

MASK32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    """32-bit multiply, low 32 bits kept (unsigned)."""
    return (a * b) & MASK32


def _code_units(s: str) -> Sequence[int]:
    """UTF-16 code units of ``s``."""
    data = s.encode('utf-16-le')
    return struct.unpack(f'<{len(data) // 2}H', data)


def xmur3(seed: str) -> Callable[[], int]:
    """String hash returning a generator of 32-bit unsigned seeds."""
    units = _code_units(seed)
    h = (1779033703 ^ len(units)) & MASK32
    for unit in units:
        h = _imul(h ^ unit, 3432918353)
        h = ((h << 13) | (h >> 19)) & MASK32

    def next_seed() -> int:
        nonlocal h
        h = _imul(h ^ (h >> 16), 2246822507)
        h = _imul(h ^ (h >> 13), 3266489909)
        h = (h ^ (h >> 16)) & MASK32
        return h

    return next_seed


def mulberry32(state: int) -> Callable[[], float]:
    """32-bit PRNG returning floats in [0, 1)."""
    a = state & MASK32

    def rng() -> float:
        nonlocal a
        a = (a + 0x6D2B79F5) & MASK32
        t = _imul(a ^ (a >> 15), a | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK32
        return ((t ^ (t >> 14)) & MASK32) / 4294967296

    return rng


def make_deck() -> List[Card]:
    """All 52 cards, rank-major (2c 2d 2h 2s 3c ... As)."""
    return [Card(rank, suit) for rank in Rank for suit in SUITS]


def shuffle_deck(deck: Sequence[Card], seed: str) -> List[Card]:
    """
    Return a shuffled copy of ``deck``.

    Pure: the input is not modified and equal seeds give equal orders.
    """
    rng = mulberry32(xmur3(seed)())
    cards = list(deck)
    for i in range(len(cards) - 1, 0, -1):
        # rng() < 1.0, so j is always within 0..i
        j = int(rng() * (i + 1))
        cards[i], cards[j] = cards[j], cards[i]
    return cards


def make_hand_seed(room_id: str, hand_number: int, now_ms: int) -> str:
    """Seed string for one hand of one room."""
    return f"{room_id}:{hand_number}:{now_ms}"


def deal_hand_cards(seed: str, count: int = 17) -> List[Card]:
    """The first ``count`` cards of the deck shuffled with ``seed``."""
    return shuffle_deck(make_deck(), seed)[:count]
