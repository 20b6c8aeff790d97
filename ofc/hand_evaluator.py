"""Hand evaluation for OFC Pineapple poker."""
from collections import Counter
from enum import IntEnum
from itertools import zip_longest
from typing import List, NamedTuple, Sequence, Tuple, Union

from .card import Card, Rank
from .errors import InputError


class HandCategory(IntEnum):
    """5-card poker hand categories. Royal flush is a straight flush."""
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8


class TopCategory(IntEnum):
    """3-card hand categories for the top row."""
    HIGH_CARD = 0
    PAIR = 1
    THREE_OF_A_KIND = 2


class HandRank(NamedTuple):
    """
    Evaluated hand.

    ``key`` holds rank values (0-12) for tiebreaking, ordered from most
    significant to least. Categories from the 5-card and 3-card scales
    are not comparable with each other.
    """
    category: Union[HandCategory, TopCategory]
    key: Tuple[int, ...]
    royal: bool = False


ROYAL_RANKS = frozenset({Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE})
WHEEL_RANKS = [Rank.ACE, Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO]


def _rank_counts(cards: Sequence[Card]) -> List[Tuple[int, int]]:
    """(rank value, count) pairs sorted by count desc, then rank desc."""
    counts = Counter(c.rank_value for c in cards)
    return sorted(counts.items(), key=lambda x: (x[1], x[0]), reverse=True)


def _is_flush(cards: Sequence[Card]) -> bool:
    return len({c.suit for c in cards}) == 1


def _check_straight(cards: Sequence[Card]) -> Tuple[bool, int]:
    """
    Check if 5 cards form a straight.

    Returns:
        Tuple of (is_straight, high_card_rank). The wheel A-2-3-4-5 is
        5-high.
    """
    unique_ranks = sorted({c.rank_value for c in cards}, reverse=True)
    if len(unique_ranks) != 5:
        return (False, -1)

    if unique_ranks[0] - unique_ranks[4] == 4:
        return (True, unique_ranks[0])

    if unique_ranks == [int(r) for r in WHEEL_RANKS]:
        return (True, int(Rank.FIVE))

    return (False, -1)


def is_royal_flush(cards: Sequence[Card]) -> bool:
    """A-K-Q-J-T of one suit."""
    if len(cards) != 5 or not _is_flush(cards):
        return False
    return {c.rank for c in cards} == ROYAL_RANKS


def evaluate_5_card_hand(cards: Sequence[Card]) -> HandRank:
    """
    Evaluate a 5-card poker hand.

    Raises:
        InputError: if ``cards`` does not hold exactly 5 cards.
    """
    if len(cards) != 5:
        raise InputError(f"Expected 5 cards, got {len(cards)}")

    ranks = tuple(sorted((c.rank_value for c in cards), reverse=True))
    is_flush = _is_flush(cards)
    is_straight, straight_high = _check_straight(cards)
    counts = _rank_counts(cards)
    pattern = tuple(count for _, count in counts)

    if is_flush and is_straight:
        return HandRank(HandCategory.STRAIGHT_FLUSH, (straight_high,),
                        royal=is_royal_flush(cards))

    if pattern == (4, 1):
        return HandRank(HandCategory.FOUR_OF_A_KIND, (counts[0][0], counts[1][0]))

    if pattern == (3, 2):
        return HandRank(HandCategory.FULL_HOUSE, (counts[0][0], counts[1][0]))

    if is_flush:
        return HandRank(HandCategory.FLUSH, ranks)

    if is_straight:
        return HandRank(HandCategory.STRAIGHT, (straight_high,))

    if pattern == (3, 1, 1):
        kickers = tuple(r for r, _ in counts[1:])
        return HandRank(HandCategory.THREE_OF_A_KIND, (counts[0][0],) + kickers)

    if pattern == (2, 2, 1):
        # counts is already ordered high pair, low pair, kicker
        return HandRank(HandCategory.TWO_PAIR, tuple(r for r, _ in counts))

    if pattern == (2, 1, 1, 1):
        kickers = tuple(r for r, _ in counts[1:])
        return HandRank(HandCategory.PAIR, (counts[0][0],) + kickers)

    return HandRank(HandCategory.HIGH_CARD, ranks)


def evaluate_3_card_hand(cards: Sequence[Card]) -> HandRank:
    """
    Evaluate a 3-card hand for the top row.

    Raises:
        InputError: if ``cards`` does not hold exactly 3 cards.
    """
    if len(cards) != 3:
        raise InputError(f"Expected 3 cards, got {len(cards)}")

    counts = _rank_counts(cards)

    if counts[0][1] == 3:
        return HandRank(TopCategory.THREE_OF_A_KIND, (counts[0][0],))

    if counts[0][1] == 2:
        return HandRank(TopCategory.PAIR, (counts[0][0], counts[1][0]))

    return HandRank(TopCategory.HIGH_CARD, tuple(r for r, _ in counts))


def _compare_keys(key1: Sequence[int], key2: Sequence[int]) -> int:
    # Missing entries rank below any real card
    for k1, k2 in zip_longest(key1, key2, fillvalue=-1):
        if k1 > k2:
            return 1
        if k1 < k2:
            return -1
    return 0


def compare_5(rank1: HandRank, rank2: HandRank) -> int:
    """
    Compare two evaluated 5-card hands.

    Returns:
        1 if rank1 wins, -1 if rank2 wins, 0 if tie
    """
    if rank1.category != rank2.category:
        return 1 if rank1.category > rank2.category else -1
    return _compare_keys(rank1.key, rank2.key)


def compare_3(rank1: HandRank, rank2: HandRank) -> int:
    """
    Compare two evaluated 3-card hands.

    Returns:
        1 if rank1 wins, -1 if rank2 wins, 0 if tie
    """
    if rank1.category != rank2.category:
        return 1 if rank1.category > rank2.category else -1
    return _compare_keys(rank1.key, rank2.key)


def compare_hands_5(hand1: Sequence[Card], hand2: Sequence[Card]) -> int:
    """Compare two 5-card hands."""
    return compare_5(evaluate_5_card_hand(hand1), evaluate_5_card_hand(hand2))


def compare_hands_3(hand1: Sequence[Card], hand2: Sequence[Card]) -> int:
    """Compare two 3-card hands."""
    return compare_3(evaluate_3_card_hand(hand1), evaluate_3_card_hand(hand2))


def hand_rank_name(rank: HandRank) -> str:
    """Get human-readable name for a 5-card hand."""
    if rank.category == HandCategory.STRAIGHT_FLUSH and rank.royal:
        return "Royal Flush"
    names = {
        HandCategory.HIGH_CARD: "High Card",
        HandCategory.PAIR: "Pair",
        HandCategory.TWO_PAIR: "Two Pair",
        HandCategory.THREE_OF_A_KIND: "Three of a Kind",
        HandCategory.STRAIGHT: "Straight",
        HandCategory.FLUSH: "Flush",
        HandCategory.FULL_HOUSE: "Full House",
        HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
        HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    }
    return names.get(rank.category, "Unknown")


def top_rank_name(rank: HandRank) -> str:
    """Get human-readable name for a 3-card hand."""
    names = {
        TopCategory.HIGH_CARD: "High Card",
        TopCategory.PAIR: "Pair",
        TopCategory.THREE_OF_A_KIND: "Three of a Kind",
    }
    return names.get(rank.category, "Unknown")
