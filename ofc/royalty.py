"""Royalty (bonus point) calculation for OFC Pineapple."""
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

from .card import Card, Rank
from .hand_evaluator import (
    HandCategory, TopCategory,
    evaluate_3_card_hand, evaluate_5_card_hand,
)


def _top_pairs() -> Dict[Rank, int]:
    # Pair of 6s through pair of Aces
    return {rank: rank - Rank.SIX + 1 for rank in Rank if rank >= Rank.SIX}


def _top_trips() -> Dict[Rank, int]:
    # 222 through AAA
    return {rank: 10 + int(rank) for rank in Rank}


def _middle() -> Dict[HandCategory, int]:
    return {
        HandCategory.THREE_OF_A_KIND: 2,
        HandCategory.STRAIGHT: 4,
        HandCategory.FLUSH: 8,
        HandCategory.FULL_HOUSE: 12,
        HandCategory.FOUR_OF_A_KIND: 20,
        HandCategory.STRAIGHT_FLUSH: 30,
    }


def _bottom() -> Dict[HandCategory, int]:
    return {
        HandCategory.STRAIGHT: 2,
        HandCategory.FLUSH: 4,
        HandCategory.FULL_HOUSE: 6,
        HandCategory.FOUR_OF_A_KIND: 10,
        HandCategory.STRAIGHT_FLUSH: 15,
    }


@dataclass(frozen=True)
class RoyaltyTable:
    """
    Payout table.

    Five-card rows are keyed by category; a royal flush pays from
    ``royal_flush`` instead of the straight flush entry. Anything missing
    from a table pays 0.
    """
    top_pairs: Dict[Rank, int] = field(default_factory=_top_pairs)
    top_trips: Dict[Rank, int] = field(default_factory=_top_trips)
    middle: Dict[HandCategory, int] = field(default_factory=_middle)
    bottom: Dict[HandCategory, int] = field(default_factory=_bottom)
    royal_flush: Dict[str, int] = field(
        default_factory=lambda: {'middle': 50, 'bottom': 25})

    def five_card_table(self, row_key: str) -> Dict[HandCategory, int]:
        if row_key == 'middle':
            return self.middle
        if row_key == 'bottom':
            return self.bottom
        raise ValueError(f"No 5-card royalty table for row {row_key!r}")


DEFAULT_ROYALTIES = RoyaltyTable()


def get_top_royalty(cards: Sequence[Card],
                    table: Optional[RoyaltyTable] = None) -> int:
    """
    Calculate royalty points for the top hand (3 cards).

    Returns:
        Royalty points (0 if no bonus)
    """
    table = table or DEFAULT_ROYALTIES
    rank = evaluate_3_card_hand(cards)

    if rank.category == TopCategory.THREE_OF_A_KIND:
        return table.top_trips.get(Rank(rank.key[0]), 0)

    if rank.category == TopCategory.PAIR:
        return table.top_pairs.get(Rank(rank.key[0]), 0)

    return 0


def get_row_royalty(cards: Sequence[Card], row_key: str,
                    table: Optional[RoyaltyTable] = None) -> int:
    """
    Royalty points for a 5-card row.

    Args:
        cards: The 5 cards of the row
        row_key: 'middle' or 'bottom'
    """
    table = table or DEFAULT_ROYALTIES
    payouts = table.five_card_table(row_key)
    rank = evaluate_5_card_hand(cards)

    if rank.category == HandCategory.STRAIGHT_FLUSH and rank.royal:
        return table.royal_flush.get(row_key, 0)
    return payouts.get(rank.category, 0)


def get_middle_royalty(cards: Sequence[Card],
                       table: Optional[RoyaltyTable] = None) -> int:
    return get_row_royalty(cards, 'middle', table)


def get_bottom_royalty(cards: Sequence[Card],
                       table: Optional[RoyaltyTable] = None) -> int:
    return get_row_royalty(cards, 'bottom', table)


def royalty_breakdown(board, table: Optional[RoyaltyTable] = None) -> Dict[str, int]:
    """
    Royalties per row of a complete board, plus their total.

    Does not check for fouls; callers that score a board must do that first.
    """
    top = get_top_royalty(board.top, table)
    middle = get_middle_royalty(board.middle, table)
    bottom = get_bottom_royalty(board.bottom, table)
    return {'top': top, 'middle': middle, 'bottom': bottom,
            'total': top + middle + bottom}


def get_total_royalties(board, table: Optional[RoyaltyTable] = None) -> int:
    """Total royalty points for a complete board."""
    return royalty_breakdown(board, table)['total']
