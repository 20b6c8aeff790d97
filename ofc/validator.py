"""
Foul detection.

A board is fouled unless bottom >= middle >= top. Bottom and middle compare
on the 5-card scale; middle against top needs its own rules because the top
row is ranked on the 3-card scale.
"""
from typing import NamedTuple, Optional

from .card import Card
from .hand_evaluator import (
    HandCategory, HandRank, TopCategory,
    compare_5, evaluate_3_card_hand, evaluate_5_card_hand,
)


class FoulCheck(NamedTuple):
    fouled: bool
    reason: Optional[str] = None


OK = FoulCheck(False)


def _middle_beats_top(middle: HandRank, top: HandRank) -> bool:
    """True when the middle row is at least as strong as the top row."""
    cat = middle.category

    if cat >= HandCategory.STRAIGHT:
        # Straight, flush, full house and up dominate any 3-card hand
        return True

    if cat == HandCategory.THREE_OF_A_KIND:
        if top.category == TopCategory.THREE_OF_A_KIND:
            return top.key[0] <= middle.key[0]
        return True

    if cat == HandCategory.TWO_PAIR:
        return top.category != TopCategory.THREE_OF_A_KIND

    if cat == HandCategory.PAIR:
        if top.category == TopCategory.THREE_OF_A_KIND:
            return False
        if top.category == TopCategory.PAIR:
            return top.key[0] <= middle.key[0]
        return True

    # Middle is high card
    if top.category != TopCategory.HIGH_CARD:
        return False
    return tuple(top.key) <= tuple(middle.key[:3])


def validate_board(board) -> FoulCheck:
    """
    Check a board for a foul.

    Never raises: incomplete or malformed boards are reported as fouled
    with a reason, so settlement always has a result.
    """
    try:
        top, middle, bottom = list(board.top), list(board.middle), list(board.bottom)
    except (AttributeError, TypeError):
        return FoulCheck(True, "malformed board")

    if len(top) != 3 or len(middle) != 5 or len(bottom) != 5:
        return FoulCheck(True, "wrong counts")

    cards = top + middle + bottom
    if not all(isinstance(c, Card) for c in cards):
        return FoulCheck(True, "invalid card")
    if len(set(cards)) != len(cards):
        return FoulCheck(True, "duplicate card")

    middle_rank = evaluate_5_card_hand(middle)
    bottom_rank = evaluate_5_card_hand(bottom)
    if compare_5(bottom_rank, middle_rank) < 0:
        return FoulCheck(True, "bottom < middle")

    if not _middle_beats_top(middle_rank, evaluate_3_card_hand(top)):
        return FoulCheck(True, "top > middle")

    return OK


def is_fouled(board) -> bool:
    return validate_board(board).fouled
