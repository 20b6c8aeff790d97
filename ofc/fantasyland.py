"""Fantasyland entry and continuation rules."""
from .card import Rank
from .hand_evaluator import (
    HandCategory, TopCategory, evaluate_3_card_hand, evaluate_5_card_hand,
)
from .validator import validate_board

# Lowest top pair that qualifies for entry
MIN_ENTRY_PAIR = Rank.QUEEN


def check_fantasyland_eligibility(board) -> bool:
    """
    Check if a completed board qualifies for Fantasyland.

    Conditions:
    - Board is not fouled, AND
    - Top has QQ, KK, AA or any three of a kind
    """
    if validate_board(board).fouled:
        return False

    top = evaluate_3_card_hand(board.top)
    if top.category == TopCategory.THREE_OF_A_KIND:
        return True
    return top.category == TopCategory.PAIR and top.key[0] >= MIN_ENTRY_PAIR


def check_fantasyland_continuation(board) -> bool:
    """
    Check if a player already in Fantasyland stays there.

    Top has three of a kind, OR bottom has four of a kind or better.
    Fouling does not matter here.
    """
    if not board.is_complete():
        return False
    if evaluate_3_card_hand(board.top).category == TopCategory.THREE_OF_A_KIND:
        return True
    return evaluate_5_card_hand(board.bottom).category >= HandCategory.FOUR_OF_A_KIND


def next_fantasyland_status(board, in_fantasyland: bool) -> bool:
    """Fantasyland flag for the next hand."""
    if in_fantasyland:
        return check_fantasyland_continuation(board)
    return check_fantasyland_eligibility(board)
