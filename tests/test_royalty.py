"""
OFC Pineapple - Royalty Tests
"""
import pytest

from ofc.card import Rank, cards_from_str
from ofc.hand_evaluator import HandCategory
from ofc.royalty import (
    RoyaltyTable, get_bottom_royalty, get_middle_royalty, get_row_royalty,
    get_top_royalty, get_total_royalties, royalty_breakdown,
)


@pytest.mark.parametrize("top, expected", [
    ("5h 5d Ac", 0),
    ("6h 6d 2c", 1),
    ("Qh Qd 2c", 7),
    ("Ah Ad Kc", 9),
    ("2h 2d 2c", 10),
    ("Ah Ad Ac", 22),
    ("Ah Kd Qc", 0),
])
def test_top_royalties(top, expected):
    got = get_top_royalty(cards_from_str(top))
    assert got == expected, f"{top} should pay {expected}, got {got}"


@pytest.mark.parametrize("hand, middle, bottom", [
    ("Ah Ad 9c 9s 2h", 0, 0),
    ("Ah Ad Ac 9s 2h", 2, 0),
    ("9h Td Jc Qs Kh", 4, 2),
    ("Ah 9h 7h 4h 2h", 8, 4),
    ("Ah Ad Ac Kh Kd", 12, 6),
    ("Ah Ad Ac As Kh", 20, 10),
    ("5s 6s 7s 8s 9s", 30, 15),
    ("Th Jh Qh Kh Ah", 50, 25),
])
def test_five_card_royalties(hand, middle, bottom):
    cards = cards_from_str(hand)
    assert get_middle_royalty(cards) == middle, f"{hand} middle should pay {middle}"
    assert get_bottom_royalty(cards) == bottom, f"{hand} bottom should pay {bottom}"


def test_row_royalty_rejects_unknown_row():
    with pytest.raises(ValueError):
        get_row_royalty(cards_from_str("Ah Ad Ac Kh Kd"), "top")


def test_board_breakdown(make_board):
    board = make_board("Qc Qd 2h", "5c 6d 7h 8s 9c", "2d 4d 7d Jd Kd")
    breakdown = royalty_breakdown(board)
    assert breakdown == {'top': 7, 'middle': 4, 'bottom': 4, 'total': 15}
    assert get_total_royalties(board) == 15


def test_custom_table(make_board):
    table = RoyaltyTable(
        top_pairs={Rank.QUEEN: 100},
        middle={HandCategory.STRAIGHT: 1},
        bottom={},
        royal_flush={'middle': 0, 'bottom': 0},
    )
    board = make_board("Qc Qd 2h", "5c 6d 7h 8s 9c", "2d 4d 7d Jd Kd")
    assert royalty_breakdown(board, table) == {'top': 100, 'middle': 1, 'bottom': 0,
                                              'total': 101}
    assert get_top_royalty(cards_from_str("Ah Ad Kc"), table) == 0
