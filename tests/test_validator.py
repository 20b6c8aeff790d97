"""
OFC Pineapple - Foul Detection Tests
"""
import pytest

from ofc.board import Board
from ofc.card import cards_from_str
from ofc.validator import validate_board

BOTTOM_TRIPS = "Tc Td Th Js Qs"


def test_clean_board(make_board):
    check = validate_board(make_board("2c 3d 4h", "5s 5h 7c 8d 9s", BOTTOM_TRIPS))
    assert not check.fouled, f"Ordered board should not foul: {check.reason}"
    assert check.reason is None


def test_bottom_weaker_than_middle(make_board):
    check = validate_board(make_board("2c 3d 4h", BOTTOM_TRIPS, "5s 5h 7c 8d 9s"))
    assert check.fouled and check.reason == "bottom < middle"


@pytest.mark.parametrize("top", ["2c 3d 4h", "Ac Ad Ah", "6c 6d 2h"])
def test_bottom_below_middle_fouls_whatever_the_top(make_board, top):
    board = make_board(top, "9c 9d 9h 3s 4s", "Ks Kh 5c 7d 8s")
    assert validate_board(board).fouled


@pytest.mark.parametrize("top, middle, bottom, fouled", [
    # Middle pair against top pair
    ("6c 6d 2h", "5s 5h 7c 8d 9s", BOTTOM_TRIPS, True),
    ("6c 6d 2h", "6h 6s 7c 8d 9s", BOTTOM_TRIPS, False),
    ("2c 2d 2h", "5s 5h 7c 8d 9s", BOTTOM_TRIPS, True),
    # Middle two pair: only top trips foul
    ("Ac Ad 2h", "5s 5h 7c 7d 9s", BOTTOM_TRIPS, False),
    ("2c 2d 2h", "5s 5h 7c 7d 9s", BOTTOM_TRIPS, True),
    # Middle trips: only higher top trips foul
    ("6c 6d 6h", "5s 5h 5c 8d 9s", BOTTOM_TRIPS, True),
    ("6c 6d 6h", "Tc Td Th 8d 9s", "2s 4s 7s Js Ks", False),
    ("Ac Ad 2h", "Tc Td Th 8d 9s", "2s 4s 7s Js Ks", False),
    # Straight and better always beat the top row
    ("Ac Ad Ah", "5c 6d 7h 8s 9c", "2d 4d 7d Jd Kd", False),
    # Middle high card
    ("Kc Qd Th", "Ks Qh 9c 7d 3s", "2c 2d 4h 5c 6d", True),
    ("Kc Qd 8h", "Ks Qh 9c 7d 3s", "2c 2d 4h 5c 6d", False),
    ("3c 3d 4s", "Ks Qh 9c 7d 8s", "2c 2d 4h 5c 6d", True),
])
def test_middle_against_top(make_board, top, middle, bottom, fouled):
    check = validate_board(make_board(top, middle, bottom))
    assert check.fouled == fouled, f"{top} / {middle} / {bottom}: {check}"
    if fouled:
        assert check.reason == "top > middle"


def test_incomplete_board_is_fouled(make_board):
    assert validate_board(Board()).fouled
    check = validate_board(make_board("2c 3d", "5s 5h 7c 8d 9s", BOTTOM_TRIPS))
    assert check.fouled and check.reason == "wrong counts"


def test_duplicate_cards_are_fouled(make_board):
    # Same card on two rows can never come from a real deal
    check = validate_board(make_board("As Ah Kd", "Ks Kh Qc Jd Th", "As Ah Ad Kc Qh"))
    assert check.fouled and check.reason == "duplicate card"


def test_malformed_entries_are_fouled():
    board = Board(["As", "Kd", "2c"], cards_from_str("5s 5h 7c 8d 9s"),
                  cards_from_str(BOTTOM_TRIPS))
    check = validate_board(board)
    assert check.fouled and check.reason == "invalid card"
    assert validate_board(object()).fouled, "Objects without rows foul"


def test_board_helpers(make_board):
    board = make_board("2c 3d 4h", "5s 5h 7c 8d 9s", BOTTOM_TRIPS)
    assert not board.is_fouled()
    assert board.get_royalties() == {'top': 0, 'middle': 0, 'bottom': 0, 'total': 0}
    fouled = make_board("Ac Ad 2h", "5s 5h 7c 8d 9s", BOTTOM_TRIPS)
    assert fouled.is_fouled()
    assert fouled.get_royalties()['total'] == 0, "Fouled boards earn nothing"
