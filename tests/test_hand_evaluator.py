"""
OFC Pineapple - Hand Evaluation Unit Tests

Category detection, tiebreak keys, wheel and royal edge cases.
"""
import itertools

import pytest

from ofc.card import Rank, cards_from_str
from ofc.errors import InputError
from ofc.hand_evaluator import (
    HandCategory, TopCategory, compare_5, compare_hands_3, compare_hands_5,
    evaluate_3_card_hand, evaluate_5_card_hand, hand_rank_name, top_rank_name,
)


def rank5(text):
    return evaluate_5_card_hand(cards_from_str(text))


def rank3(text):
    return evaluate_3_card_hand(cards_from_str(text))


def test_categories():
    cases = {
        "Ah Kd 9c 7s 2h": HandCategory.HIGH_CARD,
        "Ah Ad 9c 7s 2h": HandCategory.PAIR,
        "Ah Ad 9c 9s 2h": HandCategory.TWO_PAIR,
        "Ah Ad Ac 9s 2h": HandCategory.THREE_OF_A_KIND,
        "9h Td Jc Qs Kh": HandCategory.STRAIGHT,
        "Ah 9h 7h 4h 2h": HandCategory.FLUSH,
        "Ah Ad Ac Kh Kd": HandCategory.FULL_HOUSE,
        "Ah Ad Ac As Kh": HandCategory.FOUR_OF_A_KIND,
        "5s 6s 7s 8s 9s": HandCategory.STRAIGHT_FLUSH,
    }
    for text, expected in cases.items():
        got = rank5(text).category
        assert got == expected, f"{text} should be {expected.name}, got {got.name}"


def test_tiebreak_keys():
    assert rank5("Ah Ad Ac As Kh").key == (Rank.ACE, Rank.KING)
    assert rank5("2h 2d Kc Ks 9h").key == (Rank.KING, Rank.TWO, Rank.NINE), \
        "Two pair key is high pair, low pair, kicker"
    assert rank5("7h 7d Ac 3s 9h").key == (Rank.SEVEN, Rank.ACE, Rank.NINE, Rank.THREE)


def test_wheel():
    wheel = rank5("Ah 2s 3h 4d 5c")
    six_high = rank5("2h 3s 4h 5d 6c")
    assert wheel.category == HandCategory.STRAIGHT
    assert wheel.key == (Rank.FIVE,), f"Wheel should be 5-high, got {wheel.key}"
    assert compare_5(six_high, wheel) == 1, "6-high straight beats the wheel"

    steel_wheel = rank5("As 2s 3s 4s 5s")
    lowest_other = rank5("2d 3d 4d 5d 6d")
    assert steel_wheel.category == HandCategory.STRAIGHT_FLUSH
    assert compare_5(lowest_other, steel_wheel) == 1, "Wheel is the lowest straight flush"


def test_royal_flush():
    royal = rank5("Th Jh Qh Kh Ah")
    king_high = rank5("9h Th Jh Qh Kh")
    assert royal.category == HandCategory.STRAIGHT_FLUSH and royal.royal
    assert not king_high.royal
    assert compare_5(royal, king_high) == 1
    assert hand_rank_name(royal) == "Royal Flush"
    assert not rank5("Th Jh Qh Kh As").royal, "Mixed suits are not royal"


def test_category_order_and_antisymmetry():
    hands = [
        "Ah Kd 9c 7s 2h", "Ah Ad 9c 7s 2h", "Ah Ad 9c 9s 2h", "Ah Ad Ac 9s 2h",
        "9h Td Jc Qs Kh", "Ah 9h 7h 4h 2h", "Ah Ad Ac Kh Kd", "Ah Ad Ac As Kh",
        "5s 6s 7s 8s 9s",
    ]
    ranks = [rank5(h) for h in hands]
    for (i, a), (j, b) in itertools.combinations(enumerate(ranks), 2):
        assert compare_5(a, b) == -1, f"{hands[i]} should lose to {hands[j]}"
        assert compare_5(b, a) == 1
    for r in ranks:
        assert compare_5(r, r) == 0


def test_kickers_and_ties():
    assert compare_hands_5(cards_from_str("Ah Ad Kc 7s 2h"),
                           cards_from_str("As Ac Qc 7d 2d")) == 1, "King kicker wins"
    assert compare_hands_5(cards_from_str("Ah Kd 9c 7s 2h"),
                           cards_from_str("As Kc 9d 7h 2d")) == 0, "Suits never break ties"


def test_three_card_hands():
    assert rank3("Ah Ad Ac").category == TopCategory.THREE_OF_A_KIND
    assert rank3("Qh Qd 2c").category == TopCategory.PAIR
    assert rank3("Ah Kd 2c").category == TopCategory.HIGH_CARD
    assert compare_hands_3(cards_from_str("2h 2d 2c"), cards_from_str("Ah Ad Kc")) == 1
    assert compare_hands_3(cards_from_str("Qh Qd 3c"), cards_from_str("Qs Qc 2c")) == 1
    assert compare_hands_3(cards_from_str("Ah 5d 2c"), cards_from_str("Ad 5s 2h")) == 0


@pytest.mark.parametrize("count", [0, 3, 4, 6])
def test_five_card_evaluator_rejects_wrong_count(count):
    cards = cards_from_str("Ah Kd Qc Js Th 9h")[:count]
    with pytest.raises(InputError):
        evaluate_5_card_hand(cards)


@pytest.mark.parametrize("count", [2, 4, 5])
def test_three_card_evaluator_rejects_wrong_count(count):
    cards = cards_from_str("Ah Kd Qc Js Th")[:count]
    with pytest.raises(InputError):
        evaluate_3_card_hand(cards)


def test_top_rank_names():
    assert top_rank_name(rank3("Ah Kd 9c")) == "High Card"
    assert top_rank_name(rank3("Qh Qd 9c")) == "Pair"
    assert top_rank_name(rank3("5h 5d 5c")) == "Three of a Kind"


if __name__ == "__main__":
    test_categories()
    test_tiebreak_keys()
    test_wheel()
    test_royal_flush()
    test_category_order_and_antisymmetry()
    test_three_card_hands()
    test_top_rank_names()
    print("All hand evaluation tests passed")
