"""Unit tests for card.py and hand_evaluator.py"""
import random

import pytest

from holdem.core.card import Card, Deck, EmptyDeckError, Rank, Suit, full_deck, parse_card, parse_cards
from holdem.core.hand_evaluator import (
    HandCategory,
    compare_hands,
    evaluate,
    evaluate5,
    hand_name,
)


def make_cards(text: str) -> list:
    return parse_cards(text)


class TestCard:
    def test_str(self):
        assert str(Card(Rank.TEN, Suit.SPADES)) == "Ts"
        assert str(Card(Rank.ACE, Suit.HEARTS)) == "Ah"

    def test_parse_accepts_ten_as_two_digits(self):
        assert parse_card("10c") == Card(Rank.TEN, Suit.CLUBS)
        assert parse_card("Tc") == Card(Rank.TEN, Suit.CLUBS)

    def test_parse_invalid(self):
        with pytest.raises(ValueError):
            parse_card("1x")

    def test_rank_ordering(self):
        assert Rank.TWO < Rank.THREE < Rank.ACE
        assert max(Rank) == Rank.ACE

    def test_full_deck_unique(self):
        deck = full_deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52


class TestDeck:
    def test_draw_reduces_size(self):
        deck = Deck(random.Random(1))
        deck.draw()
        assert len(deck) == 51

    def test_seeded_shuffle_is_reproducible(self):
        a = Deck(random.Random(42))
        b = Deck(random.Random(42))
        assert a.draw_many(5) == b.draw_many(5)

    def test_stack_draws_last_card_first(self):
        deck = Deck()
        deck.stack(make_cards("2c 3d Ah"))
        assert deck.draw() == parse_card("Ah")
        assert deck.draw() == parse_card("3d")

    def test_empty_deck_raises(self):
        deck = Deck()
        deck.stack([])
        with pytest.raises(EmptyDeckError):
            deck.draw()

    def test_draw_many_too_many_raises(self):
        deck = Deck()
        deck.stack(make_cards("2c 3d"))
        with pytest.raises(EmptyDeckError):
            deck.draw_many(3)

    def test_reset_restores_full_deck(self):
        deck = Deck(random.Random(3))
        deck.draw_many(10)
        deck.reset()
        assert len(deck) == 52


class TestEvaluate5:
    def test_royal_flush(self):
        result = evaluate5(make_cards("Ah Kh Qh Jh Th"))
        assert result.category == HandCategory.ROYAL_FLUSH
        assert result.name == "Royal Flush"

    def test_wheel_straight_flush_is_five_high(self):
        result = evaluate5(make_cards("5h 4h 3h 2h Ah"))
        assert result.category == HandCategory.STRAIGHT_FLUSH
        assert result.values == (5,)

    def test_wheel_straight_flush_loses_to_six_high(self):
        wheel = evaluate5(make_cards("5h 4h 3h 2h Ah"))
        six_high = evaluate5(make_cards("6s 5s 4s 3s 2s"))
        assert compare_hands(six_high, wheel) == 1

    def test_four_of_a_kind_kicker(self):
        result = evaluate5(make_cards("9c 9d 9h 9s Kd"))
        assert result.category == HandCategory.FOUR_OF_A_KIND
        assert result.values == (9, 13)

    def test_full_house_values(self):
        result = evaluate5(make_cards("7c 7d 7h 2s 2d"))
        assert result.category == HandCategory.FULL_HOUSE
        assert result.values == (7, 2)

    def test_full_house_trips_rank_dominates(self):
        twos_full = evaluate5(make_cards("2c 2d 2h 9s 9d"))
        nines_full = evaluate5(make_cards("9c 9h 9s 2s 2d"))
        assert twos_full.values == (2, 9)
        assert nines_full.values == (9, 2)
        assert compare_hands(nines_full, twos_full) == 1

    def test_flush(self):
        result = evaluate5(make_cards("Kd Td 7d 4d 2d"))
        assert result.category == HandCategory.FLUSH
        assert result.values == (13, 10, 7, 4, 2)

    def test_broadway_straight(self):
        result = evaluate5(make_cards("Ac Kd Qh Js Tc"))
        assert result.category == HandCategory.STRAIGHT
        assert result.values == (14,)

    def test_wheel_straight(self):
        result = evaluate5(make_cards("Ac 2d 3h 4s 5c"))
        assert result.category == HandCategory.STRAIGHT
        assert result.values == (5,)

    def test_no_wraparound_straight(self):
        result = evaluate5(make_cards("Qc Kd Ah 2s 3c"))
        assert result.category == HandCategory.HIGH_CARD

    def test_three_of_a_kind(self):
        result = evaluate5(make_cards("8c 8d 8h Ks 3c"))
        assert result.category == HandCategory.THREE_OF_A_KIND
        assert result.values == (8, 13, 3)

    def test_two_pair_kicker_order(self):
        result = evaluate5(make_cards("Jc Jd 4h 4s Ac"))
        assert result.category == HandCategory.TWO_PAIR
        assert result.values == (11, 4, 14)

    def test_pair(self):
        result = evaluate5(make_cards("Qc Qd 9h 5s 2c"))
        assert result.category == HandCategory.PAIR
        assert result.values == (12, 9, 5, 2)

    def test_high_card(self):
        result = evaluate5(make_cards("Ac Jd 9h 5s 2c"))
        assert result.category == HandCategory.HIGH_CARD
        assert result.values == (14, 11, 9, 5, 2)

    def test_requires_five_cards(self):
        with pytest.raises(ValueError):
            evaluate5(make_cards("Ac Jd 9h 5s"))


class TestEvaluateBest:
    def test_seven_cards_picks_best(self):
        result = evaluate(make_cards("Ah Kh Qh Jh Th 2c 3d"))
        assert result.category == HandCategory.ROYAL_FLUSH

    def test_six_cards(self):
        result = evaluate(make_cards("7c 7d 7h 2s 2d Kc"))
        assert result.category == HandCategory.FULL_HOUSE
        assert result.values == (7, 2)

    def test_board_plays_for_both(self):
        board = make_cards("Ac Kd Qh Js Tc")
        a = evaluate(make_cards("2c 3d") + board)
        b = evaluate(make_cards("4h 5s") + board)
        assert compare_hands(a, b) == 0

    def test_best_kicker_chosen(self):
        result = evaluate(make_cards("Ac Ad Kh 9s 7c 4d 2h"))
        assert result.category == HandCategory.PAIR
        assert result.values == (14, 13, 9, 7)

    @pytest.mark.parametrize("n", [4, 8])
    def test_rejects_bad_card_count(self, n):
        with pytest.raises(ValueError):
            evaluate(full_deck()[:n])


class TestCompareHands:
    def test_category_beats_values(self):
        pair = evaluate5(make_cards("2c 2d 5h 4s 3c"))
        high = evaluate5(make_cards("Ac Kd Qh Js 9c"))
        assert compare_hands(pair, high) == 1
        assert compare_hands(high, pair) == -1

    def test_kicker_breaks_tie(self):
        a = evaluate5(make_cards("Ac Ad Kh 9s 7c"))
        b = evaluate5(make_cards("Ah As Qh 9d 7d"))
        assert compare_hands(a, b) == 1

    def test_exact_tie(self):
        a = evaluate5(make_cards("Ac Kd Qh Js 9c"))
        b = evaluate5(make_cards("Ad Kh Qs Jc 9d"))
        assert compare_hands(a, b) == 0

    def test_seven_card_high_card_tie(self):
        a = evaluate(make_cards("Ac Kd 9h 7s 5c 3d 2h"))
        b = evaluate(make_cards("Ad Kh 9s 7c 5d 4s 3c"))
        assert a.category == b.category == HandCategory.HIGH_CARD
        assert a.values == b.values == (14, 13, 9, 7, 5)
        assert compare_hands(a, b) == 0
        assert compare_hands(b, a) == 0

    # weakest hand of each category against the strongest of the one below
    @pytest.mark.parametrize("weakest,strongest,upper,lower", [
        ("2c 2d 5h 4s 3c", "Ac Kd Qh Js 9c", HandCategory.PAIR, HandCategory.HIGH_CARD),
        ("3c 3d 2h 2s 4c", "Ac Ad Kh Qs Jc", HandCategory.TWO_PAIR, HandCategory.PAIR),
        ("2c 2d 2h 4s 3c", "Ac Ad Kh Ks Qc", HandCategory.THREE_OF_A_KIND, HandCategory.TWO_PAIR),
        ("5c 4d 3h 2s Ac", "Ac Ad Ah Ks Qc", HandCategory.STRAIGHT, HandCategory.THREE_OF_A_KIND),
        ("7h 5h 4h 3h 2h", "Ac Kd Qh Js Tc", HandCategory.FLUSH, HandCategory.STRAIGHT),
        ("2c 2d 2h 3s 3c", "Ah Kh Qh Jh 9h", HandCategory.FULL_HOUSE, HandCategory.FLUSH),
        ("2c 2d 2h 2s 3c", "Ac Ad Ah Ks Kc", HandCategory.FOUR_OF_A_KIND, HandCategory.FULL_HOUSE),
        ("5h 4h 3h 2h Ah", "Ac Ad Ah As Kc", HandCategory.STRAIGHT_FLUSH, HandCategory.FOUR_OF_A_KIND),
        ("Ah Kh Qh Jh Th", "Kc Qc Jc Tc 9c", HandCategory.ROYAL_FLUSH, HandCategory.STRAIGHT_FLUSH),
    ])
    def test_category_boundaries(self, weakest, strongest, upper, lower):
        hi = evaluate5(make_cards(weakest))
        lo = evaluate5(make_cards(strongest))
        assert hi.category == upper
        assert lo.category == lower
        assert compare_hands(hi, lo) == 1
        assert compare_hands(lo, hi) == -compare_hands(hi, lo)

    def test_compare_is_deterministic(self):
        a = evaluate(make_cards("Ac Ad Kh 9s 7c 4d 2h"))
        b = evaluate(make_cards("Kc Kd Ah 9s 7c 4d 2h"))
        assert [compare_hands(a, b) for _ in range(5)] == [1] * 5


class TestHandName:
    def test_names(self):
        assert hand_name(HandCategory.HIGH_CARD) == "High Card"
        assert hand_name(HandCategory.FULL_HOUSE) == "Full House"
