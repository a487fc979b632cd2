"""Unit tests for strategy.py — StrategyEngine."""
from dataclasses import replace

import pytest

from holdem.ai.strategy import StrategyEngine
from holdem.game.betting import BettingAction
from tests.helpers import FixedRandom, make_player, make_snapshot


def _engine(roll: float = 0.99) -> StrategyEngine:
    return StrategyEngine(FixedRandom(roll))


class TestPotOdds:
    def test_basic_pot_odds(self):
        snap = make_snapshot(pot=30, call=10, max_bet=10)
        assert StrategyEngine.pot_odds(snap) == pytest.approx(0.25)

    def test_zero_when_nothing_to_call(self):
        assert StrategyEngine.pot_odds(make_snapshot(call=0)) == 0.0


class TestUnopenedPot:
    def test_strong_hand_raises(self):
        action, amount = _engine().decide(make_snapshot(pot=20), make_player(), 0.7)
        assert action == BettingAction.RAISE
        assert amount == 10  # half pot

    def test_weak_hand_checks(self):
        assert _engine().decide(make_snapshot(), make_player(), 0.3) == (BettingAction.CHECK, 0)

    def test_occasional_bluff_is_min_raise(self):
        action, amount = _engine(0.1).decide(make_snapshot(), make_player(), 0.3)
        assert action == BettingAction.RAISE
        assert amount == 2


class TestFacingBet:
    def test_very_strong_hand_raises(self):
        snap = make_snapshot(pot=30, call=10, max_bet=10)
        action, amount = _engine().decide(snap, make_player(), 0.85)
        assert action == BettingAction.RAISE
        assert amount == 40  # max bet + pot

    def test_decent_hand_calls(self):
        snap = make_snapshot(pot=30, call=10, max_bet=10)
        assert _engine().decide(snap, make_player(), 0.5) == (BettingAction.CALL, 10)

    def test_weak_hand_folds_to_big_bet(self):
        snap = make_snapshot(pot=12, call=10, max_bet=10)
        assert _engine().decide(snap, make_player(), 0.32) == (BettingAction.FOLD, 0)

    def test_marginal_hand_calls_small_bet(self):
        snap = make_snapshot(pot=6, call=6, max_bet=6)
        assert _engine().decide(snap, make_player(), 0.35) == (BettingAction.CALL, 6)

    def test_strong_hand_sometimes_reraises(self):
        snap = make_snapshot(pot=30, call=10, max_bet=10)
        action, _ = _engine(0.2).decide(snap, make_player(), 0.75)
        assert action == BettingAction.RAISE

    def test_no_legal_actions(self):
        snap = replace(make_snapshot(), valid_actions=())
        assert _engine().decide(snap, make_player(), 0.9) is None


class TestMakeRaise:
    def test_shove_with_monster(self):
        player = make_player(chips=150, bet=0)
        action, amount = _engine().make_raise(0.95, make_snapshot(player=player), player)
        assert action == BettingAction.RAISE
        assert amount == 150

    def test_pot_sized_raise(self):
        player = make_player()
        _, amount = _engine().make_raise(0.8, make_snapshot(pot=20, max_bet=4, call=4), player)
        assert amount == 24

    def test_min_raise_for_weak_strength(self):
        player = make_player()
        _, amount = _engine().make_raise(0.4, make_snapshot(pot=20, max_bet=4, call=4, min_raise=4), player)
        assert amount == 8

    def test_never_exceeds_all_in(self):
        player = make_player(chips=15, bet=5)
        _, amount = _engine().make_raise(0.8, make_snapshot(player=player, pot=100, max_bet=10, call=5), player)
        assert amount == 20
