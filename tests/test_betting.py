"""
Unit tests for the betting strategy.
"""

import random

import pytest
from jaffre_bot.card import Color
from jaffre_bot.state import Bet
from bot.betting import *
from bot.config import Difficulty, StrategyConfig
from bot.hand_evaluator import evaluate_hand
from conftest import cards

WEAK_HAND = "r0 r1 g1 g2 u0 u1 b0 b2"
STRONG_HAND = "g0 g3 g4 g5 g7 r7 r3 u2"
OVERWHELMING_HAND = "g0 g1 g3 g4 g5 g6 g7 r7"


def strategy(level, seed=0):
    config = StrategyConfig.for_difficulty(level, seed=seed)
    return BettingStrategy(config, random.Random(seed))


class TestBands:
    """Test bid strength bands and labels."""

    def test_bid_strength(self):
        assert bid_strength(evaluate_hand(cards(STRONG_HAND))) == pytest.approx(8.0)

    def test_banded_amounts(self):
        assert banded_amount(3.9) is None
        assert banded_amount(4.2) == 7
        assert banded_amount(5.2) == 7
        assert banded_amount(5.7) == 8
        assert banded_amount(6.8) == 9
        assert banded_amount(7.7) == 10
        assert banded_amount(8.0) == 10
        assert banded_amount(9.4) == 11
        assert banded_amount(15.0) == 12

    def test_labels(self):
        assert difficulty_label(7) == "NORMAL"
        assert difficulty_label(8) == "MEDIUM"
        assert difficulty_label(9) == "HARD"
        assert difficulty_label(10) == "HARD"
        assert difficulty_label(11) == "VERY HARD"
        assert difficulty_label(12) == "VERY HARD"

    def test_dealer_forced_amount(self):
        assert dealer_forced_amount(1.6) == 7
        assert dealer_forced_amount(8.2) == 8
        assert dealer_forced_amount(12.0) == 9


class TestRaiseConstraint:
    """Test raising over earlier bets."""

    def test_no_bets(self):
        assert apply_raise_constraint(9, None, False) == 9

    def test_must_exceed(self):
        highest = Bet("p2", amount=9)
        assert apply_raise_constraint(10, highest, False) == 10
        assert apply_raise_constraint(9, highest, False) is None

    def test_dealer_may_equal(self):
        highest = Bet("p2", amount=9)
        assert apply_raise_constraint(9, highest, True) == 9
        assert apply_raise_constraint(7, highest, True) == 9

    def test_cannot_raise_past_twelve(self):
        highest = Bet("p2", amount=12)
        assert apply_raise_constraint(12, highest, False) is None
        assert apply_raise_constraint(12, highest, True) == 12

    def test_position_adjustment(self):
        assert position_adjustment(7.0, "first", False) == 6.5
        assert position_adjustment(7.0, "last", False) == 7.0
        assert position_adjustment(8.0, "last", False) == 8.5
        assert position_adjustment(7.0, "middle", True) == 7.5


class TestWithoutTrump:
    """Test without-trump eligibility."""

    def test_needs_five_with_seven(self):
        strength = evaluate_hand(cards("g3 g4 g5 g6 g7 r3 u2 b1"))
        assert without_trump_viable(strength, 7.7)
        assert without_trump_viable(strength, 7.7, strict=True)

    def test_excellent_needs_six(self):
        strength = evaluate_hand(cards("g3 g4 g5 g6 g7 r7 u2 b1"))
        assert not without_trump_viable(strength, 9.4)

    def test_no_seven(self):
        strength = evaluate_hand(cards("g2 g3 g4 g5 g6 r7 u2 b1"))
        assert not without_trump_viable(strength, 7.0)

    def test_strict_rejects_stranded_red_zero(self):
        strength = evaluate_hand(cards("g3 g4 g5 g6 g7 r0 u2 b1"))
        assert without_trump_viable(strength, 7.0)
        assert not without_trump_viable(strength, 7.0, strict=True)

    def test_strict_needs_two_high_cards(self):
        strength = evaluate_hand(cards("g2 g3 g4 g5 g7 r3 u2 b1"))
        assert without_trump_viable(strength, 7.0)
        assert not without_trump_viable(strength, 7.0, strict=True)


class TestBettingStrategy:
    """Test bot betting by difficulty."""

    @pytest.mark.parametrize("level", list(Difficulty))
    def test_dealer_cannot_skip(self, level):
        for seed in range(20):
            decision = strategy(level, seed).decide(
                evaluate_hand(cards(WEAK_HAND)), is_dealer=True, highest=None)
            assert not decision.skipped
            assert decision.amount == 7
            assert not decision.without_trump

    def test_hard_skips_weak_hand(self):
        for seed in range(20):
            decision = strategy(Difficulty.HARD, seed).decide(
                evaluate_hand(cards(WEAK_HAND)), is_dealer=False, highest=None)
            assert decision.skipped

    @pytest.mark.parametrize("level", list(Difficulty))
    def test_amount_in_range(self, level):
        for seed in range(30):
            decision = strategy(level, seed).decide(
                evaluate_hand(cards(STRONG_HAND)), is_dealer=False, highest=None)
            assert 7 <= decision.amount <= 12

    def test_hard_uses_bands(self):
        hand = evaluate_hand(cards(OVERWHELMING_HAND))
        decision = strategy(Difficulty.HARD, seed=3).decide(hand, False, None, "middle")
        assert not decision.skipped
        assert decision.amount == 12

    def test_first_bettor_is_cautious(self):
        # 7.7 strength: 10 in the middle, 9 when betting first
        hand = evaluate_hand(cards("g3 g4 g5 g6 g7 r3 u2 b1"))
        config = StrategyConfig.for_difficulty(Difficulty.HARD)
        amounts = {}
        for position in ("first", "middle"):
            rng = random.Random(0)
            decision = BettingStrategy(config, rng).decide(hand, False, None, position)
            amounts[position] = decision.amount
        assert amounts == {"first": 9, "middle": 10}

    def test_non_dealer_skips_when_outbid(self):
        highest = Bet("p2", amount=12)
        for level in Difficulty:
            decision = strategy(level).decide(
                evaluate_hand(cards(OVERWHELMING_HAND)), is_dealer=False, highest=highest)
            assert decision.skipped

    def test_dealer_equalizes(self):
        highest = Bet("p2", amount=10)
        decision = strategy(Difficulty.HARD).decide(
            evaluate_hand(cards(WEAK_HAND)), is_dealer=True, highest=highest)
        assert not decision.skipped
        assert decision.amount == 10

    def test_same_seed_same_decisions(self):
        hand = evaluate_hand(cards(STRONG_HAND))
        first = [strategy(Difficulty.EASY, seed).decide(hand, False, None) for seed in range(10)]
        second = [strategy(Difficulty.EASY, seed).decide(hand, False, None) for seed in range(10)]
        assert first == second

    def test_never_without_trump_when_not_viable(self):
        hand = evaluate_hand(cards(STRONG_HAND))
        for seed in range(30):
            decision = strategy(Difficulty.HARD, seed).decide(hand, False, None)
            assert not decision.without_trump


class TestBetSuggestion:
    """Test the advisor's bet reasoning."""

    def test_weak_hand(self):
        suggestion = suggest_bet_for(evaluate_hand(cards(WEAK_HAND)), False, None)
        assert suggestion.skip
        assert suggestion.amount == 7
        assert "Weak hand" in suggestion.reason

    def test_dealer_forced(self):
        suggestion = suggest_bet_for(evaluate_hand(cards(WEAK_HAND)), True, None)
        assert not suggestion.skip
        assert suggestion.amount == 7
        assert "dealer" in suggestion.reason

    def test_reason_mentions_features(self):
        suggestion = suggest_bet_for(evaluate_hand(cards(STRONG_HAND)), False, None)
        assert suggestion.amount == 10
        assert "5 green trump" in suggestion.reason
        assert "2 high cards" in suggestion.reason
        assert "HARD" in suggestion.reason

    def test_without_trump_suggested(self):
        suggestion = suggest_bet_for(evaluate_hand(cards(OVERWHELMING_HAND)), False, None)
        assert suggestion.without_trump
        assert suggestion.amount == 12
        assert "VERY HARD" in suggestion.reason

    def test_outbid_suggests_skip(self):
        highest = Bet("p2", amount=11)
        suggestion = suggest_bet_for(evaluate_hand(cards(STRONG_HAND)), False, highest)
        assert suggestion.skip
        assert "11" in suggestion.reason

    def test_no_red_cards_lifts_marginal_hand(self):
        # Marginal hand with four green: 7 while betting, 8 once green is trump
        hand = cards("g1 g2 g3 g5 u6 u5 b5 b3")
        open_trump = suggest_bet_for(evaluate_hand(hand), False, None)
        green_trump = suggest_bet_for(evaluate_hand(hand, Color.GREEN), False, None)
        assert open_trump.amount == 7
        assert green_trump.amount == 8
        assert "No red cards" in green_trump.reason


if __name__ == "__main__":
    pytest.main([__file__])
