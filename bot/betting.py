"""
Betting strategy for Jaffre bots and the bet advisor.
Maps hand strength and the table's bets to a bet, tiered by difficulty.
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import Optional

from jaffre_bot.card import Color
from jaffre_bot.rules import MAX_BET, MIN_BET
from jaffre_bot.state import Bet
from bot.config import Difficulty, StrategyConfig
from bot.hand_evaluator import HandStrength

logger = logging.getLogger(__name__)

# A bet is a team contract, so the partner is assumed to carry a share
# comparable to our own estimated tricks.
TEAM_FACTOR = 2.0

WEAK_THRESHOLD = 4.0
SKIP_THRESHOLD = 7.0
EXCELLENT_THRESHOLD = 8.0
DEALER_FORCED_CAP = 9


@dataclass(frozen=True)
class BetDecision:
    """A bot's bet."""

    amount: int = MIN_BET
    without_trump: bool = False
    skipped: bool = False

    @classmethod
    def skip(cls) -> "BetDecision":
        return cls(amount=MIN_BET, without_trump=False, skipped=True)


@dataclass(frozen=True)
class BetSuggestion:
    """Advice for a human bettor."""

    amount: int
    without_trump: bool
    skip: bool
    reason: str
    alternatives: str = ""


def bid_strength(strength: HandStrength) -> float:
    """Project a hand's estimated tricks onto the 7-12 bet scale."""
    return round(strength.estimated_tricks * TEAM_FACTOR, 4)


def hand_band(s: float) -> str:
    if s < 4:
        return "weak"
    if s < 5:
        return "marginal"
    if s < 6:
        return "decent"
    if s < 7:
        return "good"
    if s < 8:
        return "strong"
    return "excellent"


def banded_amount(s: float) -> Optional[int]:
    """
    Deterministic bet for a bid strength, None for a weak hand.

    Two-amount bands take the upper amount from their midpoint on.
    """
    if s < 4:
        return None
    if s < 5:
        return 7
    if s < 6:
        return 7 if s < 5.5 else 8
    if s < 7:
        return 8 if s < 6.5 else 9
    if s < 8:
        return 9 if s < 7.5 else 10
    return min(MAX_BET, 10 + math.floor(s - 8))


def difficulty_label(amount: int) -> str:
    if amount >= 11:
        return "VERY HARD"
    if amount >= 9:
        return "HARD"
    if amount == 8:
        return "MEDIUM"
    return "NORMAL"


def dealer_forced_amount(s: float) -> int:
    return max(MIN_BET, min(int(round(s)), DEALER_FORCED_CAP))


def required_minimum(highest: Optional[Bet], is_dealer: bool) -> int:
    """Smallest legal amount: the dealer may equal the highest bet, others must exceed it."""
    if highest is None:
        return MIN_BET
    return highest.amount if is_dealer else highest.amount + 1


def apply_raise_constraint(target: int, highest: Optional[Bet],
                           is_dealer: bool) -> Optional[int]:
    """
    Fit a target amount to the bets already on the table.

    Returns:
        The amount to bet, or None when the player should skip
    """
    minimum = required_minimum(highest, is_dealer)
    if minimum > MAX_BET:
        return None
    if target < minimum:
        return minimum if is_dealer else None
    return min(target, MAX_BET)


def position_adjustment(s: float, position: str, is_dealer: bool) -> float:
    """Shade a bid strength by where the player sits in the betting order."""
    adjusted = s
    if position == "first":
        adjusted -= 0.5
    elif position == "last" and s >= EXCELLENT_THRESHOLD:
        adjusted += 0.5
    if is_dealer:
        adjusted += 0.5
    return adjusted


def without_trump_viable(strength: HandStrength, s: float, strict: bool = False) -> bool:
    """
    Whether the hand can carry a without-trump contract.

    The dominant color needs five cards and its 7, six for an excellent
    hand. ``strict`` also requires two cards of 6+ in that color and no
    Red Zero held outside it.
    """
    dominant = strength.dominant_color
    if dominant is None or not strength.has_seven_in_color:
        return False
    needed = 6 if s >= EXCELLENT_THRESHOLD else 5
    if strength.dominant_count < needed:
        return False
    if strict:
        if strength.dominant_high_count < 2:
            return False
        if strength.has_red_zero and dominant is not Color.RED:
            return False
    return True


class BettingStrategy:
    """Bot betting for one difficulty. Randomness comes from the injected generator."""

    def __init__(self, config: StrategyConfig, rng: random.Random):
        self.config = config
        self.rng = rng

    def decide(self, strength: HandStrength, is_dealer: bool,
               highest: Optional[Bet], position: str = "middle") -> BetDecision:
        """
        Choose a bet.

        Args:
            strength: Evaluated hand
            is_dealer: Whether the player deals this round
            highest: Highest valid bet on the table, if any
            position: 'first', 'middle' or 'last' in the betting order

        Returns:
            BetDecision
        """
        s = bid_strength(strength)

        if is_dealer and highest is None:
            amount = dealer_forced_amount(s)
            logger.debug("Dealer forced bet %d (strength %.2f)", amount, s)
            return BetDecision(amount=amount)

        if not is_dealer and self._skips(s):
            logger.debug("Skipping with strength %.2f", s)
            return BetDecision.skip()

        target = self._target(s, position, is_dealer)
        if target is None:
            if not is_dealer:
                return BetDecision.skip()
            target = MIN_BET

        amount = apply_raise_constraint(target, highest, is_dealer)
        if amount is None:
            logger.debug("Cannot raise over %s with target %d", highest.amount, target)
            return BetDecision.skip()

        strict = self.config.difficulty is Difficulty.HARD
        without_trump = (without_trump_viable(strength, s, strict)
                         and self.rng.random() < self.config.without_trump_chance)
        logger.debug("Bet %d%s (strength %.2f)", amount,
                     " without trump" if without_trump else "", s)
        return BetDecision(amount=amount, without_trump=without_trump)

    def _skips(self, s: float) -> bool:
        difficulty = self.config.difficulty
        if difficulty is Difficulty.HARD and s < WEAK_THRESHOLD:
            return True
        if s < SKIP_THRESHOLD:
            return self.rng.random() < self.config.weak_skip_probability
        return self.rng.random() < self.config.normal_skip_probability

    def _target(self, s: float, position: str, is_dealer: bool) -> Optional[int]:
        difficulty = self.config.difficulty
        if difficulty is Difficulty.EASY:
            return self.rng.randint(MIN_BET, 10)
        if difficulty is Difficulty.MEDIUM:
            jittered = int(round(s)) + self.rng.randint(-1, 1)
            return max(MIN_BET, min(MAX_BET, jittered))
        return banded_amount(position_adjustment(s, position, is_dealer))


def suggest_bet_for(strength: HandStrength, is_dealer: bool,
                    highest: Optional[Bet]) -> BetSuggestion:
    """
    Deterministic bet advice with an explanation.

    Args:
        strength: Evaluated hand
        is_dealer: Whether the player deals this round
        highest: Highest valid bet on the table, if any

    Returns:
        BetSuggestion
    """
    s = bid_strength(strength)
    trump = strength.optimal_trump
    summary = (f"{strength.trump_count} {trump} trump, "
               f"{strength.high_card_count} high cards")

    if is_dealer and highest is None:
        amount = dealer_forced_amount(s)
        return BetSuggestion(
            amount=amount,
            without_trump=False,
            skip=False,
            reason=f"{difficulty_label(amount)} - As dealer you must bet, "
                   f"{amount} with {trump} trump ({summary})",
            alternatives="As dealer you cannot skip. 7 is the safest minimum bet.",
        )

    if s < WEAK_THRESHOLD and not is_dealer:
        return BetSuggestion(
            amount=MIN_BET,
            without_trump=False,
            skip=True,
            reason=f"Weak hand - Skip is safest ({strength.trump_count} {trump} "
                   f"if you choose trump, {strength.high_card_count} high cards)",
            alternatives="Alternative: Bet 7 if you feel lucky, but you will likely lose points.",
        )

    target = banded_amount(s) or MIN_BET
    void_lift = (strength.no_red_cards and strength.trump_count >= 3 and target < 8)
    if void_lift:
        target = 8

    amount = apply_raise_constraint(target, highest, is_dealer)
    if amount is None:
        return BetSuggestion(
            amount=MIN_BET,
            without_trump=False,
            skip=True,
            reason=f"Skip - your hand is worth about {target} "
                   f"({difficulty_label(target)}) and cannot outbid {highest.amount} ({summary})",
            alternatives=f"Alternative: Bet {min(MAX_BET, highest.amount + 1)} only if "
                         f"your partner is likely to help.",
        )

    label = difficulty_label(amount)
    band = hand_band(s)

    if s >= SKIP_THRESHOLD and without_trump_viable(strength, s, strict=True):
        dominant = strength.dominant_color
        return BetSuggestion(
            amount=amount,
            without_trump=True,
            skip=False,
            reason=f"{label} BET with Without Trump (doubles points!) - "
                   f"{strength.dominant_count} {dominant} cards including the 7",
            alternatives=f"Alternative: Bet {amount} with {trump} trump for normal play. "
                         f"Without trump doubles your points but you must control the "
                         f"game with your {dominant} suit.",
        )

    if void_lift:
        reason = f"{label} - No red cards! Cut the Red 0 with {trump} trump ({summary})"
    else:
        reason = f"{label} - {band.capitalize()} hand ({summary})"

    floor = required_minimum(highest, is_dealer)
    if amount > floor:
        alternatives = f"Alternative: Bet {floor} ({difficulty_label(floor)}) for less risk."
    elif is_dealer:
        alternatives = "As dealer you must bet or raise."
    else:
        alternatives = "Alternative: Skip to avoid risk."

    return BetSuggestion(amount=amount, without_trump=False, skip=False,
                         reason=reason, alternatives=alternatives)
