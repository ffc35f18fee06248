"""
Hand evaluation for Jaffre bots.
Turns a hand into an estimated trick count plus descriptive features.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

import numpy as np

from jaffre_bot.card import Card, Color, COLORS

logger = logging.getLogger(__name__)

HIGH_CARD_VALUE = 6

# Probability-like weight of a trump card taking a trick, by value
TRUMP_WEIGHTS = {7: 0.95, 6: 0.85, 5: 0.70, 4: 0.50, 3: 0.35, 2: 0.25, 1: 0.25, 0: 0.15}

# Non-trump high cards, by value, for >=5 / >=4 / >=3 / fewer trumps.
# More trump means the suit can be bled and side sevens stand up.
SIDE_WEIGHTS = {
    7: (0.85, 0.60, 0.45, 0.30),
    6: (0.55, 0.40, 0.30, 0.20),
    5: (0.35, 0.25, 0.20, 0.10),
}


@dataclass(frozen=True)
class HandStrength:
    """Features of a hand for one trump choice. Derived, never cached."""

    trump_count: int
    trump_strength: int
    trump_high_count: int
    high_card_count: int
    has_red_zero: bool
    has_brown_zero: bool
    color_distribution: Dict[Color, int]
    dominant_color: Optional[Color]
    dominant_count: int
    dominant_high_count: int
    has_seven_in_color: bool
    no_red_cards: bool
    estimated_tricks: float
    optimal_trump: Color


def _color_counts(hand) -> np.ndarray:
    counts = np.zeros(len(COLORS), dtype=int)
    for card in hand:
        counts[COLORS.index(card.color)] += 1
    return counts


def find_best_trump(hand: Iterable[Card]) -> Color:
    """
    Pick the color that makes the best trump for a hand.

    Each color scores its card count plus two per high card (value >= 6).
    Ties go to the earliest color in red, brown, green, blue order.

    Args:
        hand: Cards held

    Returns:
        The best trump color
    """
    hand = list(hand)
    counts = _color_counts(hand)
    highs = _color_counts(card for card in hand if card.value >= HIGH_CARD_VALUE)
    scores = counts + 2 * highs
    return COLORS[int(np.argmax(scores))]


def _side_weight(value: int, trump_count: int) -> float:
    weights = SIDE_WEIGHTS.get(value)
    if weights is None:
        return 0.0
    if trump_count >= 5:
        return weights[0]
    if trump_count >= 4:
        return weights[1]
    if trump_count >= 3:
        return weights[2]
    return weights[3]


def _long_trump_bonus(trump_count: int) -> float:
    bonus = 0.0
    if trump_count >= 5:
        bonus += 0.5
    if trump_count >= 6:
        bonus += 0.5
    if trump_count >= 7:
        bonus += 0.75
    return bonus


def _red_zero_bonus(trump_count: int) -> float:
    if trump_count >= 4:
        return 1.0
    if trump_count >= 3:
        return 0.75
    if trump_count >= 2:
        return 0.5
    return 0.25


def _brown_zero_penalty(trump_count: int) -> float:
    if trump_count >= 5:
        return 0.4
    if trump_count >= 4:
        return 0.25
    return 0.1


def evaluate_hand(hand: Iterable[Card], trump: Optional[Color] = None) -> HandStrength:
    """
    Evaluate a hand for a fixed trump, or for its best trump while betting.

    Args:
        hand: Cards held
        trump: Trump color, None during betting

    Returns:
        HandStrength for the trump actually used
    """
    hand = list(hand)
    optimal = trump if trump is not None else find_best_trump(hand)

    trumps = [card for card in hand if card.color is optimal]
    trump_count = len(trumps)

    estimated = 0.0
    for card in hand:
        if card.color is optimal:
            estimated += TRUMP_WEIGHTS[card.value]
        else:
            estimated += _side_weight(card.value, trump_count)
    estimated += _long_trump_bonus(trump_count)

    has_red_zero = any(card.is_red_zero() for card in hand)
    has_brown_zero = any(card.is_brown_zero() for card in hand)
    if has_red_zero:
        estimated += _red_zero_bonus(trump_count)
    if has_brown_zero:
        estimated -= _brown_zero_penalty(trump_count)

    counts = _color_counts(hand)
    distribution = {color: int(counts[i]) for i, color in enumerate(COLORS)}
    if hand:
        dominant = COLORS[int(np.argmax(counts))]
        dominant_count = distribution[dominant]
    else:
        dominant = None
        dominant_count = 0

    strength = HandStrength(
        trump_count=trump_count,
        trump_strength=sum(card.value for card in trumps),
        trump_high_count=sum(1 for card in trumps if card.value >= HIGH_CARD_VALUE),
        high_card_count=sum(1 for card in hand if card.value >= HIGH_CARD_VALUE),
        has_red_zero=has_red_zero,
        has_brown_zero=has_brown_zero,
        color_distribution=distribution,
        dominant_color=dominant,
        dominant_count=dominant_count,
        dominant_high_count=sum(1 for card in hand
                                if card.color is dominant and card.value >= HIGH_CARD_VALUE),
        has_seven_in_color=dominant is not None and Card(dominant, 7) in hand,
        no_red_cards=trump is not None and distribution[Color.RED] == 0,
        estimated_tricks=round(estimated, 4),
        optimal_trump=optimal,
    )
    logger.debug("Evaluated %d cards with %s trump: %.2f tricks",
                 len(hand), optimal, strength.estimated_tricks)
    return strength
