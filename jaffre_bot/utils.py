"""
Utility module for the Jaffre card game.
Contains logging setup and formatting helpers.
"""

import logging
from typing import Dict, Iterable, List, Optional

from jaffre_bot.card import Card, Color, COLORS


def setup_logging(log_file: Optional[str] = None, level: int = logging.INFO):
    """Set up logging for a process hosting the bots."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def format_hand(hand: Iterable[Card], sort_by_color: bool = True) -> str:
    """
    Format a hand of cards for display.

    Args:
        hand: Cards to show
        sort_by_color: Whether to group by color then sort by value

    Returns:
        Formatted string representation
    """
    hand = list(hand)
    if not hand:
        return "Empty hand"

    if not sort_by_color:
        return ', '.join(str(card) for card in hand)

    by_color: Dict[Color, List[Card]] = {}
    for card in hand:
        by_color.setdefault(card.color, []).append(card)

    color_strings = []
    for color in COLORS:
        if color in by_color:
            values = ' '.join(str(c.value) for c in sorted(by_color[color], key=lambda c: c.value))
            color_strings.append(f"{color}: {values}")
    return ' | '.join(color_strings)


def describe_card(card: Card) -> str:
    """Human-readable card name used in advice text."""
    if card.is_red_zero():
        return "Red 0"
    if card.is_brown_zero():
        return "Brown 0"
    return str(card)
