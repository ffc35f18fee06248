"""
Jaffre card game model shared by the bots.
"""

__version__ = "0.1.0"

from .card import Card, Color, COLORS, RED_ZERO, BROWN_ZERO, create_deck
from .player import PlayerState, BotInterface
from .rules import (
    can_beat,
    current_winner,
    get_legal_plays,
    is_guaranteed_win,
    led_suit,
    select_team,
)
from .state import Bet, GameStateSnapshot, SnapshotError, TrickPlay

__all__ = [
    'Card',
    'Color',
    'COLORS',
    'RED_ZERO',
    'BROWN_ZERO',
    'create_deck',
    'PlayerState',
    'BotInterface',
    'can_beat',
    'current_winner',
    'get_legal_plays',
    'is_guaranteed_win',
    'led_suit',
    'select_team',
    'Bet',
    'GameStateSnapshot',
    'SnapshotError',
    'TrickPlay',
]
