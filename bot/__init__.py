"""
Jaffre bots and the move advisor.
"""

from .advisor import MoveAdvisor, MoveSuggestion
from .betting import BetDecision, BetSuggestion
from .card_selection import CardImpact, Priority
from .config import Difficulty, StrategyConfig
from .hand_evaluator import HandStrength, evaluate_hand, find_best_trump
from .heuristic_bot import JaffreBot, auto_play_card, select_team
from .memory import CardMemory

__all__ = [
    'MoveAdvisor',
    'MoveSuggestion',
    'BetDecision',
    'BetSuggestion',
    'CardImpact',
    'Priority',
    'Difficulty',
    'StrategyConfig',
    'HandStrength',
    'evaluate_hand',
    'find_best_trump',
    'JaffreBot',
    'auto_play_card',
    'select_team',
    'CardMemory',
]
