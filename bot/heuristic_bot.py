"""
Heuristic bot implementation for the Jaffre card game.
Rule-based betting and card play at three difficulty levels.
"""

import logging
import random
from typing import Optional

from jaffre_bot.card import Card
from jaffre_bot.player import BotInterface
from jaffre_bot.rules import select_team, validate_card_play
from jaffre_bot.state import GameStateSnapshot
from jaffre_bot.utils import format_hand
from bot.betting import BetDecision, BettingStrategy
from bot.card_selection import (
    TrickContext,
    select_card_easy,
    select_card_hard,
    select_card_medium,
)
from bot.config import Difficulty, StrategyConfig
from bot.hand_evaluator import evaluate_hand
from bot.memory import CardMemory

logger = logging.getLogger(__name__)

__all__ = ['JaffreBot', 'auto_play_card', 'select_team']


class JaffreBot(BotInterface):
    """
    Rule-based bot with difficulty-tuned betting and card play.

    Each instance owns its configuration, random generator and card memory,
    so bots of different difficulties can share a process or a table.
    """

    def __init__(self, config: Optional[StrategyConfig] = None,
                 memory: Optional[CardMemory] = None,
                 rng: Optional[random.Random] = None, name: str = "JaffreBot"):
        self.name = name
        self.config = config or StrategyConfig.for_difficulty(Difficulty.MEDIUM)
        self.memory = memory if memory is not None else CardMemory()
        self.rng = rng or random.Random(self.config.seed)
        self.betting = BettingStrategy(self.config, self.rng)

    @property
    def difficulty(self) -> Difficulty:
        return self.config.difficulty

    def set_difficulty(self, level) -> None:
        """Switch this bot to another difficulty preset."""
        self.config = self.config.with_difficulty(level)
        self.betting = BettingStrategy(self.config, self.rng)
        logger.info("%s difficulty set to %s", self.name, self.config.difficulty.value)

    def make_bet(self, snapshot: GameStateSnapshot, player_id: str) -> BetDecision:
        try:
            player = snapshot.find_player(player_id)
            if player is None:
                logger.warning("make_bet: player %s not in game %s", player_id, snapshot.game_id)
                return BetDecision.skip()

            strength = evaluate_hand(player.hand, snapshot.trump)
            decision = self.betting.decide(
                strength,
                is_dealer=snapshot.is_dealer(player),
                highest=snapshot.highest_bet(),
                position=snapshot.betting_position(),
            )
            logger.debug("%s (%s) bets %s", player.name, self.difficulty.value, decision)
            return decision
        except Exception:
            logger.exception("make_bet failed for player %s", player_id)
            return BetDecision.skip()

    def play_card(self, snapshot: GameStateSnapshot, player_id: str) -> Optional[Card]:
        try:
            return self._play_card(snapshot, player_id)
        except Exception:
            logger.exception("play_card failed for player %s", player_id)
            return None

    def _play_card(self, snapshot: GameStateSnapshot, player_id: str) -> Optional[Card]:
        player = snapshot.find_player(player_id)
        if player is None:
            logger.warning("play_card: player %s not in game %s", player_id, snapshot.game_id)
            return None
        if not player.hand:
            return None

        logger.debug("%s holds %s", player.name, format_hand(player.hand))
        seen = frozenset()
        if self.difficulty is Difficulty.HARD:
            self.memory.observe(snapshot.game_id, snapshot.current_trick, snapshot.previous_trick)
            seen = self.memory.seen(snapshot.game_id)

        ctx = TrickContext.from_snapshot(snapshot, player, seen)
        if self.difficulty is Difficulty.EASY:
            choice = select_card_easy(ctx, self.config, self.rng)
        elif self.difficulty is Difficulty.MEDIUM:
            choice = select_card_medium(ctx, self.config, self.rng)
        else:
            choice = select_card_hard(ctx)

        if choice is None:
            return None
        if not validate_card_play(choice.card, player.hand, snapshot.current_trick):
            logger.warning("Rule %s picked illegal card %s; playing %s instead",
                           choice.rule, choice.card, ctx.legal[0])
            return ctx.legal[0]

        logger.debug("%s plays %s (%s)", player.name, choice.card, choice.rule)
        return choice.card

    def get_action_delay(self) -> int:
        """Thinking time in milliseconds for the caller to wait before acting."""
        return self.config.base_delay_ms + self.rng.randrange(self.config.delay_variance_ms)

    def clear_memory(self, game_id: str) -> None:
        self.memory.clear(game_id)


def auto_play_card(snapshot: GameStateSnapshot, player_id: str) -> Optional[Card]:
    """
    Pick a card for a player who ran out of time.

    Uses the hard strategy without card memory, so it keeps no state
    between calls.

    Args:
        snapshot: Read-only game state
        player_id: Id of the player to act for

    Returns:
        A legal card, or None if the player is missing or has no cards
    """
    player = snapshot.find_player(player_id)
    if player is None:
        logger.warning("auto_play_card: player %s not in game %s", player_id, snapshot.game_id)
        return None
    choice = select_card_hard(TrickContext.from_snapshot(snapshot, player))
    return choice.card if choice else None
