"""
Move advisor for human players.
Runs the deterministic strategy and explains the suggested bet or card.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from jaffre_bot.card import Card
from jaffre_bot.rules import MIN_BET, PHASE_BETTING, PHASE_PLAYING, trick_points
from jaffre_bot.state import GameStateSnapshot
from jaffre_bot.utils import describe_card
from bot.betting import BetSuggestion, suggest_bet_for
from bot.card_selection import CardChoice, Priority, TrickContext, select_card_hard
from bot.hand_evaluator import evaluate_hand

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveSuggestion:
    """A suggested card with the reasoning behind it."""

    card: Card
    reason: str
    priority: Priority
    explanation: str
    alternatives: str = ""


# rule -> (reason, explanation); explanations are formatted with
# card, winner, and points
RULE_TEXT = {
    "only-card": (
        "Only playable card",
        "You can only play {card}, it is your only legal option.",
    ),
    "lead-trump": (
        "Lead with high trump to control",
        "Leading with {card} (trump) gives you the best chance to win this trick.",
    ),
    "lead-high": (
        "Lead with high card",
        "Leading with {card} gives you a good chance to win, especially if "
        "others are out of trump.",
    ),
    "lead-long-suit": (
        "Lead from your longest suit",
        "Leading {card} from your longest suit draws out the other players' trump.",
    ),
    "lead-low-trump": (
        "Lead low trump to draw trump",
        "You hold plenty of trump. Leading {card} pulls trump from the others "
        "and keeps your high trump for later.",
    ),
    "lead-red-early": (
        "Lead red to force out the Red 0",
        "Leading {card} early makes whoever holds the Red 0 decide what to do "
        "with it while your team can still fight for it.",
    ),
    "lead-zero": (
        "Only zeros left",
        "You only hold zeros. Lead {card} and let the others fight over it.",
    ),
    "partner-red-zero": (
        "ADD RED 0 BONUS (+5 points)!",
        "Your teammate is winning with {winner}. Play the Red 0 to add +5 "
        "points to your team's trick.",
    ),
    "partner-winning-low": (
        "Teammate winning - save high cards",
        "Your teammate is winning with {winner}. Play your lowest card ({card}) "
        "to save strong cards for later tricks.",
    ),
    "win-red-zero-trick": (
        "WIN RED 0 TRICK (+5 points)!",
        "The Red 0 is in this trick and the opponents are winning it. Play "
        "{card} to take it; the trick is worth {points} points.",
    ),
    "win-with-red-zero": (
        "WIN with Red 0 (+5 points)",
        "No card still out can beat the Red 0 here. Play it to win the trick "
        "and the +5 bonus.",
    ),
    "guaranteed-win": (
        "GUARANTEE the win",
        "Play {card}: every card that could beat it has already been played.",
    ),
    "try-win": (
        "Try to win",
        "Play {card} to take the trick from {winner}, but watch out for higher "
        "cards still in play.",
    ),
    "endgame-make-bet": (
        "Take the trick to make your bet",
        "Your team still needs points for its bet and few tricks are left. "
        "Play {card} to take this trick.",
    ),
    "endgame-deny": (
        "Take the trick to break their bet",
        "The opponents are close to their bet and few tricks are left. Play "
        "{card} to keep this trick away from them.",
    ),
    "poison": (
        "POISON the trick with Brown 0 (-2 points)",
        "You cannot beat {winner}. Give the opponents the Brown 0 so the trick "
        "costs them points.",
    ),
    "discard-low": (
        "Can't win - throw lowest",
        "You can't win this trick. Play {card} to save better cards.",
    ),
}


def _alternatives(ctx: TrickContext, choice: CardChoice) -> str:
    rule = choice.rule
    if rule == "lead-trump" and any(not c.is_trump(ctx.trump) for c in ctx.legal):
        return "You could save trump by leading a non-trump card, but you risk losing the trick."
    if rule == "partner-winning-low" and ctx.held(Card.is_red_zero) is not None:
        return "The Red 0 would add bonus points but might be lost if the trick is beaten."
    if rule == "try-win":
        return "Playing low instead keeps your strong cards for a trick you can be sure of."
    return ""


class MoveAdvisor:
    """Suggests bets and cards with the hard strategy, without card memory."""

    def suggest_bet(self, snapshot: GameStateSnapshot,
                    player_name: str) -> Optional[BetSuggestion]:
        """
        Suggest a bet for a human player.

        Args:
            snapshot: Read-only game state
            player_name: Name of the player asking

        Returns:
            BetSuggestion, or None outside the betting phase or turn
        """
        if snapshot.phase != PHASE_BETTING:
            return None
        player = snapshot.find_player_by_name(player_name)
        if player is None:
            logger.warning("Bet suggestion for unknown player %r", player_name)
            return BetSuggestion(amount=MIN_BET, without_trump=False, skip=True,
                                 reason="Player not found")
        if not snapshot.is_turn_of(player):
            return None

        strength = evaluate_hand(player.hand, snapshot.trump)
        return suggest_bet_for(strength, snapshot.is_dealer(player), snapshot.highest_bet())

    def suggest_move(self, snapshot: GameStateSnapshot,
                     player_name: str) -> Optional[MoveSuggestion]:
        """
        Suggest a card for a human player.

        Args:
            snapshot: Read-only game state
            player_name: Name of the player asking

        Returns:
            MoveSuggestion, or None when no suggestion applies
        """
        if snapshot.phase != PHASE_PLAYING:
            return None
        player = snapshot.find_player_by_name(player_name)
        if player is None:
            logger.warning("Move suggestion for unknown player %r", player_name)
            return None
        if not snapshot.is_turn_of(player):
            return None

        ctx = TrickContext.from_snapshot(snapshot, player)
        choice = select_card_hard(ctx, cheap_wins=False)
        if choice is None:
            return None

        reason, template = RULE_TEXT[choice.rule]
        winner = ctx.winner
        explanation = template.format(
            card=describe_card(choice.card),
            winner=describe_card(winner.card) if winner else "",
            points=trick_points([play.card for play in ctx.trick] + [choice.card]),
        )
        logger.debug("Suggesting %s for %s (%s)", choice.card, player_name, choice.rule)
        return MoveSuggestion(
            card=choice.card,
            reason=reason,
            priority=choice.priority,
            explanation=explanation,
            alternatives=_alternatives(ctx, choice),
        )
