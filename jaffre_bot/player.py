"""
Player module for the Jaffre card game.
Defines the read-only player view and the bot strategy interface.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional, TYPE_CHECKING

from jaffre_bot.card import Card, Color

if TYPE_CHECKING:
    from jaffre_bot.state import GameStateSnapshot


class PlayerState:
    """A player as seen in a game snapshot."""

    def __init__(self, player_id: str, name: str = None, hand: Iterable[Card] = (),
                 team_id: int = 1, points_won: int = 0):
        self.player_id = player_id
        self.name = name or f"Player {player_id}"
        self.hand = tuple(hand)
        self.team_id = team_id
        self.points_won = points_won

    def count_color(self, color: Color) -> int:
        return sum(1 for card in self.hand if card.color is color)

    @classmethod
    def from_dict(cls, data: dict) -> "PlayerState":
        hand = [Card.from_dict(c) for c in data.get("hand", [])]
        return cls(
            player_id=str(data["id"]),
            name=data.get("name"),
            hand=hand,
            team_id=int(data.get("teamId", 1)),
            points_won=int(data.get("pointsWon", 0)),
        )

    def __repr__(self):
        return f"PlayerState({self.player_id!r}, {self.name!r}, team={self.team_id})"


class BotInterface(ABC):
    """Abstract interface for bot strategies."""

    @abstractmethod
    def make_bet(self, snapshot: "GameStateSnapshot", player_id: str):
        """
        Make a betting decision.

        Args:
            snapshot: Read-only game state
            player_id: Id of the acting player

        Returns:
            BetDecision with amount, without_trump and skipped
        """
        pass

    @abstractmethod
    def play_card(self, snapshot: "GameStateSnapshot", player_id: str) -> Optional[Card]:
        """
        Choose which card to play.

        Args:
            snapshot: Read-only game state
            player_id: Id of the acting player

        Returns:
            A legal card from the player's hand, or None if there is none
        """
        pass
