"""
State module for the Jaffre card game.
Read-only snapshot of a game as handed to the bots by the server.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from jaffre_bot.card import Card, Color
from jaffre_bot.player import PlayerState
from jaffre_bot.rules import MAX_BET, MIN_BET, NUM_PLAYERS, PHASE_BETTING


class SnapshotError(ValueError):
    """Raised when a server payload cannot be turned into a snapshot."""


@dataclass(frozen=True)
class TrickPlay:
    """One card played into the current trick."""

    card: Card
    player_id: str
    player_name: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "TrickPlay":
        return cls(
            card=Card.from_dict(data["card"]),
            player_id=str(data.get("playerId", "")),
            player_name=data.get("playerName", ""),
        )


@dataclass(frozen=True)
class Bet:
    """A player's bet for the round. Skipped bets carry a placeholder amount."""

    player_id: str
    amount: int = MIN_BET
    without_trump: bool = False
    skipped: bool = False
    player_name: str = ""

    def is_valid(self) -> bool:
        return not self.skipped and MIN_BET <= self.amount <= MAX_BET

    @classmethod
    def from_dict(cls, data: dict) -> "Bet":
        return cls(
            player_id=str(data.get("playerId", "")),
            amount=int(data.get("amount", 0)),
            without_trump=bool(data.get("withoutTrump", False)),
            skipped=bool(data.get("skipped", False)),
            player_name=data.get("playerName", ""),
        )


class GameStateSnapshot:
    """Full, read-only view of one game at the moment a decision is needed."""

    def __init__(self, players: Iterable[PlayerState], trump: Optional[Color] = None,
                 current_trick: Iterable[TrickPlay] = (), current_bets: Iterable[Bet] = (),
                 dealer_index: int = 0, phase: str = PHASE_BETTING, game_id: str = "",
                 previous_trick: Iterable[TrickPlay] = (),
                 current_player_index: Optional[int] = None):
        self.players: Tuple[PlayerState, ...] = tuple(players)
        self.trump = trump
        self.current_trick: Tuple[TrickPlay, ...] = tuple(current_trick)
        self.current_bets: Tuple[Bet, ...] = tuple(current_bets)
        self.dealer_index = dealer_index
        self.phase = phase
        self.game_id = game_id
        self.previous_trick: Tuple[TrickPlay, ...] = tuple(previous_trick)
        self.current_player_index = current_player_index

    def find_player(self, player_id: str) -> Optional[PlayerState]:
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def find_player_by_name(self, name: str) -> Optional[PlayerState]:
        for player in self.players:
            if player.name == name:
                return player
        return None

    def player_index(self, player: PlayerState) -> int:
        return self.players.index(player)

    def is_dealer(self, player: PlayerState) -> bool:
        return self.player_index(player) == self.dealer_index

    def is_turn_of(self, player: PlayerState) -> bool:
        """True unless the snapshot says another seat is to act."""
        if self.current_player_index is None:
            return True
        return self.player_index(player) == self.current_player_index

    def partner_of(self, player: PlayerState) -> Optional[PlayerState]:
        for other in self.players:
            if other.player_id != player.player_id and other.team_id == player.team_id:
                return other
        return None

    def valid_bets(self) -> List[Bet]:
        return [bet for bet in self.current_bets if bet.is_valid()]

    def highest_bet(self) -> Optional[Bet]:
        """
        Highest valid bet so far.

        Larger amounts win; on equal amounts a without-trump bet outranks a
        trump bet, otherwise the earlier bet stands.
        """
        highest = None
        for bet in self.valid_bets():
            if highest is None or bet.amount > highest.amount:
                highest = bet
            elif bet.amount == highest.amount and bet.without_trump and not highest.without_trump:
                highest = bet
        return highest

    def betting_position(self) -> str:
        """'first' before any valid bet, 'last' after three, else 'middle'."""
        count = len(self.valid_bets())
        if count == 0:
            return "first"
        if count == NUM_PLAYERS - 1:
            return "last"
        return "middle"

    @classmethod
    def from_dict(cls, data: dict) -> "GameStateSnapshot":
        """
        Build a snapshot from the server's JSON game state.

        Args:
            data: Mapping using the server's camelCase keys

        Returns:
            GameStateSnapshot

        Raises:
            SnapshotError: If the payload is malformed
        """
        try:
            trump = data.get("trump")
            previous = data.get("previousTrick") or {}
            return cls(
                players=[PlayerState.from_dict(p) for p in data["players"]],
                trump=Color.parse(trump) if trump is not None else None,
                current_trick=[TrickPlay.from_dict(t) for t in data.get("currentTrick", [])],
                current_bets=[Bet.from_dict(b) for b in data.get("currentBets", [])],
                dealer_index=int(data.get("dealerIndex", 0)),
                phase=data.get("phase", PHASE_BETTING),
                game_id=str(data.get("id", "")),
                previous_trick=[TrickPlay.from_dict(t) for t in previous.get("trick", [])],
                current_player_index=data.get("currentPlayerIndex"),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise SnapshotError(f"Invalid game state payload: {e}") from e
