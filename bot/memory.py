"""
Per-game memory of cards already played.
"""

import logging
from typing import Dict, FrozenSet, Iterable, List

from jaffre_bot.card import Card
from jaffre_bot.state import TrickPlay

logger = logging.getLogger(__name__)


class CardMemory:
    """
    Ledger of cards seen in each game, keyed by game id.

    Entries live until ``clear`` is called for the game, so owners must
    clear a game's ledger once it ends.
    """

    def __init__(self):
        self._seen: Dict[str, List[Card]] = {}

    def observe(self, game_id: str, trick: Iterable[TrickPlay],
                previous_trick: Iterable[TrickPlay] = ()) -> int:
        """
        Record the cards of the current and previous tricks.

        Args:
            game_id: Game the tricks belong to
            trick: Plays of the trick in progress
            previous_trick: Plays of the last completed trick

        Returns:
            Number of newly recorded cards
        """
        ledger = self._seen.setdefault(game_id, [])
        known = set(ledger)
        added = 0
        for play in list(previous_trick) + list(trick):
            if play.card not in known:
                ledger.append(play.card)
                known.add(play.card)
                added += 1
        if added:
            logger.debug("Game %s: recorded %d new cards (%d total)", game_id, added, len(ledger))
        return added

    def seen(self, game_id: str) -> FrozenSet[Card]:
        return frozenset(self._seen.get(game_id, ()))

    def history(self, game_id: str) -> List[Card]:
        """Seen cards in the order they were first recorded."""
        return list(self._seen.get(game_id, ()))

    def clear(self, game_id: str) -> None:
        if self._seen.pop(game_id, None) is not None:
            logger.debug("Cleared card memory for game %s", game_id)

    def __contains__(self, game_id: str) -> bool:
        return game_id in self._seen

    def __len__(self) -> int:
        return len(self._seen)
