"""
Shared fixtures for Jaffre tests.
"""

import pytest

from jaffre_bot.card import Card, Color
from jaffre_bot.player import PlayerState
from jaffre_bot.rules import PHASE_BETTING, select_team
from jaffre_bot.state import Bet, GameStateSnapshot, TrickPlay

PLAYER_IDS = ["p1", "p2", "p3", "p4"]
PLAYER_NAMES = ["TestPlayer", "Player2", "Player3", "Player4"]

COLOR_CODES = {"r": Color.RED, "b": Color.BROWN, "g": Color.GREEN, "u": Color.BLUE}


def cards(text: str):
    """Parse 'g7 r0 u3' into cards (r=red, b=brown, g=green, u=blue)."""
    return [Card(COLOR_CODES[token[0]], int(token[1:])) for token in text.split()]


def trick(*plays):
    """Build a trick from (player_id, 'g7') pairs."""
    return [TrickPlay(card=cards(code)[0], player_id=pid,
                      player_name=PLAYER_NAMES[PLAYER_IDS.index(pid)])
            for pid, code in plays]


def build_snapshot(hand, trump=None, phase=PHASE_BETTING, current_trick=(),
                   bets=None, dealer_index=1, current_player_index=0,
                   previous_trick=(), game_id="test-game", other_hands=None,
                   points=None):
    """Four-seat game where p1 (TestPlayer) holds ``hand``."""
    hands = [list(hand)] + list(other_hands or [[], [], []])
    points = points or [0, 0, 0, 0]
    players = [
        PlayerState(pid, name, hand=hands[i], team_id=select_team(i), points_won=points[i])
        for i, (pid, name) in enumerate(zip(PLAYER_IDS, PLAYER_NAMES))
    ]
    if bets is None:
        # Placeholder entries the server keeps before anyone has bet
        bets = [Bet(pid, amount=0, player_name=name)
                for pid, name in zip(PLAYER_IDS, PLAYER_NAMES)]
    return GameStateSnapshot(
        players=players,
        trump=trump,
        current_trick=current_trick,
        current_bets=bets,
        dealer_index=dealer_index,
        phase=phase,
        game_id=game_id,
        previous_trick=previous_trick,
        current_player_index=current_player_index,
    )


@pytest.fixture
def snapshot_factory():
    return build_snapshot
