"""
Rules module for the Jaffre card game.
Contains rule constants, trick resolution and legal-move filtering.
"""

from typing import Iterable, List, Optional, Sequence, TYPE_CHECKING

from jaffre_bot.card import Card, Color, MAX_VALUE

if TYPE_CHECKING:
    from jaffre_bot.state import TrickPlay


# Game constants
NUM_PLAYERS = 4
CARDS_PER_PLAYER = 8
TRICK_SIZE = 4

# Betting constants
MIN_BET = 7
MAX_BET = 12

# Scoring constants
POINTS_PER_TRICK = 1
RED_ZERO_BONUS = 5
BROWN_ZERO_PENALTY = -2

# Phases in which the engine has something to say
PHASE_BETTING = "betting"
PHASE_PLAYING = "playing"


def select_team(player_index: int) -> int:
    """Seats alternate between team 1 (even seats) and team 2 (odd seats)."""
    return 1 if player_index % 2 == 0 else 2


def led_suit(trick: Sequence["TrickPlay"]) -> Optional[Color]:
    """Color of the first card in the trick, or None when nothing was played."""
    if not trick:
        return None
    return trick[0].card.color


def can_beat(candidate: Card, winner: Card, led: Optional[Color],
             trump: Optional[Color]) -> bool:
    """
    Check whether a candidate card would take the trick from the current winner.

    Args:
        candidate: Card being considered
        winner: Card currently winning the trick
        led: Suit that was led (kept for call-site symmetry; colors decide)
        trump: Trump color, None when unset

    Returns:
        True if the candidate beats the winning card
    """
    if candidate.is_trump(trump) and not winner.is_trump(trump):
        return True
    if winner.is_trump(trump) and not candidate.is_trump(trump):
        return False
    if candidate.color is winner.color:
        return candidate.value > winner.value
    return False


def current_winner(trick: Sequence["TrickPlay"],
                   trump: Optional[Color]) -> Optional["TrickPlay"]:
    """
    Determine which play is currently winning the trick.

    Plays are reduced left to right; a play of a third color never wins and
    an equal card never displaces the earlier one.

    Returns:
        The winning TrickPlay, or None for an empty trick
    """
    if not trick:
        return None

    winning = trick[0]
    led = winning.card.color
    for play in trick[1:]:
        if can_beat(play.card, winning.card, led, trump):
            winning = play
    return winning


def is_guaranteed_win(candidate: Card, trick: Sequence["TrickPlay"],
                      trump: Optional[Color], seen: Iterable[Card] = ()) -> bool:
    """
    Heuristic check that no card still out can beat the candidate.

    Only card values 0-7 and the cards already seen are considered: the
    current trick plus whatever the caller passes in ``seen`` (for example a
    per-game memory of earlier tricks). Opponents' hands are not modelled.

    Args:
        candidate: Card we intend to play
        trick: Plays already made in this trick
        trump: Trump color, None when unset
        seen: Additional cards known to be out of play

    Returns:
        True if every higher card of the relevant color(s) has been seen
    """
    in_trick = [play.card for play in trick]
    played = set(in_trick)
    played.update(seen)
    led = trick[0].card.color if trick else candidate.color

    if candidate.is_trump(trump):
        return all(Card(trump, value) in played
                   for value in range(candidate.value + 1, MAX_VALUE + 1))

    if candidate.color is led:
        if any(Card(led, value) not in played
               for value in range(candidate.value + 1, MAX_VALUE + 1)):
            return False
        if trump is not None and trump is not led:
            if any(card.color is trump for card in in_trick):
                return False
            return any(card.color is trump for card in played)
        return True

    return False


def get_legal_plays(hand: Sequence[Card], trick: Sequence["TrickPlay"]) -> List[Card]:
    """
    Get all legal card plays for the current trick.

    Args:
        hand: Player's current hand
        trick: Plays already made in this trick (empty when leading)

    Returns:
        List of cards that can legally be played
    """
    led = led_suit(trick)
    if led is None:
        return list(hand)

    following_suit = [card for card in hand if card.color is led]
    if following_suit:
        return following_suit

    # Can't follow suit - any card, trump included
    return list(hand)


def validate_card_play(card: Card, hand: Sequence[Card],
                       trick: Sequence["TrickPlay"]) -> bool:
    """True if the card is in hand and respects the follow-suit rule."""
    return card in hand and card in get_legal_plays(hand, trick)


def trick_points(cards: Iterable[Card]) -> int:
    """Points earned by whoever wins a trick made of these cards."""
    points = POINTS_PER_TRICK
    for card in cards:
        if card.is_red_zero():
            points += RED_ZERO_BONUS
        elif card.is_brown_zero():
            points += BROWN_ZERO_PENALTY
    return points
