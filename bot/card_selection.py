"""
Card selection for Jaffre bots and the move advisor.
Picks one legal card from the trick situation, tiered by difficulty.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional, Sequence, Tuple

from jaffre_bot.card import Card, Color, COLORS
from jaffre_bot.player import PlayerState
from jaffre_bot.rules import (
    CARDS_PER_PLAYER,
    POINTS_PER_TRICK,
    RED_ZERO_BONUS,
    can_beat,
    current_winner,
    get_legal_plays,
    is_guaranteed_win,
)
from jaffre_bot.state import GameStateSnapshot, TrickPlay
from bot.config import StrategyConfig

logger = logging.getLogger(__name__)

LONG_SUIT_LENGTH = 4
LOW_TRUMP_LEAD_COUNT = 3
LOW_TRUMP_MAX_VALUE = 3
EARLY_TRICKS = 4
ENDGAME_TRICKS = 2
MAX_TRICK_POINTS = POINTS_PER_TRICK + RED_ZERO_BONUS


class CardImpact(Enum):
    """How much a card matters to the hand's outcome."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Priority(Enum):
    """How strongly a choice is recommended."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    def __str__(self):
        return self.value


def classify_impact(card: Card, trump: Optional[Color]) -> CardImpact:
    if card.is_red_zero():
        return CardImpact.HIGH
    if card.is_brown_zero():
        return CardImpact.LOW
    if card.value >= 6:
        return CardImpact.HIGH
    if card.is_trump(trump):
        return CardImpact.MEDIUM if card.value >= 4 else CardImpact.LOW
    return CardImpact.MEDIUM if card.value >= 3 else CardImpact.LOW


@dataclass(frozen=True)
class CardChoice:
    """A selected card plus the rule that picked it."""

    card: Card
    rule: str
    priority: Priority


@dataclass(frozen=True)
class TrickContext:
    """Everything a strategy needs to know about the trick in progress."""

    hand: Tuple[Card, ...]
    legal: Tuple[Card, ...]
    trick: Tuple[TrickPlay, ...]
    trump: Optional[Color]
    player_id: str
    partner_id: Optional[str] = None
    seen: FrozenSet[Card] = frozenset()
    # Round score and the contract being played for
    team_points: int = 0
    opponent_points: int = 0
    bet_target: Optional[int] = None
    bet_ours: bool = False

    @classmethod
    def from_snapshot(cls, snapshot: GameStateSnapshot, player: PlayerState,
                      seen: FrozenSet[Card] = frozenset()) -> "TrickContext":
        partner = snapshot.partner_of(player)
        highest = snapshot.highest_bet()
        bidder = snapshot.find_player(highest.player_id) if highest else None
        team_points = sum(p.points_won for p in snapshot.players
                          if p.team_id == player.team_id)
        opponent_points = sum(p.points_won for p in snapshot.players
                              if p.team_id != player.team_id)
        return cls(
            hand=player.hand,
            legal=tuple(get_legal_plays(player.hand, snapshot.current_trick)),
            trick=snapshot.current_trick,
            trump=snapshot.trump,
            player_id=player.player_id,
            partner_id=partner.player_id if partner else None,
            seen=frozenset(seen),
            team_points=team_points,
            opponent_points=opponent_points,
            bet_target=highest.amount if highest else None,
            bet_ours=bidder is not None and bidder.team_id == player.team_id,
        )

    @property
    def position(self) -> int:
        return len(self.trick) + 1

    @property
    def led(self) -> Optional[Color]:
        return self.trick[0].card.color if self.trick else None

    @property
    def winner(self) -> Optional[TrickPlay]:
        return current_winner(self.trick, self.trump)

    @property
    def partner_winning(self) -> bool:
        winner = self.winner
        return winner is not None and self.partner_id is not None \
            and winner.player_id == self.partner_id

    @property
    def opponent_winning(self) -> bool:
        winner = self.winner
        return winner is not None and not self.partner_winning \
            and winner.player_id != self.player_id

    @property
    def red_zero_in_trick(self) -> bool:
        return any(play.card.is_red_zero() for play in self.trick)

    def held(self, predicate) -> Optional[Card]:
        for card in self.legal:
            if predicate(card):
                return card
        return None

    def suit_length(self, color: Color) -> int:
        return sum(1 for card in self.hand if card.color is color)

    def beaters(self) -> List[Card]:
        """Legal cards that would take the trick from the current winner."""
        winner = self.winner
        if winner is None:
            return []
        return [card for card in self.legal
                if can_beat(card, winner.card, self.led, self.trump)]

    def is_guaranteed(self, card: Card) -> bool:
        # Nobody plays after the fourth seat
        if self.position == 4:
            return True
        return is_guaranteed_win(card, self.trick, self.trump, self.seen)


def _low_key(trump: Optional[Color]):
    return lambda card: (card.is_trump(trump), card.value, COLORS.index(card.color))


def lowest_card(cards: Sequence[Card], trump: Optional[Color]) -> Card:
    """Cheapest card to give up: non-trump first, then by value."""
    return min(cards, key=_low_key(trump))


def _plain(cards: Sequence[Card]) -> List[Card]:
    return [card for card in cards if not card.is_special()]


def _lead_trumps(ctx: TrickContext) -> List[Card]:
    # A Red Zero trump is worth +5 to whoever takes it, never lead it
    return [card for card in ctx.legal
            if card.is_trump(ctx.trump) and not card.is_red_zero()]


def _lead(ctx: TrickContext) -> CardChoice:
    trumps = _lead_trumps(ctx)
    if trumps:
        best = max(trumps, key=lambda c: c.value)
        return CardChoice(best, "lead-trump", Priority.HIGH)

    pool = _plain(ctx.legal)
    if pool:
        non_singletons = [card for card in pool if ctx.suit_length(card.color) > 1]
        if non_singletons:
            pool = non_singletons
        best = max(pool, key=lambda c: (c.value, ctx.suit_length(c.color),
                                        -COLORS.index(c.color)))
        return CardChoice(best, "lead-high", Priority.MEDIUM)

    # Only zeros left; the Brown Zero costs whoever takes it
    zero = ctx.held(Card.is_brown_zero) or ctx.legal[0]
    return CardChoice(zero, "lead-zero", Priority.LOW)


def _red_zero_safe(ctx: TrickContext, red_zero: Card) -> bool:
    if ctx.position == 4:
        return True
    winning_card = ctx.winner.card
    if can_beat(red_zero, winning_card, ctx.led, ctx.trump):
        return False
    return is_guaranteed_win(winning_card, ctx.trick, ctx.trump, ctx.seen)


def _support_partner(ctx: TrickContext) -> CardChoice:
    red_zero = ctx.held(Card.is_red_zero)
    if red_zero is not None and _red_zero_safe(ctx, red_zero):
        return CardChoice(red_zero, "partner-red-zero", Priority.HIGH)

    pool = _plain(ctx.legal) \
        or [card for card in ctx.legal if not card.is_brown_zero()] \
        or list(ctx.legal)
    winning_card = ctx.winner.card
    not_overtaking = [card for card in pool
                      if not can_beat(card, winning_card, ctx.led, ctx.trump)]
    card = lowest_card(not_overtaking or pool, ctx.trump)
    return CardChoice(card, "partner-winning-low", Priority.LOW)


def _discard(ctx: TrickContext) -> CardChoice:
    brown_zero = ctx.held(Card.is_brown_zero)
    if brown_zero is not None and ctx.opponent_winning:
        return CardChoice(brown_zero, "poison", Priority.MEDIUM)

    pool = _plain(ctx.legal) \
        or [card for card in ctx.legal if not card.is_red_zero()] \
        or list(ctx.legal)
    return CardChoice(lowest_card(pool, ctx.trump), "discard-low", Priority.LOW)


def _contest(ctx: TrickContext, cheap_wins: bool) -> Optional[CardChoice]:
    beaters = ctx.beaters()
    if not beaters:
        return None
    guaranteed = [card for card in beaters if ctx.is_guaranteed(card)]

    if ctx.red_zero_in_trick:
        if guaranteed:
            card = min(guaranteed, key=lambda c: c.value)
        else:
            card = max(beaters, key=lambda c: c.value)
        return CardChoice(card, "win-red-zero-trick", Priority.HIGH)

    for card in guaranteed:
        if card.is_red_zero():
            return CardChoice(card, "win-with-red-zero", Priority.HIGH)

    if guaranteed:
        card = min(guaranteed, key=_low_key(ctx.trump))
        return CardChoice(card, "guaranteed-win", Priority.HIGH)

    speculative = [card for card in beaters if not card.is_red_zero()]
    if not speculative:
        return None
    if cheap_wins:
        card = min(speculative, key=_low_key(ctx.trump))
    else:
        card = max(speculative, key=lambda c: (c.value, not c.is_trump(ctx.trump)))
    return CardChoice(card, "try-win", Priority.MEDIUM)


def decide(ctx: TrickContext, cheap_wins: bool = False) -> Optional[CardChoice]:
    """
    Deterministic card choice shared by the hard bot and the advisor.

    Args:
        ctx: Trick situation for the acting player
        cheap_wins: Take a trick that can still be overtaken with the lowest
            winning card instead of the highest

    Returns:
        CardChoice, or None when there is no legal card
    """
    if not ctx.legal:
        return None
    if len(ctx.legal) == 1:
        return CardChoice(ctx.legal[0], "only-card", Priority.HIGH)
    if not ctx.trick:
        return _lead(ctx)
    if ctx.partner_winning:
        return _support_partner(ctx)
    return _contest(ctx, cheap_wins) or _discard(ctx)


def _opening_lead(ctx: TrickContext) -> Optional[CardChoice]:
    trumps = _lead_trumps(ctx)
    if trumps:
        top = max(trumps, key=lambda c: c.value)
        if is_guaranteed_win(top, ctx.trick, ctx.trump, ctx.seen):
            return None
        low = [card for card in trumps if card.value <= LOW_TRUMP_MAX_VALUE]
        if len(trumps) >= LOW_TRUMP_LEAD_COUNT and low:
            card = min(low, key=lambda c: c.value)
            return CardChoice(card, "lead-low-trump", Priority.MEDIUM)
    else:
        plain = _plain(ctx.legal)
        if plain:
            longest = max(COLORS, key=lambda color: (
                sum(1 for card in plain if card.color is color), -COLORS.index(color)))
            suit = [card for card in plain if card.color is longest]
            if len(suit) >= LONG_SUIT_LENGTH:
                card = max(suit, key=lambda c: c.value)
                return CardChoice(card, "lead-long-suit", Priority.MEDIUM)

    # Draw the Red Zero out of an opponent's hand while tricks are young
    early = len(ctx.hand) > CARDS_PER_PLAYER - EARLY_TRICKS
    red_zero_out = not any(card.is_red_zero() for card in ctx.hand) \
        and not any(card.is_red_zero() for card in ctx.seen)
    if early and red_zero_out and ctx.trump is not Color.RED:
        reds = [card for card in ctx.legal if card.color is Color.RED
                and classify_impact(card, ctx.trump) is CardImpact.MEDIUM]
        if reds:
            card = max(reds, key=lambda c: c.value)
            return CardChoice(card, "lead-red-early", Priority.MEDIUM)
    return None


def _endgame_rule(ctx: TrickContext) -> Optional[str]:
    tricks_left = len(ctx.hand)
    if tricks_left > ENDGAME_TRICKS or ctx.bet_target is None:
        return None
    reachable = tricks_left * MAX_TRICK_POINTS
    if ctx.bet_ours:
        needed = ctx.bet_target - ctx.team_points
        return "endgame-make-bet" if 0 < needed <= reachable else None
    needed = ctx.bet_target - ctx.opponent_points
    return "endgame-deny" if 0 < needed <= reachable else None


def _endgame(ctx: TrickContext) -> Optional[CardChoice]:
    """Last tricks with the contract still open: take every trick we can."""
    if not ctx.trick or ctx.red_zero_in_trick:
        return None
    rule = _endgame_rule(ctx)
    if rule is None:
        return None

    beaters = ctx.beaters()
    guaranteed = [card for card in beaters if ctx.is_guaranteed(card)]
    if ctx.partner_winning:
        # Overtake only to secure a trick the partner could still lose
        if ctx.is_guaranteed(ctx.winner.card):
            return None
        pool = guaranteed
    else:
        pool = guaranteed or [card for card in beaters if not card.is_red_zero()]
    if not pool:
        return None
    return CardChoice(min(pool, key=_low_key(ctx.trump)), rule, Priority.HIGH)


def select_card_hard(ctx: TrickContext, cheap_wins: bool = True) -> Optional[CardChoice]:
    """
    Shared decision plus positional tactics.

    Leads low trump from a long trump holding, leads from a long plain suit
    when holding no trump, and leads red early to flush out the Red Zero.
    In the last two tricks it fights for every trick while the contract can
    still be made or broken.
    """
    if len(ctx.legal) <= 1:
        return decide(ctx, cheap_wins)
    tactic = _endgame(ctx) if ctx.trick else _opening_lead(ctx)
    if tactic is not None:
        logger.debug("Hard tactic %s with %s", tactic.rule, tactic.card)
        return tactic
    return decide(ctx, cheap_wins)


def select_card_medium(ctx: TrickContext, config: StrategyConfig,
                       rng: random.Random) -> Optional[CardChoice]:
    """Teammate and zero-card rules applied with some probability; no card counting."""
    if len(ctx.legal) <= 1:
        return decide(ctx)

    if not ctx.trick:
        trumps = _lead_trumps(ctx)
        if trumps and rng.random() < config.trump_lead_chance:
            return CardChoice(max(trumps, key=lambda c: c.value), "lead-trump", Priority.HIGH)
        red_zero = ctx.held(Card.is_red_zero)
        if red_zero is not None and rng.random() < config.red_zero_lead_chance:
            return CardChoice(red_zero, "lead-red-zero", Priority.MEDIUM)
        middling = [card for card in _plain(ctx.legal)
                    if not card.is_trump(ctx.trump)
                    and classify_impact(card, ctx.trump) is CardImpact.MEDIUM]
        if middling:
            return CardChoice(rng.choice(middling), "lead-medium", Priority.MEDIUM)
        return decide(ctx)

    if ctx.partner_winning:
        red_zero = ctx.held(Card.is_red_zero)
        if red_zero is not None and rng.random() < config.unsafe_red_zero_chance:
            return CardChoice(red_zero, "partner-red-zero", Priority.MEDIUM)
        return decide(ctx)

    beaters = ctx.beaters()
    if ctx.red_zero_in_trick and beaters:
        card = min(beaters, key=lambda c: c.value)
        return CardChoice(card, "win-red-zero-trick", Priority.HIGH)

    brown_zero = ctx.held(Card.is_brown_zero)
    if brown_zero is not None and ctx.opponent_winning \
            and rng.random() < config.brown_zero_poison_chance:
        return CardChoice(brown_zero, "poison", Priority.MEDIUM)

    speculative = [card for card in beaters if not card.is_special()]
    if speculative:
        card = min(speculative, key=_low_key(ctx.trump))
        return CardChoice(card, "try-win", Priority.MEDIUM)

    pool = _plain(ctx.legal) or [card for card in ctx.legal if not card.is_red_zero()] \
        or list(ctx.legal)
    return CardChoice(lowest_card(pool, ctx.trump), "discard-low", Priority.LOW)


def select_card_easy(ctx: TrickContext, config: StrategyConfig,
                     rng: random.Random) -> Optional[CardChoice]:
    """Mostly random play with a soft habit of shedding the Brown Zero."""
    if len(ctx.legal) <= 1:
        return decide(ctx)
    brown_zero = ctx.held(Card.is_brown_zero)
    if brown_zero is not None and rng.random() < config.brown_zero_shed_chance:
        return CardChoice(brown_zero, "shed-brown-zero", Priority.LOW)
    return CardChoice(rng.choice(ctx.legal), "random", Priority.LOW)
