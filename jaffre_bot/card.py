"""
Card module for the Jaffre card game.
Defines Color and Card with the special zero cards used in scoring.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class Color(Enum):
    """Card colors, in the order used for tie-breaking."""
    RED = "red"
    BROWN = "brown"
    GREEN = "green"
    BLUE = "blue"

    def __str__(self):
        return self.value

    @classmethod
    def parse(cls, value) -> "Color":
        """Accept a Color or its string name ("red", "RED")."""
        if isinstance(value, Color):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown card color: {value!r}") from None


# Enumeration order matters: ties between colors go to the earliest one.
COLORS = (Color.RED, Color.BROWN, Color.GREEN, Color.BLUE)

MIN_VALUE = 0
MAX_VALUE = 7


@dataclass(frozen=True)
class Card:
    """Represents a playing card with a color and a value 0-7."""

    color: Color
    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.color, Color):
            raise ValueError(f"Unknown card color: {self.color!r}")
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"Card value must be an integer, got {self.value!r}")
        if not MIN_VALUE <= self.value <= MAX_VALUE:
            raise ValueError(f"Card value out of range 0-7: {self.value}")

    def __str__(self):
        return f"{self.value} {self.color}"

    def __repr__(self):
        return f"Card({self.color.name}, {self.value})"

    def is_red_zero(self) -> bool:
        """True for the red 0 (+5 to whoever wins its trick)."""
        return self.color is Color.RED and self.value == 0

    def is_brown_zero(self) -> bool:
        """True for the brown 0 (-2 to whoever wins its trick)."""
        return self.color is Color.BROWN and self.value == 0

    def is_special(self) -> bool:
        return self.is_red_zero() or self.is_brown_zero()

    def is_trump(self, trump: Optional[Color]) -> bool:
        return trump is not None and self.color is trump

    @classmethod
    def from_dict(cls, data: dict) -> "Card":
        """Build a card from a ``{"color": ..., "value": ...}`` mapping."""
        try:
            return cls(Color.parse(data["color"]), data["value"])
        except (KeyError, TypeError):
            raise ValueError(f"Malformed card: {data!r}") from None

    def to_dict(self) -> dict:
        return {"color": self.color.value, "value": self.value}


RED_ZERO = Card(Color.RED, 0)
BROWN_ZERO = Card(Color.BROWN, 0)


def create_deck() -> List[Card]:
    """Create the 32-card Jaffre deck (4 colors x values 0-7)."""
    deck = []
    for color in COLORS:
        for value in range(MIN_VALUE, MAX_VALUE + 1):
            deck.append(Card(color, value))
    return deck
