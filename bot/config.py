"""
Strategy configuration for Jaffre bots.
Difficulty presets are plain values bound to each bot instance.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class Difficulty(Enum):
    """Bot difficulty levels."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value) -> "Difficulty":
        if isinstance(value, Difficulty):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown difficulty: {value!r}") from None


@dataclass(frozen=True)
class StrategyConfig:
    """
    Tunable knobs for one bot.

    Probabilities are in [0, 1]; delays are in milliseconds. ``seed`` feeds
    the bot's own random generator so a game can be replayed exactly.
    """

    difficulty: Difficulty = Difficulty.MEDIUM
    # Betting
    weak_skip_probability: float = 0.25
    normal_skip_probability: float = 0.0
    without_trump_chance: float = 0.2
    # Card play
    red_zero_lead_chance: float = 0.0
    trump_lead_chance: float = 1.0
    unsafe_red_zero_chance: float = 0.0
    brown_zero_poison_chance: float = 1.0
    brown_zero_shed_chance: float = 0.0
    # Pacing
    base_delay_ms: int = 500
    delay_variance_ms: int = 800
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        for name in ("weak_skip_probability", "normal_skip_probability",
                     "without_trump_chance", "red_zero_lead_chance",
                     "trump_lead_chance", "unsafe_red_zero_chance",
                     "brown_zero_poison_chance", "brown_zero_shed_chance"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if self.base_delay_ms < 0 or self.delay_variance_ms < 1:
            raise ValueError("Delays must be non-negative with a positive variance")

    @classmethod
    def for_difficulty(cls, difficulty, seed: Optional[int] = None) -> "StrategyConfig":
        """Preset configuration for a difficulty level."""
        preset = DIFFICULTY_PRESETS[Difficulty.parse(difficulty)]
        return replace(preset, seed=seed)

    def with_difficulty(self, difficulty) -> "StrategyConfig":
        """Same seed, preset knobs of another difficulty."""
        return StrategyConfig.for_difficulty(difficulty, seed=self.seed)


DIFFICULTY_PRESETS = {
    Difficulty.EASY: StrategyConfig(
        difficulty=Difficulty.EASY,
        weak_skip_probability=0.40,
        normal_skip_probability=0.30,
        without_trump_chance=0.10,
        brown_zero_shed_chance=0.30,
        base_delay_ms=300,
        delay_variance_ms=500,
    ),
    Difficulty.MEDIUM: StrategyConfig(
        difficulty=Difficulty.MEDIUM,
        weak_skip_probability=0.25,
        without_trump_chance=0.20,
        red_zero_lead_chance=0.05,
        trump_lead_chance=0.5,
        unsafe_red_zero_chance=0.5,
        brown_zero_poison_chance=0.6,
        base_delay_ms=500,
        delay_variance_ms=800,
    ),
    Difficulty.HARD: StrategyConfig(
        difficulty=Difficulty.HARD,
        weak_skip_probability=0.15,
        without_trump_chance=0.30,
        base_delay_ms=800,
        delay_variance_ms=1200,
    ),
}
