"""
Core data types for the 501 scorekeeper.
Defines contracts between modules to ensure stable interfaces.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .errors import ConfigError

# Supported countdown variants
VALID_STARTING_SCORES = (301, 501, 701)

# Legs needed to take a set
LEGS_PER_SET = 3

PlayerId = Union[int, str]


class MatchMode(Enum):
    """How the match target is interpreted."""
    FIRST_TO = "first-to"  # First player to reach target wins
    BEST_OF = "best-of"  # Majority of target wins


class MatchUnit(Enum):
    """What the match target counts."""
    LEGS = "legs"
    SETS = "sets"


@dataclass(frozen=True)
class Player:
    """
    External player identity. Never changes during a match.
    """
    id: PlayerId
    name: str
    avatar_url: Optional[str] = None


@dataclass(frozen=True)
class MatchConfig:
    """
    Match rules, fixed for the whole match.

    Mode and unit may be given as enum members or their string values
    ("first-to", "best-of", "legs", "sets").
    """
    starting_score: int = 501
    mode: MatchMode = MatchMode.FIRST_TO
    unit: MatchUnit = MatchUnit.LEGS
    target: int = 1
    track_doubles: bool = False
    legs_per_set: int = LEGS_PER_SET

    def __post_init__(self):
        try:
            object.__setattr__(self, "mode", MatchMode(self.mode))
        except ValueError:
            raise ConfigError(f"Unknown match mode: {self.mode!r}") from None
        try:
            object.__setattr__(self, "unit", MatchUnit(self.unit))
        except ValueError:
            raise ConfigError(f"Unknown match unit: {self.unit!r}") from None

        if self.starting_score not in VALID_STARTING_SCORES:
            raise ConfigError(
                f"starting_score must be one of {VALID_STARTING_SCORES}, got {self.starting_score}"
            )
        if not isinstance(self.target, int) or self.target < 1:
            raise ConfigError("target must be a positive integer")
        if self.legs_per_set < 1:
            raise ConfigError("legs_per_set must be positive")

    @property
    def uses_sets(self) -> bool:
        return self.unit is MatchUnit.SETS

    def describe(self) -> str:
        """Human readable summary, e.g. 'First to 3 legs (501)'."""
        mode = "First to" if self.mode is MatchMode.FIRST_TO else "Best of"
        return f"{mode} {self.target} {self.unit.value} ({self.starting_score})"
