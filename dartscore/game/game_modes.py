"""
Match win conditions (first-to, best-of).
"""
from abc import ABC, abstractmethod

from dartscore.core import ConfigError, MatchConfig, MatchMode


class WinCondition(ABC):
    """Abstract base class for match win conditions."""

    def __init__(self, target: int):
        """
        Args:
            target: Match target in legs or sets
        """
        if target < 1:
            raise ConfigError("target must be a positive integer")
        self.target = target

    @abstractmethod
    def get_name(self) -> str:
        """Get win condition name."""
        pass

    @abstractmethod
    def wins_needed(self) -> int:
        """Legs or sets a player must win to take the match."""
        pass

    def check_winner(self, count: int) -> bool:
        """Check if a player with `count` legs/sets has won."""
        return count >= self.wins_needed()


class FirstTo(WinCondition):
    """First player to reach the target wins."""

    def get_name(self) -> str:
        return f"First to {self.target}"

    def wins_needed(self) -> int:
        return self.target


class BestOf(WinCondition):
    """
    Best of N: a majority of the target wins.

    Best of 5 is decided at 3, best of 4 also at 3.
    """

    def get_name(self) -> str:
        return f"Best of {self.target}"

    def wins_needed(self) -> int:
        return self.target // 2 + 1


def win_condition_for(config: MatchConfig) -> WinCondition:
    """Build the win condition a MatchConfig describes."""
    if config.mode is MatchMode.FIRST_TO:
        return FirstTo(config.target)
    return BestOf(config.target)
