"""
Outcome of an engine transition.

Rule violations are ordinary outcomes, not exceptions: the UI shows the
message and keeps going.
"""
from dataclasses import dataclass
from enum import Enum

from .game_state import MatchState


class TurnOutcome(Enum):
    APPLIED = "applied"
    BUST = "bust"
    INVALID_SCORE = "invalid_score"
    INVALID_DART_COUNT = "invalid_dart_count"
    NOT_ALLOWED = "not_allowed"  # Wrong phase or a question is pending
    AWAITING_CHECKOUT_DART_COUNT = "awaiting_checkout_dart_count"
    AWAITING_DOUBLE_DISAMBIGUATION = "awaiting_double_disambiguation"
    LEG_WON = "leg_won"
    SET_WON = "set_won"
    MATCH_WON = "match_won"
    UNDONE = "undone"
    UNDO_BLOCKED = "undo_blocked"


REJECTED_OUTCOMES = frozenset({
    TurnOutcome.INVALID_SCORE,
    TurnOutcome.INVALID_DART_COUNT,
    TurnOutcome.NOT_ALLOWED,
    TurnOutcome.UNDO_BLOCKED,
})


@dataclass(frozen=True)
class TurnResult:
    """New match state plus what happened."""
    state: MatchState
    outcome: TurnOutcome
    message: str = ""

    @property
    def accepted(self) -> bool:
        """False if the action was refused and the state is unchanged."""
        return self.outcome not in REJECTED_OUTCOMES
