"""
Match state value types.

MatchState is immutable: every engine transition returns a new value, so a
caller that swaps its reference in one assignment never exposes a half
updated scoreboard. Open questions to the player (how many darts at the
double?) live in a single `pending` field instead of a set of flags.
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Optional, Tuple, Union

from dartscore.core import MatchConfig
from dartscore.stats import DartStats, FinalStatsRecord
from .player import PlayerMatchState


class MatchPhase(Enum):
    """Lifecycle of a match."""
    AWAITING_START_ORDER = "awaiting_start_order"  # Players known, starter not yet
    IN_PROGRESS = "in_progress"
    MATCH_COMPLETE = "match_complete"  # Terminal


@dataclass(frozen=True)
class AwaitingCheckoutDartCount:
    """Checkout made; player must say how many darts went at the double."""
    player_index: int
    finish: int
    options: FrozenSet[int]


@dataclass(frozen=True)
class AwaitingDoubleDisambiguation:
    """
    Visit leaves a finish on; player must say how many darts (if any) were
    thrown at a double. The visit is applied once answered.
    """
    player_index: int
    score: int
    new_remaining: int
    options: FrozenSet[int]


PendingInteraction = Union[AwaitingCheckoutDartCount, AwaitingDoubleDisambiguation]


class PersistenceStatus(Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    DONE = "done"


@dataclass(frozen=True)
class Persistence:
    """Where the hand-off of the final statistics stands."""
    status: PersistenceStatus = PersistenceStatus.IDLE
    match_id: Optional[str] = None

    @classmethod
    def done(cls, match_id: str) -> "Persistence":
        return cls(PersistenceStatus.DONE, match_id)


@dataclass(frozen=True)
class HistorySnapshot:
    """Everything undo needs to put back."""
    players: Tuple[PlayerMatchState, ...]
    stats: Tuple[DartStats, ...]
    current_index: int
    leg_starting_index: int
    set_starting_index: int

    @property
    def is_leg_start(self) -> bool:
        """No player has thrown yet in this leg."""
        return all(p.turns_in_leg == 0 for p in self.players)


@dataclass(frozen=True)
class MatchState:
    """Complete state of one match."""
    config: MatchConfig
    players: Tuple[PlayerMatchState, ...]
    stats: Tuple[DartStats, ...]
    phase: MatchPhase = MatchPhase.AWAITING_START_ORDER

    current_index: int = 0
    leg_starting_index: int = 0
    set_starting_index: int = 0

    pending: Optional[PendingInteraction] = None
    history: Tuple[HistorySnapshot, ...] = ()

    winner_index: Optional[int] = None
    final_stats: Tuple[FinalStatsRecord, ...] = ()
    persistence: Persistence = field(default_factory=Persistence)

    @property
    def current_player(self) -> PlayerMatchState:
        return self.players[self.current_index]

    @property
    def is_complete(self) -> bool:
        return self.phase is MatchPhase.MATCH_COMPLETE

    @property
    def winner(self) -> Optional[PlayerMatchState]:
        if self.winner_index is None:
            return None
        return self.players[self.winner_index]

    @property
    def is_leg_start(self) -> bool:
        return all(p.turns_in_leg == 0 for p in self.players)

    def snapshot(self) -> HistorySnapshot:
        return HistorySnapshot(
            players=self.players,
            stats=self.stats,
            current_index=self.current_index,
            leg_starting_index=self.leg_starting_index,
            set_starting_index=self.set_starting_index,
        )

    def with_snapshot(self) -> "MatchState":
        """Copy with the current position pushed onto the undo stack."""
        return replace(self, history=self.history + (self.snapshot(),))

    def restore(self, snapshot: HistorySnapshot) -> "MatchState":
        """Copy with the tracked fields taken from `snapshot` and no pending question."""
        return replace(
            self,
            players=snapshot.players,
            stats=snapshot.stats,
            current_index=snapshot.current_index,
            leg_starting_index=snapshot.leg_starting_index,
            set_starting_index=snapshot.set_starting_index,
            pending=None,
        )
