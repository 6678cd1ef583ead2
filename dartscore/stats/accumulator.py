"""
Per-player match statistics.

DartStats is an immutable running tally. Every register_* function returns a
new value and leaves the caller's reference untouched, which is what lets the
match engine keep old values on its undo stack.
"""
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Optional, Tuple

# Turns per leg counted towards the first-9 (opening) average
FIRST9_TURNS = 3


@dataclass(frozen=True)
class DartStats:
    """Running statistics for one player over a whole match."""
    total_score: int = 0
    total_turns: int = 0

    # Opening average: the first three visits of every leg
    first9_score: int = 0
    first9_turns: int = 0
    turns_in_leg: int = 0

    doubles_hit: int = 0
    doubles_thrown: int = 0

    one_eighties: int = 0
    scores_140_plus: int = 0  # 140-179
    scores_100_plus: int = 0  # 100-139
    scores_80_plus: int = 0  # 80-99

    highest_score: int = 0
    highest_finish: int = 0
    last_finish: int = 0

    leg_darts: Tuple[int, ...] = ()  # Darts used for every leg won


@dataclass(frozen=True)
class FinalStatsRecord:
    """
    Statistics row handed to the statistics store when a match ends.

    Both averages are per three darts.
    """
    three_dart_avg: float
    first9_avg: float
    finish: int
    highest_finish: int
    doubles_hit: int
    doubles_thrown: int
    checkout_percentage: float
    double_percentage: float
    highest_score: int
    one_eighties: int
    scores_140_plus: int
    scores_100_plus: int
    scores_80_plus: int
    total_turns: int
    total_darts: int
    leg_darts: Tuple[int, ...]
    best_leg: Optional[int]
    worst_leg: Optional[int]
    legs_played: int

    def to_dict(self) -> Dict[str, Any]:
        """Plain dictionary suitable for YAML/JSON storage."""
        data = asdict(self)
        data["leg_darts"] = list(self.leg_darts)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FinalStatsRecord":
        values = dict(data)
        values["leg_darts"] = tuple(values.get("leg_darts") or ())
        return cls(**values)


def register_turn(stats: DartStats, turn_score: int) -> DartStats:
    """
    Add one accepted visit to the tally.

    Args:
        stats: Current statistics
        turn_score: Points scored in the visit (0-180)

    Returns:
        Updated statistics
    """
    in_first9 = stats.turns_in_leg < FIRST9_TURNS

    return replace(
        stats,
        total_score=stats.total_score + turn_score,
        total_turns=stats.total_turns + 1,
        turns_in_leg=stats.turns_in_leg + 1,
        first9_score=stats.first9_score + (turn_score if in_first9 else 0),
        first9_turns=stats.first9_turns + (1 if in_first9 else 0),
        one_eighties=stats.one_eighties + (turn_score == 180),
        scores_140_plus=stats.scores_140_plus + (140 <= turn_score < 180),
        scores_100_plus=stats.scores_100_plus + (100 <= turn_score < 140),
        scores_80_plus=stats.scores_80_plus + (80 <= turn_score < 100),
        highest_score=max(stats.highest_score, turn_score),
    )


def register_bust(stats: DartStats) -> DartStats:
    """
    Record a busted visit.

    No points are added and the visit is not a scoring turn, but it still
    uses up one of the player's opening visits of the leg (scored as 0).
    """
    in_first9 = stats.turns_in_leg < FIRST9_TURNS

    return replace(
        stats,
        turns_in_leg=stats.turns_in_leg + 1,
        first9_turns=stats.first9_turns + (1 if in_first9 else 0),
    )


def register_double_attempt(
        stats: DartStats,
        darts_on_double: int,
        hits_on_double: int
) -> DartStats:
    """
    Record darts thrown at a double and whether the double was hit.

    Raises:
        ValueError: If the counts are inconsistent
    """
    if darts_on_double < 0 or darts_on_double > 3:
        raise ValueError("darts_on_double must be between 0 and 3")
    if hits_on_double not in (0, 1) or hits_on_double > darts_on_double:
        raise ValueError("hits_on_double must be 0 or 1 and not exceed darts_on_double")

    return replace(
        stats,
        doubles_thrown=stats.doubles_thrown + darts_on_double,
        doubles_hit=stats.doubles_hit + hits_on_double,
    )


def start_leg(stats: DartStats) -> DartStats:
    """Open a new leg: the next three visits count for the first 9."""
    return replace(stats, turns_in_leg=0)


def register_leg_won(stats: DartStats, darts: int, finish: int) -> DartStats:
    """Record a won leg: darts used and the finishing score."""
    return replace(
        stats,
        leg_darts=stats.leg_darts + (darts,),
        highest_finish=max(stats.highest_finish, finish),
        last_finish=finish,
    )


def _ratio(numerator: float, denominator: float, scale: float = 1.0) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator * scale


def finalize(stats: DartStats, finish_score: int, total_darts: int) -> FinalStatsRecord:
    """
    Derive the stored statistics row.

    The three-dart average is total points per dart times three, over every
    dart thrown in the match (busted visits included).

    Args:
        stats: Final running statistics
        finish_score: Finish to record for this match (0 if none)
        total_darts: Darts the player threw over the whole match

    Returns:
        FinalStatsRecord
    """
    double_rate = _ratio(stats.doubles_hit, stats.doubles_thrown, 100.0)

    return FinalStatsRecord(
        three_dart_avg=_ratio(stats.total_score, total_darts, 3.0),
        first9_avg=_ratio(stats.first9_score, stats.first9_turns),
        finish=finish_score,
        highest_finish=stats.highest_finish,
        doubles_hit=stats.doubles_hit,
        doubles_thrown=stats.doubles_thrown,
        checkout_percentage=double_rate,
        double_percentage=double_rate,
        highest_score=stats.highest_score,
        one_eighties=stats.one_eighties,
        scores_140_plus=stats.scores_140_plus,
        scores_100_plus=stats.scores_100_plus,
        scores_80_plus=stats.scores_80_plus,
        total_turns=stats.total_turns,
        total_darts=total_darts,
        leg_darts=stats.leg_darts,
        best_leg=min(stats.leg_darts) if stats.leg_darts else None,
        worst_leg=max(stats.leg_darts) if stats.leg_darts else None,
        legs_played=len(stats.leg_darts),
    )
