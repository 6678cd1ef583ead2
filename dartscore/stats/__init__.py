"""
Stats module - per-match statistics and career aggregation.
"""
from .accumulator import (
    FIRST9_TURNS,
    DartStats,
    FinalStatsRecord,
    finalize,
    register_bust,
    register_double_attempt,
    register_leg_won,
    register_turn,
    start_leg,
)
from .career import CareerStats, aggregate_career

__all__ = [
    "FIRST9_TURNS",
    "DartStats",
    "FinalStatsRecord",
    "finalize",
    "register_bust",
    "register_double_attempt",
    "register_leg_won",
    "register_turn",
    "start_leg",
    "CareerStats",
    "aggregate_career",
]
