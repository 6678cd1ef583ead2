"""
Career statistics across stored matches.

Folds the per-match rows a statistics store holds for one player into the
figures shown on a player's statistics screen.
"""
from dataclasses import dataclass, field
from typing import Iterable, List, Optional
import logging

import numpy as np

from .accumulator import FinalStatsRecord

logger = logging.getLogger(__name__)

TOP_FINISHES = 5


@dataclass(frozen=True)
class CareerStats:
    """Aggregated statistics for one player."""
    matches: int = 0
    three_dart_avg: float = 0.0  # Weighted by turns per match
    first9_avg: float = 0.0  # Weighted by opening turns per match
    top_finishes: List[int] = field(default_factory=list)
    best_leg: Optional[int] = None
    total_180s: int = 0
    total_140_plus: int = 0
    total_100_plus: int = 0
    total_80_plus: int = 0
    finishes_above_100: int = 0


def _weighted_mean(values: np.ndarray, weights: np.ndarray) -> float:
    if weights.sum() == 0:
        return 0.0
    return float(np.average(values, weights=weights))


def aggregate_career(records: Iterable[FinalStatsRecord]) -> CareerStats:
    """
    Combine a player's stored match rows.

    Args:
        records: Stored rows for one player

    Returns:
        CareerStats (all zero for no records)
    """
    records = list(records)
    if not records:
        return CareerStats()

    turns = np.array([r.total_turns for r in records], dtype=np.float64)
    averages = np.array([r.three_dart_avg for r in records], dtype=np.float64)
    first9 = np.array([r.first9_avg for r in records], dtype=np.float64)

    # Opening turns are not stored per match; a match contributes at most three
    first9_turns = np.minimum(turns, 3)

    # Only genuine finishes (2-170) count; duplicates are kept
    finishes = np.array([r.finish for r in records], dtype=np.int64)
    finishes = finishes[(finishes >= 2) & (finishes <= 170)]
    top = np.sort(finishes)[::-1][:TOP_FINISHES]

    best_legs = [r.best_leg for r in records if r.best_leg is not None]

    career = CareerStats(
        matches=len(records),
        three_dart_avg=_weighted_mean(averages, turns),
        first9_avg=_weighted_mean(first9, first9_turns),
        top_finishes=[int(f) for f in top],
        best_leg=min(best_legs) if best_legs else None,
        total_180s=sum(r.one_eighties for r in records),
        total_140_plus=sum(r.scores_140_plus for r in records),
        total_100_plus=sum(r.scores_100_plus for r in records),
        total_80_plus=sum(r.scores_80_plus for r in records),
        finishes_above_100=int(np.count_nonzero(finishes > 100)),
    )
    logger.debug(f"Aggregated {career.matches} matches: avg {career.three_dart_avg:.2f}")
    return career
