"""
Tests for career statistics.
"""
import pytest

from dartscore.stats import CareerStats, FinalStatsRecord, aggregate_career


def record(**overrides):
    values = dict(
        three_dart_avg=0.0, first9_avg=0.0, finish=0, highest_finish=0,
        doubles_hit=0, doubles_thrown=0, checkout_percentage=0.0,
        double_percentage=0.0, highest_score=0, one_eighties=0,
        scores_140_plus=0, scores_100_plus=0, scores_80_plus=0,
        total_turns=0, total_darts=0, leg_darts=(), best_leg=None,
        worst_leg=None, legs_played=0,
    )
    values.update(overrides)
    return FinalStatsRecord(**values)


def test_no_records():
    assert aggregate_career([]) == CareerStats()


def test_averages_weighted_by_turns():
    """A long match counts for more than a short one."""
    career = aggregate_career([
        record(three_dart_avg=60.0, first9_avg=70.0, total_turns=30),
        record(three_dart_avg=90.0, first9_avg=40.0, total_turns=10),
    ])

    assert career.matches == 2
    assert career.three_dart_avg == pytest.approx((60 * 30 + 90 * 10) / 40)
    # Both matches contribute three opening turns
    assert career.first9_avg == pytest.approx(55.0)


def test_first9_weight_capped_by_turns():
    career = aggregate_career([
        record(first9_avg=100.0, total_turns=1),
        record(first9_avg=40.0, total_turns=12),
    ])
    assert career.first9_avg == pytest.approx((100 * 1 + 40 * 3) / 4)


def test_top_finishes():
    """Five highest real finishes, duplicates kept, highest first."""
    finishes = [40, 170, 0, 121, 121, 2, 96, 180, 1]
    career = aggregate_career([record(finish=f) for f in finishes])

    assert career.top_finishes == [170, 121, 121, 96, 40]
    assert career.finishes_above_100 == 3


def test_totals_and_best_leg():
    career = aggregate_career([
        record(one_eighties=2, scores_140_plus=3, scores_100_plus=4, scores_80_plus=5, best_leg=18),
        record(one_eighties=1, scores_140_plus=1, scores_100_plus=1, scores_80_plus=1, best_leg=15),
        record(best_leg=None),
    ])

    assert career.total_180s == 3
    assert career.total_140_plus == 4
    assert career.total_100_plus == 5
    assert career.total_80_plus == 6
    assert career.best_leg == 15


def test_zero_turns_average():
    career = aggregate_career([record(three_dart_avg=0.0, total_turns=0)])
    assert career.three_dart_avg == 0.0
    assert career.first9_avg == 0.0
