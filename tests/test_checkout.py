"""
Tests for checkout arithmetic.
"""
import pytest

from dartscore.game.checkout import (
    DART_VALUES,
    IMPOSSIBLE_SCORES,
    analyze,
    checkout_dart_options,
    checkout_darts,
    is_double_value,
    is_valid_turn_score,
    min_darts_to_finish,
)


@pytest.mark.parametrize("remaining", [170, 40, 32, 2, 50, 100])
def test_finishable_scores(remaining):
    """Even scores up to 170 (bogeys aside) can be checked out."""
    assert analyze(remaining).possible


@pytest.mark.parametrize("remaining", [1, 171, 0, 3, -4, 99, 180])
def test_unfinishable_scores(remaining):
    """Below 2, above 170 and odd leaves are reported as impossible."""
    info = analyze(remaining)
    assert not info.possible
    assert info.darts_on_double_options == frozenset()
    assert info.dart_count_options == frozenset()
    assert info.min_darts_on_double == 0


def test_170_needs_all_three_darts():
    """170 is T20 T20 Bull: only the last dart goes at a double."""
    info = analyze(170)
    assert info.darts_on_double_options == frozenset({1})
    assert info.min_darts_to_finish == 3
    assert 3 in info.dart_count_options
    assert info.dart_count_options == frozenset({3})


def test_40_allows_every_double_count():
    """D20 can be hit with the first, second or third dart."""
    info = analyze(40)
    assert info.darts_on_double_options == frozenset({1, 2, 3})
    assert info.min_darts_to_finish == 1
    assert info.max_darts_on_double == 3
    assert info.dart_count_options == frozenset({1, 2, 3})


def test_32_allows_every_double_count():
    """D16 can be hit with the first, second or third dart."""
    assert analyze(32).darts_on_double_options == frozenset({1, 2, 3})


def test_2_is_a_single_dart_finish():
    """D1 cannot be set up by another dart."""
    assert analyze(2).darts_on_double_options == frozenset({1})


def test_bull_counts_as_double():
    """50 is finished with one dart at the bull."""
    info = analyze(50)
    assert 1 in info.darts_on_double_options
    assert info.min_darts_to_finish == 1


def test_min_darts_to_finish():
    """Fewest darts needed, odd finishes included."""
    assert min_darts_to_finish(40) == 1
    assert min_darts_to_finish(60) == 2   # 20, D20
    assert min_darts_to_finish(100) == 2  # T20, D20
    assert min_darts_to_finish(99) == 3   # T19, 10, D16
    assert min_darts_to_finish(170) == 3
    assert min_darts_to_finish(159) == 0  # bogey number
    assert min_darts_to_finish(1) == 0
    assert min_darts_to_finish(171) == 0


def test_dart_values():
    """Singles, doubles, trebles and both bulls, each value once."""
    assert min(DART_VALUES) == 1
    assert max(DART_VALUES) == 60
    assert 25 in DART_VALUES and 50 in DART_VALUES
    assert len(DART_VALUES) == len(set(DART_VALUES))
    assert is_double_value(40)
    assert is_double_value(50)
    assert not is_double_value(42)
    assert not is_double_value(25)


def test_impossible_turn_scores():
    """Totals three darts cannot make are rejected."""
    assert IMPOSSIBLE_SCORES == {179, 178, 176, 175, 173, 172, 169, 168, 166, 165, 163, 162, 159}
    for score in IMPOSSIBLE_SCORES:
        assert not is_valid_turn_score(score)

    assert is_valid_turn_score(0)
    assert is_valid_turn_score(180)
    assert is_valid_turn_score(177)
    assert not is_valid_turn_score(-1)
    assert not is_valid_turn_score(181)


def test_checkout_bands():
    """Finish size decides which dart counts the player may report."""
    for finish in (2, 16, 40, 50):
        assert checkout_dart_options(finish) == frozenset({1, 2, 3})

    for finish in (99, 101, 120, 158, 160, 161, 164, 167, 170):
        assert checkout_dart_options(finish) == frozenset({1})

    for finish in (3, 41, 60, 98, 100):
        assert checkout_dart_options(finish) == frozenset({1, 2})


def test_checkout_darts():
    """Darts used on a finish are never fewer than the finish needs."""
    assert checkout_darts(40, 1) == 1
    assert checkout_darts(40, 3) == 3
    assert checkout_darts(60, 1) == 2
    assert checkout_darts(60, 2) == 2
    assert checkout_darts(120, 1) == 3


def test_dart_count_options():
    """Number of darts a finish can be made with, setup darts included."""
    assert analyze(2).dart_count_options == frozenset({1})
    assert analyze(32).dart_count_options == frozenset({1, 2, 3})
    assert analyze(100).dart_count_options == frozenset({2, 3})
    assert analyze(160).dart_count_options == frozenset({3})


def test_auto_band_includes_two_dart_finishes():
    """110 (T20, Bull) is booked as one dart at the double but uses two darts."""
    assert checkout_dart_options(110) == frozenset({1})
    assert min_darts_to_finish(110) == 2
    assert checkout_darts(110, 1) == 2
