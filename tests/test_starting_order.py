"""
Tests for starting order resolution.
"""
import pytest

from dartscore.core import MatchConfig, Player
from dartscore.game import (
    MatchPhase,
    apply_starting_order,
    create_match,
    resolve_from_ranking,
    resolve_starting_order,
)

A = Player(id="a", name="A")
B = Player(id="b", name="B")
C = Player(id="c", name="C")


def test_rotation_keeps_relative_order():
    """With B starting, A, B, C becomes B, C, A."""
    order = resolve_starting_order([A, B, C], 1)

    assert order.players == (B, C, A)
    assert order.current_index == 0
    assert order.leg_starting_index == 0
    assert order.set_starting_index == 0
    assert order.starter == B


def test_rotation_first_player():
    assert resolve_starting_order([A, B, C], 0).players == (A, B, C)


@pytest.mark.parametrize("index", [-1, 3, 10])
def test_rotation_index_out_of_range(index):
    with pytest.raises(ValueError):
        resolve_starting_order([A, B, C], index)


def test_rotation_no_players():
    with pytest.raises(ValueError):
        resolve_starting_order([], 0)


def test_ranking_order():
    """Players are ordered exactly as ranked."""
    order = resolve_from_ranking([A, B, C], ["c", "a", "b"])
    assert order.players == (C, A, B)


@pytest.mark.parametrize("ranking", [
    ["a", "b"],
    ["a", "b", "b"],
    ["a", "b", "d"],
    ["a", "b", "c", "a"],
])
def test_ranking_must_be_permutation(ranking):
    with pytest.raises(ValueError):
        resolve_from_ranking([A, B, C], ranking)


def test_apply_starting_order():
    """Applying the order opens the first leg."""
    state = create_match([A, B, C], MatchConfig())
    assert state.phase is MatchPhase.AWAITING_START_ORDER

    started = apply_starting_order(state, resolve_starting_order([A, B, C], 2))

    assert started.phase is MatchPhase.IN_PROGRESS
    assert [p.player for p in started.players] == [C, A, B]
    assert started.current_player.player == C


def test_apply_starting_order_twice():
    state = create_match([A, B], MatchConfig())
    started = apply_starting_order(state, resolve_starting_order([A, B], 0))

    with pytest.raises(ValueError):
        apply_starting_order(started, resolve_starting_order([A, B], 1))


def test_apply_starting_order_other_players():
    state = create_match([A, B], MatchConfig())

    with pytest.raises(ValueError):
        apply_starting_order(state, resolve_starting_order([A, C], 0))
