"""
501 match engine.

Pure transition functions over MatchState:

    create_match -> apply_starting_order -> submit_turn / confirm_* / undo

Each function takes a state and returns a TurnResult holding the next
state. Nothing is mutated and no rule violation is raised; refused actions
come back with the original state and a rejected outcome.

Turn flow:
1. Score outside 0-180 or not makeable with three darts -> INVALID_SCORE
2. Leaves below zero, leaves 1, or "finishes" from above 170 -> BUST
3. Reaches zero -> checkout (optionally asks darts at the double)
4. Otherwise the visit is applied (optionally asks darts at the double
   first, when the leave is a finish)
"""
from dataclasses import replace
from typing import Optional, Sequence, Tuple
import logging

from dartscore.core import MatchConfig, Player
from dartscore.stats import (
    DartStats,
    finalize,
    register_bust,
    register_double_attempt,
    register_leg_won,
    register_turn,
    start_leg,
)
from .checkout import (
    MAX_CHECKOUT,
    analyze,
    checkout_dart_options,
    checkout_darts,
    is_valid_turn_score,
)
from .game_modes import win_condition_for
from .game_state import (
    AwaitingCheckoutDartCount,
    AwaitingDoubleDisambiguation,
    MatchPhase,
    MatchState,
    Persistence,
)
from .player import PlayerMatchState
from .results import TurnOutcome, TurnResult
from .starting_order import StartingOrder, resolve_starting_order

logger = logging.getLogger(__name__)

# Darts assumed for a checkout when doubles are not tracked
UNTRACKED_CHECKOUT_DARTS = 3


def create_match(players: Sequence[Player], config: MatchConfig) -> MatchState:
    """
    New match waiting for its starting order.

    Args:
        players: Players in seating order
        config: Match rules

    Raises:
        ValueError: If no players are given
    """
    if not players:
        raise ValueError("At least one player is required")

    return MatchState(
        config=config,
        players=tuple(PlayerMatchState.initial(p, config.starting_score) for p in players),
        stats=tuple(DartStats() for _ in players),
    )


def apply_starting_order(state: MatchState, order: StartingOrder) -> MatchState:
    """
    Put the players in throwing order and open the first leg.

    Raises:
        ValueError: If the match already started or the order names other players
    """
    if state.phase is not MatchPhase.AWAITING_START_ORDER:
        raise ValueError("Starting order can only be set before the first throw")
    if {p.id for p in order.players} != {ps.player.id for ps in state.players}:
        raise ValueError("Starting order does not match the players in this match")

    started = replace(
        create_match(order.players, state.config),
        phase=MatchPhase.IN_PROGRESS,
        current_index=order.current_index,
        leg_starting_index=order.leg_starting_index,
        set_starting_index=order.set_starting_index,
    )
    logger.info(
        f"Match started: {state.config.describe()}, "
        f"{', '.join(p.name for p in order.players)}"
    )
    return started


def start_match(
        players: Sequence[Player],
        config: MatchConfig,
        starting_index: int = 0
) -> MatchState:
    """Create a match and start it with players[starting_index] throwing first."""
    state = create_match(players, config)
    return apply_starting_order(state, resolve_starting_order(players, starting_index))


def _refuse(state: MatchState, outcome: TurnOutcome, message: str) -> TurnResult:
    logger.warning(message)
    return TurnResult(state=state, outcome=outcome, message=message)


def _check_can_act(state: MatchState) -> Optional[TurnResult]:
    if state.phase is MatchPhase.AWAITING_START_ORDER:
        return _refuse(state, TurnOutcome.NOT_ALLOWED, "Match has not started")
    if state.is_complete:
        return _refuse(state, TurnOutcome.NOT_ALLOWED, "Match is already over")
    return None


def _replace_at(items: Tuple, index: int, value) -> Tuple:
    return items[:index] + (value,) + items[index + 1:]


def _next_index(state: MatchState, index: int) -> int:
    return (index + 1) % len(state.players)


def _is_plain_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def submit_turn(state: MatchState, score: int) -> TurnResult:
    """
    Score one visit for the player to throw.

    Args:
        state: Current match state
        score: Points scored with up to three darts

    Returns:
        TurnResult; state is unchanged when the outcome is rejected
    """
    refused = _check_can_act(state)
    if refused:
        return refused
    if state.pending is not None:
        return _refuse(state, TurnOutcome.NOT_ALLOWED, "Answer the open question first")

    if not _is_plain_int(score) or not is_valid_turn_score(score):
        return _refuse(state, TurnOutcome.INVALID_SCORE, f"{score} is not a possible score")

    index = state.current_index
    player = state.current_player
    new_remaining = player.remaining_score - score

    if (
        new_remaining < 0
        or new_remaining == 1
        or (new_remaining == 0 and player.remaining_score > MAX_CHECKOUT)
    ):
        busted = state.with_snapshot()
        busted = replace(
            busted,
            players=_replace_at(busted.players, index, player.bust()),
            stats=_replace_at(busted.stats, index, register_bust(busted.stats[index])),
            current_index=_next_index(state, index),
        )
        message = f"BUST! {player.player.name} stays on {player.remaining_score}"
        logger.info(message)
        return TurnResult(state=busted, outcome=TurnOutcome.BUST, message=message)

    state = state.with_snapshot()
    state = replace(
        state,
        stats=_replace_at(state.stats, index, register_turn(state.stats[index], score)),
    )
    logger.debug(f"{player.player.name} scored {score}, {new_remaining} left")

    if new_remaining == 0:
        return _checkout(state, index, score)

    if state.config.track_doubles:
        info = analyze(new_remaining)
        if info.possible:
            pending = AwaitingDoubleDisambiguation(
                player_index=index,
                score=score,
                new_remaining=new_remaining,
                options=frozenset({0}) | info.darts_on_double_options,
            )
            return TurnResult(
                state=replace(state, pending=pending),
                outcome=TurnOutcome.AWAITING_DOUBLE_DISAMBIGUATION,
                message=f"How many darts at a double? {sorted(pending.options)}",
            )

    return _apply_visit(state, index, score)


def _checkout(state: MatchState, index: int, finish: int) -> TurnResult:
    if not state.config.track_doubles:
        return _complete_leg(state, index, finish, darts_on_double=None)

    options = checkout_dart_options(finish)
    if options == frozenset({1}):
        return _complete_leg(state, index, finish, darts_on_double=1)

    pending = AwaitingCheckoutDartCount(player_index=index, finish=finish, options=options)
    return TurnResult(
        state=replace(state, pending=pending),
        outcome=TurnOutcome.AWAITING_CHECKOUT_DART_COUNT,
        message=f"Darts at the double for {finish}? {sorted(options)}",
    )


def _apply_visit(state: MatchState, index: int, score: int) -> TurnResult:
    player = state.players[index].apply_visit(score)
    state = replace(
        state,
        players=_replace_at(state.players, index, player),
        current_index=_next_index(state, index),
        pending=None,
    )
    return TurnResult(
        state=state,
        outcome=TurnOutcome.APPLIED,
        message=f"{player.player.name}: {score}, {player.remaining_score} left",
    )


def confirm_checkout_dart_count(state: MatchState, darts_on_double: int) -> TurnResult:
    """
    Answer the darts-at-the-double question after a checkout.

    Args:
        state: State waiting on AwaitingCheckoutDartCount
        darts_on_double: 1, 2 or 3 (must be one of the offered options)
    """
    refused = _check_can_act(state)
    if refused:
        return refused
    pending = state.pending
    if not isinstance(pending, AwaitingCheckoutDartCount):
        return _refuse(state, TurnOutcome.NOT_ALLOWED, "No checkout is waiting for a dart count")
    if not _is_plain_int(darts_on_double) or darts_on_double not in pending.options:
        return _refuse(
            state,
            TurnOutcome.INVALID_DART_COUNT,
            f"Choose one of {sorted(pending.options)} darts",
        )

    return _complete_leg(
        replace(state, pending=None),
        pending.player_index,
        pending.finish,
        darts_on_double=darts_on_double,
    )


def confirm_double_disambiguation(state: MatchState, darts_on_double: int) -> TurnResult:
    """
    Answer how many darts were thrown at a double in a visit that did not
    check out, then apply that visit.
    """
    refused = _check_can_act(state)
    if refused:
        return refused
    pending = state.pending
    if not isinstance(pending, AwaitingDoubleDisambiguation):
        return _refuse(state, TurnOutcome.NOT_ALLOWED, "No visit is waiting for a dart count")
    if not _is_plain_int(darts_on_double) or darts_on_double not in pending.options:
        return _refuse(
            state,
            TurnOutcome.INVALID_DART_COUNT,
            f"Choose one of {sorted(pending.options)} darts",
        )

    index = pending.player_index
    if darts_on_double:
        stats = register_double_attempt(state.stats[index], darts_on_double, 0)
        state = replace(state, stats=_replace_at(state.stats, index, stats))

    return _apply_visit(state, index, pending.score)


def _complete_leg(
        state: MatchState,
        index: int,
        finish: int,
        darts_on_double: Optional[int]
) -> TurnResult:
    """Apply the finishing visit and move on to the next leg, set or the end."""
    config = state.config
    stats = state.stats[index]

    if darts_on_double is None:
        darts = UNTRACKED_CHECKOUT_DARTS
    else:
        darts = checkout_darts(finish, darts_on_double)
        stats = register_double_attempt(stats, darts_on_double, 1)

    winner = state.players[index].apply_visit(finish, darts)
    stats = register_leg_won(stats, winner.darts_in_leg, finish)
    winner = replace(winner, legs_won=winner.legs_won + 1)

    players = _replace_at(state.players, index, winner)
    all_stats = _replace_at(state.stats, index, stats)
    leg_starting_index = _next_index(state, state.leg_starting_index)
    set_starting_index = state.set_starting_index
    outcome = TurnOutcome.LEG_WON
    message = f"{winner.player.name} wins the leg with {finish} ({winner.darts_in_leg} darts)"

    if config.uses_sets and winner.legs_won >= config.legs_per_set:
        winner = replace(winner, sets_won=winner.sets_won + 1)
        players = tuple(
            replace(winner if i == index else p, legs_won=0)
            for i, p in enumerate(players)
        )
        set_starting_index = _next_index(state, set_starting_index)
        leg_starting_index = set_starting_index
        outcome = TurnOutcome.SET_WON
        message = f"{winner.player.name} wins the set ({winner.sets_won} sets)"

    won = players[index].sets_won if config.uses_sets else players[index].legs_won
    match_won = win_condition_for(config).check_winner(won)

    players = tuple(p.new_leg(config.starting_score) for p in players)
    all_stats = tuple(start_leg(s) for s in all_stats)

    state = replace(
        state,
        players=players,
        stats=all_stats,
        current_index=leg_starting_index,
        leg_starting_index=leg_starting_index,
        set_starting_index=set_starting_index,
        pending=None,
    )

    if match_won:
        state = _complete_match(state, index)
        outcome = TurnOutcome.MATCH_WON
        message = f"{winner.player.name} wins the match!"

    logger.info(message)
    return TurnResult(state=state, outcome=outcome, message=message)


def _complete_match(state: MatchState, winner_index: int) -> MatchState:
    final_stats = tuple(
        finalize(stats, stats.last_finish, player.total_darts)
        for player, stats in zip(state.players, state.stats)
    )
    return replace(
        state,
        phase=MatchPhase.MATCH_COMPLETE,
        winner_index=winner_index,
        final_stats=final_stats,
    )


def can_undo(state: MatchState) -> bool:
    """
    True if the last action can be taken back.

    Undo never crosses a leg boundary: neither back into the first visit of
    a leg nor back over the checkout that ended the previous one.
    """
    if state.phase is not MatchPhase.IN_PROGRESS or not state.history:
        return False
    if state.history[-1].is_leg_start:
        return False
    if state.pending is None and state.is_leg_start:
        return False
    return True


def undo(state: MatchState) -> TurnResult:
    """
    Take back the last action, including any open question it raised.
    """
    if not can_undo(state):
        return _refuse(state, TurnOutcome.UNDO_BLOCKED, "Nothing to undo")

    snapshot = state.history[-1]
    restored = replace(state.restore(snapshot), history=state.history[:-1])
    player = restored.current_player
    message = f"Undone: {player.player.name} to throw on {player.remaining_score}"
    logger.info(message)
    return TurnResult(state=restored, outcome=TurnOutcome.UNDONE, message=message)


def with_persistence(state: MatchState, persistence: Persistence) -> MatchState:
    """Copy of a state with a new persistence marker."""
    return replace(state, persistence=persistence)
