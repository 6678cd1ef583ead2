"""
Game module - checkout arithmetic, match state and the 501 engine.
"""
from .checkout import (
    IMPOSSIBLE_SCORES,
    CheckoutInfo,
    analyze,
    checkout_dart_options,
    checkout_darts,
    is_valid_turn_score,
    min_darts_to_finish,
)
from .player import PlayerMatchState
from .game_modes import BestOf, FirstTo, WinCondition, win_condition_for
from .game_state import (
    AwaitingCheckoutDartCount,
    AwaitingDoubleDisambiguation,
    HistorySnapshot,
    MatchPhase,
    MatchState,
    Persistence,
    PersistenceStatus,
)
from .results import TurnOutcome, TurnResult
from .starting_order import StartingOrder, resolve_from_ranking, resolve_starting_order
from .engine import (
    apply_starting_order,
    can_undo,
    confirm_checkout_dart_count,
    confirm_double_disambiguation,
    create_match,
    start_match,
    submit_turn,
    undo,
)
from .session import MatchSession

__all__ = [
    "IMPOSSIBLE_SCORES",
    "CheckoutInfo",
    "analyze",
    "checkout_dart_options",
    "checkout_darts",
    "is_valid_turn_score",
    "min_darts_to_finish",
    "PlayerMatchState",
    "BestOf",
    "FirstTo",
    "WinCondition",
    "win_condition_for",
    "AwaitingCheckoutDartCount",
    "AwaitingDoubleDisambiguation",
    "HistorySnapshot",
    "MatchPhase",
    "MatchState",
    "Persistence",
    "PersistenceStatus",
    "TurnOutcome",
    "TurnResult",
    "StartingOrder",
    "resolve_from_ranking",
    "resolve_starting_order",
    "apply_starting_order",
    "can_undo",
    "confirm_checkout_dart_count",
    "confirm_double_disambiguation",
    "create_match",
    "start_match",
    "submit_turn",
    "undo",
    "MatchSession",
]
