"""
Turn order at the start of a match.

Who throws first is decided outside the scorekeeper (bulls, a wheel, a coin
toss). This module only turns that decision into the opening order.
"""
from dataclasses import dataclass
from typing import Sequence, Tuple
import logging

from dartscore.core import Player, PlayerId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartingOrder:
    """Players in throwing order, starter first."""
    players: Tuple[Player, ...]
    current_index: int = 0
    leg_starting_index: int = 0
    set_starting_index: int = 0

    @property
    def starter(self) -> Player:
        return self.players[self.current_index]


def resolve_starting_order(players: Sequence[Player], starting_index: int) -> StartingOrder:
    """
    Rotate the player list so the starter throws first.

    The relative order of the other players is kept: with A, B, C and B
    starting, the order becomes B, C, A.

    Args:
        players: Players in seating order
        starting_index: Index of the starter in `players`

    Raises:
        ValueError: If there are no players or the index is out of range
    """
    if not players:
        raise ValueError("At least one player is required")
    if not 0 <= starting_index < len(players):
        raise ValueError(f"starting_index {starting_index} out of range for {len(players)} players")

    ordered = tuple(players[starting_index:]) + tuple(players[:starting_index])
    logger.info(f"{ordered[0].name} throws first")
    return StartingOrder(players=ordered)


def resolve_from_ranking(players: Sequence[Player], ranking: Sequence[PlayerId]) -> StartingOrder:
    """
    Order players by an explicit ranking, e.g. closest to the bull first.

    Args:
        players: Players in any order
        ranking: Every player id exactly once, starter first

    Raises:
        ValueError: If the ranking is not a permutation of the player ids
    """
    if not players:
        raise ValueError("At least one player is required")

    by_id = {p.id: p for p in players}
    if len(by_id) != len(players):
        raise ValueError("Player ids must be unique")
    if len(ranking) != len(by_id) or set(ranking) != set(by_id):
        raise ValueError("Ranking must list every player exactly once")

    ordered = tuple(by_id[pid] for pid in ranking)
    logger.info(f"{ordered[0].name} throws first")
    return StartingOrder(players=ordered)
