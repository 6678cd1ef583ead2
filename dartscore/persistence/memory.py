"""
In-memory statistics store for tests and one-off sessions.
"""
from typing import Dict, List
from uuid import uuid4
import logging

from dartscore.core import PersistenceFailure, PlayerId
from dartscore.stats import FinalStatsRecord
from .base import StatisticsStore

logger = logging.getLogger(__name__)


def new_match_id() -> str:
    """Unique match id, e.g. 'game_3f2a9c1b7d4e'."""
    return f"game_{uuid4().hex[:12]}"


class InMemoryStatisticsStore(StatisticsStore):
    """
    Keeps every match in a dict; nothing survives the process.
    """

    def __init__(self) -> None:
        self.matches: Dict[str, Dict[PlayerId, FinalStatsRecord]] = {}

    async def create_match_record(self) -> str:
        match_id = new_match_id()
        self.matches[match_id] = {}
        logger.debug(f"Created match record {match_id}")
        return match_id

    async def save_player_stats(
            self,
            match_id: str,
            player_id: PlayerId,
            record: FinalStatsRecord
    ) -> None:
        rows = self.matches.get(match_id)
        if rows is None:
            raise PersistenceFailure(f"Unknown match {match_id}", match_id)
        if player_id in rows:
            raise PersistenceFailure(
                f"Statistics for player {player_id} already saved in {match_id}",
                match_id,
            )
        rows[player_id] = record

    async def load_player_records(self, player_id: PlayerId) -> List[FinalStatsRecord]:
        return [rows[player_id] for rows in self.matches.values() if player_id in rows]
