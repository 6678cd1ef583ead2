"""
Statistics store interface.

The scorekeeper hands each finished match to a store exactly once: one
create_match_record() call, then one save_player_stats() call per player.
Stores are async because the real ones sit behind a network or disk.
"""
from abc import ABC, abstractmethod
from typing import List

from dartscore.core import PlayerId
from dartscore.stats import FinalStatsRecord


class StatisticsStore(ABC):
    """Abstract base class for statistics stores."""

    @abstractmethod
    async def create_match_record(self) -> str:
        """
        Open a record for a finished match.

        Returns:
            New match id
        """
        pass

    @abstractmethod
    async def save_player_stats(
            self,
            match_id: str,
            player_id: PlayerId,
            record: FinalStatsRecord
    ) -> None:
        """
        Store one player's statistics for a match.

        Raises:
            PersistenceFailure: If the match is unknown or the player's row
                already exists
        """
        pass

    @abstractmethod
    async def load_player_records(self, player_id: PlayerId) -> List[FinalStatsRecord]:
        """All stored rows for a player, oldest match first."""
        pass
