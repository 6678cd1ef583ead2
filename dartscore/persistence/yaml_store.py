"""
Statistics store backed by a single YAML file.

Layout:

    matches:
      game_3f2a9c1b7d4e:
        created_at: '2026-10-19T20:15:03+00:00'
        players:
          7: {three_dart_avg: 54.3, ...}

Every write rewrites the file through update_yaml, so a crash leaves
either the old or the new file, never a partial one.
"""
import asyncio
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Union
import logging

from dartscore.core import PersistenceFailure, PlayerId, load_yaml, update_yaml
from dartscore.stats import FinalStatsRecord
from .base import StatisticsStore
from .memory import new_match_id

logger = logging.getLogger(__name__)


class YamlStatisticsStore(StatisticsStore):
    """
    File-backed store; file IO runs in a worker thread.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Args:
            path: YAML file to read and write (created on first save)
        """
        self.path = Path(path)

    def _create(self) -> str:
        match_id = new_match_id()

        def add_match(data: Dict[str, Any]) -> None:
            data["matches"][match_id] = {
                "created_at": datetime.now(tz=timezone.utc).isoformat(),
                "players": {},
            }

        update_yaml(self.path, add_match, defaults={"matches": {}})
        logger.info(f"Created match record {match_id} in {self.path}")
        return match_id

    def _save(self, match_id: str, player_id: PlayerId, record: FinalStatsRecord) -> None:
        def add_row(data: Dict[str, Any]) -> None:
            match = data["matches"].get(match_id)
            if match is None:
                raise PersistenceFailure(f"Unknown match {match_id}", match_id)

            players = match.get("players") or {}
            if player_id in players:
                raise PersistenceFailure(
                    f"Statistics for player {player_id} already saved in {match_id}",
                    match_id,
                )
            players[player_id] = record.to_dict()
            match["players"] = players

        update_yaml(self.path, add_row, defaults={"matches": {}})

    def _load(self, player_id: PlayerId) -> List[FinalStatsRecord]:
        data = load_yaml(self.path, missing_ok=True)
        records = []
        for match in (data.get("matches") or {}).values():
            row = (match.get("players") or {}).get(player_id)
            if row is not None:
                records.append(FinalStatsRecord.from_dict(row))
        return records

    async def create_match_record(self) -> str:
        return await asyncio.to_thread(self._create)

    async def save_player_stats(
            self,
            match_id: str,
            player_id: PlayerId,
            record: FinalStatsRecord
    ) -> None:
        await asyncio.to_thread(self._save, match_id, player_id, record)

    async def load_player_records(self, player_id: PlayerId) -> List[FinalStatsRecord]:
        return await asyncio.to_thread(self._load, player_id)
