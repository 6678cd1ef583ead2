"""
Match session: the object a UI holds on to.

Wraps the pure engine with the current MatchState and owns the single
hand-off of the final statistics to a StatisticsStore. The UI may ask for
that hand-off as often as it likes (every re-render that sees a finished
match); only the first request reaches the store.
"""
from typing import Optional, Sequence, Set
import logging

from dartscore.core import MatchConfig, PersistenceFailure, Player, PlayerId
from dartscore.persistence import StatisticsStore
from . import engine
from .game_state import MatchState, Persistence, PersistenceStatus
from .results import TurnResult
from .starting_order import StartingOrder

logger = logging.getLogger(__name__)


class MatchSession:
    """
    Stateful wrapper around one match.

    Usage:
        session = MatchSession.start(players, config, store, starting_index=1)
        session.submit_turn(100)
        ...
        if session.state.is_complete:
            await session.persist_result()
    """

    def __init__(self, state: MatchState, store: Optional[StatisticsStore] = None):
        """
        Args:
            state: Initial match state (usually fresh from the engine)
            store: Where finished matches are saved (None = not saved)
        """
        self.state = state
        self.store = store
        self.last_result: Optional[TurnResult] = None
        self.last_error: Optional[PersistenceFailure] = None

        # Re-entrancy latch for persist_result
        self._saving = False
        # Progress of a partly failed save, reused on retry
        self._match_id: Optional[str] = None
        self._saved_players: Set[PlayerId] = set()

    @classmethod
    def start(
            cls,
            players: Sequence[Player],
            config: MatchConfig,
            store: Optional[StatisticsStore] = None,
            starting_index: int = 0
    ) -> "MatchSession":
        """Start a match with players[starting_index] to throw first."""
        return cls(engine.start_match(players, config, starting_index), store)

    @classmethod
    def from_order(
            cls,
            order: StartingOrder,
            config: MatchConfig,
            store: Optional[StatisticsStore] = None
    ) -> "MatchSession":
        """Start a match from an already resolved starting order."""
        state = engine.create_match(order.players, config)
        return cls(engine.apply_starting_order(state, order), store)

    def _commit(self, result: TurnResult) -> TurnResult:
        self.state = result.state
        self.last_result = result
        return result

    def submit_turn(self, score: int) -> TurnResult:
        return self._commit(engine.submit_turn(self.state, score))

    def confirm_checkout_dart_count(self, darts_on_double: int) -> TurnResult:
        return self._commit(engine.confirm_checkout_dart_count(self.state, darts_on_double))

    def confirm_double_disambiguation(self, darts_on_double: int) -> TurnResult:
        return self._commit(engine.confirm_double_disambiguation(self.state, darts_on_double))

    def undo(self) -> TurnResult:
        return self._commit(engine.undo(self.state))

    @property
    def can_undo(self) -> bool:
        return engine.can_undo(self.state)

    @property
    def is_persisted(self) -> bool:
        return self.state.persistence.status is PersistenceStatus.DONE

    async def persist_result(self) -> Optional[str]:
        """
        Save the final statistics of a finished match.

        Safe to call repeatedly: a match already saved returns its id, a save
        in progress is not started twice, and an unfinished match is ignored.
        Store errors are logged and kept in `last_error`; the match result
        stays available and a later call retries.

        Returns:
            Match id once saved, None otherwise
        """
        state = self.state
        if not state.is_complete:
            return None
        if state.persistence.status is PersistenceStatus.DONE:
            logger.debug(f"Match {state.persistence.match_id} already saved")
            return state.persistence.match_id
        if self._saving:
            logger.debug("Save already in progress")
            return None
        if self.store is None:
            logger.info("No statistics store configured, result not saved")
            return None

        self._saving = True
        self.state = engine.with_persistence(state, Persistence(PersistenceStatus.IN_FLIGHT))
        try:
            if self._match_id is None:
                self._match_id = await self.store.create_match_record()

            for player_state, record in zip(state.players, state.final_stats):
                player_id = player_state.player.id
                if player_id in self._saved_players:
                    continue
                await self.store.save_player_stats(self._match_id, player_id, record)
                self._saved_players.add(player_id)

        except Exception as e:
            self.last_error = e if isinstance(e, PersistenceFailure) else PersistenceFailure(
                f"Saving match statistics failed: {e}", self._match_id
            )
            logger.error(f"Failed to save match statistics: {e}")
            self.state = engine.with_persistence(self.state, Persistence())
            return None

        finally:
            self._saving = False

        self.last_error = None
        self.state = engine.with_persistence(self.state, Persistence.done(self._match_id))
        logger.info(f"Match statistics saved as {self._match_id}")
        return self._match_id
