"""
Tests for MatchSession and the one-time hand-off of final statistics.
"""
import asyncio

from dartscore.core import MatchConfig, PersistenceFailure, Player
from dartscore.game import MatchSession, PersistenceStatus, TurnOutcome
from dartscore.persistence import InMemoryStatisticsStore

PLAYERS = [Player(id=1, name="Alice"), Player(id=2, name="Bob")]


class FlakyStore(InMemoryStatisticsStore):
    """Fails the first `failures` player saves, counting every call."""

    def __init__(self, failures: int = 1):
        super().__init__()
        self.failures = failures
        self.create_calls = 0
        self.save_calls = 0

    async def create_match_record(self) -> str:
        self.create_calls += 1
        return await super().create_match_record()

    async def save_player_stats(self, match_id, player_id, record):
        self.save_calls += 1
        if player_id == 2 and self.failures > 0:
            self.failures -= 1
            raise ConnectionError("database unavailable")
        await super().save_player_stats(match_id, player_id, record)


def finished_session(store):
    session = MatchSession.start(PLAYERS, MatchConfig(), store)
    for score in (180, 0, 180, 0, 141):
        session.submit_turn(score)
    assert session.state.is_complete
    return session


def test_session_tracks_last_result():
    session = MatchSession.start(PLAYERS, MatchConfig())

    result = session.submit_turn(60)

    assert session.last_result is result
    assert session.state is result.state
    assert session.state.players[0].remaining_score == 441
    assert not session.can_undo

    session.submit_turn(60)
    assert session.can_undo
    assert session.undo().outcome is TurnOutcome.UNDONE


def test_unfinished_match_not_saved():
    store = InMemoryStatisticsStore()
    session = MatchSession.start(PLAYERS, MatchConfig(), store)
    session.submit_turn(60)

    assert asyncio.run(session.persist_result()) is None
    assert store.matches == {}


def test_no_store_configured():
    session = finished_session(None)

    assert asyncio.run(session.persist_result()) is None
    assert session.state.persistence.status is PersistenceStatus.IDLE


def test_result_saved_once():
    """Repeated requests reuse the first save."""
    store = InMemoryStatisticsStore()
    session = finished_session(store)

    match_id = asyncio.run(session.persist_result())

    assert match_id is not None
    assert session.is_persisted
    assert session.state.persistence.match_id == match_id
    assert set(store.matches) == {match_id}
    assert set(store.matches[match_id]) == {1, 2}
    assert store.matches[match_id][1] == session.state.final_stats[0]

    assert asyncio.run(session.persist_result()) == match_id
    assert len(store.matches) == 1


def test_concurrent_requests_save_once():
    """Two requests racing for the same finished match create one record."""
    store = FlakyStore(failures=0)
    session = finished_session(store)

    async def both():
        return await asyncio.gather(session.persist_result(), session.persist_result())

    results = asyncio.run(both())

    assert store.create_calls == 1
    assert store.save_calls == 2
    assert len(store.matches) == 1
    assert session.state.persistence.match_id in results


def test_failed_save_keeps_result_and_retries():
    """A store error is reported, the result stays, a retry completes it."""
    store = FlakyStore(failures=1)
    session = finished_session(store)

    assert asyncio.run(session.persist_result()) is None
    assert isinstance(session.last_error, PersistenceFailure)
    assert session.state.persistence.status is PersistenceStatus.IDLE
    assert session.state.is_complete
    assert session.state.winner.player.name == "Alice"

    match_id = asyncio.run(session.persist_result())

    assert match_id is not None
    assert session.last_error is None
    assert store.create_calls == 1
    # Alice was saved on the first try and is not written again
    assert store.save_calls == 3
    assert set(store.matches[match_id]) == {1, 2}


def test_from_order():
    from dartscore.game import resolve_starting_order

    session = MatchSession.from_order(resolve_starting_order(PLAYERS, 1), MatchConfig())

    assert session.state.current_player.player.name == "Bob"
