"""
Tests for the statistics stores.
"""
import asyncio
from pathlib import Path

import pytest

from dartscore.core import PersistenceFailure, load_yaml
from dartscore.persistence import InMemoryStatisticsStore, YamlStatisticsStore, new_match_id
from dartscore.stats import DartStats, finalize, register_leg_won, register_turn


def sample_record(score: int = 100):
    stats = register_leg_won(register_turn(DartStats(), score), 15, 40)
    return finalize(stats, 40, 15)


def test_new_match_id():
    first, second = new_match_id(), new_match_id()
    assert first.startswith("game_")
    assert first != second


def test_memory_store_save_and_load():
    store = InMemoryStatisticsStore()
    record = sample_record()

    async def run():
        match_id = await store.create_match_record()
        await store.save_player_stats(match_id, 7, record)
        return await store.load_player_records(7)

    assert asyncio.run(run()) == [record]


def test_memory_store_rejects_duplicates():
    store = InMemoryStatisticsStore()

    async def run():
        match_id = await store.create_match_record()
        await store.save_player_stats(match_id, 7, sample_record())
        await store.save_player_stats(match_id, 7, sample_record())

    with pytest.raises(PersistenceFailure):
        asyncio.run(run())


def test_memory_store_unknown_match():
    store = InMemoryStatisticsStore()

    with pytest.raises(PersistenceFailure):
        asyncio.run(store.save_player_stats("game_missing", 7, sample_record()))


def test_yaml_store_writes_file(tmp_path: Path):
    """Rows are written under matches/<id>/players/<player id>."""
    path = tmp_path / "stats" / "dart_stats.yaml"
    store = YamlStatisticsStore(path)
    record = sample_record(140)

    async def run():
        match_id = await store.create_match_record()
        await store.save_player_stats(match_id, 7, record)
        return match_id

    match_id = asyncio.run(run())

    data = load_yaml(path)
    row = data["matches"][match_id]["players"][7]
    assert row["three_dart_avg"] == pytest.approx(28.0)
    assert row["scores_140_plus"] == 1
    assert row["leg_darts"] == [15]
    assert "created_at" in data["matches"][match_id]


def test_yaml_store_load_across_instances(tmp_path: Path):
    """A second store on the same file sees earlier matches."""
    path = tmp_path / "dart_stats.yaml"
    record = sample_record()

    async def save():
        store = YamlStatisticsStore(path)
        for _ in range(2):
            match_id = await store.create_match_record()
            await store.save_player_stats(match_id, 7, record)

    asyncio.run(save())
    loaded = asyncio.run(YamlStatisticsStore(path).load_player_records(7))

    assert loaded == [record, record]
    assert asyncio.run(YamlStatisticsStore(path).load_player_records(8)) == []


def test_yaml_store_rejects_duplicates(tmp_path: Path):
    store = YamlStatisticsStore(tmp_path / "dart_stats.yaml")

    async def run():
        match_id = await store.create_match_record()
        await store.save_player_stats(match_id, 7, sample_record())
        await store.save_player_stats(match_id, 7, sample_record())

    with pytest.raises(PersistenceFailure):
        asyncio.run(run())


def test_yaml_store_unknown_match(tmp_path: Path):
    store = YamlStatisticsStore(tmp_path / "dart_stats.yaml")

    with pytest.raises(PersistenceFailure):
        asyncio.run(store.save_player_stats("game_missing", 7, sample_record()))


def test_yaml_store_missing_file_loads_nothing(tmp_path: Path):
    store = YamlStatisticsStore(tmp_path / "missing.yaml")
    assert asyncio.run(store.load_player_records(7)) == []
