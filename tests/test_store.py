from datetime import datetime, timedelta

import pytest
from sqlalchemy import inspect

from leaderboard.errors import StorageError
from leaderboard.models import Ranking
from leaderboard.store import RankingStore

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0)


def add_rows(store, rows):
    """Insert ``(game_id, name, score, seconds_after_base)`` rows with fixed timestamps."""
    with store.SessionLocal() as db:
        for game_id, name, score, offset in rows:
            db.add(Ranking(game_id=game_id, name=name, score=score,
                           created_at=BASE_TIME + timedelta(seconds=offset)))
        db.commit()


def test_insert_assigns_id_and_timestamp(store):
    before = datetime.now()
    first = store.insert("pudding_jump", "inho", 123)
    second = store.insert("pudding_jump", "mina", 500)
    assert second.id > first.id
    assert first.created_at >= before - timedelta(seconds=1)
    assert (first.game_id, first.name, first.score) == ("pudding_jump", "inho", 123)


def test_top_by_score_canonical_order(store):
    # mina and jisoo tie; jisoo was inserted later but submitted earlier
    add_rows(store, [
        ("pudding_jump", "inho", 123, 0),
        ("pudding_jump", "mina", 500, 20),
        ("pudding_jump", "jisoo", 500, 10),
        ("pudding_jump", "yuna", 300, 5),
        ("other_game", "hana", 9999, 1),
    ])
    rows = store.top_by_score("pudding_jump", 10)
    assert [r.name for r in rows] == ["jisoo", "mina", "yuna", "inho"]

    scores = [r.score for r in rows]
    assert scores == sorted(scores, reverse=True)


def test_top_by_score_respects_limit(store):
    add_rows(store, [("g", f"p{i}", i, i) for i in range(10)])
    rows = store.top_by_score("g", 3)
    assert [r.score for r in rows] == [9, 8, 7]


def test_same_timestamp_ties_fall_back_to_insertion(store):
    add_rows(store, [("g", "first", 50, 0), ("g", "second", 50, 0)])
    assert [r.name for r in store.top_by_score("g", 5)] == ["first", "second"]
    assert [r.name for r in store.latest_by_time("g", 5)] == ["second", "first"]


def test_latest_by_time_newest_first(store):
    add_rows(store, [
        ("g", "old", 900, 0),
        ("g", "newest", 1, 30),
        ("g", "middle", 50, 15),
    ])
    rows = store.latest_by_time("g", 2)
    assert [r.name for r in rows] == ["newest", "middle"]


def test_unknown_partition_is_empty(store):
    assert store.top_by_score("nonexistent_game", 50) == []
    assert store.latest_by_time("nonexistent_game", 50) == []


def test_init_schema_creates_ranking_index(store):
    store.init_schema()  # idempotent
    indexes = {ix["name"] for ix in inspect(store.engine).get_indexes("rankings")}
    assert "idx_rankings_game_score" in indexes


def test_init_schema_fails_when_database_unreachable(tmp_path):
    store = RankingStore(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'db.sqlite'}")
    with pytest.raises(StorageError):
        store.init_schema()


def test_negative_score_violates_constraint(store):
    with pytest.raises(StorageError):
        store.insert("g", "cheater", -5)


def test_reads_fail_without_schema(tmp_path):
    store = RankingStore(f"sqlite:///{tmp_path / 'empty.db'}")
    with pytest.raises(StorageError):
        store.top_by_score("g", 10)
    store.dispose()
