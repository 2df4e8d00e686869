"""Tests for the resonance log, reply memory and archetype summaries."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from conftest import NOW
from oracle_core.models import Archetype, ResonanceEntry
from oracle_core.resonance import ReplyMemory, ResonanceStore, entry_from_post, mirror_summary, pulse_summary


def _entry(i: int, archetype: Archetype = Archetype.SEER) -> ResonanceEntry:
    return ResonanceEntry(
        id=f"post-{i}",
        archetype=archetype,
        token="$SOL",
        content=f"report {i}",
        timestamp=NOW + timedelta(minutes=i),
        rsi=64,
        price=150.0,
        volume="2.00B",
    )


class TestResonanceStore:
    def test_append_returns_increasing_seq(self, db_session):
        store = ResonanceStore(db_session)
        first = store.append(_entry(1))
        second = store.append(_entry(2))
        assert second > first

    def test_load_all_newest_first(self, db_session):
        store = ResonanceStore(db_session)
        for i in range(3):
            store.append(_entry(i))
        assert [e.id for e in store.load_all()] == ["post-2", "post-1", "post-0"]

    def test_load_recent(self, db_session):
        store = ResonanceStore(db_session)
        for i in range(5):
            store.append(_entry(i))
        assert [e.id for e in store.load_recent(2)] == ["post-4", "post-3"]

    def test_round_trip_fields(self, db_session):
        store = ResonanceStore(db_session)
        store.append(_entry(1, Archetype.PROPHET))
        (loaded,) = store.load_all()
        assert loaded == _entry(1, Archetype.PROPHET)
        assert loaded.timestamp.tzinfo is not None

    def test_empty(self, db_session):
        assert ResonanceStore(db_session).load_all() == []

    def test_upsert_inserts_new_post(self, db_session):
        store = ResonanceStore(db_session)
        assert store.upsert(_entry(1)) is True
        assert [e.id for e in store.load_all()] == ["post-1"]

    def test_upsert_refreshes_engagement_only(self, db_session):
        store = ResonanceStore(db_session)
        store.append(_entry(1, Archetype.PROPHET))
        update = _entry(1).model_copy(update={"content": "other", "likes": 8, "retweets": 2})
        assert store.upsert(update) is False
        (loaded,) = store.load_all()
        assert (loaded.likes, loaded.retweets) == (8, 2)
        assert loaded.archetype is Archetype.PROPHET
        assert loaded.content == "report 1"


class TestReplyMemory:
    def test_remember_and_contains(self, db_session):
        memory = ReplyMemory(db_session)
        assert not memory.contains("m1")
        memory.remember("m1")
        assert memory.contains("m1")

    def test_remember_is_idempotent(self, db_session):
        memory = ReplyMemory(db_session)
        memory.remember("m1")
        memory.remember("m1")
        assert memory.prune(keep=100) == 0

    def test_prune_keeps_newest(self, db_session):
        memory = ReplyMemory(db_session)
        for i in range(5):
            memory.remember(f"m{i}")
        assert memory.prune(keep=2) == 3
        assert [memory.contains(f"m{i}") for i in range(5)] == [False, False, False, True, True]


class TestSummaries:
    def test_mirror_percentages(self):
        entries = [_entry(0), _entry(1), _entry(2, Archetype.ECHO)]
        summary = mirror_summary(entries)
        assert summary["distribution"] == {"seer": 2, "echo": 1}
        assert summary["percentages"] == {"seer": "66.7", "echo": "33.3"}
        assert summary["total"] == 3

    def test_mirror_empty(self):
        assert mirror_summary([]) == {"distribution": {}, "percentages": {}, "total": 0}

    def test_pulse_window(self):
        entries = [_entry(i, Archetype.PROPHET) for i in range(3)] + [_entry(i) for i in range(3, 25)]
        summary = pulse_summary(entries)
        assert summary["recentSignals"] == 20
        assert summary["totalSignals"] == 25
        assert summary["active"] == {"prophet": 3, "seer": 17}
        assert summary["total"] == {"prophet": 3, "seer": 22}

    def test_pulse_small_log(self):
        summary = pulse_summary([_entry(0)], recent=20)
        assert summary["recentSignals"] == 1
        assert summary["active"] == {"seer": 1}


class TestEntryFromPost:
    def test_compact_post(self):
        entry = entry_from_post({
            "id": 1001,
            "text": '"quote"\n\n$SOL • RSI 72 • Overglow ☄\nPrice: 0.004000 • Vol $1.25M',
            "created_at": "2026-10-16T09:30:00.000Z",
            "public_metrics": {"like_count": 4, "retweet_count": 1},
        })
        assert entry.id == "1001"
        assert entry.token == "$SOL"
        assert entry.rsi == 72
        assert entry.archetype is Archetype.GUARDIAN
        assert entry.price == 0.004
        assert entry.volume == "1.25M"
        assert (entry.likes, entry.retweets) == (4, 1)
        assert entry.timestamp == datetime(2026, 10, 16, 9, 30, tzinfo=timezone.utc)

    def test_text_without_readings(self):
        entry = entry_from_post({"id": "7", "text": "gm, the moon is listening"})
        assert entry.token is None
        assert entry.rsi is None
        assert entry.price is None
        assert entry.volume is None
        assert entry.archetype is Archetype.SEER
        assert (entry.likes, entry.retweets) == (0, 0)
        assert entry.timestamp.tzinfo is not None

    def test_out_of_range_rsi_is_dropped(self):
        entry = entry_from_post({"id": "8", "text": "$WIF • RSI 420 • Drift"})
        assert entry.rsi is None
        assert entry.archetype is Archetype.PROPHET

    def test_unparseable_price(self):
        entry = entry_from_post({"id": "9", "text": "$WIF Price: 1.2.3"})
        assert entry.price is None
