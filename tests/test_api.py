"""Tests for the HTTP API with collaborators and database overridden."""

from __future__ import annotations

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from conftest import NOW, FakeX, http_status_error
from oracle_core.api.app import app, get_db, get_services
from oracle_core.config import AppConfig
from oracle_core.models import Archetype, ResonanceEntry
from oracle_core.resonance import ResonanceStore


@pytest.fixture
def services(make_services):
    return make_services()


@pytest.fixture
def client(services, db_session):
    app.dependency_overrides[get_services] = lambda: services
    app.dependency_overrides[get_db] = lambda: db_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def _seed(db_session, archetypes):
    store = ResonanceStore(db_session)
    for i, archetype in enumerate(archetypes):
        store.append(ResonanceEntry(
            id=f"p{i}",
            archetype=archetype,
            token="$SOL",
            content=f"report {i}",
            timestamp=NOW + timedelta(minutes=i),
        ))


class TestHealth:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"


class TestCelestialEndpoints:
    def test_lunar(self, client):
        body = client.get("/api/lunar").json()
        assert body["phase"] == "Full Moon"
        assert body["illumination"] == "98"
        assert body["source"] == "primary"
        assert body["pattern"]["tier"] == "Overglow"

    def test_lunar_fallback_without_key(self, client, services):
        services.weather = None
        body = client.get("/api/lunar").json()
        assert body["phase"] == "Waning Crescent"
        assert body["illumination"] == "45"
        assert body["source"] == "fallback"

    def test_celestial(self, client):
        body = client.get("/api/celestial").json()
        assert body["kp"]["realtime"]["index"] == 4.33
        assert body["kp"]["realtime"]["state"] == "🟠 Active"
        assert body["kp"]["averaged"]["state"] == "🟡 Unsettled"
        alignment = body["alignment"]
        assert alignment["event"] == "Full Moon"
        assert alignment["effect"] == "Full sentiment — prepare for reversal."
        assert alignment["pattern"]["glyph"] == "☄"
        assert alignment["source"] == "primary"


class TestResonanceEndpoints:
    def test_pulse_empty(self, client):
        assert client.get("/api/pulse").json() == {
            "active": {}, "total": {}, "recentSignals": 0, "totalSignals": 0,
        }

    def test_mirror(self, client, db_session):
        _seed(db_session, [Archetype.SEER, Archetype.SEER, Archetype.ECHO])
        body = client.get("/api/mirror").json()
        assert body["distribution"] == {"seer": 2, "echo": 1}
        assert body["percentages"] == {"seer": "66.7", "echo": "33.3"}
        assert body["total"] == 3

    def test_resonance_newest_first(self, client, db_session):
        _seed(db_session, [Archetype.SEER, Archetype.PROPHET, Archetype.ECHO])
        body = client.get("/api/resonance", params={"limit": 2}).json()
        assert [e["id"] for e in body] == ["p2", "p1"]
        assert body[0]["archetype"] == "echo"

    def test_resonance_limit_validated(self, client):
        assert client.get("/api/resonance", params={"limit": 0}).status_code == 422


class TestCronEndpoints:
    @pytest.mark.parametrize("params", [{}, {"key": "wrong"}])
    def test_forbidden(self, client, params):
        resp = client.get("/api/cron/post", params=params)
        assert resp.status_code == 403
        assert resp.json() == {"ok": False, "reason": "forbidden"}
        assert resp.headers["cache-control"] == "no-store"

    def test_forbidden_without_configured_secret(self, make_services, db_session):
        services = make_services(config=AppConfig.model_validate({"x": {"reply_pause_s": 0}}))
        app.dependency_overrides[get_services] = lambda: services
        app.dependency_overrides[get_db] = lambda: db_session
        try:
            resp = TestClient(app).get("/api/cron/reply", params={"key": ""})
        finally:
            app.dependency_overrides.clear()
        assert resp.status_code == 403

    def test_post(self, client, services, db_session):
        resp = client.get("/api/cron/post", params={"key": "s3cret"})
        assert resp.status_code == 200
        assert resp.headers["cache-control"] == "no-store"
        body = resp.json()
        assert body["ok"] is True
        assert body["archetype"] == "prophet"
        assert len(services.x.posts) == 1
        assert len(ResonanceStore(db_session).load_all()) == 1

    def test_post_failure_is_reported(self, client, services):
        services.x = FakeX(post_error=http_status_error(503))
        resp = client.get("/api/cron/post", params={"key": "s3cret"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["ok"] is False
        assert "503" in body["error"]

    def test_reply_no_mentions(self, client):
        resp = client.get("/api/cron/reply", params={"key": "s3cret"})
        assert resp.json() == {"ok": True, "sent": 0, "message": "No new mentions"}

    def test_sync_forbidden(self, client):
        resp = client.get("/api/cron/sync", params={"key": "wrong"})
        assert resp.status_code == 403
        assert resp.headers["cache-control"] == "no-store"

    def test_sync(self, client, services, db_session):
        services.x = FakeX(timeline=[{
            "id": "55",
            "text": "$SOL • RSI 64 • Overglow ☄",
            "created_at": "2026-10-16T09:30:00Z",
            "public_metrics": {"like_count": 9, "retweet_count": 2},
        }])
        resp = client.get("/api/cron/sync", params={"key": "s3cret"})
        assert resp.status_code == 200
        assert resp.headers["cache-control"] == "no-store"
        assert resp.json() == {"ok": True, "synced": 1, "inserted": 1}
        (entry,) = ResonanceStore(db_session).load_all()
        assert (entry.id, entry.likes, entry.retweets) == ("55", 9, 2)
