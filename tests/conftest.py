"""Shared test fixtures."""

from __future__ import annotations

import random
from datetime import datetime, timezone

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

import oracle_core.db.tables  # noqa: F401
from oracle_core.config import AppConfig
from oracle_core.db.base import Base
from oracle_core.models import TrendingToken
from oracle_core.orchestrator import OracleServices

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def db_session():
    """In-memory SQLite session with all tables created.

    StaticPool + check_same_thread=False lets the FastAPI TestClient thread
    share the connection.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    session = Session(engine)
    yield session
    session.close()
    engine.dispose()


# ── Fake collaborators ──────────────────────────────────────────


def coin_payload(symbol: str = "sol", price: float = 150.0) -> dict:
    return {
        "id": "solana",
        "symbol": symbol,
        "market_data": {
            "current_price": {"usd": price},
            "total_volume": {"usd": 2_000_000_000},
            "market_cap": {"usd": 70_000_000_000},
            "fully_diluted_valuation": {"usd": 85_000_000_000},
            "circulating_supply": 466_000_000,
            "total_supply": 580_000_000,
            "price_change_percentage_24h": 4.2,
        },
        "community_data": {"twitter_followers": 3_200_000},
    }


class FakeWeather:
    def __init__(self, reading: dict | None = None, error: Exception | None = None):
        self.reading = reading if reading is not None else {"phase": "Full Moon", "illumination": "98"}
        self.error = error

    async def get_astronomy(self, day=None):
        if self.error is not None:
            raise self.error
        return self.reading

    async def close(self):
        pass


class FakeSwpc:
    def __init__(self, realtime=(4.33, NOW), averaged=(2.67, NOW), realtime_error=None, averaged_error=None):
        self.realtime = realtime
        self.averaged = averaged
        self.realtime_error = realtime_error
        self.averaged_error = averaged_error

    async def get_realtime_kp(self):
        if self.realtime_error is not None:
            raise self.realtime_error
        return self.realtime

    async def get_averaged_kp(self):
        if self.averaged_error is not None:
            raise self.averaged_error
        return self.averaged

    async def close(self):
        pass


class FakeCoinGecko:
    def __init__(
        self,
        trending: list[TrendingToken] | None = None,
        coin: dict | None = None,
        closes: list[float] | None = None,
        coin_error: Exception | None = None,
        search: dict[str, TrendingToken] | None = None,
    ):
        self.trending = trending if trending is not None else [TrendingToken(id="solana", symbol="$SOL")]
        self.coin = coin if coin is not None else coin_payload()
        self.closes = closes if closes is not None else [100.0 + i for i in range(30)]
        self.coin_error = coin_error
        self.search = search or {}
        self.requested: list[str] = []

    async def get_trending(self, limit=7):
        return self.trending[:limit]

    async def get_coin(self, coin_id):
        self.requested.append(coin_id)
        if self.coin_error is not None:
            raise self.coin_error
        return self.coin

    async def get_daily_closes(self, coin_id, days=30):
        return self.closes

    async def search_symbol(self, symbol):
        return self.search.get(symbol.upper())

    async def close(self):
        pass


class FakeLLM:
    def __init__(self, text: str | None = None, error: Exception | None = None):
        self.text = text
        self.error = error
        self.prompts: list[str] = []

    async def complete(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text

    async def close(self):
        pass


class FakeX:
    def __init__(
        self,
        mentions: list[dict] | None = None,
        post_error: Exception | None = None,
        timeline: list[dict] | None = None,
    ):
        self.mentions = mentions or []
        self.timeline = timeline or []
        self.timeline_requests: list[tuple[str, int]] = []
        self.post_error = post_error
        self.posts: list[tuple[str, str | None]] = []

    async def post(self, text, reply_to=None):
        if self.post_error is not None:
            raise self.post_error
        self.posts.append((text, reply_to))
        return f"post-{len(self.posts)}"

    async def search_mentions(self, handle, max_results=10):
        return self.mentions

    async def get_me(self):
        return "me"

    async def get_timeline(self, user_id, max_results=50):
        self.timeline_requests.append((user_id, max_results))
        return self.timeline

    async def close(self):
        pass


def http_status_error(status: int) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", "https://api.x.com/2/tweets")
    response = httpx.Response(status, request=request)
    return httpx.HTTPStatusError(f"HTTP {status}", request=request, response=response)


@pytest.fixture
def make_services():
    """Factory for OracleServices wired to fakes; keyword args replace defaults."""

    def _make(**overrides) -> OracleServices:
        config = overrides.pop("config", None) or AppConfig.model_validate({
            "x": {"reply_pause_s": 0},
            "cron": {"secret": "s3cret"},
        })
        kwargs = {
            "config": config,
            "coingecko": FakeCoinGecko(),
            "swpc": FakeSwpc(),
            "weather": FakeWeather(),
            "llm": None,
            "x": FakeX(),
            "rng": random.Random(7),
        }
        kwargs.update(overrides)
        return OracleServices(**kwargs)

    return _make
