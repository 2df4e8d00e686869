"""Market data models — token snapshots and trending picks."""

from __future__ import annotations

from pydantic import BaseModel, Field


class TrendingToken(BaseModel):
    """A CoinGecko coin id with its display ticker (``$SYMBOL``)."""

    id: str
    symbol: str


class TokenSnapshot(BaseModel):
    """Point-in-time market data for one token.

    Numeric fields are ``None`` when the upstream feed did not report them.
    """

    id: str
    symbol: str
    price: float | None = None
    volume_usd: float | None = None
    market_cap: float | None = None
    fdv: float | None = None
    circulating_supply: float | None = None
    total_supply: float | None = None
    holders: float | None = None
    change_24h_percent: float | None = None
    rsi: int | None = Field(default=None, ge=0, le=100)
