"""TokenSnapshot construction from CoinGecko payloads."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

from oracle_core.market.indicators import rounded_rsi
from oracle_core.models import TokenSnapshot

RSI_PERIOD = 14


def _get(data: Mapping[str, Any] | None, *path: str) -> Any:
    for key in path:
        if not isinstance(data, Mapping):
            return None
        data = data.get(key)
    return data


def _number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def clean_closes(prices: Sequence[Any] | None) -> list[float]:
    """Extract close prices from ``market_chart`` ``[[ts_ms, price], ...]`` rows, dropping junk."""
    closes: list[float] = []
    for row in prices or []:
        if not isinstance(row, Sequence) or len(row) < 2:
            continue
        price = _number(row[1])
        if price is not None:
            closes.append(price)
    return closes


def build_token_snapshot(
    coin_id: str,
    coin: Mapping[str, Any],
    closes: Sequence[float],
) -> TokenSnapshot:
    """Build a snapshot from a ``/coins/{id}`` payload and a daily close series.

    RSI is the 14-period RSI over *closes*, absent with fewer than 15 points.
    Raises ValueError if the payload carries no symbol.
    """
    symbol = coin.get("symbol")
    if not symbol:
        raise ValueError(f"CoinGecko payload for {coin_id!r} has no symbol")

    md = coin.get("market_data") or {}
    return TokenSnapshot(
        id=coin_id,
        symbol=str(symbol).upper(),
        price=_number(_get(md, "current_price", "usd")),
        volume_usd=_number(_get(md, "total_volume", "usd")),
        market_cap=_number(_get(md, "market_cap", "usd")),
        fdv=_number(_get(md, "fully_diluted_valuation", "usd")),
        circulating_supply=_number(md.get("circulating_supply")),
        total_supply=_number(md.get("total_supply")),
        holders=_number(_get(coin, "community_data", "twitter_followers")) or 0.0,
        change_24h_percent=_number(md.get("price_change_percentage_24h")),
        rsi=rounded_rsi(list(closes), period=RSI_PERIOD),
    )
