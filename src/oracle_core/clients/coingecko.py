"""CoinGecko client — trending coins, coin details, daily closes, symbol search."""

from __future__ import annotations

from typing import Any

import httpx

from oracle_core.clients.base import HttpClient
from oracle_core.market.snapshot import clean_closes
from oracle_core.models import TrendingToken


class CoinGeckoClient(HttpClient):
    """Async client for the public CoinGecko v3 API."""

    def __init__(
        self,
        base_url: str = "https://api.coingecko.com/api/v3",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(base_url, transport)

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        http = await self._get_http()
        resp = await http.get(f"{self.base_url}{path}", params=params)
        resp.raise_for_status()
        return resp.json()

    async def get_trending(self, limit: int = 7) -> list[TrendingToken]:
        """Top trending coins, ticker rendered as ``$SYMBOL``."""
        body = await self._get_json("/search/trending")
        return self.parse_trending(body, limit)

    async def get_coin(self, coin_id: str) -> dict:
        """Coin details including ``market_data`` and ``community_data``."""
        return await self._get_json(
            f"/coins/{coin_id}",
            params={"localization": "false", "market_data": "true"},
        )

    async def get_daily_closes(self, coin_id: str, days: int = 30) -> list[float]:
        """Daily USD closes for the last *days* days, oldest first."""
        body = await self._get_json(
            f"/coins/{coin_id}/market_chart",
            params={"vs_currency": "usd", "days": days, "interval": "daily"},
        )
        return clean_closes((body or {}).get("prices"))

    async def search_symbol(self, symbol: str) -> TrendingToken | None:
        """Resolve a ticker to the first coin whose symbol matches exactly."""
        body = await self._get_json("/search", params={"query": symbol.lower()})
        return self.parse_search(body, symbol)

    @staticmethod
    def parse_trending(body: Any, limit: int) -> list[TrendingToken]:
        coins = (body or {}).get("coins") or []
        tokens = []
        for entry in coins[:limit]:
            item = entry.get("item") or {}
            if not item.get("id") or not item.get("symbol"):
                continue
            tokens.append(TrendingToken(id=item["id"], symbol=f"${item['symbol'].upper()}"))
        return tokens

    @staticmethod
    def parse_search(body: Any, symbol: str) -> TrendingToken | None:
        wanted = symbol.lstrip("$").lower()
        for coin in (body or {}).get("coins") or []:
            if str(coin.get("symbol", "")).lower() == wanted and coin.get("id"):
                return TrendingToken(id=coin["id"], symbol=f"${coin['symbol'].upper()}")
        return None
