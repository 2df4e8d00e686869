"""WeatherAPI astronomy client — today's moon phase and illumination."""

from __future__ import annotations

from datetime import date

import httpx

from oracle_core.clients.base import HttpClient


class WeatherApiClient(HttpClient):
    """Async client for ``/astronomy.json``."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.weatherapi.com/v1",
        location: str = "auto:ip",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(base_url, transport)
        self.api_key = api_key
        self.location = location

    async def get_astronomy(self, day: date | None = None) -> dict:
        """Fetch the moon reading for *day* (default today).

        Returns ``{"phase": str | None, "illumination": str | None}``.
        """
        day = day or date.today()
        http = await self._get_http()
        resp = await http.get(
            f"{self.base_url}/astronomy.json",
            params={"key": self.api_key, "q": self.location, "dt": day.isoformat()},
        )
        resp.raise_for_status()
        return self.parse_astronomy(resp.json())

    @staticmethod
    def parse_astronomy(body: dict) -> dict:
        astro = ((body or {}).get("astronomy") or {}).get("astro") or {}
        return {
            "phase": astro.get("moon_phase"),
            "illumination": astro.get("moon_illumination"),
        }
