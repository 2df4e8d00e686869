"""NOAA Space Weather Prediction Center client — planetary Kp index feeds."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import httpx

from oracle_core.clients.base import HttpClient


def parse_time_tag(value: str) -> datetime:
    """Parse SWPC time tags (``2026-10-17T06:00:00`` or ``2026-10-17 06:00:00.000``) as UTC."""
    dt = datetime.fromisoformat(value.strip().replace(" ", "T").rstrip("Z"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


class SwpcClient(HttpClient):
    """Async client for the realtime (1-minute) and 3-hour averaged Kp feeds."""

    def __init__(
        self,
        base_url: str = "https://services.swpc.noaa.gov",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(base_url, transport)

    async def _get_json(self, path: str) -> Any:
        http = await self._get_http()
        resp = await http.get(f"{self.base_url}{path}")
        resp.raise_for_status()
        return resp.json()

    async def get_realtime_kp(self) -> tuple[float, datetime]:
        """Latest 1-minute estimated Kp as ``(value, observed_at)``."""
        rows = await self._get_json("/json/planetary_k_index_1m.json")
        return self.parse_realtime(rows)

    async def get_averaged_kp(self) -> tuple[float, datetime]:
        """Latest 3-hour planetary Kp as ``(value, observed_at)``."""
        rows = await self._get_json("/products/noaa-planetary-k-index.json")
        return self.parse_averaged(rows)

    @staticmethod
    def parse_realtime(rows: Any) -> tuple[float, datetime]:
        """Rows are dicts with ``kp_index`` and ``time_tag``; the last one is newest."""
        if not isinstance(rows, list) or not rows:
            raise ValueError("realtime Kp feed returned no rows")
        row = rows[-1]
        return float(row["kp_index"]), parse_time_tag(row["time_tag"])

    @staticmethod
    def parse_averaged(rows: Any) -> tuple[float, datetime]:
        """Rows are ``[time_tag, kp, ...]`` lists after a header row.

        Newer feed revisions serve ``{"time_tag": ..., "Kp": ...}`` objects
        without a header; both shapes are accepted.
        """
        if not isinstance(rows, list) or not rows:
            raise ValueError("averaged Kp feed returned no rows")
        row = rows[-1]
        if isinstance(row, dict):
            return float(row["Kp"]), parse_time_tag(row["time_tag"])
        if len(rows) < 2:
            raise ValueError("averaged Kp feed returned only a header row")
        return float(row[1]), parse_time_tag(row[0])
