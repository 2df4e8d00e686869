"""Shared lazy httpx.AsyncClient handling."""

from __future__ import annotations

import httpx


class HttpClient:
    """Owns one lazily created ``httpx.AsyncClient``.

    *transport* is handed to httpx unchanged; tests pass an
    ``httpx.MockTransport``.
    """

    timeout: float = 15.0

    def __init__(self, base_url: str, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    async def _get_http(self) -> httpx.AsyncClient:
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._http

    async def close(self) -> None:
        if self._http and not self._http.is_closed:
            await self._http.aclose()
