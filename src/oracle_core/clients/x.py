"""X (Twitter) API v2 client — post, reply, search mentions, read the own timeline.

Authenticates with an OAuth 2.0 user-context access token.
"""

from __future__ import annotations

from typing import Any

import httpx

from oracle_core.clients.base import HttpClient


class XClient(HttpClient):
    """Async client for the X API v2 endpoints the oracle uses."""

    def __init__(
        self,
        access_token: str,
        base_url: str = "https://api.x.com/2",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(base_url, transport)
        self.access_token = access_token

    @property
    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}

    async def post(self, text: str, reply_to: str | None = None) -> str:
        """Publish *text*, optionally as a reply, and return the new post id."""
        payload: dict[str, Any] = {"text": text}
        if reply_to is not None:
            payload["reply"] = {"in_reply_to_tweet_id": reply_to}
        http = await self._get_http()
        resp = await http.post(f"{self.base_url}/tweets", json=payload, headers=self._headers)
        resp.raise_for_status()
        return str(resp.json()["data"]["id"])

    async def search_mentions(self, handle: str, max_results: int = 10) -> list[dict]:
        """Most recent posts mentioning *handle*, excluding retweets and its own posts."""
        http = await self._get_http()
        resp = await http.get(
            f"{self.base_url}/tweets/search/recent",
            params={
                "query": f"@{handle} -is:retweet -from:{handle}",
                "tweet.fields": "author_id,created_at,conversation_id",
                "max_results": max(10, min(max_results, 100)),
                "sort_order": "recency",
            },
            headers=self._headers,
        )
        resp.raise_for_status()
        return resp.json().get("data") or []

    async def get_me(self) -> str:
        """Id of the account the access token belongs to."""
        http = await self._get_http()
        resp = await http.get(f"{self.base_url}/users/me", headers=self._headers)
        resp.raise_for_status()
        return str(resp.json()["data"]["id"])

    async def get_timeline(self, user_id: str, max_results: int = 50) -> list[dict]:
        """Most recent own posts, newest first, with ``created_at`` and ``public_metrics``."""
        http = await self._get_http()
        resp = await http.get(
            f"{self.base_url}/users/{user_id}/tweets",
            params={
                "tweet.fields": "created_at,public_metrics",
                "max_results": max(5, min(max_results, 100)),
            },
            headers=self._headers,
        )
        resp.raise_for_status()
        return resp.json().get("data") or []
