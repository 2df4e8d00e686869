"""Rebuild resonance entries from posts read back off the account timeline."""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from oracle_core.archetype import archetype_for_rsi
from oracle_core.models import ResonanceEntry

_TOKEN = re.compile(r"\$([A-Z]{2,10})")
_RSI = re.compile(r"RSI (\d+)")
_PRICE = re.compile(r"Price: ([0-9.]+)")
_VOLUME = re.compile(r"Vol \$([0-9,.]+[KMB]?)")


def _parse_created_at(value: str | None) -> datetime:
    if not value:
        return datetime.now(timezone.utc)
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def _price(text: str) -> float | None:
    match = _PRICE.search(text)
    if match is None:
        return None
    try:
        return float(match.group(1))
    except ValueError:
        return None


def entry_from_post(post: Mapping[str, Any]) -> ResonanceEntry:
    """Recover ticker, RSI, price and volume from a published post's text.

    The archetype is re-derived from the RSI alone; engagement counts come
    from ``public_metrics``.
    """
    text = post.get("text") or ""
    token = _TOKEN.search(text)
    rsi = _RSI.search(text)
    volume = _VOLUME.search(text)
    metrics = post.get("public_metrics") or {}
    rsi_value = int(rsi.group(1)) if rsi else None
    return ResonanceEntry(
        id=str(post["id"]),
        archetype=archetype_for_rsi(rsi_value),
        token=f"${token.group(1)}" if token else None,
        content=text,
        timestamp=_parse_created_at(post.get("created_at")),
        rsi=rsi_value if rsi_value is None or rsi_value <= 100 else None,
        price=_price(text),
        volume=volume.group(1) if volume else None,
        likes=int(metrics.get("like_count") or 0),
        retweets=int(metrics.get("retweet_count") or 0),
    )
