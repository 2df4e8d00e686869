"""Post, reply and timeline-sync pipelines — fetch, normalise, classify, report, publish, log.

Every collaborator call is caught at the seam and mapped to a fallback
value, so a report can always be assembled. Only publishing errors escape
``run_post``; the caller decides how to surface them.
"""

from __future__ import annotations

import asyncio
import random
import re
from datetime import datetime, timezone
from typing import Awaitable, Callable, NamedTuple

import httpx
import structlog

from oracle_core.archetype import classify
from oracle_core.celestial import kp_unavailable, resolve_kp_reading, resolve_lunar_signal
from oracle_core.clients import ChatCompletionClient, CoinGeckoClient, SwpcClient, WeatherApiClient
from oracle_core.market import build_token_snapshot
from oracle_core.models import (
    Archetype,
    CelestialAlignment,
    GeomagneticReading,
    KpState,
    LunarSignal,
    OracleReport,
    Resolved,
    ResonanceEntry,
    TokenSnapshot,
    TrendingToken,
)
from oracle_core.orchestrator.services import OracleServices
from oracle_core.report import (
    build_compact_post,
    build_insight_prompt,
    build_report,
    format_number,
    truncate_post,
)
from oracle_core.resonance import ReplyMemory, ResonanceStore, entry_from_post

log = structlog.get_logger("orchestrator")

_TICKER = re.compile(r"\$([A-Z0-9]{2,10})")

FALLBACK_REPLY_TOKEN = TrendingToken(id="bitcoin", symbol="$BTC")


# ── Readings ────────────────────────────────────────────────────


async def fetch_lunar_signal(weather: WeatherApiClient | None) -> LunarSignal:
    """Today's lunar signal; no client or a failed request gives the fallback signal."""
    if weather is None:
        return resolve_lunar_signal(None)
    try:
        reading = await weather.get_astronomy()
    except Exception as e:
        log.warning("lunar_fetch_failed", error=str(e))
        return resolve_lunar_signal(None)
    return resolve_lunar_signal(reading)


async def _fetch_kp(
    fetch: Callable[[], Awaitable[tuple[float, datetime]]],
    feed: str,
) -> Resolved[GeomagneticReading]:
    try:
        value, observed_at = await fetch()
    except Exception as e:
        log.warning("kp_fetch_failed", feed=feed, error=str(e))
        return Resolved.fallback(kp_unavailable(KpState.UNKNOWN), str(e))
    try:
        return Resolved.ok(resolve_kp_reading(value, observed_at))
    except ValueError as e:
        log.warning("kp_reading_invalid", feed=feed, error=str(e))
        return Resolved.failed(kp_unavailable(KpState.ERROR), str(e))


async def fetch_celestial(weather: WeatherApiClient | None, swpc: SwpcClient) -> CelestialAlignment:
    """Lunar signal plus realtime and averaged Kp; each reading degrades on its own."""
    lunar, realtime, averaged = await asyncio.gather(
        fetch_lunar_signal(weather),
        _fetch_kp(swpc.get_realtime_kp, "realtime"),
        _fetch_kp(swpc.get_averaged_kp, "averaged"),
    )
    return CelestialAlignment(realtime_kp=realtime.value, averaged_kp=averaged.value, lunar=lunar)


async def pick_trending(coingecko: CoinGeckoClient, default: TrendingToken) -> TrendingToken:
    try:
        trending = await coingecko.get_trending(limit=1)
    except Exception as e:
        log.warning("trending_fetch_failed", error=str(e))
        return default
    return trending[0] if trending else default


async def fetch_token_snapshot(
    coingecko: CoinGeckoClient,
    coin_id: str,
    days: int = 30,
) -> Resolved[TokenSnapshot | None]:
    try:
        coin = await coingecko.get_coin(coin_id)
        closes = await coingecko.get_daily_closes(coin_id, days=days)
    except Exception as e:
        log.warning("token_fetch_failed", coin_id=coin_id, error=str(e))
        return Resolved.fallback(None, str(e))
    try:
        return Resolved.ok(build_token_snapshot(coin_id, coin, closes))
    except ValueError as e:
        log.warning("token_payload_invalid", coin_id=coin_id, error=str(e))
        return Resolved.failed(None, str(e))


async def resolve_mention_token(
    coingecko: CoinGeckoClient,
    text: str,
    default: TrendingToken = FALLBACK_REPLY_TOKEN,
) -> TrendingToken:
    """The ``$TICKER`` named in *text*, else the top trending coin, else *default*."""
    match = _TICKER.search(text or "")
    if match:
        try:
            found = await coingecko.search_symbol(match.group(1))
        except Exception as e:
            log.warning("token_search_failed", symbol=match.group(1), error=str(e))
            found = None
        if found is not None:
            return found
    return await pick_trending(coingecko, default)


# ── Report ──────────────────────────────────────────────────────


async def compose_report(
    llm: ChatCompletionClient | None,
    snapshot: TokenSnapshot,
    lunar: LunarSignal,
    archetype: Archetype,
    *,
    header: str,
    rng: random.Random | None = None,
) -> OracleReport:
    """Build a report, asking the language model for the narrative when one is configured."""
    completion = None
    if llm is not None:
        try:
            completion = await llm.complete(build_insight_prompt(snapshot, lunar, archetype))
        except Exception as e:
            log.warning("insight_completion_failed", symbol=snapshot.symbol, error=str(e))
    return build_report(snapshot, lunar, archetype, completion=completion, header=header, rng=rng)


class ComposedPost(NamedTuple):
    snapshot: TokenSnapshot
    archetype: Archetype
    text: str
    narrative_source: str


async def _report_for(
    services: OracleServices,
    token: TrendingToken,
    *,
    allow_empty: bool = False,
) -> ComposedPost | None:
    """Snapshot, archetype and untruncated post text for *token*.

    Without market data this returns None, or with *allow_empty* reports on an
    empty snapshot whose fields all render as placeholders. The ``report.layout``
    setting picks the full report or the compact post; the compact post does
    not consult the language model.
    """
    cfg = services.config
    resolved = await fetch_token_snapshot(services.coingecko, token.id, days=cfg.coingecko.history_days)
    snapshot = resolved.value if resolved.is_ok else None
    if snapshot is None:
        if not allow_empty:
            return None
        snapshot = TokenSnapshot(id=token.id, symbol=token.symbol.lstrip("$"))
    lunar = await fetch_lunar_signal(services.weather)
    archetype = classify(token.symbol, snapshot.rsi, snapshot.volume_usd, rng=services.rng)

    if cfg.report.layout == "compact":
        text = build_compact_post(snapshot, lunar, archetype, max_chars=cfg.report.max_post_chars)
        return ComposedPost(snapshot, archetype, text, "compact")

    report = await compose_report(
        services.llm,
        snapshot,
        lunar,
        archetype,
        header=cfg.report.header,
        rng=services.rng,
    )
    return ComposedPost(snapshot, archetype, report.render(), report.narrative_source)


# ── Pipelines ───────────────────────────────────────────────────


async def run_post(services: OracleServices, store: ResonanceStore) -> dict:
    """Publish one report on the top trending token and log it."""
    if services.x is None:
        return {"ok": True, "skipped": "missing X creds"}

    cfg = services.config
    default = TrendingToken(id=cfg.coingecko.default_coin_id, symbol=cfg.coingecko.default_symbol)
    pick = await pick_trending(services.coingecko, default)

    composed = await _report_for(services, pick, allow_empty=True)
    snapshot = composed.snapshot

    post_text = truncate_post(composed.text, cfg.report.max_post_chars)
    post_id = await services.x.post(post_text)

    store.append(ResonanceEntry(
        id=post_id,
        archetype=composed.archetype,
        token=pick.symbol,
        content=post_text,
        timestamp=datetime.now(timezone.utc),
        rsi=snapshot.rsi,
        price=snapshot.price,
        volume=format_number(snapshot.volume_usd),
    ))
    log.info(
        "oracle_posted",
        post_id=post_id,
        token=pick.symbol,
        archetype=composed.archetype.value,
        narrative=composed.narrative_source,
    )
    return {
        "ok": True,
        "posted": composed.text,
        "tweetId": post_id,
        "archetype": composed.archetype.value,
    }


async def run_reply(services: OracleServices, memory: ReplyMemory) -> dict:
    """Answer new mentions with a report on the token they name."""
    if services.x is None:
        return {"ok": True, "skipped": "missing X creds"}

    cfg = services.config.x
    mentions = await services.x.search_mentions(cfg.handle, max_results=10)
    if not mentions:
        return {"ok": True, "sent": 0, "message": "No new mentions"}

    fresh = [m for m in mentions if not memory.contains(str(m["id"]))]
    if not fresh:
        return {"ok": True, "sent": 0, "message": "All mentions already replied"}

    sent = 0
    errors: list[dict] = []
    for mention in fresh[: cfg.max_replies_per_run]:
        mention_id = str(mention["id"])
        try:
            token = await resolve_mention_token(services.coingecko, mention.get("text", ""))
            composed = await _report_for(services, token)
            if composed is None:
                log.warning("reply_token_unavailable", mention_id=mention_id, token=token.symbol)
                continue
            text = truncate_post(composed.text, services.config.report.max_post_chars)
            await services.x.post(text, reply_to=mention_id)
            memory.remember(mention_id)
            sent += 1
            log.info("mention_replied", mention_id=mention_id, author_id=mention.get("author_id"))
            if cfg.reply_pause_s > 0:
                await asyncio.sleep(cfg.reply_pause_s)
        except httpx.HTTPStatusError as e:
            log.warning("reply_failed", mention_id=mention_id, error=str(e))
            errors.append({"tweet_id": mention_id, "error": str(e)})
            if e.response.status_code == 429:
                log.warning("reply_rate_limited")
                break
        except Exception as e:
            log.warning("reply_failed", mention_id=mention_id, error=str(e))
            errors.append({"tweet_id": mention_id, "error": str(e)})

    memory.prune(keep=cfg.reply_memory_size)

    result: dict = {
        "ok": True,
        "sent": sent,
        "total_mentions": len(mentions),
        "new_mentions": len(fresh),
    }
    if errors:
        result["errors"] = errors
    return result


async def run_sync(services: OracleServices, store: ResonanceStore) -> dict:
    """Pull the account's recent posts into the resonance log.

    New posts are inserted oldest first so the log keeps its newest-first
    order; posts already logged only get their like and repost counts
    refreshed.
    """
    if services.x is None:
        return {"ok": True, "skipped": "missing X creds"}

    user_id = await services.x.get_me()
    posts = await services.x.get_timeline(user_id, max_results=services.config.x.sync_max_results)

    inserted = 0
    for post in reversed(posts):
        if store.upsert(entry_from_post(post)):
            inserted += 1

    log.info("timeline_synced", synced=len(posts), inserted=inserted)
    return {"ok": True, "synced": len(posts), "inserted": inserted}
