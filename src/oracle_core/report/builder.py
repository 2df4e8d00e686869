"""Report assembly."""

from __future__ import annotations

import random

from oracle_core.archetype import quote_for
from oracle_core.models import Archetype, LunarSignal, OracleReport, TokenSnapshot
from oracle_core.report.formatting import as_number, format_number, format_percent, format_price, to_fixed
from oracle_core.report.insight import DEFAULT_MYSTICAL_QUOTE, split_completion, template_narrative
from oracle_core.report.metrics import derive_metrics

DEFAULT_HEADER = "◇ EVAA PROTOCOL // EVAA — ACTIVE READ (Refined)"
MAX_POST_CHARS = 279


def build_report(
    snapshot: TokenSnapshot,
    lunar: LunarSignal,
    archetype: Archetype,
    *,
    completion: str | None = None,
    header: str = DEFAULT_HEADER,
    rng: random.Random | None = None,
) -> OracleReport:
    """Assemble a report from a snapshot, the lunar signal and its archetype.

    *completion* is the language model's answer, or None when it was not
    available; blank completions are treated the same way. Apart from the
    randomised metrics the result depends only on the inputs.
    """
    metrics = derive_metrics(snapshot, rng=rng)

    if completion and completion.strip():
        quote, narrative = split_completion(completion)
        narrative_source = "llm"
    else:
        quote = DEFAULT_MYSTICAL_QUOTE
        narrative = template_narrative(snapshot, lunar, metrics)
        narrative_source = "template"

    return OracleReport(
        header=header,
        symbol=snapshot.symbol,
        archetype=archetype,
        quote=quote,
        narrative=narrative,
        narrative_source=narrative_source,
        price=format_price(snapshot.price),
        change_24h=format_percent(snapshot.change_24h_percent),
        volume=format_number(snapshot.volume_usd),
        market_cap=format_number(snapshot.market_cap),
        fdv=format_number(snapshot.fdv),
        circulating_supply=format_number(snapshot.circulating_supply),
        holders=format_number(snapshot.holders),
        total_supply=format_number(snapshot.total_supply),
        metrics=metrics,
    )


def build_compact_post(
    snapshot: TokenSnapshot,
    lunar: LunarSignal,
    archetype: Archetype,
    max_chars: int = MAX_POST_CHARS,
) -> str:
    """Short post: archetype quote, ticker, RSI, pattern tier, price and volume.

    Prices print with 6 decimals under 1 and 2 otherwise; volume carries a
    dollar sign. Zero or missing price and volume are left out.
    """
    ticker = snapshot.symbol if snapshot.symbol.startswith("$") else f"${snapshot.symbol}"
    rsi = f"RSI {snapshot.rsi}" if snapshot.rsi is not None else "RSI unknown"
    details = []
    price = as_number(snapshot.price)
    if price:
        details.append(f"Price: {to_fixed(price, 6 if price < 1 else 2)}")
    if as_number(snapshot.volume_usd):
        details.append(f"Vol ${format_number(snapshot.volume_usd)}")

    quote = quote_for(archetype)
    post = (
        f'"{quote}"\n\n'
        f"{ticker} • {rsi} • {lunar.pattern.tier} {lunar.pattern.glyph}\n"
        f"{' • '.join(details)}"
    ).rstrip()
    if len(post) <= max_chars:
        return post
    return f'"{quote}"\n\n{ticker} • {rsi} • {lunar.pattern.glyph}'


def truncate_post(text: str, max_chars: int = MAX_POST_CHARS) -> str:
    """Cut *text* to the posting limit."""
    return text[:max_chars]
