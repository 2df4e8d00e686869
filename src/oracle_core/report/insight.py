"""Language-model prompt and response handling for the oracle narrative."""

from __future__ import annotations

import re

from oracle_core.models import Archetype, DerivedMetrics, LunarSignal, TokenSnapshot
from oracle_core.report.formatting import PLACEHOLDER, as_number, format_price, to_fixed

DEFAULT_MYSTICAL_QUOTE = (
    '"Mid-caps awaken as rotation intensifies; the spiral pulls tight around a new pivot."'
)

MAX_COMPLETION_CHARS = 200

_QUOTED_SENTENCE = re.compile(r'"([^"]+)"')


def build_insight_prompt(
    snapshot: TokenSnapshot,
    lunar: LunarSignal,
    archetype: Archetype,
) -> str:
    """Instruction sent to the language model for one report."""
    rsi = 50 if snapshot.rsi is None else snapshot.rsi
    return (
        f"You are ALICE — cryptomystic oracle. Generate a mystical quote about the market "
        f"state (1 sentence max, wrapped in double quotes) for {snapshot.symbol}.\n"
        f"\n"
        f"Context: RSI {rsi}, Moon {lunar.phase}, Pattern {lunar.pattern.tier}, "
        f"Archetype {Archetype(archetype).value}\n"
        f"\n"
        f"Then write 2-3 sentences of technical analysis explaining key levels, what could "
        f"trigger moves up or down, and the setup. Be cryptic but accurate.\n"
        f"\n"
        f"Keep response under {MAX_COMPLETION_CHARS} chars total. No hashtags."
    )


def split_completion(text: str) -> tuple[str, str]:
    """Split a completion into ``(quote, narrative)``.

    The first double-quoted sentence becomes the quote (kept in quotes) and
    the remaining text the narrative. Without one, the whole text is the
    narrative and the default quote is used.
    """
    text = text.strip()
    match = _QUOTED_SENTENCE.search(text)
    if match is None:
        return DEFAULT_MYSTICAL_QUOTE, text
    narrative = (text[: match.start()] + text[match.end():]).strip()
    return f'"{match.group(1)}"', narrative


def template_narrative(
    snapshot: TokenSnapshot,
    lunar: LunarSignal,
    metrics: DerivedMetrics,
) -> str:
    """Deterministic narrative used whenever the language model gives nothing usable.

    Without a price every level in it renders as the placeholder.
    """
    price = as_number(snapshot.price)
    change = as_number(snapshot.change_24h_percent) or 0.0
    if price is None:
        support = retrace = PLACEHOLDER
    else:
        support = format_price(price * 0.96)
        retrace = to_fixed(price * 0.9, 0)
    return (
        f"{snapshot.symbol} is consolidating above ${format_price(price)} with strong volume "
        f"and nearly a {to_fixed(abs(change), 0)}% daily gain. Market cap expansion alongside "
        f"a high volume-to-market-cap ratio suggests bullish rotation into mids. A sustained "
        f"break above {metrics.threshold} could open the mirror toward {metrics.echo_rim}, "
        f"while weakness below {support} may trigger a retrace to the "
        f"mid-{retrace}s. {lunar.pattern.glyph} {lunar.phase}: {lunar.message}"
    )
