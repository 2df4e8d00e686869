"""Archetype classification over RSI bands.

Band edges are Fibonacci retracement ratios (23.6, 38.2, 50, 61.8, 78.6).
"""

from __future__ import annotations

import math
import random

from oracle_core.models import Archetype

SHADOW_CEILING = 23.6
TRICKSTER_CEILING = 38.2
ECHO_CEILING = 50.0
SEER_CEILING = 61.8
GUARDIAN_CEILING = 78.6

TRICKSTER_MIN_VOLUME = 10_000_000
CULTIST_PROBABILITY = 0.7

DEFAULT_RSI = 50.0

DEFAULT_QUOTE = "Conviction preempts price."

ARCHETYPE_QUOTES: dict[Archetype, str] = {
    Archetype.PROPHET: "Pulse fractures the veil of noise.",
    Archetype.TRICKSTER: "No signal survives unshaped.",
    Archetype.OBSERVER: "Look through, not at.",
    Archetype.SEER: "Momentum follows myth. Trade accordingly.",
    Archetype.CULTIST: "Ritual reveals reversal.",
    Archetype.GUARDIAN: "Thresholds hold until echo breaks.",
    Archetype.SHADOW: "Down here, even silence wails.",
    Archetype.ECHO: "Price remembers what mind forgets.",
}

_default_rng = random.Random()


def _band(symbol: str, rsi: float, volume: float) -> Archetype:
    if rsi < SHADOW_CEILING:
        return Archetype.SHADOW
    if rsi < TRICKSTER_CEILING:
        return Archetype.TRICKSTER if volume > TRICKSTER_MIN_VOLUME else Archetype.OBSERVER
    if rsi < ECHO_CEILING:
        return Archetype.ECHO
    if rsi < SEER_CEILING:
        return Archetype.SEER
    if rsi < GUARDIAN_CEILING:
        return Archetype.GUARDIAN
    if "SOL" in symbol:
        return Archetype.PROPHET
    return Archetype.SEER


def _finite_rsi(rsi: float | None) -> float:
    if rsi is None:
        return DEFAULT_RSI
    try:
        value = float(rsi)
    except (TypeError, ValueError):
        return DEFAULT_RSI
    return value if math.isfinite(value) else DEFAULT_RSI


def classify(
    symbol: str,
    rsi: float | None = None,
    volume: float | None = None,
    *,
    rng: random.Random | None = None,
) -> Archetype:
    """Classify a token's market mood.

    Missing or non-finite RSI counts as 50 and missing volume as 0. Symbols containing
    "BONK" are then re-drawn at random: cultist with probability 0.7,
    trickster otherwise, whatever the RSI band said. The draw is meant to
    vary posted content; pass *rng* to make it reproducible.
    """
    symbol = (symbol or "").upper()
    rsi = _finite_rsi(rsi)
    try:
        volume = float(volume or 0)
    except (TypeError, ValueError):
        volume = 0.0

    archetype = _band(symbol, rsi, volume)

    if "BONK" in symbol:
        rng = rng or _default_rng
        archetype = Archetype.CULTIST if rng.random() < CULTIST_PROBABILITY else Archetype.TRICKSTER

    return archetype


def quote_for(archetype: Archetype | str) -> str:
    """Fixed one-line quote for an archetype."""
    try:
        return ARCHETYPE_QUOTES.get(Archetype(archetype), DEFAULT_QUOTE)
    except ValueError:
        return DEFAULT_QUOTE


def archetype_for_rsi(rsi: float | None) -> Archetype:
    """Archetype from RSI alone, for posts re-read from the timeline.

    Without volume or symbol context the trickster band reads as observer and
    the top band as prophet. No random override; missing RSI gives seer.
    """
    if not rsi:
        return Archetype.SEER
    value = _finite_rsi(rsi)
    if value < SHADOW_CEILING:
        return Archetype.SHADOW
    if value < TRICKSTER_CEILING:
        return Archetype.OBSERVER
    if value < ECHO_CEILING:
        return Archetype.ECHO
    if value < SEER_CEILING:
        return Archetype.SEER
    if value < GUARDIAN_CEILING:
        return Archetype.GUARDIAN
    return Archetype.PROPHET
