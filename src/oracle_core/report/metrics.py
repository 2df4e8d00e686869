"""Derived report metrics — ratios, golden-ratio cycle index, thresholds, flavour fields."""

from __future__ import annotations

import random
import re

from oracle_core.models import DerivedMetrics, TokenSnapshot
from oracle_core.report.formatting import PLACEHOLDER, as_number, format_price, to_fixed

PHI = 1.618
THRESHOLD_FACTOR = 1.05
ECHO_RIM_FACTOR = 1.15
DEFAULT_RSI = 50

_default_rng = random.Random()


def _digits(rendered: str) -> str:
    return re.sub(r"\D", "", rendered) or PLACEHOLDER


def volume_to_market_cap_ratio(volume: float | None, market_cap: float | None) -> str:
    """Volume as a percentage of market cap, 1 decimal; "0.0" without a positive market cap."""
    vol = as_number(volume) or 0.0
    cap = as_number(market_cap) or 0.0
    if cap <= 0:
        return "0.0"
    return to_fixed(vol / cap * 100, 1)


def cycle_index(rsi: float | None) -> str:
    rsi = DEFAULT_RSI if rsi is None else rsi
    return to_fixed(rsi / 100 * PHI, 2)


def alignment_string(symbol: str, threshold: str, echo_rim: str, omega: int, delta: int) -> str:
    return f"{symbol}-{omega}Ω / Δ{delta} : TH{_digits(threshold)} < ECHO > {_digits(echo_rim)}"


def derive_metrics(snapshot: TokenSnapshot, *, rng: random.Random | None = None) -> DerivedMetrics:
    """Compute the derived fields of a report.

    Δ-key, phase drift and the alignment string's Ω/Δ are drawn from *rng*
    and carry no information about the market.
    """
    rng = rng or _default_rng
    price = as_number(snapshot.price)

    if price is None:
        threshold = echo_rim = PLACEHOLDER
    else:
        threshold = format_price(price * THRESHOLD_FACTOR)
        echo_rim = format_price(price * ECHO_RIM_FACTOR)

    delta_key = to_fixed(rng.random() * 2 + 0.5, 2)
    phase_drift = to_fixed((rng.random() - 0.5) * 0.05, 4)
    omega = rng.randrange(999)
    delta = rng.randrange(99)

    return DerivedMetrics(
        volume_to_market_cap_ratio_percent=volume_to_market_cap_ratio(
            snapshot.volume_usd, snapshot.market_cap
        ),
        cycle_index=cycle_index(snapshot.rsi),
        threshold=threshold,
        echo_rim=echo_rim,
        delta_key=delta_key,
        phase_drift=phase_drift,
        alignment_string=alignment_string(snapshot.symbol, threshold, echo_rim, omega, delta),
    )
