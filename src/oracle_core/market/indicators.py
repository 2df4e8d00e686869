"""Technical indicators — pure functions on price series."""

from __future__ import annotations

from collections.abc import Sequence
from statistics import mean


def rsi(closes: Sequence[float], period: int = 14) -> float | None:
    """Relative Strength Index (Wilder's smoothing).

    Returns a float in [0, 100] or None if there are fewer than
    ``period + 1`` data points.
    """
    if len(closes) < period + 1:
        return None

    deltas = [closes[i] - closes[i - 1] for i in range(1, len(closes))]

    # Seed with simple average of first *period* changes
    avg_gain = mean(d if d > 0 else 0.0 for d in deltas[:period])
    avg_loss = mean(-d if d < 0 else 0.0 for d in deltas[:period])

    # Wilder smoothing over remaining deltas
    for d in deltas[period:]:
        avg_gain = (avg_gain * (period - 1) + (d if d > 0 else 0.0)) / period
        avg_loss = (avg_loss * (period - 1) + (-d if d < 0 else 0.0)) / period

    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100.0 - 100.0 / (1 + rs)


def rounded_rsi(closes: Sequence[float], period: int = 14) -> int | None:
    """RSI rounded half-up to the nearest integer, None with too little history."""
    value = rsi(closes, period=period)
    if value is None:
        return None
    return int(value + 0.5)
