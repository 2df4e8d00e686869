"""Numeric display formatting for reports.

Rounding is fixed-point, half away from zero, applied to the exact binary
value of the float, so ``to_fixed(1.005, 2) == "1.00"`` and
``to_fixed(0.125, 2) == "0.13"``.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any

PLACEHOLDER = "--"

_CONTEXT = Context(prec=120)


def as_number(value: Any) -> float | None:
    """Return *value* as a finite float, or None if it is missing or not a number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def to_fixed(value: float, digits: int) -> str:
    """Render *value* with exactly *digits* decimals."""
    if value == 0:
        value = 0.0
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=_CONTEXT)
    return format(rounded, "f")


def format_price(price: Any) -> str:
    """8 decimals under 0.01, 4 under 1, else 2."""
    p = as_number(price)
    if p is None:
        return PLACEHOLDER
    if p < 0.01:
        return to_fixed(p, 8)
    if p < 1:
        return to_fixed(p, 4)
    return to_fixed(p, 2)


def format_number(num: Any, decimals: int = 2) -> str:
    """Abbreviate with B/M/K suffixes."""
    n = as_number(num)
    if n is None:
        return PLACEHOLDER
    if n >= 1e9:
        return f"{to_fixed(n / 1e9, decimals)}B"
    if n >= 1e6:
        return f"{to_fixed(n / 1e6, decimals)}M"
    if n >= 1e3:
        return f"{to_fixed(n / 1e3, decimals)}K"
    return to_fixed(n, decimals)


def format_percent(num: Any) -> str:
    n = as_number(num)
    if n is None:
        return PLACEHOLDER
    sign = "+" if n > 0 else ""
    return f"{sign}{to_fixed(n, 2)}%"
