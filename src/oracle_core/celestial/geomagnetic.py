"""Planetary Kp index classification."""

from __future__ import annotations

import math
from datetime import datetime, timezone

from oracle_core.models import GeomagneticReading, KpState


def classify_kp(index: float) -> KpState:
    """Map a Kp index onto the four-state activity ladder."""
    if index < 2:
        return KpState.QUIET
    if index < 4:
        return KpState.UNSETTLED
    if index < 6:
        return KpState.ACTIVE
    return KpState.STORM_WATCH


def resolve_kp_reading(value: float | str, observed_at: datetime) -> GeomagneticReading:
    """Build a reading from a raw feed value, rounded to 2 decimals.

    Raises ValueError for values that are not finite numbers.
    """
    index = float(value)
    if not math.isfinite(index):
        raise ValueError(f"Kp index is not a finite number: {value!r}")
    return GeomagneticReading(
        index=round(index, 2),
        state=classify_kp(index),
        observed_at=observed_at,
    )


def kp_unavailable(state: KpState = KpState.UNKNOWN, now: datetime | None = None) -> GeomagneticReading:
    """Placeholder reading for a feed that could not be used."""
    return GeomagneticReading(
        index=0.0,
        state=state,
        observed_at=now or datetime.now(timezone.utc),
    )
