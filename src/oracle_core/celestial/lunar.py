"""Lunar signal normalisation — phase messages, pattern tiers, fallback discipline."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

import structlog

from oracle_core.models import LunarPhase, LunarSignal, PatternTier

log = structlog.get_logger("celestial")

UNKNOWN_PHASE_MESSAGE = "Lunar unknown — silence reverberates."

PHASE_MESSAGES: Mapping[str, str] = {
    LunarPhase.NEW_MOON.value: "New pattern forming — wait, don't act.",
    LunarPhase.WAXING_CRESCENT.value: "Conviction forming. Early risk finds momentum.",
    LunarPhase.FIRST_QUARTER.value: "Signal friction. Cut noise.",
    LunarPhase.WAXING_GIBBOUS.value: "Belief climbing — echo gaining mass.",
    LunarPhase.FULL_MOON.value: "Full sentiment — prepare for reversal.",
    LunarPhase.WANING_GIBBOUS.value: "Decompression — profit + shadow emerge.",
    LunarPhase.LAST_QUARTER.value: "Ritual endings. Retest mind.",
    LunarPhase.WANING_CRESCENT.value: "Fading signal — prepare to receive anew.",
}

PHASE_ANGLES: Mapping[str, float] = {
    LunarPhase.NEW_MOON.value: 0,
    LunarPhase.WAXING_CRESCENT.value: 45,
    LunarPhase.FIRST_QUARTER.value: 90,
    LunarPhase.WAXING_GIBBOUS.value: 135,
    LunarPhase.FULL_MOON.value: 180,
    LunarPhase.WANING_GIBBOUS.value: 225,
    LunarPhase.LAST_QUARTER.value: 270,
    LunarPhase.WANING_CRESCENT.value: 315,
}

# (exclusive upper bound in degrees, tier); sectors are 45° wide, centred on the phase angles
_PATTERN_SECTORS: tuple[tuple[float, PatternTier], ...] = (
    (22.5, PatternTier(tier="Veil", glyph="⟡", signal="Nothing reveals — pause, dream.")),
    (67.5, PatternTier(tier="Whisper", glyph="~", signal="Pre-signal buildup.")),
    (112.5, PatternTier(tier="Charge", glyph="⇌", signal="Conviction forming.")),
    (157.5, PatternTier(tier="Charge", glyph="⇌", signal="Momentum accelerating.")),
    (202.5, PatternTier(tier="Overglow", glyph="☄", signal="Full sentiment — likely reversal.")),
    (247.5, PatternTier(tier="Echofield", glyph="⟟", signal="Echo still resonates.")),
    (292.5, PatternTier(tier="Whisper", glyph="~", signal="Decline forming quietly.")),
    (360.0, PatternTier(tier="Veil", glyph="⟡", signal="Signal fading — prepare anew.")),
)

FALLBACK_PHASE = LunarPhase.WANING_CRESCENT.value
FALLBACK_ILLUMINATION = "45"


def map_phase_to_message(phase: str) -> str:
    """Return the fixed message for a canonical phase name."""
    return PHASE_MESSAGES.get(phase, UNKNOWN_PHASE_MESSAGE)


def phase_angle(phase: str) -> float:
    """Position of *phase* on the 360° cycle; unknown phases sit at 0°."""
    return PHASE_ANGLES.get(phase, 0)


def map_angle_to_pattern_tier(angle: float) -> PatternTier:
    """Map an angle in degrees to its pattern tier.

    Sectors are closed-open, so a boundary angle such as 22.5 belongs to the
    sector that starts there.
    """
    angle = angle % 360.0
    for upper, tier in _PATTERN_SECTORS:
        if angle < upper:
            return tier
    # only reachable if the modulo rounds up to exactly 360.0
    return _PATTERN_SECTORS[0][1]


def _signal(phase: str, illumination: str, source: str, now: datetime) -> LunarSignal:
    return LunarSignal(
        phase=phase,
        illumination=illumination,
        message=map_phase_to_message(phase),
        pattern=map_angle_to_pattern_tier(phase_angle(phase)),
        observed_at=now,
        source=source,
    )


def fallback_lunar_signal(source: str = "fallback", now: datetime | None = None) -> LunarSignal:
    """The fixed Waning Crescent signal used whenever no reading is usable."""
    now = now or datetime.now(timezone.utc)
    return _signal(FALLBACK_PHASE, FALLBACK_ILLUMINATION, source, now)


def resolve_lunar_signal(
    reading: Mapping[str, Any] | None,
    *,
    now: datetime | None = None,
) -> LunarSignal:
    """Normalise an astronomy reading into a LunarSignal. Never raises.

    *reading* is ``{"phase": ..., "illumination": ...}`` or ``None`` when no
    reading is available (no credential configured, or the request failed).

    - ``None``            → fallback signal, ``source="fallback"``
    - usable reading      → phase/illumination from the reading, ``source="primary"``
    - processing failure  → fallback signal, ``source="error"``
    """
    now = now or datetime.now(timezone.utc)
    if reading is None:
        return fallback_lunar_signal("fallback", now)

    try:
        phase = reading.get("phase") or FALLBACK_PHASE
        illumination = reading.get("illumination")
        illumination = "0" if illumination in (None, "") else str(illumination)
        return _signal(str(phase).strip(), illumination, "primary", now)
    except Exception as e:
        log.warning("lunar_reading_invalid", error=str(e))
        return fallback_lunar_signal("error", now)
