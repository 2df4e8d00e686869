"""Lunar and geomagnetic signal models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict


class LunarPhase(str, Enum):
    NEW_MOON = "New Moon"
    WAXING_CRESCENT = "Waxing Crescent"
    FIRST_QUARTER = "First Quarter"
    WAXING_GIBBOUS = "Waxing Gibbous"
    FULL_MOON = "Full Moon"
    WANING_GIBBOUS = "Waning Gibbous"
    LAST_QUARTER = "Last Quarter"
    WANING_CRESCENT = "Waning Crescent"


class PatternTier(BaseModel):
    """Mood of one 45° sector of the lunar cycle."""

    model_config = ConfigDict(frozen=True)

    tier: Literal["Veil", "Whisper", "Charge", "Overglow", "Echofield"]
    glyph: str
    signal: str


class LunarSignal(BaseModel):
    """Today's lunar reading, normalised.

    ``phase`` is kept as the string the astronomy feed reported; unknown
    names are passed through and map to the default message and the 0° tier.
    ``illumination`` is display-only.
    """

    phase: str
    illumination: str
    message: str
    pattern: PatternTier
    observed_at: datetime
    source: Literal["primary", "fallback", "error"]


class KpState(str, Enum):
    QUIET = "Quiet"
    UNSETTLED = "Unsettled"
    ACTIVE = "Active"
    STORM_WATCH = "StormWatch"
    UNKNOWN = "Unknown"
    ERROR = "Error"

    @property
    def label(self) -> str:
        return _KP_LABELS[self]


_KP_LABELS = {
    KpState.QUIET: "⚪ Quiet",
    KpState.UNSETTLED: "🟡 Unsettled",
    KpState.ACTIVE: "🟠 Active",
    KpState.STORM_WATCH: "🔴 Storm Watch",
    KpState.UNKNOWN: "Unknown",
    KpState.ERROR: "Error",
}


class GeomagneticReading(BaseModel):
    """One planetary Kp observation."""

    index: float
    state: KpState
    observed_at: datetime


class CelestialAlignment(BaseModel):
    """Bundle served by the celestial endpoint."""

    realtime_kp: GeomagneticReading
    averaged_kp: GeomagneticReading
    lunar: LunarSignal
