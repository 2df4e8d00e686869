"""Lunar and geomagnetic signal normalisation."""

from oracle_core.celestial.geomagnetic import classify_kp, kp_unavailable, resolve_kp_reading
from oracle_core.celestial.lunar import (
    PHASE_ANGLES,
    PHASE_MESSAGES,
    UNKNOWN_PHASE_MESSAGE,
    fallback_lunar_signal,
    map_angle_to_pattern_tier,
    map_phase_to_message,
    phase_angle,
    resolve_lunar_signal,
)

__all__ = [
    "PHASE_ANGLES",
    "PHASE_MESSAGES",
    "UNKNOWN_PHASE_MESSAGE",
    "classify_kp",
    "fallback_lunar_signal",
    "kp_unavailable",
    "map_angle_to_pattern_tier",
    "map_phase_to_message",
    "phase_angle",
    "resolve_kp_reading",
    "resolve_lunar_signal",
]
