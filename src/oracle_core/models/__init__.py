"""Pydantic domain models."""

from oracle_core.models.archetype import Archetype
from oracle_core.models.lunar import (
    CelestialAlignment,
    GeomagneticReading,
    KpState,
    LunarPhase,
    LunarSignal,
    PatternTier,
)
from oracle_core.models.market import TokenSnapshot, TrendingToken
from oracle_core.models.report import DerivedMetrics, OracleReport, ResonanceEntry
from oracle_core.models.result import Resolved, ResolvedStatus

__all__ = [
    "Archetype",
    "CelestialAlignment",
    "DerivedMetrics",
    "GeomagneticReading",
    "KpState",
    "LunarPhase",
    "LunarSignal",
    "OracleReport",
    "PatternTier",
    "Resolved",
    "ResolvedStatus",
    "ResonanceEntry",
    "TokenSnapshot",
    "TrendingToken",
]
