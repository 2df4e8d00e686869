"""Archetype distribution summaries over the resonance log."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from oracle_core.models import ResonanceEntry
from oracle_core.report.formatting import to_fixed

RECENT_WINDOW = 20


def archetype_counts(entries: Sequence[ResonanceEntry]) -> dict[str, int]:
    return dict(Counter(e.archetype.value for e in entries))


def pulse_summary(entries: Sequence[ResonanceEntry], recent: int = RECENT_WINDOW) -> dict:
    """Archetype counts over the newest *recent* entries and over the whole log.

    *entries* must be ordered newest first.
    """
    window = list(entries[:recent])
    return {
        "active": archetype_counts(window),
        "total": archetype_counts(entries),
        "recentSignals": len(window),
        "totalSignals": len(entries),
    }


def mirror_summary(entries: Sequence[ResonanceEntry]) -> dict:
    """Archetype distribution with 1-decimal percentage strings."""
    distribution = archetype_counts(entries)
    total = len(entries)
    percentages = {
        archetype: to_fixed(count / total * 100, 1)
        for archetype, count in distribution.items()
    }
    return {"distribution": distribution, "percentages": percentages, "total": total}
