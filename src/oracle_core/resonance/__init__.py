"""Resonance log — published posts and reply memory."""

from oracle_core.resonance.store import ReplyMemory, ResonanceStore
from oracle_core.resonance.summary import archetype_counts, mirror_summary, pulse_summary
from oracle_core.resonance.timeline import entry_from_post

__all__ = [
    "ReplyMemory",
    "ResonanceStore",
    "archetype_counts",
    "entry_from_post",
    "mirror_summary",
    "pulse_summary",
]
