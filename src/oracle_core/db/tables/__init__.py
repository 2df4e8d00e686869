"""Import all table modules so Base.metadata knows about them."""

from oracle_core.db.tables.resonance import RepliedMentionRow, ResonanceRow

__all__ = ["RepliedMentionRow", "ResonanceRow"]
