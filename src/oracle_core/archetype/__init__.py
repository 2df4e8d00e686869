"""Market archetype classification."""

from oracle_core.archetype.classifier import (
    ARCHETYPE_QUOTES,
    DEFAULT_QUOTE,
    archetype_for_rsi,
    classify,
    quote_for,
)

__all__ = ["ARCHETYPE_QUOTES", "DEFAULT_QUOTE", "archetype_for_rsi", "classify", "quote_for"]
