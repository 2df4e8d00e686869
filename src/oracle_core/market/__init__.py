"""Market data helpers — indicators and snapshot construction."""

from oracle_core.market.indicators import rounded_rsi, rsi
from oracle_core.market.snapshot import build_token_snapshot, clean_closes

__all__ = ["build_token_snapshot", "clean_closes", "rounded_rsi", "rsi"]
