"""Report and resonance-log models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

from oracle_core.models.archetype import Archetype


class DerivedMetrics(BaseModel):
    """Formatted numbers derived from a snapshot.

    ``delta_key``, ``phase_drift`` and the Ω/Δ parts of ``alignment_string``
    are random per report.
    """

    model_config = ConfigDict(frozen=True)

    volume_to_market_cap_ratio_percent: str
    cycle_index: str
    threshold: str
    echo_rim: str
    delta_key: str
    phase_drift: str
    alignment_string: str


class OracleReport(BaseModel):
    """A fully assembled report. ``render()`` gives the post text."""

    model_config = ConfigDict(frozen=True)

    header: str
    symbol: str
    archetype: Archetype
    quote: str
    narrative: str
    narrative_source: Literal["llm", "template"]
    price: str
    change_24h: str
    volume: str
    market_cap: str
    fdv: str
    circulating_supply: str
    holders: str
    total_supply: str
    metrics: DerivedMetrics

    def render(self) -> str:
        m = self.metrics
        return (
            f"{self.header}\n"
            f"\n"
            f"{self.quote}\n"
            f"\n"
            f"Price: {self.price} • 24h Change: {self.change_24h}\n"
            f"24h Volume: {self.volume}\n"
            f"Market Cap: {self.market_cap}\n"
            f"Fully Diluted Valuation: {self.fdv}\n"
            f"Circulating Supply: {self.circulating_supply} {self.symbol}\n"
            f"Volume/Market Cap: {m.volume_to_market_cap_ratio_percent}%\n"
            f"Holders: {self.holders}\n"
            f"Total Supply: {self.total_supply} {self.symbol}\n"
            f"Cycle Index: {m.cycle_index} /φ\n"
            f"Threshold: {m.threshold}\n"
            f"Echo Rim: {m.echo_rim}\n"
            f"Δ-Key: {m.delta_key}\n"
            f"Phase Drift: {m.phase_drift} / h\n"
            f"Alignment String:\n"
            f"{m.alignment_string}\n"
            f"\n"
            f"Oracle Pulse:\n"
            f"{self.narrative}"
        )


class ResonanceEntry(BaseModel):
    """One published post as kept in the resonance log."""

    id: str
    archetype: Archetype
    token: str | None = None
    content: str
    timestamp: datetime
    rsi: int | None = None
    price: float | None = None
    volume: str | None = None
    likes: int = 0
    retweets: int = 0
