"""Derived metrics, numeric formatting and report assembly."""

from oracle_core.report.builder import (
    DEFAULT_HEADER,
    MAX_POST_CHARS,
    build_compact_post,
    build_report,
    truncate_post,
)
from oracle_core.report.formatting import (
    PLACEHOLDER,
    format_number,
    format_percent,
    format_price,
    to_fixed,
)
from oracle_core.report.insight import (
    DEFAULT_MYSTICAL_QUOTE,
    build_insight_prompt,
    split_completion,
    template_narrative,
)
from oracle_core.report.metrics import derive_metrics

__all__ = [
    "DEFAULT_HEADER",
    "DEFAULT_MYSTICAL_QUOTE",
    "MAX_POST_CHARS",
    "PLACEHOLDER",
    "build_compact_post",
    "build_insight_prompt",
    "build_report",
    "derive_metrics",
    "format_number",
    "format_percent",
    "format_price",
    "split_completion",
    "template_narrative",
    "to_fixed",
    "truncate_post",
]
