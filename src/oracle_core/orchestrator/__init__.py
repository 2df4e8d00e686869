"""Post, reply and timeline-sync orchestration."""

from oracle_core.orchestrator.pipeline import (
    compose_report,
    fetch_celestial,
    fetch_lunar_signal,
    fetch_token_snapshot,
    pick_trending,
    resolve_mention_token,
    run_post,
    run_reply,
    run_sync,
)
from oracle_core.orchestrator.services import OracleServices, build_services

__all__ = [
    "OracleServices",
    "build_services",
    "compose_report",
    "fetch_celestial",
    "fetch_lunar_signal",
    "fetch_token_snapshot",
    "pick_trending",
    "resolve_mention_token",
    "run_post",
    "run_reply",
    "run_sync",
]
