"""One-shot cron runner for the post, reply and sync pipelines."""

from __future__ import annotations

import asyncio

import structlog

from oracle_core.config.loader import load_config
from oracle_core.config.schema import AppConfig
from oracle_core.db.engine import get_session, init_engine
from oracle_core.logging.setup import setup_logging
from oracle_core.orchestrator.pipeline import run_post, run_reply, run_sync
from oracle_core.orchestrator.services import build_services
from oracle_core.resonance import ReplyMemory, ResonanceStore

log = structlog.get_logger("orchestrator")


async def run_once(config: AppConfig, command: str) -> dict:
    """Run one ``post``, ``reply`` or ``sync`` cycle and return its result payload."""
    if command not in ("post", "reply", "sync"):
        raise ValueError(f"Unknown command: {command!r}")

    init_engine(config.database.url)
    services = build_services(config)
    session_gen = get_session()
    session = next(session_gen)
    try:
        if command == "post":
            result = await run_post(services, ResonanceStore(session))
        elif command == "reply":
            result = await run_reply(services, ReplyMemory(session))
        else:
            result = await run_sync(services, ResonanceStore(session))
    except Exception as e:
        log.exception("cycle_failed", command=command)
        result = {"ok": False, "error": str(e)}
    finally:
        await services.close()
        try:
            next(session_gen)
        except StopIteration:
            pass

    log.info("cycle_finished", command=command, ok=result.get("ok"))
    return result


def main(command: str, config_path: str | None = None) -> None:
    """Entry point — load config, set up logging, run one cycle."""
    config = load_config(config_path)
    setup_logging(level=config.logging.level, log_format=config.logging.format)
    asyncio.run(run_once(config, command))
