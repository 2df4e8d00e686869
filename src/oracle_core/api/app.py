"""FastAPI application — celestial readings, resonance summaries, cron triggers."""

from __future__ import annotations

import hmac
import os
from collections.abc import Generator
from datetime import datetime, timezone

import structlog
from fastapi import Depends, FastAPI, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from oracle_core import __version__
from oracle_core.config.loader import load_config
from oracle_core.db.engine import get_session as _get_session, init_engine
from oracle_core.models import GeomagneticReading
from oracle_core.orchestrator import (
    OracleServices,
    build_services,
    fetch_celestial,
    fetch_lunar_signal,
    run_post,
    run_reply,
    run_sync,
)
from oracle_core.resonance import ReplyMemory, ResonanceStore, mirror_summary, pulse_summary

logger = structlog.get_logger()

# Load config once at import; ORACLE_CONFIG points at a YAML file
config = load_config(os.environ.get("ORACLE_CONFIG"))

app = FastAPI(
    title="Oracle API",
    description="Lunar and geomagnetic readings, resonance log, and cron-triggered posting",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.api.cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

_services: OracleServices | None = None

NO_STORE = {"Cache-Control": "no-store"}


def get_services() -> OracleServices:
    """Dependency returning the process-wide collaborator bundle."""
    global _services
    if _services is None:
        _services = build_services(config)
    return _services


def get_db() -> Generator[Session, None, None]:
    """Dependency to get DB session."""
    gen = _get_session()
    session = next(gen)
    try:
        yield session
    finally:
        try:
            next(gen)
        except StopIteration:
            pass


@app.on_event("startup")
async def startup_event():
    """Initialize database engine on startup."""
    init_engine(config.database.url)
    logger.info("Database engine initialized")


@app.on_event("shutdown")
async def shutdown_event():
    if _services is not None:
        await _services.close()


def _kp_payload(reading: GeomagneticReading) -> dict:
    return {
        "index": reading.index,
        "state": reading.state.label,
        "time": reading.observed_at.isoformat(),
    }


def _cron_authorized(key: str | None, secret: str | None) -> bool:
    if not secret or key is None:
        return False
    return hmac.compare_digest(key.encode(), secret.encode())


def _forbidden() -> JSONResponse:
    return JSONResponse(status_code=403, content={"ok": False, "reason": "forbidden"}, headers=NO_STORE)


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


# ═══════════════════════════════════════════════════════════════
# Celestial
# ═══════════════════════════════════════════════════════════════


@app.get("/api/lunar")
async def lunar(services: OracleServices = Depends(get_services)):
    """Today's lunar signal; ``source`` tells primary, fallback or error."""
    signal = await fetch_lunar_signal(services.weather)
    return signal.model_dump(mode="json")


@app.get("/api/celestial")
async def celestial(services: OracleServices = Depends(get_services)):
    """Realtime and averaged Kp plus the lunar alignment."""
    alignment = await fetch_celestial(services.weather, services.swpc)
    lunar = alignment.lunar
    return {
        "kp": {
            "realtime": _kp_payload(alignment.realtime_kp),
            "averaged": _kp_payload(alignment.averaged_kp),
        },
        "alignment": {
            "event": lunar.phase,
            "effect": lunar.message,
            "pattern": lunar.pattern.model_dump(),
            "illumination": lunar.illumination,
            "time": lunar.observed_at.isoformat(),
            "source": lunar.source,
        },
    }


# ═══════════════════════════════════════════════════════════════
# Resonance log
# ═══════════════════════════════════════════════════════════════


@app.get("/api/pulse")
async def pulse(session: Session = Depends(get_db)):
    """Archetype counts over the last 20 posts and over the whole log."""
    try:
        entries = ResonanceStore(session).load_all()
    except SQLAlchemyError:
        logger.exception("pulse_failed")
        return JSONResponse(
            status_code=500,
            content={"active": {}, "total": {}, "recentSignals": 0, "totalSignals": 0},
        )
    return pulse_summary(entries)


@app.get("/api/mirror")
async def mirror(session: Session = Depends(get_db)):
    """Archetype distribution over the whole log."""
    try:
        entries = ResonanceStore(session).load_all()
    except SQLAlchemyError:
        logger.exception("mirror_failed")
        return JSONResponse(status_code=500, content={"distribution": {}, "percentages": {}, "total": 0})
    return mirror_summary(entries)


@app.get("/api/resonance")
async def resonance(
    limit: int = Query(default=100, ge=1, le=1000),
    session: Session = Depends(get_db),
):
    """Newest posts first."""
    try:
        entries = ResonanceStore(session).load_recent(limit)
    except SQLAlchemyError:
        logger.exception("resonance_failed")
        return JSONResponse(status_code=500, content=[])
    return [e.model_dump(mode="json") for e in entries]


# ═══════════════════════════════════════════════════════════════
# Cron
# ═══════════════════════════════════════════════════════════════


@app.get("/api/cron/post")
async def cron_post(
    response: Response,
    key: str | None = None,
    services: OracleServices = Depends(get_services),
    session: Session = Depends(get_db),
):
    """Publish one report. Requires ``?key=<cron secret>``."""
    if not _cron_authorized(key, services.config.cron.secret):
        return _forbidden()
    response.headers.update(NO_STORE)
    try:
        return await run_post(services, ResonanceStore(session))
    except Exception as e:
        logger.exception("cron_post_failed")
        return {"ok": False, "error": str(e)}


@app.get("/api/cron/reply")
async def cron_reply(
    response: Response,
    key: str | None = None,
    services: OracleServices = Depends(get_services),
    session: Session = Depends(get_db),
):
    """Answer new mentions. Requires ``?key=<cron secret>``."""
    if not _cron_authorized(key, services.config.cron.secret):
        return _forbidden()
    response.headers.update(NO_STORE)
    try:
        return await run_reply(services, ReplyMemory(session))
    except Exception as e:
        logger.exception("cron_reply_failed")
        return {"ok": False, "error": str(e)}


@app.get("/api/cron/sync")
async def cron_sync(
    response: Response,
    key: str | None = None,
    services: OracleServices = Depends(get_services),
    session: Session = Depends(get_db),
):
    """Pull recent posts and their engagement into the resonance log. Requires ``?key=<cron secret>``."""
    if not _cron_authorized(key, services.config.cron.secret):
        return _forbidden()
    response.headers.update(NO_STORE)
    try:
        return await run_sync(services, ResonanceStore(session))
    except Exception as e:
        logger.exception("cron_sync_failed")
        return {"ok": False, "error": str(e)}
