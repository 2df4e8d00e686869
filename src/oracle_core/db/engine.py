"""Database engine and session management."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from oracle_core.db.base import Base

_engine: Engine | None = None
_SessionLocal: sessionmaker[Session] | None = None


def _ensure_psycopg_driver(url: str) -> str:
    """Rewrite postgresql:// to postgresql+psycopg:// for psycopg v3."""
    if url.startswith("postgresql://"):
        return "postgresql+psycopg://" + url[len("postgresql://"):]
    return url


def _engine_kwargs(url: str, kwargs: dict[str, Any]) -> dict[str, Any]:
    if url.startswith("sqlite"):
        # FastAPI opens sessions in its threadpool and uses them on the event loop
        connect_args = dict(kwargs.get("connect_args") or {})
        connect_args.setdefault("check_same_thread", False)
        kwargs = {**kwargs, "connect_args": connect_args}
    return kwargs


def init_engine(url: str, create_tables: bool = True, **kwargs: Any) -> Engine:
    """Create the global engine and session factory.

    Tables are created on first use; there are no migrations.
    """
    global _engine, _SessionLocal
    url = _ensure_psycopg_driver(url)
    _engine = create_engine(url, **_engine_kwargs(url, kwargs))
    _SessionLocal = sessionmaker(bind=_engine)
    if create_tables:
        import oracle_core.db.tables  # noqa: F401

        Base.metadata.create_all(_engine)
    return _engine


def get_engine() -> Engine:
    """Return the global engine (must call init_engine first)."""
    if _engine is None:
        raise RuntimeError("Database engine not initialised — call init_engine() first")
    return _engine


def get_session() -> Generator[Session, None, None]:
    """Yield a session bound to the global engine, closing it when done."""
    if _SessionLocal is None:
        raise RuntimeError("Database engine not initialised — call init_engine() first")
    session = _SessionLocal()
    try:
        yield session
    finally:
        session.close()
