"""Database layer — engine, session, ORM base."""

from oracle_core.db.base import Base
from oracle_core.db.engine import get_engine, get_session, init_engine

__all__ = ["Base", "get_engine", "get_session", "init_engine"]
