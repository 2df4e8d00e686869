"""SQLAlchemy ORM models for the resonance log and reply memory."""

from datetime import datetime

from sqlalchemy import Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import DateTime

from oracle_core.db.base import Base


class ResonanceRow(Base):
    __tablename__ = "resonance_log"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    archetype: Mapped[str] = mapped_column(Text, nullable=False)
    token: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    ts: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    rsi: Mapped[int | None] = mapped_column(Integer, nullable=True)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    volume: Mapped[str | None] = mapped_column(Text, nullable=True)
    likes: Mapped[int] = mapped_column(Integer, default=0)
    retweets: Mapped[int] = mapped_column(Integer, default=0)


class RepliedMentionRow(Base):
    __tablename__ = "replied_mentions"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mention_id: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    replied_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
