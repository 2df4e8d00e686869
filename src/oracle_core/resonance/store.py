"""Resonance log and reply memory, backed by SQLAlchemy."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from oracle_core.db.tables.resonance import RepliedMentionRow, ResonanceRow
from oracle_core.models import Archetype, ResonanceEntry


def _aware(ts: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything stored is UTC
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)


def _to_entry(row: ResonanceRow) -> ResonanceEntry:
    return ResonanceEntry(
        id=row.post_id,
        archetype=Archetype(row.archetype),
        token=row.token,
        content=row.content,
        timestamp=_aware(row.ts),
        rsi=row.rsi,
        price=row.price,
        volume=row.volume,
        likes=row.likes,
        retweets=row.retweets,
    )


def _to_row(entry: ResonanceEntry) -> ResonanceRow:
    return ResonanceRow(
        post_id=entry.id,
        archetype=entry.archetype.value,
        token=entry.token,
        content=entry.content,
        ts=entry.timestamp,
        rsi=entry.rsi,
        price=entry.price,
        volume=entry.volume,
        likes=entry.likes,
        retweets=entry.retweets,
    )


class ResonanceStore:
    """Published posts, newest first on read."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def append(self, entry: ResonanceEntry) -> int:
        """Insert *entry* and return its sequence number."""
        row = _to_row(entry)
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return row.seq

    def upsert(self, entry: ResonanceEntry) -> bool:
        """Insert *entry*, or refresh the engagement counts of the stored post.

        Returns True when a new row was inserted.
        """
        row = self.session.execute(
            select(ResonanceRow).where(ResonanceRow.post_id == entry.id)
        ).scalar_one_or_none()
        if row is None:
            self.session.add(_to_row(entry))
            inserted = True
        else:
            row.likes = entry.likes
            row.retweets = entry.retweets
            inserted = False
        self.session.commit()
        return inserted

    def load_recent(self, n: int) -> list[ResonanceEntry]:
        rows = self.session.execute(
            select(ResonanceRow).order_by(ResonanceRow.seq.desc()).limit(n)
        ).scalars().all()
        return [_to_entry(r) for r in rows]

    def load_all(self) -> list[ResonanceEntry]:
        rows = self.session.execute(
            select(ResonanceRow).order_by(ResonanceRow.seq.desc())
        ).scalars().all()
        return [_to_entry(r) for r in rows]


class ReplyMemory:
    """Ids of mentions that were already answered."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def contains(self, mention_id: str) -> bool:
        found = self.session.execute(
            select(RepliedMentionRow.seq).where(RepliedMentionRow.mention_id == mention_id)
        ).first()
        return found is not None

    def remember(self, mention_id: str, now: datetime | None = None) -> None:
        if self.contains(mention_id):
            return
        self.session.add(RepliedMentionRow(
            mention_id=mention_id,
            replied_at=now or datetime.now(timezone.utc),
        ))
        self.session.commit()

    def prune(self, keep: int = 100) -> int:
        """Drop all but the newest *keep* ids; returns how many were removed."""
        keep_seqs = select(RepliedMentionRow.seq).order_by(RepliedMentionRow.seq.desc()).limit(keep)
        result = self.session.execute(
            delete(RepliedMentionRow)
            .where(RepliedMentionRow.seq.not_in(keep_seqs))
            .execution_options(synchronize_session=False)
        )
        self.session.commit()
        return result.rowcount or 0
