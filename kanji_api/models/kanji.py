"""Kanji ORM — persisted kanji record (character, readings, meaning).

Invariants:
    - id is a UUID assigned on insert; clients treat it as an opaque string
    - character is non-nullable and UNIQUE (uq_kanji_character)
    - onyomi / kunyomi / meaning default to empty string, never NULL
    - updated_at refreshed on every UPDATE

Design Decisions:
    - Generic Uuid type: native uuid on PostgreSQL, CHAR(32) on SQLite test databases
    - Named unique constraint: DuplicateKeyError resolves the offending field by name
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, Uuid, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from kanji_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Kanji(Base):
    """One kanji entry."""
    __tablename__ = "kanji"
    __table_args__ = (
        UniqueConstraint("character", name="uq_kanji_character"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    character: Mapped[str] = mapped_column(String(16), nullable=False)
    onyomi: Mapped[str] = mapped_column(Text, nullable=False, default="")
    kunyomi: Mapped[str] = mapped_column(Text, nullable=False, default="")
    meaning: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )
