"""Kanji Store — all persistence operations on the kanji table, behind one injected handle.

Invariants:
    - Every operation runs on the AsyncSession it was constructed with (no global engine)
    - Malformed identifiers resolve to ResourceNotFoundError, never to a parse error
    - Unique-constraint violations become DuplicateKeyError naming the offending field
    - Any other SQLAlchemy failure becomes DatabaseError; the session is rolled back
    - sample() never asks the database for more rows than it holds

Design Decisions:
    - Store class over inline queries in routes: routes stay thin and the handle
      is replaceable in tests (ADR: ExMA impureim sandwich)
    - ORDER BY random() for sampling: supported by both PostgreSQL and SQLite,
      uniform without replacement within one query
"""

import logging
from uuid import UUID

from fastapi import Depends
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from kanji_api.core.default_kanji import sample_size
from kanji_api.core.errors import (
    DatabaseError, DuplicateKeyError, ErrorContext, ResourceNotFoundError,
)
from kanji_api.infrastructure.database import get_db
from kanji_api.models.kanji import Kanji
from kanji_api.schemas.kanji import KanjiCreate, KanjiPatch

logger = logging.getLogger(__name__)

# Unique columns, matched against the driver's constraint-violation message
_UNIQUE_FIELDS = ("character",)


def duplicate_field(exc: IntegrityError) -> str:
    """Name the field behind a unique violation (PostgreSQL and SQLite messages)."""
    text = str(exc.orig) if exc.orig is not None else str(exc)
    for field in _UNIQUE_FIELDS:
        if field in text:
            return field
    return _UNIQUE_FIELDS[0]


def parse_kanji_id(kanji_id: str) -> UUID:
    try:
        return UUID(kanji_id)
    except (ValueError, AttributeError, TypeError):
        raise ResourceNotFoundError("Kanji", str(kanji_id))


class KanjiStore:
    """CRUD and sampling over the kanji table for one request."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[Kanji]:
        try:
            result = await self.db.execute(
                select(Kanji).order_by(Kanji.created_at, Kanji.id),
            )
        except SQLAlchemyError as e:
            raise await self._database_error(e, "list")
        return list(result.scalars().all())

    async def count(self) -> int:
        try:
            result = await self.db.execute(
                select(func.count()).select_from(Kanji),
            )
        except SQLAlchemyError as e:
            raise await self._database_error(e, "count")
        return result.scalar_one()

    async def get(self, kanji_id: str) -> Kanji:
        """Fetch one record or raise ResourceNotFoundError."""
        key = parse_kanji_id(kanji_id)
        try:
            kanji = await self.db.get(Kanji, key)
        except SQLAlchemyError as e:
            raise await self._database_error(e, "get")
        if kanji is None:
            raise ResourceNotFoundError("Kanji", kanji_id)
        return kanji

    async def sample(self, limit: int) -> list[Kanji]:
        """Uniform random sample without replacement, at most min(limit, count) rows."""
        n = sample_size(limit, await self.count())
        if n == 0:
            return []
        try:
            result = await self.db.execute(
                select(Kanji).order_by(func.random()).limit(n),
            )
        except SQLAlchemyError as e:
            raise await self._database_error(e, "sample")
        return list(result.scalars().all())

    async def create(self, body: KanjiCreate) -> Kanji:
        kanji = Kanji(**body.model_dump())
        self.db.add(kanji)
        await self._commit("create")
        await self.db.refresh(kanji)
        logger.info(
            f"Kanji created: {kanji.character}",
            extra={"kanji_id": str(kanji.id)},
        )
        return kanji

    async def update(self, kanji_id: str, patch: KanjiPatch) -> Kanji:
        """Merge supplied fields onto the stored record; untouched fields keep their value."""
        kanji = await self.get(kanji_id)
        for name, value in patch.changes().items():
            setattr(kanji, name, value)
        await self._commit("update")
        await self.db.refresh(kanji)
        return kanji

    async def delete(self, kanji_id: str) -> None:
        kanji = await self.get(kanji_id)
        await self.db.delete(kanji)
        await self._commit("delete")
        logger.info("Kanji deleted", extra={"kanji_id": kanji_id})

    async def delete_all(self) -> int:
        """Remove every record. Returns the number of rows deleted."""
        try:
            result = await self.db.execute(delete(Kanji))
        except SQLAlchemyError as e:
            raise await self._database_error(e, "delete_all")
        await self._commit("delete_all")
        deleted = result.rowcount or 0
        logger.info("Kanji collection cleared", extra={"deleted_count": deleted})
        return deleted

    async def insert_many(self, rows: list[KanjiCreate]) -> int:
        self.db.add_all([Kanji(**row.model_dump()) for row in rows])
        await self._commit("insert_many")
        return len(rows)

    async def _commit(self, operation: str) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            field = duplicate_field(e)
            logger.warning(f"Duplicate key on {operation}: {field}")
            raise DuplicateKeyError(field)
        except SQLAlchemyError as e:
            raise await self._database_error(e, operation)

    async def _database_error(self, e: SQLAlchemyError, operation: str) -> DatabaseError:
        await self.db.rollback()
        logger.error(f"DB error during kanji {operation}: {e}")
        return DatabaseError(
            "Database operation failed", operation,
            ErrorContext(debug_info={"reason": f"{type(e).__name__}: {e}"}),
        )


async def get_kanji_store(db: AsyncSession = Depends(get_db)) -> KanjiStore:
    """FastAPI dependency — store handle bound to the request's session."""
    return KanjiStore(db)
