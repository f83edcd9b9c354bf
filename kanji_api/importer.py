"""Data Importer — one-shot batch load of a JSON array file into the kanji table.

Invariants:
    - The file is read and every row validated BEFORE the store is touched
    - Store-specific keys (_id, __v, id, timestamps) are dropped; only the four text fields survive
    - Existing rows are deleted and committed before the bulk insert begins
    - Any failure aborts the job with exit status 1; no rollback of the clear step

Design Decisions:
    - Accepts both API field names and the legacy export keys (Kanji/Onyomi/...) via
      Pydantic AliasChoices instead of hand-written key juggling
    - Runs through the same DatabaseSessionManager + KanjiStore as the server
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from kanji_api.config import get_settings
from kanji_api.core.errors import KanjiApiError
from kanji_api.infrastructure.database import DatabaseSessionManager
from kanji_api.infrastructure.observability import setup_logging
from kanji_api.schemas.kanji import KanjiCreate
from kanji_api.services.kanji_store import KanjiStore

logger = logging.getLogger(__name__)

DEFAULT_IMPORT_FILE = "capstone.kanji.json"


class KanjiImportRow(BaseModel):
    """One row of the import file; unknown keys ignored, missing readings default to ""."""
    model_config = ConfigDict(extra="ignore")

    character: str = Field(validation_alias=AliasChoices("character", "Kanji"))
    onyomi: str | None = Field(None, validation_alias=AliasChoices("onyomi", "Onyomi"))
    kunyomi: str | None = Field(None, validation_alias=AliasChoices("kunyomi", "Kunyomi"))
    meaning: str | None = Field(None, validation_alias=AliasChoices("meaning", "Meaning"))

    def to_create(self) -> KanjiCreate:
        return KanjiCreate(
            character=self.character,
            onyomi=self.onyomi or "",
            kunyomi=self.kunyomi or "",
            meaning=self.meaning or "",
        )


def load_rows(path: Path) -> list[KanjiCreate]:
    """Read and validate the import file. Raises ValueError on any bad shape."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array, got {type(data).__name__}")
    return [KanjiImportRow.model_validate(item).to_create() for item in data]


async def import_kanji(db_manager: DatabaseSessionManager, rows: list[KanjiCreate]) -> int:
    """Clear the collection, then bulk-insert rows. Returns the imported count."""
    async with db_manager.session() as db:
        store = KanjiStore(db)
        deleted = await store.delete_all()
        logger.info(f"Cleared {deleted} existing kanji", extra={"deleted_count": deleted})
        imported = await store.insert_many(rows)
    logger.info("Kanji imported", extra={"imported_count": imported})
    return imported


async def run(path: Path, database_url: str) -> int:
    rows = load_rows(path)
    logger.info(f"Loaded {len(rows)} kanji from {path}")
    db_manager = DatabaseSessionManager(database_url)
    try:
        await db_manager.connect()
        return await import_kanji(db_manager, rows)
    finally:
        await db_manager.dispose()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="kanji-import",
        description="Replace the kanji collection with the contents of a JSON file.",
    )
    parser.add_argument(
        "--file", type=Path, default=Path(DEFAULT_IMPORT_FILE),
        help=f"JSON array of kanji records (default: {DEFAULT_IMPORT_FILE})",
    )
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        logger.critical(f"Invalid configuration: {e}")
        sys.exit(1)
    setup_logging(settings.log_level, settings.log_format)

    try:
        asyncio.run(run(args.file, settings.database_url))
    except (OSError, ValueError, KanjiApiError) as e:
        logger.error(f"Error importing data: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
