"""Kanji API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to a structured JSON response
    - CORS restricted to the configured allow-list of local dev origins
    - Store connection verified in the lifespan BEFORE uvicorn binds the listener;
      an unreachable store aborts startup

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Store handle and dictionary client live on app.state and are injected via
      dependencies, never imported as module globals
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kanji_api.api.error_handlers import register_error_handlers
from kanji_api.api.routes import dictionary, health, kanji
from kanji_api.config import get_settings
from kanji_api.infrastructure.database import DatabaseSessionManager
from kanji_api.infrastructure.dictionary_client import DictionaryClient
from kanji_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle: connect store, open upstream client, tear both down."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    db_manager = DatabaseSessionManager(
        settings.database_url, **_engine_options(settings.database_url),
    )
    try:
        await db_manager.connect()
    except Exception:
        await db_manager.dispose()
        logger.critical("Failed to start Kanji API: database unreachable")
        raise
    app.state.db_manager = db_manager
    app.state.dictionary_client = DictionaryClient(
        settings.dictionary_api_url, settings.dictionary_timeout_seconds,
    )
    logger.info("Kanji API started")
    try:
        yield
    finally:
        logger.info("Kanji API shutting down")
        await app.state.dictionary_client.close()
        await db_manager.dispose()
        app.state.db_manager = None
        app.state.dictionary_client = None


def _engine_options(database_url: str) -> dict:
    """Pool sizing applies to server databases; SQLite manages its own pool."""
    if database_url.startswith("sqlite"):
        return {}
    settings = get_settings()
    return {
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
        "pool_recycle": 3600,
    }


app = FastAPI(title="Kanji API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(health.router)
app.include_router(kanji.router)
app.include_router(dictionary.router)

register_error_handlers(app)
