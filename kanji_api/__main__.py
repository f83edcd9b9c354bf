"""Server entry point — `kanji-api` / `python -m kanji_api`.

Invariants:
    - Settings validated before anything binds: missing DATABASE_URL exits with status 1
    - uvicorn owns the socket: bind failures (address in use) are logged and exit non-zero
    - SIGINT/SIGTERM drain in-flight requests, then the lifespan closes the store (exit 0)
"""

import logging
import sys

import uvicorn
from pydantic import ValidationError

from kanji_api.config import get_settings
from kanji_api.infrastructure.observability import setup_logging

logger = logging.getLogger("kanji_api")


def main() -> None:
    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        logger.critical(f"Invalid configuration, refusing to start: {e}")
        sys.exit(1)

    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Starting Kanji API on {settings.host}:{settings.port}")
    # log_config=None: uvicorn logs through the root handler installed above
    uvicorn.run(
        "kanji_api.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
