"""Health & Info — service banner at / and a readiness probe.

Invariants:
    - GET / always returns 200 if the process is up (liveness)
    - GET /api/health/ready returns 503 if the database is unreachable (readiness)
"""

import logging
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])

ENDPOINTS = [
    "/api/kanji (GET, POST, DELETE)",
    "/api/kanji/random (GET)",
    "/api/kanji/:id (GET, PUT, DELETE)",
    "/api/dictionary/search?query= (GET)",
]


@router.get("/", status_code=status.HTTP_200_OK)
async def root():
    """Liveness banner with the endpoint list."""
    return {
        "message": "Kanji API is running",
        "status": "OK",
        "endpoints": ENDPOINTS,
    }


@router.get("/api/health/ready")
async def readiness_check(request: Request):
    """Readiness probe — includes database connectivity."""
    db_manager = getattr(request.app.state, "db_manager", None)
    db_ok = await db_manager.health_check() if db_manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
