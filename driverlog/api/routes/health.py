"""Health & Readiness Probes: liveness and readiness endpoints.

Invariants:
    - GET /healthz always returns 200 "ok" if the process is up (no storage access)
    - GET /healthz/ready returns 503 if the database is unreachable
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse, PlainTextResponse

from driverlog.infrastructure import database

router = APIRouter(prefix="/healthz", tags=["health"])


@router.get("", response_class=PlainTextResponse)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return "ok"


@router.get("/ready")
async def readiness_check():
    """Readiness probe: includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
