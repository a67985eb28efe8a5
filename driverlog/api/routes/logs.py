"""Log Ingestion Route: POST /api/logs.

Invariants:
    - Body is read raw: any JSON or form-encoded shape is accepted and handed to the ingestion
      service, which coerces (lenient) or rejects (strict)
    - Success contract is exactly {"ok": true, "id": <int>}
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from driverlog.api.dependencies import read_payload
from driverlog.config import Settings, get_settings
from driverlog.infrastructure.database import get_db
from driverlog.schemas.log_entry import LogCreatedResponse
from driverlog.services.log_ingestion import submit_log

router = APIRouter(prefix="/api/logs", tags=["logs"])


@router.post("", response_model=LogCreatedResponse)
async def create_log(
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Store one driver-day log with its stops."""
    payload = await read_payload(request, settings)
    log_id = await submit_log(db, payload, strict=settings.strict_validation)
    return LogCreatedResponse(id=log_id)
