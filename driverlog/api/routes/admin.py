"""Admin Routes: filtered log view with stats, stop listing, and CSV exports.

Invariants:
    - Every route sits behind require_admin (router-level dependency)
    - All four routes take the same from/to/driver filters (get_log_filters)
    - Exports stream; the response starts before the query has finished
"""

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from driverlog.api.dependencies import get_log_filters, require_admin
from driverlog.core.log_filters import LogFilters
from driverlog.infrastructure.database import get_db, get_session_manager
from driverlog.schemas.log_entry import (
    AdminLogsResponse, AdminStopsResponse, FiltersEcho,
    LogEntryResponse, LogStatsResponse, StopRowResponse,
)
from driverlog.services.csv_export import (
    CSV_MEDIA_TYPE, stream_log_export, stream_stop_export,
)
from driverlog.services.log_query import query_logs, query_stops
from driverlog.services.log_repository import SqlLogStore

router = APIRouter(
    prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)],
)


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f"attachment; filename={filename}"}


@router.get("", response_model=AdminLogsResponse)
async def admin_logs(
    filters: LogFilters = Depends(get_log_filters),
    db: AsyncSession = Depends(get_db),
):
    """Filtered logs (newest first) with days/miles/value/pay totals."""
    result = await query_logs(SqlLogStore(db), filters)
    return AdminLogsResponse(
        rows=[LogEntryResponse.model_validate(row) for row in result.rows],
        filters=FiltersEcho(**filters.to_echo()),
        stats=LogStatsResponse(**result.stats),
    )


@router.get("/stops", response_model=AdminStopsResponse)
async def admin_stops(
    filters: LogFilters = Depends(get_log_filters),
    db: AsyncSession = Depends(get_db),
):
    """Stops of the filtered logs, joined with their parent's date/driver/truck."""
    rows = await query_stops(SqlLogStore(db), filters)
    return AdminStopsResponse(
        rows=[StopRowResponse(**row) for row in rows],
        filters=FiltersEcho(**filters.to_echo()),
    )


@router.get("/export/daily_logs.csv")
async def export_daily_logs(filters: LogFilters = Depends(get_log_filters)):
    return StreamingResponse(
        stream_log_export(get_session_manager(), filters),
        media_type=CSV_MEDIA_TYPE,
        headers=_attachment("daily_logs.csv"),
    )


@router.get("/export/daily_stops.csv")
async def export_daily_stops(filters: LogFilters = Depends(get_log_filters)):
    return StreamingResponse(
        stream_stop_export(get_session_manager(), filters),
        media_type=CSV_MEDIA_TYPE,
        headers=_attachment("daily_stops.csv"),
    )
