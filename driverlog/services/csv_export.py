"""CSV Export: streams filtered logs or stops as UTF-8 CSV, one row at a time.

Invariants:
    - The header line is emitted before the first row is fetched, so empty
      result sets still produce a header
    - Each row is encoded and yielded as soon as it is read; nothing buffers the
      whole result set
    - The export owns its DB session for the lifetime of the stream and closes
      it when the stream ends, fails, or the client goes away

Design Decisions:
    - Session opened inside the generator rather than through Depends(get_db):
      a StreamingResponse body runs after the endpoint function has returned
"""

import asyncio
import logging
from collections.abc import AsyncIterable, AsyncIterator, Callable, Mapping
from contextlib import aclosing
from typing import Any

from driverlog.core.csv_projection import (
    ExportColumn, LOG_EXPORT_COLUMNS, STOP_EXPORT_COLUMNS, header_line, row_line,
)
from driverlog.core.log_filters import LogFilters
from driverlog.core.repository_protocols import LogStore
from driverlog.infrastructure.database import DatabaseSessionManager
from driverlog.services.log_query import stream_log_rows, stream_stop_rows
from driverlog.services.log_repository import SqlLogStore

logger = logging.getLogger(__name__)

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"


async def stream_csv(
    rows: AsyncIterable[Mapping[str, Any]], columns: tuple[ExportColumn, ...],
) -> AsyncIterator[bytes]:
    """Serialize rows to CSV bytes: header first, then one chunk per row."""
    yield header_line(columns).encode("utf-8")
    async for row in rows:
        yield row_line(row, columns).encode("utf-8")


async def _export(
    manager: DatabaseSessionManager,
    filters: LogFilters,
    name: str,
    rows_for: Callable[[LogStore, LogFilters], AsyncIterator[Mapping[str, Any]]],
    columns: tuple[ExportColumn, ...],
) -> AsyncIterator[bytes]:
    rows_sent = 0
    async with manager.session() as db:
        rows = rows_for(SqlLogStore(db), filters)
        try:
            async with aclosing(rows), aclosing(stream_csv(rows, columns)) as chunks:
                async for chunk in chunks:
                    yield chunk
                    rows_sent += 1
        except (asyncio.CancelledError, GeneratorExit):
            logger.info(
                "Export %s stopped by client after %d line(s)", name, rows_sent,
                extra={"export": name},
            )
            raise
    logger.info(
        "Export %s finished with %d row(s)", name, rows_sent - 1,
        extra={"export": name},
    )


def stream_log_export(
    manager: DatabaseSessionManager, filters: LogFilters,
) -> AsyncIterator[bytes]:
    return _export(manager, filters, "daily_logs", stream_log_rows, LOG_EXPORT_COLUMNS)


def stream_stop_export(
    manager: DatabaseSessionManager, filters: LogFilters,
) -> AsyncIterator[bytes]:
    return _export(manager, filters, "daily_stops", stream_stop_rows, STOP_EXPORT_COLUMNS)
