"""SQL Log Store: SQLAlchemy implementation of the LogStore protocol.

Invariants:
    - Never commits or rolls back; the caller owns the transaction
    - insert_log flushes so the AUTOINCREMENT id is known before stops are added
    - stream_* close their result even when the consumer stops early
"""

import logging
from collections.abc import AsyncIterator, Mapping, Sequence
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from driverlog.models.log_entry import LogEntry
from driverlog.models.stop_entry import StopEntry

logger = logging.getLogger(__name__)

# Stop rows joined with the parent fields the stop export needs
_JOINED_STOP_COLUMNS = (
    LogEntry.date,
    LogEntry.driver_name,
    LogEntry.truck_num,
    StopEntry.log_id,
    StopEntry.stop_no,
    StopEntry.type,
    StopEntry.location,
    StopEntry.arrive,
    StopEntry.depart,
    StopEntry.duration,
    StopEntry.detention,
    StopEntry.value_hours,
    StopEntry.grain_phase,
)


class SqlLogStore:
    """Reads and writes logs/stops through one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def insert_log(self, fields: Mapping[str, Any]) -> int:
        log = LogEntry(**fields)
        self._db.add(log)
        await self._db.flush()
        return log.id

    async def insert_stops(
        self, log_id: int, stops: Sequence[Mapping[str, Any]],
    ) -> None:
        if not stops:
            return
        self._db.add_all([StopEntry(log_id=log_id, **stop) for stop in stops])
        await self._db.flush()

    async def query_logs(
        self, predicate: Sequence[Any], order: Sequence[Any],
    ) -> list[LogEntry]:
        result = await self._db.execute(
            select(LogEntry).where(*predicate).order_by(*order),
        )
        return list(result.scalars().all())

    def stream_logs(
        self, predicate: Sequence[Any], order: Sequence[Any],
    ) -> AsyncIterator[Mapping[str, Any]]:
        statement = select(LogEntry.__table__).where(*predicate).order_by(*order)
        return self._stream(statement)

    async def query_stops_joined(
        self, predicate: Sequence[Any], order: Sequence[Any],
    ) -> list[Mapping[str, Any]]:
        result = await self._db.execute(self._joined_stops(predicate, order))
        return [dict(row) for row in result.mappings().all()]

    def stream_stops_joined(
        self, predicate: Sequence[Any], order: Sequence[Any],
    ) -> AsyncIterator[Mapping[str, Any]]:
        return self._stream(self._joined_stops(predicate, order))

    @staticmethod
    def _joined_stops(predicate: Sequence[Any], order: Sequence[Any]):
        return (
            select(*_JOINED_STOP_COLUMNS)
            .select_from(StopEntry)
            .join(LogEntry, LogEntry.id == StopEntry.log_id)
            .where(*predicate)
            .order_by(*order)
        )

    async def _stream(self, statement) -> AsyncIterator[Mapping[str, Any]]:
        result = await self._db.stream(statement)
        try:
            async for row in result.mappings():
                yield dict(row)
        finally:
            await result.close()
