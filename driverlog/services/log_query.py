"""Log Query: the one filter predicate and the three read paths built on it.

Invariants:
    - build_log_predicate() is the only place filter clauses are made; the admin
      view, the log export and the stop export all consume it
    - Clauses target LogEntry columns; the stop paths join logs so the same
      clauses apply to each stop's parent
    - Admin view is newest-first; both exports are oldest-first
    - Stats are computed over exactly the filtered rows
"""

from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy import ColumnElement

from driverlog.core.log_filters import LogFilters
from driverlog.core.log_stats import compute_log_stats
from driverlog.core.repository_protocols import LogStore
from driverlog.models.log_entry import LogEntry
from driverlog.models.stop_entry import StopEntry

ADMIN_ORDER = (LogEntry.date.desc(), LogEntry.id.desc())
LOG_EXPORT_ORDER = (LogEntry.date.asc(), LogEntry.id.asc())
STOP_EXPORT_ORDER = (
    LogEntry.date.asc(), LogEntry.id.asc(),
    StopEntry.stop_no.asc(), StopEntry.id.asc(),
)


@dataclass
class LogQueryResult:
    rows: list[LogEntry]
    stats: dict


def build_log_predicate(filters: LogFilters) -> list[ColumnElement[bool]]:
    """AND-ed clauses for the present filters; an empty list matches everything."""
    clauses: list[ColumnElement[bool]] = []
    if filters.from_date:
        clauses.append(LogEntry.date >= filters.from_date)
    if filters.to_date:
        clauses.append(LogEntry.date <= filters.to_date)
    if filters.driver:
        # literal substring: % and _ in the caller's text are escaped
        clauses.append(LogEntry.driver_name.contains(filters.driver, autoescape=True))
    return clauses


async def query_logs(store: LogStore, filters: LogFilters) -> LogQueryResult:
    """Admin view: filtered logs newest-first plus their aggregate stats."""
    rows = await store.query_logs(build_log_predicate(filters), ADMIN_ORDER)
    return LogQueryResult(rows=rows, stats=compute_log_stats(rows))


async def query_stops(store: LogStore, filters: LogFilters) -> list[Mapping[str, Any]]:
    """Stops of the filtered logs with parent date/driver/truck, export order."""
    return await store.query_stops_joined(
        build_log_predicate(filters), STOP_EXPORT_ORDER,
    )


def stream_log_rows(store: LogStore, filters: LogFilters) -> AsyncIterator[Mapping[str, Any]]:
    return store.stream_logs(build_log_predicate(filters), LOG_EXPORT_ORDER)


def stream_stop_rows(store: LogStore, filters: LogFilters) -> AsyncIterator[Mapping[str, Any]]:
    return store.stream_stops_joined(build_log_predicate(filters), STOP_EXPORT_ORDER)
