"""CSV Projection: fixed column tables and line rendering for the two exports.

Invariants:
    - Column order and labels come from LOG_EXPORT_COLUMNS / STOP_EXPORT_COLUMNS,
      never from the shape of a data row, so an empty export still has a header
    - One call renders one complete CSV line (csv module quoting, \\r\\n terminated)
    - A None cell renders as the column's default
    - Pure: no IO; the async streaming adapter lives in services/csv_export.py
"""

import csv
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from driverlog.core.log_coercion import format_number


@dataclass(frozen=True)
class ExportColumn:
    field: str
    label: str
    default: Any = ""


LOG_EXPORT_COLUMNS: tuple[ExportColumn, ...] = (
    ExportColumn("date", "Date"),
    ExportColumn("driver_name", "Driver Name"),
    ExportColumn("driver_email", "Driver Email"),
    ExportColumn("truck_num", "Truck #"),
    ExportColumn("start_miles", "Start Miles", 0),
    ExportColumn("end_miles", "End Miles", 0),
    ExportColumn("start_time", "Start Time"),
    ExportColumn("end_time", "End Time"),
    ExportColumn("rate_mile", "Rate/Mile", 0),
    ExportColumn("rate_hour", "Hourly Rate", 0),
    ExportColumn("total_miles", "Total Miles", 0),
    ExportColumn("total_time", "Total Time"),
    ExportColumn("total_detention", "Total Detention"),
    ExportColumn("total_value_hours", "Total Value (hrs)", 0),
    ExportColumn("gross_pay", "Gross Pay", 0),
)

STOP_EXPORT_COLUMNS: tuple[ExportColumn, ...] = (
    ExportColumn("date", "Date"),
    ExportColumn("driver_name", "Driver Name"),
    ExportColumn("truck_num", "Truck #"),
    ExportColumn("stop_no", "Stop #", 0),
    ExportColumn("type", "Type"),
    ExportColumn("location", "Location"),
    ExportColumn("arrive", "Arrive"),
    ExportColumn("depart", "Depart"),
    ExportColumn("duration", "Duration"),
    ExportColumn("detention", "Detention"),
    # null value_hours is an empty cell, not 0
    ExportColumn("value_hours", "Value (hrs)", ""),
    ExportColumn("grain_phase", "Grain Phase"),
)


class _Echo:
    """File-like object whose write() hands the formatted line back."""

    def write(self, value: str) -> str:
        return value


_writer = csv.writer(_Echo(), lineterminator="\r\n")


def render_cell(value: Any, default: Any = "") -> str:
    if value is None:
        value = default
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def header_line(columns: Iterable[ExportColumn]) -> str:
    return _writer.writerow([column.label for column in columns])


def row_line(row: Mapping[str, Any], columns: Iterable[ExportColumn]) -> str:
    return _writer.writerow([
        render_cell(row.get(column.field), column.default) for column in columns
    ])
