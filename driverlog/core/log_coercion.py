"""Log Coercion: turns an arbitrary submission payload into storable log and stop rows.

Invariants:
    - Pure: no IO, no clock (the caller passes created_at and today)
    - Absent, null and "" values always fall back to the column default
      (0 for numbers, "" for text, today for date), in both modes
    - Stop value_hours is the only value that may come out as None (caller sent "")
    - Lenient mode never raises; strict mode raises PayloadValidationError for a
      present value of the wrong shape, naming the offending field
    - No range or consistency checks in either mode (end_miles < start_miles is fine)
"""

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from driverlog.core.errors import PayloadValidationError

LOG_TEXT_FIELDS = (
    "driver_name", "driver_email", "cc_email", "truck_num",
    "start_time", "end_time", "total_time", "total_detention",
)
LOG_NUMERIC_FIELDS = (
    "start_miles", "end_miles", "rate_mile", "rate_hour",
    "total_miles", "total_value_hours", "gross_pay",
)
STOP_TEXT_FIELDS = (
    "type", "location", "arrive", "depart", "duration", "detention", "grain_phase",
)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_SQLITE_INT_MIN = -(2 ** 63)
_SQLITE_INT_MAX = 2 ** 63 - 1


@dataclass
class CoercedSubmission:
    """Column values for one log row and its stop rows (log_id not yet known)."""
    log: dict[str, Any]
    stops: list[dict[str, Any]] = field(default_factory=list)


def _reject(field_name: str, message: str) -> PayloadValidationError:
    return PayloadValidationError(f"{field_name}: {message}", field_name)


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def format_number(value: float) -> str:
    """Render integral floats without a trailing .0 (100.0 -> "100")."""
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return str(value)


def coerce_number(value: Any, field_name: str, strict: bool = False) -> float:
    """Numeric coercion: blank or unparseable values become 0."""
    if _is_blank(value):
        return 0.0
    if isinstance(value, bool):
        if strict:
            raise _reject(field_name, "expected a number, got a boolean")
        return 1.0 if value else 0.0
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, str):
            number = float(value.strip()) if value.strip() else 0.0
        else:
            raise TypeError(type(value).__name__)
    except (TypeError, ValueError, OverflowError):
        if strict:
            raise _reject(field_name, "expected a number")
        return 0.0
    if not math.isfinite(number):
        if strict:
            raise _reject(field_name, "expected a finite number")
        return 0.0
    return number


def coerce_integer(value: Any, field_name: str, strict: bool = False) -> int:
    number = coerce_number(value, field_name, strict)
    if strict and number != int(number):
        raise _reject(field_name, "expected a whole number")
    integer = int(number)
    if not _SQLITE_INT_MIN <= integer <= _SQLITE_INT_MAX:
        if strict:
            raise _reject(field_name, "number out of range")
        return 0
    return integer


def coerce_text(value: Any, field_name: str, strict: bool = False) -> str:
    """String coercion: blank becomes "", scalars are stringified."""
    if _is_blank(value):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_number(value)
    if strict:
        raise _reject(field_name, "expected text")
    return ""


def coerce_optional_number(value: Any, field_name: str, strict: bool = False) -> float | None:
    """Like coerce_number, except an explicit "" is kept as None."""
    if value == "":
        return None
    return coerce_number(value, field_name, strict)


def coerce_date(value: Any, today: date, strict: bool = False) -> str:
    if _is_blank(value):
        return today.isoformat()
    if not strict:
        return coerce_text(value, "date") or today.isoformat()
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        raise _reject("date", "expected YYYY-MM-DD")
    try:
        date.fromisoformat(value)
    except ValueError:
        raise _reject("date", "not a calendar date")
    return value


def coerce_stop(raw: Any, index: int, strict: bool = False) -> dict[str, Any]:
    """Coerce one stop object; non-objects count as an empty stop in lenient mode."""
    prefix = f"stops[{index}]"
    if not isinstance(raw, Mapping):
        if strict:
            raise _reject(prefix, "expected an object")
        raw = {}
    stop: dict[str, Any] = {
        "stop_no": coerce_integer(raw.get("stop_no"), f"{prefix}.stop_no", strict),
    }
    for name in STOP_TEXT_FIELDS:
        stop[name] = coerce_text(raw.get(name), f"{prefix}.{name}", strict)
    stop["value_hours"] = coerce_optional_number(
        raw.get("value_hours"), f"{prefix}.value_hours", strict,
    )
    return stop


def _stop_items(payload: Mapping, strict: bool) -> list:
    stops = payload.get("stops")
    if stops is None:
        return []
    if isinstance(stops, list):
        return stops
    if strict:
        raise _reject("stops", "expected a list")
    return []


def coerce_submission(
    payload: Any, *, created_at: str, today: date, strict: bool = False,
) -> CoercedSubmission:
    """Coerce a raw submission into a log row and its ordered stop rows."""
    if not isinstance(payload, Mapping):
        if strict and payload is not None:
            raise _reject("body", "expected a JSON object")
        payload = {}

    log: dict[str, Any] = {
        "created_at": created_at,
        "date": coerce_date(payload.get("date"), today, strict),
    }
    for name in LOG_TEXT_FIELDS:
        log[name] = coerce_text(payload.get(name), name, strict)
    for name in LOG_NUMERIC_FIELDS:
        log[name] = coerce_number(payload.get(name), name, strict)

    stops = [
        coerce_stop(raw, index, strict)
        for index, raw in enumerate(_stop_items(payload, strict))
    ]
    return CoercedSubmission(log=log, stops=stops)
