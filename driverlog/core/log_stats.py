"""Log Stats: pure aggregate statistics over a filtered set of log rows.

Invariants:
    - Computed over exactly the rows passed in (the caller's filtered set)
    - Null/missing contributions count as 0; an empty set yields all zeros
    - Returns a flat dict (serializable as JSON)
"""

from collections.abc import Iterable
from typing import Any


def _value(row: Any, name: str) -> float:
    value = row.get(name) if isinstance(row, dict) else getattr(row, name, None)
    return value or 0


def compute_log_stats(rows: Iterable[Any]) -> dict:
    """Aggregate days/miles/value/pay. Accepts ORM rows or plain dicts."""
    days = 0
    miles = value = pay = 0
    for row in rows:
        days += 1
        miles += _value(row, "total_miles")
        value += _value(row, "total_value_hours")
        pay += _value(row, "gross_pay")
    return {"days": days, "miles": miles, "value": value, "pay": pay}
