"""Tests for compute_log_stats: pure aggregates over filtered rows, no IO."""

from types import SimpleNamespace

from driverlog.core.log_stats import compute_log_stats


def test_empty_rows_return_zero_stats():
    assert compute_log_stats([]) == {"days": 0, "miles": 0, "value": 0, "pay": 0}


def test_sums_total_miles():
    rows = [{"total_miles": 100}, {"total_miles": 0}, {"total_miles": 50}]
    stats = compute_log_stats(rows)
    assert stats["days"] == 3
    assert stats["miles"] == 150


def test_null_contributions_count_as_zero():
    rows = [
        {"total_miles": None, "total_value_hours": 2.5, "gross_pay": None},
        {"total_miles": 10, "total_value_hours": None, "gross_pay": 120.0},
        {},
    ]
    stats = compute_log_stats(rows)
    assert stats == {"days": 3, "miles": 10, "value": 2.5, "pay": 120.0}


def test_accepts_attribute_rows():
    rows = [
        SimpleNamespace(total_miles=12.5, total_value_hours=1.0, gross_pay=80.0),
        SimpleNamespace(total_miles=7.5, total_value_hours=0.5, gross_pay=20.0),
    ]
    stats = compute_log_stats(rows)
    assert stats == {"days": 2, "miles": 20.0, "value": 1.5, "pay": 100.0}


def test_consumes_generators():
    stats = compute_log_stats({"gross_pay": p} for p in (10, 20, 30))
    assert stats["days"] == 3
    assert stats["pay"] == 60
