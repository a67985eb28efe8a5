"""Log ingestion tests: atomic header + stops persistence on a real SQLite file.

Tests cover:
    - Empty payload persisted with defaults and today's date
    - Stops persisted in order with the new log id
    - value_hours null special case
    - Atomic rollback when one stop insert fails
    - Concurrent submissions never interleave stops
    - Strict mode persists nothing on rejection
"""

import asyncio
from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy import func, null, select

import driverlog.services.log_ingestion as ingestion_module
from driverlog.core.errors import DatabaseError, PayloadValidationError
from driverlog.core.log_coercion import coerce_submission
from driverlog.models.log_entry import LogEntry
from driverlog.models.stop_entry import StopEntry
from driverlog.services.log_ingestion import iso_timestamp, submit_log


async def _count(manager, model) -> int:
    async with manager.session() as db:
        return (await db.execute(select(func.count()).select_from(model))).scalar_one()


async def _submit(manager, payload, **kwargs) -> int:
    async with manager.session() as db:
        return await submit_log(db, payload, **kwargs)


async def test_empty_payload_persists_defaults(manager):
    log_id = await _submit(manager, {})

    async with manager.session() as db:
        log = await db.get(LogEntry, log_id)
    assert log.date == date.today().isoformat()
    assert log.driver_name == ""
    assert log.truck_num == ""
    assert log.total_time == ""
    assert log.start_miles == 0
    assert log.gross_pay == 0
    assert log.created_at.endswith("Z")
    assert await _count(manager, StopEntry) == 0


async def test_created_at_comes_from_server_clock(manager):
    now = datetime(2024, 5, 1, 13, 45, 30, 123456, tzinfo=timezone.utc)
    log_id = await _submit(manager, {"created_at": "bogus"}, now=now)

    async with manager.session() as db:
        log = await db.get(LogEntry, log_id)
    assert log.created_at == "2024-05-01T13:45:30.123Z"


def test_iso_timestamp_converts_to_utc():
    moment = datetime(2024, 1, 1, 2, 0, tzinfo=timezone(timedelta(hours=2)))
    assert iso_timestamp(moment) == "2024-01-01T00:00:00.000Z"


async def test_stops_persisted_with_log_id(manager):
    log_id = await _submit(manager, {
        "driver_name": "Ana",
        "stops": [
            {"stop_no": 1, "type": "Pickup", "location": "Field 9", "value_hours": 1.5},
            {"stop_no": 2, "type": "Drop", "location": "Elevator", "value_hours": ""},
            {"stop_no": 3, "type": "Drop", "location": "Bin 4"},
        ],
    })

    async with manager.session() as db:
        stops = (await db.execute(
            select(StopEntry).where(StopEntry.log_id == log_id).order_by(StopEntry.stop_no),
        )).scalars().all()
    assert [s.location for s in stops] == ["Field 9", "Elevator", "Bin 4"]
    assert stops[0].value_hours == 1.5
    assert stops[1].value_hours is None
    assert stops[2].value_hours == 0


async def test_ids_are_assigned_incrementally(manager):
    first = await _submit(manager, {})
    second = await _submit(manager, {})
    assert second > first


async def test_failing_stop_rolls_back_whole_submission(manager, monkeypatch):
    def broken_coercion(payload, **kwargs):
        submission = coerce_submission(payload, **kwargs)
        submission.stops[1]["location"] = null()  # violates NOT NULL
        return submission

    monkeypatch.setattr(ingestion_module, "coerce_submission", broken_coercion)

    with pytest.raises(DatabaseError):
        await _submit(manager, {
            "driver_name": "Ana",
            "stops": [{"stop_no": 1}, {"stop_no": 2}, {"stop_no": 3}],
        })

    assert await _count(manager, LogEntry) == 0
    assert await _count(manager, StopEntry) == 0


async def test_concurrent_submissions_keep_their_own_stops(manager):
    def payload(driver):
        return {
            "driver_name": driver,
            "stops": [{"stop_no": n, "location": f"{driver}-{n}"} for n in range(1, 6)],
        }

    ids = await asyncio.gather(
        _submit(manager, payload("ana")), _submit(manager, payload("ben")),
    )

    async with manager.session() as db:
        for log_id, driver in zip(ids, ("ana", "ben")):
            stops = (await db.execute(
                select(StopEntry.location).where(StopEntry.log_id == log_id)
                .order_by(StopEntry.stop_no),
            )).scalars().all()
            assert stops == [f"{driver}-{n}" for n in range(1, 6)]


async def test_strict_rejection_persists_nothing(manager):
    with pytest.raises(PayloadValidationError):
        await _submit(manager, {"start_miles": "lots", "stops": [{}]}, strict=True)
    assert await _count(manager, LogEntry) == 0


async def test_lenient_accepts_the_same_payload(manager):
    log_id = await _submit(manager, {"start_miles": "lots", "stops": [{}]})
    async with manager.session() as db:
        log = await db.get(LogEntry, log_id)
    assert log.start_miles == 0
    assert await _count(manager, StopEntry) == 1
