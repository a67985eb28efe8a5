"""POST /api/logs: success contract, JSON and form bodies, size limit, strict mode."""

from sqlalchemy import func, select

from driverlog.config import Settings, get_settings
from driverlog.main import app
from driverlog.models.log_entry import LogEntry
from driverlog.models.stop_entry import StopEntry


def _use_settings(**overrides):
    app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None, **overrides)


async def _count(manager, model) -> int:
    async with manager.session() as db:
        return (await db.execute(select(func.count()).select_from(model))).scalar_one()


async def test_submit_returns_ok_and_id(client, manager):
    res = await client.post("/api/logs", json={
        "driver_name": "Ana", "stops": [{"stop_no": 1}, {"stop_no": 2}],
    })
    assert res.status_code == 200
    body = res.json()
    assert body["ok"] is True
    assert isinstance(body["id"], int)
    assert await _count(manager, StopEntry) == 2


async def test_empty_body_is_accepted(client, manager):
    res = await client.post("/api/logs")
    assert res.status_code == 200
    assert await _count(manager, LogEntry) == 1


async def test_invalid_json_is_coerced_in_lenient_mode(client, manager):
    res = await client.post(
        "/api/logs", content=b"{not json", headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 200
    assert await _count(manager, LogEntry) == 1


async def test_wrong_types_are_coerced_in_lenient_mode(client, manager):
    res = await client.post("/api/logs", json={
        "start_miles": "many", "stops": "none", "driver_name": 42,
    })
    assert res.status_code == 200
    async with manager.session() as db:
        log = await db.get(LogEntry, res.json()["id"])
    assert log.start_miles == 0
    assert log.driver_name == "42"


async def test_strict_mode_rejects_wrong_types(client, manager):
    _use_settings(validation_mode="strict")
    res = await client.post("/api/logs", json={"start_miles": "many"})
    assert res.status_code == 400
    body = res.json()
    assert body["ok"] is False
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["error"]["context"]["field"] == "start_miles"
    assert await _count(manager, LogEntry) == 0


async def test_strict_mode_rejects_invalid_json(client):
    _use_settings(validation_mode="strict")
    res = await client.post(
        "/api/logs", content=b"[1,", headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["context"]["field"] == "body"


async def test_oversized_body_is_rejected(client, manager):
    _use_settings(max_body_bytes=64)
    res = await client.post("/api/logs", json={"driver_name": "x" * 200})
    assert res.status_code == 413
    assert res.json()["error"]["code"] == "PAYLOAD_TOO_LARGE"
    assert await _count(manager, LogEntry) == 0


async def test_responses_carry_security_headers(client):
    res = await client.post("/api/logs", json={})
    assert res.headers["X-Content-Type-Options"] == "nosniff"
    assert res.headers["X-Frame-Options"] == "SAMEORIGIN"


async def test_form_encoded_submission_is_stored(client, manager):
    res = await client.post("/api/logs", data={
        "driver_name": "Ana",
        "total_miles": "120",
        "stops[0][stop_no]": "1",
        "stops[0][location]": "Field",
        "stops[1][stop_no]": "2",
        "stops[1][location]": "Bin",
        "stops[1][value_hours]": "",
    })
    assert res.status_code == 200
    async with manager.session() as db:
        log = await db.get(LogEntry, res.json()["id"])
        stops = (await db.execute(
            select(StopEntry).where(StopEntry.log_id == log.id).order_by(StopEntry.stop_no),
        )).scalars().all()
    assert log.driver_name == "Ana"
    assert log.total_miles == 120
    assert [(s.stop_no, s.location, s.value_hours) for s in stops] == [
        (1, "Field", 0), (2, "Bin", None),
    ]


async def test_form_encoded_submission_in_strict_mode(client, manager):
    _use_settings(validation_mode="strict")
    res = await client.post("/api/logs", data={"driver_name": "Ana", "gross_pay": "a lot"})
    assert res.status_code == 400
    assert res.json()["error"]["context"]["field"] == "gross_pay"
    assert await _count(manager, LogEntry) == 0


async def test_chunked_body_over_limit_is_rejected(client, manager):
    _use_settings(max_body_bytes=64)

    async def body():
        yield b'{"driver_name": "'
        for _ in range(10):
            yield b"x" * 20
        yield b'"}'

    res = await client.post(
        "/api/logs", content=body(), headers={"Content-Type": "application/json"},
    )
    assert "content-length" not in res.request.headers
    assert res.status_code == 413
    assert await _count(manager, LogEntry) == 0


async def test_deeply_nested_json_is_coerced_in_lenient_mode(client, manager):
    nested = b"[" * 50_000 + b"]" * 50_000
    res = await client.post(
        "/api/logs", content=nested, headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 200
    assert await _count(manager, LogEntry) == 1


async def test_deeply_nested_json_is_rejected_in_strict_mode(client):
    _use_settings(validation_mode="strict")
    nested = b"[" * 50_000 + b"]" * 50_000
    res = await client.post(
        "/api/logs", content=nested, headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["context"]["field"] == "body"
