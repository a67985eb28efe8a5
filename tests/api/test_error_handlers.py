"""Error handler registration and the domain error envelope over HTTP."""

from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError

from driverlog.config import Settings, get_settings
from driverlog.core.errors import DriverLogError
from driverlog.main import app


def test_domain_and_catch_all_handlers_are_registered():
    assert DriverLogError in app.exception_handlers
    assert Exception in app.exception_handlers


def test_request_validation_uses_framework_default():
    assert app.exception_handlers[RequestValidationError] is request_validation_exception_handler


async def test_domain_error_envelope_over_http(client):
    app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None, max_body_bytes=8)
    res = await client.post("/api/logs", json={"driver_name": "Ana"})
    assert res.status_code == 413
    body = res.json()
    assert body["ok"] is False
    assert body["error"]["category"] == "validation"
    assert body["error"]["context"] == {"field": None}
