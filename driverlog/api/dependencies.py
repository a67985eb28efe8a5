"""Route Dependencies: admin gate, filter parsing, request body reading.

Invariants:
    - require_admin runs before any admin handler; handlers only see authorized calls
    - Credentials compared in constant time
    - Missing admin configuration is a server error (500), not a 401
    - read_payload never raises in lenient mode except for oversized bodies
    - The body is read in chunks and abandoned once it passes MAX_BODY_BYTES
    - Form-encoded bodies (bracketed keys) decode to the same shape as JSON ones
"""

import json
import secrets
from collections.abc import AsyncIterator
from typing import Any

from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from starlette.formparsers import FormParser

from driverlog.config import Settings, get_settings
from driverlog.core.errors import PayloadTooLargeError, PayloadValidationError
from driverlog.core.form_payload import unflatten_form
from driverlog.core.log_filters import LogFilters

FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"

_basic = HTTPBasic(auto_error=False)


def _matches(given: str, expected: str) -> bool:
    return secrets.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


async def require_admin(
    credentials: HTTPBasicCredentials | None = Depends(_basic),
    settings: Settings = Depends(get_settings),
) -> None:
    if not settings.basic_auth_user or not settings.basic_auth_pass:
        raise HTTPException(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Admin auth not configured.",
        )
    # evaluate both comparisons so timing does not reveal which one failed
    authorized = credentials is not None and all([
        _matches(credentials.username, settings.basic_auth_user),
        _matches(credentials.password, settings.basic_auth_pass),
    ])
    if not authorized:
        raise HTTPException(
            status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required.",
            headers={"WWW-Authenticate": 'Basic realm="Admin"'},
        )


def get_log_filters(
    from_date: str | None = Query(None, alias="from"),
    to_date: str | None = Query(None, alias="to"),
    driver: str | None = Query(None),
) -> LogFilters:
    return LogFilters.from_params(from_date, to_date, driver)


async def _bounded_stream(request: Request, limit: int) -> AsyncIterator[bytes]:
    """Yield body chunks, failing as soon as more than `limit` bytes arrive."""
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            raise PayloadTooLargeError(limit)
        yield chunk


def _media_type(request: Request) -> str:
    return request.headers.get("content-type", "").split(";")[0].strip().lower()


async def read_payload(request: Request, settings: Settings) -> Any:
    """Decode a JSON or form-encoded body; empty counts as {}, bad JSON depends on mode."""
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > settings.max_body_bytes:
        raise PayloadTooLargeError(settings.max_body_bytes)
    chunks = _bounded_stream(request, settings.max_body_bytes)

    if _media_type(request) == FORM_MEDIA_TYPE:
        form = await FormParser(request.headers, chunks).parse()
        return unflatten_form(form.multi_items())

    body = b"".join([chunk async for chunk in chunks])
    if not body.strip():
        return {}
    try:
        return json.loads(body)
    except (ValueError, RecursionError):
        if settings.strict_validation:
            raise PayloadValidationError("body: invalid JSON", "body")
        return {}
