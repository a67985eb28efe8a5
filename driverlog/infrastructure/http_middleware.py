"""HTTP Middleware: one access-log line per request plus baseline security headers.

Invariants:
    - Every response carries the _SECURITY_HEADERS set
    - Access log records carry method, path, status_code and duration_ms as extras
"""

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger("driverlog.access")

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
}


def register_middleware(app: FastAPI) -> None:
    """Attach the access-log and security-header middleware to the app."""

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        for header, value in _SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        duration_ms = round((time.perf_counter() - started) * 1000, 1)
        logger.info(
            "%s %s %s - %.1f ms",
            request.method, request.url.path, response.status_code, duration_ms,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response
