"""Error Handlers: global exception handlers for the driver log API.

Invariants:
    - DriverLogError -> structured JSON with ok=false, error code, message, severity
    - Exception (catch-all) -> never leaks internal details

Design Decisions:
    - Two-layer handler: domain (DriverLogError), catch-all (Exception)
    - Client errors log at WARNING, storage and internal failures at ERROR
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from driverlog.core.errors import DriverLogError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_driverlog_error_handler(app)
    _register_generic_error_handler(app)


def _register_driverlog_error_handler(app: FastAPI) -> None:

    @app.exception_handler(DriverLogError)
    async def driverlog_error_handler(request: Request, exc: DriverLogError):
        """Handle all driver log domain/infrastructure errors."""
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"DriverLogError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "ok": False,
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )
