"""Error Hierarchy: typed, categorized exceptions for all driver log failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Input errors (400-level) are the caller's to fix; storage errors (500-level) are critical
    - to_response() produces the REST envelope, always with "ok": false
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with DriverLogError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability data without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    field: str | None = None


class DriverLogError(Exception):
    """Base exception for all driver log errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "ok": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "field": self.context.field,
                },
            },
        }


# ─── Input Errors (400-level) ───────────────────────────────────

class PayloadValidationError(DriverLogError):
    """Submission rejected by strict validation."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field


class PayloadTooLargeError(DriverLogError):
    """Request body exceeds the configured size limit."""
    def __init__(self, limit: int, context: ErrorContext | None = None):
        super().__init__(
            f"Request body exceeds {limit} bytes",
            "PAYLOAD_TOO_LARGE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 413,
        )
        self.limit = limit


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(DriverLogError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
