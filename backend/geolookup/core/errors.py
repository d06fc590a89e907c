"""Error Hierarchy — typed, categorized exceptions for all GeoLookup failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) are the caller's to fix; infrastructure errors
      (500-level) are critical and never retried
    - error_body() is the single shape of every error response the API emits
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with GeoLookupError base: FastAPI global handler catches all
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
    """Request-scoped context attached to an error."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    path: str | None = None


def error_body(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    context: ErrorContext | None = None,
    details: list[dict] | None = None,
) -> dict:
    """Build the {"error": {...}} envelope shared by every error response."""
    context = context or ErrorContext()
    body = {
        "code": code,
        "message": message,
        "category": category.value,
        "severity": severity.value,
        "timestamp": context.timestamp.isoformat(),
        "path": context.path,
    }
    if details is not None:
        body["details"] = details
    return {"error": body}


class GeoLookupError(Exception):
    """Base exception for all GeoLookup errors."""

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

    def details(self) -> list[dict] | None:
        return None

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return error_body(
            self.code, self.message, self.category, self.severity,
            self.context, self.details(),
        )


# ─── Request Errors (400-level) ─────────────────────────────────

class PageSizeLimitError(GeoLookupError):
    """pageSize is well-formed but larger than the configured maximum."""
    def __init__(self, requested: int, maximum: int, context: ErrorContext | None = None):
        super().__init__(
            f"pageSize must not exceed {maximum}",
            "PAGE_SIZE_TOO_LARGE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.requested = requested
        self.maximum = maximum

    def details(self) -> list[dict]:
        return [{
            "field": "pageSize",
            "message": f"{self.requested} is above the maximum of {self.maximum}",
            "type": "less_than_equal",
        }]


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(GeoLookupError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
