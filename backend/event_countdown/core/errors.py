"""Error Hierarchy — closed set of typed exceptions for every countdown failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - The set of concrete kinds is closed: ConfigurationError, ValidationError,
      ForbiddenError, InvalidDateError
    - Client errors (400/403/422) are recoverable; configuration errors (500) are critical
    - to_response() produces the REST envelope; never leaks file paths or tracebacks

Design Decisions:
    - Single hierarchy with CountdownError base: one FastAPI handler catches all (ADR: uniform error shape)
    - InvalidDateError separate from ValidationError: the field was present but
      semantically invalid (422 vs 400)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """One category per error kind; the boundary switches on these."""
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    FORBIDDEN = "forbidden"
    UNPROCESSABLE = "unprocessable"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    field: str | None = None
    debug_info: dict[str, Any] | None = None


class CountdownError(Exception):
    """Base exception for all countdown service errors."""

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
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        if self.context.field:
            body["field"] = self.context.field
        return {"error": body}


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ConfigurationError(CountdownError):
    """Stored record unreadable, unparsable, schema-invalid, or unwritable."""
    def __init__(
        self,
        message: str,
        code: str = "CONFIG_ERROR",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationError(CountdownError):
    """Update payload missing required fields or structurally wrong."""
    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        field: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field


class ForbiddenError(CountdownError):
    """Update attempted while the record is locked (updatesAllowed = false)."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Event updates are currently disabled",
            "UPDATES_DISABLED", ErrorCategory.FORBIDDEN,
            ErrorSeverity.WARNING, context, 403,
        )


class InvalidDateError(CountdownError):
    """Date supplied but not parseable as an ISO-8601 instant."""
    def __init__(self, value: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = "date"
        super().__init__(
            "Invalid date format. Please provide a valid ISO datetime string.",
            "INVALID_DATE_FORMAT", ErrorCategory.UNPROCESSABLE,
            ErrorSeverity.ERROR, ctx, 422,
        )
        self.value = value
