"""Error Handlers — global exception handlers for the countdown API.

Invariants:
    - CountdownError → structured JSON with error code, message, severity, its own status
    - RequestValidationError → 400 with field-level error details
    - HTTPException (unknown route, wrong method) → same envelope, its own status
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Layered handlers: domain (CountdownError), validation (Pydantic), routing
      (Starlette HTTPException), catch-all (Exception)
    - Log level follows the error category: configuration failures are errors,
      client mistakes are warnings
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from event_countdown.core.errors import CountdownError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)

_LOG_LEVEL_BY_CATEGORY = {
    ErrorCategory.CONFIGURATION: logging.ERROR,
    ErrorCategory.VALIDATION: logging.WARNING,
    ErrorCategory.FORBIDDEN: logging.WARNING,
    ErrorCategory.UNPROCESSABLE: logging.WARNING,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_countdown_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_countdown_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(CountdownError)
    async def countdown_error_handler(request: Request, exc: CountdownError):
        """Handle all countdown domain/infrastructure errors."""
        logger.log(
            _LOG_LEVEL_BY_CATEGORY[exc.category],
            f"CountdownError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


_HTTP_ERRORS = {
    status.HTTP_404_NOT_FOUND: ("NOT_FOUND", "Endpoint not found"),
    status.HTTP_405_METHOD_NOT_ALLOWED: ("METHOD_NOT_ALLOWED", "Method not allowed"),
}


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing error handler (unknown paths, unsupported methods)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        code, message = _HTTP_ERRORS.get(
            exc.status_code, ("HTTP_ERROR", str(exc.detail)),
        )
        logger.warning(
            f"HTTP {exc.status_code} on {request.method} {request.url.path}",
            extra={"error_code": code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "code": code,
                    "message": message,
                    "category": "request",
                    "severity": ErrorSeverity.WARNING.value,
                },
            },
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
