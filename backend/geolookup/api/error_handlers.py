"""Error Handlers — map every failure of a lookup request onto the shared error envelope.

Invariants:
    - Every error response is built by core.errors.error_body and carries the
      request path
    - GeoLookupError → its own status (400 page size limit, 503 database)
    - RequestValidationError → 400 with one detail per offending query parameter
    - Exception (catch-all) → opaque 500, never leaks internal details
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from geolookup.core.errors import (
    ErrorCategory, ErrorContext, ErrorSeverity, GeoLookupError, error_body,
)

logger = logging.getLogger(__name__)

# Request locations FastAPI prefixes onto validation error paths
_LOCATIONS = {"query", "path", "header"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(GeoLookupError, handle_geolookup_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_geolookup_error(request: Request, exc: GeoLookupError):
    exc.context.path = request.url.path
    log = logger.warning if exc.http_status < 500 else logger.error
    log(
        f"{exc.code} on {request.url.path}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(
        status_code=exc.http_status, content=exc.to_response(),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [_validation_detail(e) for e in exc.errors()]
    logger.warning(
        f"Invalid parameters on {request.url.path}: "
        f"{', '.join(d['field'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(
            "VALIDATION_ERROR", "Invalid request parameters",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR,
            ErrorContext(path=request.url.path), details,
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
            ErrorContext(path=request.url.path),
        ),
    )


def _validation_detail(error: dict) -> dict:
    """Name the offending parameter as the client spelled it (e.g. "name", "pageSize")."""
    loc = [str(part) for part in error["loc"]]
    if loc and loc[0] in _LOCATIONS:
        loc = loc[1:]
    return {
        "field": ".".join(loc),
        "message": error["msg"],
        "type": error["type"],
    }
