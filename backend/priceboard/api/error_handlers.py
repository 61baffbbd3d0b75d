"""Error Handlers — turn Priceboard exceptions into HTTP error envelopes.

Invariants:
    - CatalogError → its own status (503 unreachable, 502 upstream or decode);
      the envelope names the failure_kind, upstream errors add the catalog's
      status and details
    - Other PriceboardError (unknown set) → its status, logged below error level
    - RequestValidationError → 400 VALIDATION_ERROR, one detail per field
    - Anything else → 500 INTERNAL_ERROR without the exception text

Design Decisions:
    - Handlers are module functions registered with add_exception_handler:
      Starlette resolves by MRO, so CatalogError wins over PriceboardError
    - Catalog failures log at warning: the catalog is down, not this service
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from priceboard.core.errors import (
    CatalogError,
    ErrorCategory,
    ErrorSeverity,
    PriceboardError,
    UpstreamError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(PriceboardError, priceboard_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Catalog call behind a route failed (set listing or lookup)."""
    logger.warning(
        f"Catalog {exc.kind.value} on {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "failure_kind": exc.kind.value,
            "status_code": exc.status_code if isinstance(exc, UpstreamError) else None,
            "url": exc.context.url,
            "path": request.url.path,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def priceboard_error_handler(
    request: Request, exc: PriceboardError,
) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.info
    log(
        f"{exc.code} on {request.url.path}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def validation_error_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    errors = exc.errors()
    logger.warning(
        f"Rejected request on {request.url.path}: {len(errors)} invalid field(s)",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return _error_response(
        status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", "Invalid request data",
        ErrorCategory.VALIDATION, ErrorSeverity.ERROR,
        details=[
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in errors
        ],
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR",
        "An unexpected error occurred", ErrorCategory.INTERNAL,
        ErrorSeverity.CRITICAL,
    )


def _error_response(
    status_code: int,
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    **extra,
) -> JSONResponse:
    body = {
        "code": code, "message": message,
        "category": category.value, "severity": severity.value,
        **extra,
    }
    return JSONResponse(status_code=status_code, content={"error": body})
