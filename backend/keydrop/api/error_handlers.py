"""Error Handlers - global exception handlers for the Keydrop API.

Invariants:
    - KeydropError → structured JSON with error code, message, severity, mapped status
    - RequestValidationError → 400 with field-level error details
    - Starlette HTTPException (unknown route, wrong method) → 404/405 in the same envelope
    - Other 4xx HTTPExceptions stay client errors (400); only 5xx become INTERNAL_ERROR
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Four-layer handler: domain (KeydropError), routing (HTTPException), validation (Pydantic), catch-all
    - Routing errors re-expressed as domain errors so every body has one shape
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from keydrop.core.errors import (
    BadRequestError, ErrorSeverity, ForbiddenError, InternalError, KeydropError,
    NotAllowedError, ResourceNotFoundError, UnauthorizedError,
)

logger = logging.getLogger(__name__)

_HTTP_ERRORS: dict[int, type[KeydropError]] = {
    status.HTTP_400_BAD_REQUEST: BadRequestError,
    status.HTTP_401_UNAUTHORIZED: UnauthorizedError,
    status.HTTP_403_FORBIDDEN: ForbiddenError,
    status.HTTP_404_NOT_FOUND: ResourceNotFoundError,
    status.HTTP_405_METHOD_NOT_ALLOWED: NotAllowedError,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_keydrop_error_handler(app)
    _register_http_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_keydrop_error_handler(app: FastAPI) -> None:
    """Register Keydrop domain/infrastructure error handler."""

    @app.exception_handler(KeydropError)
    async def keydrop_error_handler(request: Request, exc: KeydropError):
        """Handle all Keydrop domain/infrastructure errors."""
        server_fault = exc.http_status >= 500
        log = logger.error if server_fault else logger.warning
        log(
            f"KeydropError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "status_code": exc.http_status,
            },
            exc_info=exc if server_fault else None,
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing error handler (unknown path, unsupported method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Map framework routing errors onto the Keydrop envelope."""
        error = _to_keydrop_error(exc)
        logger.warning(
            f"{error.message} on {request.method} {request.url.path}",
            extra={"error_code": error.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=error.http_status,
            content=error.to_response(),
            headers=getattr(exc, "headers", None),
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


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
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


def _to_keydrop_error(exc: StarletteHTTPException) -> KeydropError:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return ResourceNotFoundError("Route Not Found")
    default = BadRequestError if exc.status_code < 500 else InternalError
    error_type = _HTTP_ERRORS.get(exc.status_code, default)
    return error_type(str(exc.detail))


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.WARNING.value,
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
