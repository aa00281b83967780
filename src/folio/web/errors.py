"""Error responses for the JSON API.

Every failure leaves the API as {"error": "<message>"} with a 4xx/5xx
status. Database exceptions are mapped to a status by message and class.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import (
    DataError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from starlette.exceptions import HTTPException as StarletteHTTPException

from folio.web.cors import cors_headers

logger = structlog.get_logger(__name__)

_SENSITIVE_WORDS = ("password", "token", "secret", "key", "database", "connection")

_CONNECTION_MARKERS = (
    "connection",
    "timeout",
    "could not connect",
    "server closed the connection",
    "connection refused",
    "unable to open database",
    "name or service not known",
)


class ApiError(Exception):
    """An error that maps directly to an HTTP response."""

    def __init__(self, status_code: int, message: str, code: str | None = None):
        self.status_code = status_code
        self.message = message
        self.code = code
        super().__init__(message)


def sanitize_error(message: str | None) -> str:
    """Hide internals from error messages shown in production."""
    if not message:
        return "An error occurred"

    lowered = message.lower()
    if any(word in lowered for word in _SENSITIVE_WORDS):
        return "An error occurred. Please try again later."
    if "not found" in lowered or "invalid" in lowered:
        return "Invalid request"

    return "An error occurred"


def handle_database_error(exc: SQLAlchemyError, operation: str) -> ApiError:
    """Map a database exception raised during `operation` to an ApiError."""
    detail = str(getattr(exc, "orig", None) or exc)
    lowered = detail.lower()

    logger.error(
        "database.error",
        operation=operation,
        error_type=type(exc).__name__,
        error=detail,
    )

    if isinstance(exc, IntegrityError):
        if "unique" in lowered or "duplicate key" in lowered:
            return ApiError(409, "Resource already exists", code="unique_violation")
        if "foreign key" in lowered:
            return ApiError(
                400, "Invalid reference to related resource", code="foreign_key_violation"
            )
        return ApiError(400, "Invalid data format", code="integrity_error")

    if isinstance(exc, DataError) or "invalid input syntax" in lowered:
        return ApiError(400, "Invalid data format", code="data_error")

    if isinstance(exc, (OperationalError, InterfaceError)) or any(
        marker in lowered for marker in _CONNECTION_MARKERS
    ):
        return ApiError(
            503,
            "Database connection error. Please try again later.",
            code="database_unavailable",
        )

    return ApiError(500, f"Failed to {operation}", code=type(exc).__name__)


@contextmanager
def database_errors(operation: str) -> Iterator[None]:
    """Turn database exceptions raised in the block into ApiError.

    Example:
        with database_errors("create project"):
            record = create_project(**payload.model_dump())
    """
    try:
        yield
    except SQLAlchemyError as exc:
        raise handle_database_error(exc, operation) from exc


def error_body(request: Request, status_code: int, message: str, code: str | None = None) -> dict:
    config = request.app.state.config
    if config.is_production and status_code >= 500:
        message = sanitize_error(message)

    body: dict = {"error": message}
    if config.is_development and code:
        body["code"] = code
    return body


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("api.error", path=request.url.path, status=exc.status_code, error=exc.message)
    else:
        logger.info("api.rejected", path=request.url.path, status=exc.status_code, error=exc.message)

    return JSONResponse(
        error_body(request, exc.status_code, exc.message, exc.code),
        status_code=exc.status_code,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        error_body(request, exc.status_code, str(exc.detail)),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort 500 for anything the routes did not map.

    Runs outside the http middlewares, so /api responses get their
    CORS headers here.
    """
    logger.error(
        "api.unhandled_error",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        error=str(exc),
    )

    headers = None
    if request.url.path.startswith("/api"):
        headers = cors_headers(
            request.headers.get("origin"), request.app.state.config.allowed_origins
        )

    return JSONResponse(
        error_body(request, 500, "Internal server error", type(exc).__name__),
        status_code=500,
        headers=headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "query")
        message = f"Invalid {location}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"

    return JSONResponse(error_body(request, 400, message), status_code=400)
