"""Global exception handlers for FastAPI application."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from photo_catalog.core.database import InvalidCursorError, StorageError
from photo_catalog.core.exceptions import AppException
from photo_catalog.core.schemas import ProblemDetails

logger = logging.getLogger(__name__)

PROBLEM_JSON = "application/problem+json"


def _problem_response(
    status_code: int,
    detail: str,
    type_: str = "about:blank",
    title: str | None = None,
    instance: str | None = None,
    extra: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build an RFC 7807 Problem Details response."""
    problem = ProblemDetails(
        type=type_,
        title=title or AppException._default_title(status_code),
        status=status_code,
        detail=detail,
        instance=instance,
    )
    content = problem.model_dump(exclude_none=True)
    if extra:
        content.update(extra)
    return JSONResponse(status_code=status_code, content=content, media_type=PROBLEM_JSON)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert AppException instances into Problem Details responses."""
    logger.warning(
        "Application exception occurred",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": exc.type,
            "status_code": exc.status_code,
            "detail": exc.detail,
        },
    )
    return _problem_response(
        status_code=exc.status_code,
        detail=exc.detail,
        type_=exc.type,
        title=exc.title,
        instance=exc.instance or request.url.path,
        extra=exc.extra,
    )


async def invalid_cursor_handler(request: Request, exc: InvalidCursorError) -> JSONResponse:
    """Out-of-range ``offset`` values are client errors."""
    logger.info(
        "Rejected page cursor",
        extra={"path": request.url.path, "offset": exc.offset},
    )
    return _problem_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=exc.message,
        type_="invalid-cursor",
        instance=request.url.path,
        extra={"offset": exc.offset},
    )


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    """Storage failures surface as a generic, retryable 503."""
    logger.error(
        "Storage failure while handling request",
        extra={
            "path": request.url.path,
            "method": request.method,
            "operation": exc.operation,
        },
        exc_info=exc,
    )
    return _problem_response(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="The photo store is temporarily unavailable",
        type_="storage-unavailable",
        instance=request.url.path,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Convert request validation errors into Problem Details with field errors."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(errors),
        },
    )
    return _problem_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=f"Request validation failed for {len(errors)} field(s)",
        type_="validation-error",
        title="Validation Error",
        instance=request.url.path,
        extra={"errors": errors},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: log the traceback, return a generic 500."""
    logger.error(
        "Unexpected exception occurred",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
        },
        exc_info=exc,
    )
    return _problem_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred while processing your request",
        type_="internal-error",
        instance=request.url.path,
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on ``app``."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(InvalidCursorError, invalid_cursor_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
    logger.debug("Exception handlers configured")
