"""Error Handlers — translate exceptions into the JSON error envelope.

Invariants:
    - Every error body is {"error": {code, message, category, severity, errors, ...}}
    - Request-shape errors (pydantic) become a RejectionSet, so they share the
      field -> [messages] layout with business rejections; status 400
    - Unexpected exceptions answer 500 INTERNAL_ERROR with no internal details

Design Decisions:
    - Client rejections log at WARNING, server-side failures at ERROR
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from jarbas.core.errors import (
    ErrorCategory, ErrorSeverity, JarbasError, RejectedError, RejectionSet,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(JarbasError, handle_jarbas_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)


async def handle_jarbas_error(request: Request, exc: JarbasError) -> JSONResponse:
    level = logging.WARNING if exc.http_status < 500 else logging.ERROR
    logger.log(
        level, f"{exc.code}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "method": request.method,
            "user_id": exc.context.user_id,
            "goal_id": exc.context.goal_id,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_request_validation(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    rejections = request_rejections(exc)
    return await handle_jarbas_error(request, RejectedError(rejections))


def request_rejections(exc: RequestValidationError) -> RejectionSet:
    """One VALIDATION_ERROR entry per pydantic error, keyed by dotted field path."""
    rejections = RejectionSet()
    for error in exc.errors():
        field_path = ".".join(str(part) for part in error["loc"] if part != "body")
        rejections.add(
            field_path or "body", "VALIDATION_ERROR", error["msg"],
            ErrorCategory.VALIDATION,
        )
    return rejections


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
                "errors": {},
            },
        },
    )
