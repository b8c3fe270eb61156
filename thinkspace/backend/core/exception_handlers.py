"""
Exception Handlers.

FastAPI exception handlers that convert exceptions to the standard
JSON error body. Every error body carries a `message` field.

Usage:
    from thinkspace.backend.core.exception_handlers import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from thinkspace.backend.core.exceptions import (
    ApplicationError,
    InvalidIdError,
    NotFoundError,
    StoreError,
    StoreRequestError,
    ValidationError,
)
from thinkspace.backend.core.logging import get_logger
from thinkspace.backend.schemas.base import ErrorResponse

logger = get_logger(__name__)

# Map exception types to HTTP status codes
EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    NotFoundError: 404,
    ValidationError: 400,
    InvalidIdError: 400,
    StoreRequestError: 400,
    StoreError: 500,
}

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state or headers."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return request.headers.get("x-request-id")


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        message=message,
        code=code,
        details=details or None,
        request_id=_get_request_id(request),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _detailed_errors_enabled() -> bool:
    try:
        from thinkspace.backend.core.config import get_app_config

        return get_app_config().features.api_detailed_errors
    except Exception:
        return False


async def application_error_handler(
    request: Request,
    exc: ApplicationError,
) -> JSONResponse:
    """
    Handle all ApplicationError subclasses.

    Converts application exceptions to JSON error responses
    with the mapped HTTP status code.
    """
    status_code = EXCEPTION_STATUS_MAP.get(type(exc), 500)

    log_extra = {
        "code": exc.code,
        "message": exc.message,
        "status": status_code,
        "path": request.url.path,
        "method": request.method,
    }

    if status_code >= 500:
        logger.error("Server error", extra=log_extra)
    else:
        logger.warning("Client error", extra=log_extra)

    details = exc.details if isinstance(exc, ValidationError) else None
    return _error_response(request, status_code, exc.code, exc.message, details)


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Handle FastAPI/Pydantic request validation errors.

    Malformed bodies and parameters are client errors and map to 400,
    like ValidationError.
    """
    errors = exc.errors()
    problems = [
        {
            "field": ".".join(str(loc) for loc in err.get("loc", [])),
            "message": err.get("msg", "Validation error"),
            "type": err.get("type", "unknown"),
        }
        for err in errors
    ]

    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(errors),
        },
    )

    if problems:
        first = problems[0]
        message = f"Invalid request: {first['field']}: {first['message']}"
    else:
        message = "Invalid request"

    return _error_response(
        request,
        400,
        "VAL_REQUEST_INVALID",
        message,
        {"validation_errors": problems},
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Handle routing-level HTTP errors, including unmatched routes."""
    if exc.status_code == 404:
        return _error_response(
            request,
            404,
            "RES_NOT_FOUND",
            f"Not Found - {request.url.path}",
        )

    return _error_response(
        request,
        exc.status_code,
        f"HTTP_{exc.status_code}",
        str(exc.detail),
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    The underlying message is exposed only when api_detailed_errors is on.
    """
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
        },
    )

    message = str(exc) or GENERIC_ERROR_MESSAGE
    if not _detailed_errors_enabled():
        message = GENERIC_ERROR_MESSAGE

    return _error_response(request, 500, "SYS_INTERNAL_ERROR", message)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.debug("Exception handlers registered")
