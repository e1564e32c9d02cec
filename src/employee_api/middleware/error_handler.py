"""Global error handling to prevent information disclosure.

Every error leaves the API in the same shape as the registration endpoint's
own errors: ``{"error": ..., "message": ...}``, plus ``errors`` for field
validation failures.
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from employee_api.config import Settings
from employee_api.utils.secure_logging import sanitize_exception_message

logger = logging.getLogger(__name__)

# Safe error titles that can be shown to users
SAFE_ERROR_TITLES = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    415: "Unsupported Media Type",
    422: "Unprocessable Entity",
    429: "Too Many Requests",
    500: "Internal Server Error",
    503: "Service Unavailable",
}

# Safe error messages that can be shown to users
SAFE_ERROR_MESSAGES = {
    400: "Invalid request",
    401: "Authentication required",
    403: "Access denied",
    404: "Resource not found",
    405: "Method not allowed",
    409: "Conflict with existing resource",
    415: "Unsupported media type",
    422: "Invalid input data",
    429: "Too many requests",
    500: "An unexpected error occurred.",
    503: "Service temporarily unavailable",
}

MAX_REPORTED_FIELD_ERRORS = 20


def _settings(request: Request) -> Settings:
    return request.app.state.settings


def _get_cors_headers(request: Request) -> dict[str, str]:
    """Get CORS headers for error responses.

    Exception handlers run outside the CORS middleware, so allowed origins
    must be echoed here for browsers to read the error body.

    Args:
        request: The incoming request

    Returns:
        Dict of CORS headers to add to the response
    """
    origin = request.headers.get("origin")
    if not origin:
        return {}

    allowed_origins = _settings(request).cors_origins_list
    if "*" in allowed_origins:
        return {"Access-Control-Allow-Origin": "*"}
    if origin in allowed_origins:
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
        }

    return {}


def _error_body(status_code: int, message: str | None = None, **extra: Any) -> dict[str, Any]:
    body = {
        "error": SAFE_ERROR_TITLES.get(status_code, "Error"),
        "message": message or SAFE_ERROR_MESSAGES.get(status_code, "Request failed"),
    }
    body.update(extra)
    return body


def field_errors_from_validation(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Reduce pydantic validation errors to field name and message.

    Type details and input values are dropped so that nothing the client
    sent (such as a password) is echoed back.

    Args:
        errors: Errors from ``RequestValidationError.errors()``

    Returns:
        List of ``{"field": ..., "message": ...}`` dicts
    """
    field_errors = []
    for error in errors[:MAX_REPORTED_FIELD_ERRORS]:
        loc = [part for part in error.get("loc", []) if part != "body"]
        field = str(loc[-1]) if loc else "body"
        if field.startswith("_"):
            field = "body"
        field_errors.append({"field": field, "message": error.get("msg", "Invalid value")})
    return field_errors


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions with sanitized messages.

    Args:
        request: FastAPI request
        exc: HTTP exception

    Returns:
        JSONResponse with sanitized error
    """
    message = exc.detail if _settings(request).debug and isinstance(exc.detail, str) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, message),
        headers={**(exc.headers or {}), **_get_cors_headers(request)},
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request body validation failures as 400 Bad Request.

    Malformed JSON and wrongly typed fields are reported in the same
    field-attributed shape as the registration validator's errors.

    Args:
        request: FastAPI request
        exc: Validation exception

    Returns:
        JSONResponse with field errors
    """
    field_errors = field_errors_from_validation(list(exc.errors()))
    logger.warning(f"Request validation failed for {request.url.path}: {len(field_errors)} error(s)")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(status.HTTP_400_BAD_REQUEST, "Invalid employee data", errors=field_errors),
        headers=_get_cors_headers(request),
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle SQLAlchemy exceptions without leaking database details.

    Args:
        request: FastAPI request
        exc: SQLAlchemy exception

    Returns:
        JSONResponse with safe error
    """
    logger.error(
        f"Database error for {request.url.path}: {sanitize_exception_message(exc)}",
        exc_info=_settings(request).debug,
    )

    if isinstance(exc, IntegrityError):
        message = str(exc).lower()
        if "unique" in message or "duplicate" in message:
            return JSONResponse(
                status_code=status.HTTP_409_CONFLICT,
                content=_error_body(status.HTTP_409_CONFLICT, "Resource already exists"),
                headers=_get_cors_headers(request),
            )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(status.HTTP_500_INTERNAL_SERVER_ERROR),
        headers=_get_cors_headers(request),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking information.

    Args:
        request: FastAPI request
        exc: Unexpected exception

    Returns:
        JSONResponse with generic error
    """
    logger.error(f"Unhandled exception for {request.url.path}: {type(exc).__name__}", exc_info=True)

    extra: dict[str, Any] = {}
    if _settings(request).debug:
        extra["type"] = type(exc).__name__

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(status.HTTP_500_INTERNAL_SERVER_ERROR, **extra),
        headers=_get_cors_headers(request),
    )
