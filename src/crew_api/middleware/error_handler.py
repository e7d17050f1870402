"""Global error handling to prevent information disclosure."""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from crew_api.config import get_settings
from crew_api.exceptions import (
    AuthenticationError,
    CollaboratorError,
    ConflictError,
    CrewAPIError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _get_cors_headers(request: Request) -> dict[str, str]:
    """Get CORS headers for error responses.

    Exception handlers run before the CORS middleware can add its headers,
    so allowed origins are echoed here.
    """
    origin = request.headers.get("origin")
    if not origin:
        return {}

    if origin in get_settings().cors_origins_list:
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
        }
    return {}


# Safe error messages that can be shown to users
SAFE_ERROR_MESSAGES = {
    400: "Invalid request",
    401: "Authentication required",
    403: "Access denied",
    404: "Resource not found",
    405: "Method not allowed",
    409: "Conflict with existing resource",
    422: "Invalid input data",
    429: "Too many requests",
    500: "Internal server error",
    502: "Service unavailable",
    503: "Service temporarily unavailable",
}

# Error messages that are safe to pass through
ALLOWED_ERROR_PATTERNS = [
    "Invalid credentials",
    "Authentication required",
    "Invalid or expired session",
    "Resource not found",
    "Employee not found",
    "Certification not found",
    "Archive reason is required",
    "Skill is not part of the catalog",
    "Duplicate entry in",
    "Skill names cannot be blank",
    "Employee already exists",
    "Employee was modified concurrently",
    "Auth provider unavailable",
]

# Status code per domain error family
_STATUS_BY_ERROR: list[tuple[type[CrewAPIError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (CollaboratorError, status.HTTP_502_BAD_GATEWAY),
]


def is_safe_error_message(message: str) -> bool:
    """Check if an error message is safe to expose to users."""
    message_lower = message.lower()
    return any(pattern.lower() in message_lower for pattern in ALLOWED_ERROR_PATTERNS)


def sanitize_error_detail(detail: Any, status_code: int) -> str:
    """Sanitize error detail to prevent information disclosure.

    Args:
        detail: Original error detail
        status_code: HTTP status code

    Returns:
        Safe error message
    """
    if isinstance(detail, str):
        if is_safe_error_message(detail):
            return detail
    elif isinstance(detail, list):
        # Validation errors - only keep field names and messages
        safe_errors = []
        for error in detail:
            if isinstance(error, dict):
                loc = error.get("loc", [])
                msg = error.get("msg", "Invalid value")
                field = loc[-1] if loc else "field"
                if isinstance(field, str) and not field.startswith("_"):
                    safe_errors.append(f"{field}: {msg}")
        if safe_errors:
            return "; ".join(safe_errors[:3])

    return SAFE_ERROR_MESSAGES.get(status_code, "Request failed")


def status_for_error(exc: CrewAPIError) -> int:
    """HTTP status code for a domain error."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def crew_api_exception_handler(request: Request, exc: CrewAPIError) -> JSONResponse:
    """Map domain errors to HTTP responses.

    Args:
        request: FastAPI request
        exc: Domain exception

    Returns:
        JSONResponse with sanitized error
    """
    status_code = status_for_error(exc)
    if status_code >= 500:
        logger.error("Collaborator failure for %s: %s %s", request.url.path, exc.message, exc.details)
    else:
        logger.info("Request to %s rejected: %s", request.url.path, exc.message)

    content: dict[str, Any] = {"detail": sanitize_error_detail(exc.message, status_code)}
    if get_settings().debug and exc.details:
        content["details"] = exc.details

    return JSONResponse(status_code=status_code, content=content, headers=_get_cors_headers(request))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions with sanitized messages."""
    cors_headers = _get_cors_headers(request)

    if get_settings().debug:
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=cors_headers,
        )

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": sanitize_error_detail(exc.detail, exc.status_code)},
        headers={**cors_headers, **(exc.headers or {})},
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle validation exceptions with sanitized messages."""
    cors_headers = _get_cors_headers(request)
    logger.warning("Validation error for %s: %s", request.url.path, exc.errors())

    if get_settings().debug:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.errors()},
            headers=cors_headers,
        )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": sanitize_error_detail(exc.errors(), status.HTTP_422_UNPROCESSABLE_ENTITY)},
        headers=cors_headers,
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle SQLAlchemy exceptions without leaking database details."""
    cors_headers = _get_cors_headers(request)
    logger.error("Database error for %s: %s", request.url.path, exc, exc_info=True)

    if isinstance(exc, IntegrityError) and (
        "unique" in str(exc).lower() or "duplicate" in str(exc).lower()
    ):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": "Resource already exists"},
            headers=cors_headers,
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database error occurred"},
        headers=cors_headers,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking information."""
    cors_headers = _get_cors_headers(request)
    logger.error("Unhandled exception for %s: %s", request.url.path, exc, exc_info=True)

    if get_settings().debug:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc), "type": type(exc).__name__},
            headers=cors_headers,
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": SAFE_ERROR_MESSAGES[500]},
        headers=cors_headers,
    )
