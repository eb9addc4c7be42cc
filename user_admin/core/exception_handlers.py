"""Global exception handlers for consistent error responses.

Design:
- AppError subclasses → their declared HTTP status (400, 404, 429, 500)
- Malformed request bodies / parameters → 400 (same shape as AppError)
- Unexpected Exception → generic 500 (safety net)
- All responses include request_id for log correlation
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from user_admin.core.config import settings
from user_admin.core.errors import AppError, RateLimitAppError
from user_admin.core.logging import get_request_id

logger = logging.getLogger(__name__)


def _error_body(code: str, message: str, details: dict | None = None) -> dict:
    error_content = {
        "code": code,
        "message": message,
        "request_id": get_request_id(),
    }
    if details:
        error_content["details"] = details
    return {"error": error_content}


def _rate_limit_headers(exc: RateLimitAppError) -> dict[str, str] | None:
    if not settings.app.rate_limit_include_headers or not exc.details:
        return None
    details = exc.details
    return {
        "Retry-After": str(details.get("retry_after", 0)),
        "X-RateLimit-Limit": str(details.get("limit", 0)),
        "X-RateLimit-Remaining": "0",
        "X-RateLimit-Reset": str(details.get("reset_at", 0)),
    }


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain application errors with consistent JSON format.

    The HTTP status comes from ``exc.status_code``. Server-side failures are
    logged at error level, client faults at warning level.

    Args:
        request: FastAPI request object.
        exc: AppError instance (or subclass).

    Returns:
        JSONResponse with appropriate status code and error details.
    """
    status_code = exc.status_code
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "has_details": bool(exc.details),
            "request_path": request.url.path,
            "request_method": request.method,
        },
    )

    headers = _rate_limit_headers(exc) if isinstance(exc, RateLimitAppError) else None
    return JSONResponse(
        status_code=status_code,
        content=_error_body(exc.code, exc.message, dict(exc.details) if exc.details else None),
        headers=headers,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Map FastAPI/Pydantic input errors (bad JSON, wrong types) to 400."""
    fields = [".".join(str(part) for part in err.get("loc", ())[1:]) for err in exc.errors()]
    fields = [f for f in fields if f]
    logger.warning(
        "request_validation_failed",
        extra={
            "fields": fields,
            "request_path": request.url.path,
            "request_method": request.method,
        },
    )
    message = "Invalid request"
    if fields:
        message = f"Invalid value for: {', '.join(fields)}"
    return JSONResponse(
        status_code=400,
        content=_error_body("invalid_request", message, {"fields": fields} if fields else None),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors.

    Logs detailed information for debugging while returning a generic message,
    so no stack trace or driver message reaches the client.
    """
    logger.error(
        "unhandled_exception",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
        },
    )

    return JSONResponse(
        status_code=500,
        content=_error_body(
            "internal_server_error",
            "An unexpected error occurred. Please try again later.",
        ),
    )


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance.
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(RequestValidationError)(request_validation_handler)
    app.exception_handler(Exception)(general_exception_handler)
