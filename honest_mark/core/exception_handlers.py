"""Global exception handlers for consistent gateway error responses.

Design:
- AppError subclasses map to an HTTP status by type (see ``_STATUS_BY_ERROR``)
- Unexpected Exception → generic 500 (safety net, no details leaked)
- All responses include request_id for log correlation
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from honest_mark.core.errors import (
    ApiAppError,
    AppError,
    AuthenticationAppError,
    ClientClosedAppError,
    EncodingAppError,
    TransportAppError,
    ValidationAppError,
)
from honest_mark.core.logging import get_request_id

logger = logging.getLogger(__name__)

# Checked in order; first isinstance match wins.
_STATUS_BY_ERROR: tuple[tuple[type[AppError], int], ...] = (
    (ValidationAppError, 400),
    (AuthenticationAppError, 403),
    (ApiAppError, 502),
    (TransportAppError, 502),
    (ClientClosedAppError, 503),
    (EncodingAppError, 500),
)


def status_for_error(exc: AppError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render an AppError as ``{"error": {code, message, request_id, details?}}``.

    The upstream response body is dropped from the payload: it is logged
    server-side only.
    """
    status_code = status_for_error(exc)

    logger.warning(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "has_details": bool(exc.details),
        },
    )

    error_content: dict = {
        "code": exc.code,
        "message": exc.message,
        "request_id": get_request_id(),
    }

    if exc.details:
        public_details = {k: v for k, v in exc.details.items() if k != "body"}
        if public_details:
            error_content["details"] = public_details

    return JSONResponse(status_code=status_code, content={"error": error_content})


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors; never leaks internals."""
    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": get_request_id(),
            }
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(Exception)(general_exception_handler)
