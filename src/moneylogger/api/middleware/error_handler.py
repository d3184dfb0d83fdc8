"""Global error handling.

Every exception that reaches the API boundary is converted to the same
problem body: status, error_code, message, user_message, suggestion and
retry_allowed.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from moneylogger.config import settings
from moneylogger.core.errors import get_error
from moneylogger.core.exceptions import MoneyLoggerError

logger = logging.getLogger(__name__)


def problem_response(
    http_status: int,
    error_code: str,
    message: str,
    user_message: str,
    suggestion: str,
    retry_allowed: bool,
) -> JSONResponse:
    return JSONResponse(
        status_code=http_status,
        content={
            "status": http_status,
            "error_code": error_code,
            "message": message,
            "user_message": user_message,
            "suggestion": suggestion,
            "retry_allowed": retry_allowed,
        },
    )


async def handle_money_logger_error(request: Request, exc: MoneyLoggerError) -> JSONResponse:
    """Handle service-layer exceptions.

    Args:
        request: The incoming request
        exc: The service exception

    Returns:
        JSONResponse with error details from catalog
    """
    error_info = get_error(exc.error_code)

    extra = {"error_code": exc.error_code, "path": request.url.path, "method": request.method}
    if settings.debug:
        extra["details"] = exc.details

    # 4xx at INFO, 5xx at ERROR
    log = logger.error if exc.http_status >= 500 else logger.info
    log(f"{type(exc).__name__}: {exc.error_code}", extra=extra)

    return problem_response(
        exc.http_status,
        exc.error_code,
        error_info["message"],
        error_info["user_message"],
        error_info["suggestion"],
        error_info["retry_allowed"],
    )


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors on request bodies and parameters.

    Args:
        request: The incoming request
        exc: The validation error

    Returns:
        JSONResponse with validation error details
    """
    error_messages = []
    for error in exc.errors():
        field = ".".join(str(x) for x in error.get("loc", []))
        msg = error.get("msg", "Invalid value")
        error_messages.append(f"{field}: {msg}")

    # Request bodies hold amounts and details; keep them out of non-debug logs.
    extra = {"path": request.url.path, "method": request.method}
    if settings.debug:
        extra["errors"] = error_messages
    logger.warning(f"Validation error on {request.url.path}", extra=extra)

    return problem_response(
        status.HTTP_400_BAD_REQUEST,
        "VAL_001",
        " | ".join(error_messages),
        "Invalid input data",
        "Please check your input and try again",
        True,
    )


async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    """Handle database integrity errors.

    Args:
        request: The incoming request
        exc: The integrity error

    Returns:
        JSONResponse with error details
    """
    # Do not log str(exc): it can include SQL + bound parameters.
    extra = {"path": request.url.path, "method": request.method}
    if settings.debug:
        logger.exception(f"Database integrity error on {request.url.path}", extra=extra)
    else:
        logger.error(f"Database integrity error on {request.url.path}", extra=extra)

    error_msg = str(exc).lower()
    if "unique" in error_msg or "duplicate" in error_msg:
        return problem_response(
            status.HTTP_409_CONFLICT,
            "DB_002",
            "Resource already exists",
            "This record already exists",
            "Please check if the record was already created",
            False,
        )

    return problem_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "DB_001",
        "Database operation failed",
        "A database error occurred",
        "Please try again later",
        True,
    )


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without exposing internal details.

    Args:
        request: The incoming request
        exc: The unexpected exception

    Returns:
        JSONResponse with generic error message
    """
    extra = {
        "error_type": type(exc).__name__,
        "path": request.url.path,
        "method": request.method,
    }
    # In non-debug: do not log str(exc) or traceback (may include personal data).
    if settings.debug:
        logger.exception(f"Unexpected error on {request.url.path}", extra=extra)
    else:
        logger.error(f"Unexpected error on {request.url.path}", extra=extra)

    return problem_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "SYS_001",
        "Internal server error",
        "An unexpected error occurred",
        "Please try again later or contact support",
        True,
    )
