"""Request logging middleware and JSON log formatting.

This module provides structured logging for all API requests with:
- Unique request IDs for tracing
- Request duration tracking
- Caller login (when authenticated)
- Filtering of credentials and emails out of logged text
"""

import json
import logging
import re
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


# Sensitive patterns to filter from logs
SENSITIVE_PATTERNS = [
    # Bearer tokens in headers or messages
    (re.compile(r'Bearer\s+[A-Za-z0-9\-_\.=]+', re.I), 'Bearer [TOKEN]'),
    # Bare JWTs (three base64url segments)
    (re.compile(r'\beyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\b'), '[TOKEN]'),
    # Email addresses
    (re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b'), '[EMAIL]'),
]

# LogRecord attributes copied into the JSON document when present
EXTRA_FIELDS = (
    "request_id",
    "login",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "error_code",
    "error_type",
    "client_ip",
    "category_id",
    "transaction_id",
    "entity_id",
    "detached_transactions",
)


def filter_sensitive(text: str) -> str:
    """Remove credentials and emails from text.

    Args:
        text: Input text that may contain sensitive values

    Returns:
        Text with sensitive values replaced by placeholders
    """
    if not text:
        return text

    filtered = text
    for pattern, replacement in SENSITIVE_PATTERNS:
        filtered = pattern.sub(replacement, filtered)

    return filtered


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and log details.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware or route handler

        Returns:
            HTTP response
        """
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()

        logger.info(
            "Request started",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": filter_sensitive(str(request.url.path)),
                "client_ip": request.client.host if request.client else None,
            },
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = int((time.time() - start_time) * 1000)
            logger.error(
                "Request failed",
                extra={
                    "request_id": request_id,
                    "login": getattr(request.state, "login", None),
                    "method": request.method,
                    "path": filter_sensitive(str(request.url.path)),
                    "duration_ms": duration_ms,
                    "error_type": type(exc).__name__,
                },
            )
            raise

        duration_ms = int((time.time() - start_time) * 1000)

        response.headers["X-Request-ID"] = request_id

        # The login is only known once the route's dependencies have run.
        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "login": getattr(request.state, "login", None),
                "method": request.method,
                "path": filter_sensitive(str(request.url.path)),
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )

        return response


class JSONLogFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": filter_sensitive(record.getMessage()),
        }

        for name in EXTRA_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value

        if record.exc_info:
            log_data["exception"] = filter_sensitive(self.formatException(record.exc_info))

        return json.dumps(log_data, default=str)


def configure_logging(level: str) -> None:
    """Install a JSON-formatted stream handler on the root logger (once)."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    if any(isinstance(h.formatter, JSONLogFormatter) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(JSONLogFormatter())
    root.addHandler(handler)
