"""Custom exception classes for the service layer.

Every error detected by the services or the request parsers derives from
MoneyLoggerError and carries an error_code from errors.py together with the
HTTP status the API boundary should answer with.
"""

from typing import Any


class MoneyLoggerError(Exception):
    """Base exception for all service-layer errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "API_003")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 500)
    """

    http_status_default = 500

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int | None = None,
    ):
        """Initialize the exception.

        Args:
            error_code: Error code from errors.py
            details: Additional error context (not shown to users)
            http_status: HTTP status code (defaults to the class status)
        """
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status or self.http_status_default
        super().__init__(error_code)


class BadRequestError(MoneyLoggerError):
    """Raised for malformed caller input.

    Common causes:
    - An id supplied on create (API_001)
    - A missing or mismatched id on update (API_002, API_003)
    - An update target that does not exist (API_004)
    - An unparseable filter, sort or page parameter (QRY_001, QRY_002)
    """

    http_status_default = 400


class InvalidReferenceError(BadRequestError):
    """Raised when a nested reference in the payload is unusable.

    A transaction pointing at a category that does not exist or that belongs
    to another user is bad input, not an access violation on the caller's own
    resource, so it answers 400 rather than 403.
    """

    pass


class NotFoundError(MoneyLoggerError):
    """Raised when no entity exists at the requested id."""

    http_status_default = 404


class ForbiddenError(MoneyLoggerError):
    """Raised when the entity exists but the caller is not its creator."""

    http_status_default = 403
