"""Error codes and user-friendly messages.

This module defines the error catalog for the API. Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

# Error catalog for the ownership-scoped CRUD API
ERROR_CATALOG: dict[str, dict] = {
    "API_001": {
        "code": "API_001",
        "message": "A new entity cannot already have an ID",
        "user_message": "This record looks like it was already created.",
        "suggestion": "Remove the id from the request body to create a new record.",
        "retry_allowed": False,
    },
    "API_002": {
        "code": "API_002",
        "message": "Invalid id: missing from request body",
        "user_message": "The record to update was not identified.",
        "suggestion": "Include the record id in the request body.",
        "retry_allowed": False,
    },
    "API_003": {
        "code": "API_003",
        "message": "Invalid ID: path and body ids differ",
        "user_message": "The record id in the address does not match the request body.",
        "suggestion": "Use the same id in the URL and the request body.",
        "retry_allowed": False,
    },
    "API_004": {
        "code": "API_004",
        "message": "Entity not found",
        "user_message": "The record you are trying to update does not exist.",
        "suggestion": "Refresh and try again.",
        "retry_allowed": False,
    },
    "API_005": {
        "code": "API_005",
        "message": "Category not found",
        "user_message": "We couldn't find this category.",
        "suggestion": "Please check the category ID and try again.",
        "retry_allowed": False,
    },
    "API_006": {
        "code": "API_006",
        "message": "Transaction not found",
        "user_message": "We couldn't find this transaction.",
        "suggestion": "Please check the transaction ID and try again.",
        "retry_allowed": False,
    },
    "API_007": {
        "code": "API_007",
        "message": "Access denied: category belongs to different user",
        "user_message": "You don't have permission to access this category.",
        "suggestion": "You can only access your own categories.",
        "retry_allowed": False,
    },
    "API_008": {
        "code": "API_008",
        "message": "Access denied: transaction belongs to different user",
        "user_message": "You don't have permission to access this transaction.",
        "suggestion": "You can only access your own transactions.",
        "retry_allowed": False,
    },
    "API_009": {
        "code": "API_009",
        "message": "Invalid category",
        "user_message": "The selected category is not available.",
        "suggestion": "Choose one of your own categories or create a new one.",
        "retry_allowed": False,
    },
    "QRY_001": {
        "code": "QRY_001",
        "message": "Unparseable filter",
        "user_message": "One of the search filters is not valid.",
        "suggestion": "Use field.operator=value, e.g. amount.greaterThan=10.",
        "retry_allowed": False,
    },
    "QRY_002": {
        "code": "QRY_002",
        "message": "Invalid paging or sort parameter",
        "user_message": "The requested page or sort order is not valid.",
        "suggestion": "Check the page, size and sort parameters.",
        "retry_allowed": False,
    },
    "AUTH_001": {
        "code": "AUTH_001",
        "message": "Could not validate credentials",
        "user_message": "Please sign in again.",
        "suggestion": "Your session may have expired.",
        "retry_allowed": True,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details, or a generic entry for unknown codes
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]
