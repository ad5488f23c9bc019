"""
Blog API: Custom Exception Hierarchy
======================================

What:  Application-specific exceptions for the error categories of the API.
How:   Each exception carries a message and optional context dict. Global
       exception handlers (registered in main.py) catch these and return the
       `{"error": ...}` envelope with the matching HTTP status code.
Who:   Raised by BlogPostService; caught by the global handlers.

Exception Hierarchy:
    BlogApiError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error (generic message only)
"""

from typing import Any, Dict, List, Optional


class BlogApiError(Exception):
    """
    Base exception for all Blog API errors.

    Attributes:
        message:  Error description
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BlogApiError):
    """
    Raised when the request body fails the required-field checks.

    Carries every violation found in a single validation pass, in check
    order. The message is the violations joined with "; ".

    HTTP: 400 Bad Request
    """

    def __init__(
        self,
        violations: List[str],
        context: Optional[Dict[str, Any]] = None,
    ):
        self.violations = list(violations)
        super().__init__(message="; ".join(self.violations) or "Validation failed", context=context)


class NotFoundError(BlogApiError):
    """
    Raised when a requested blog post does not exist.

    SQLAlchemy returns None for missing rows; the service converts None (and
    ids that cannot be a valid UUID) into this exception.

    HTTP: 404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(BlogApiError):
    """
    Raised when a store operation fails unexpectedly.

    The message returned to the client is always the generic
    "Internal server error". Detail (driver error type, post id) lives in
    `context` and is logged server-side only.

    HTTP: 500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
