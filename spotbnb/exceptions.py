"""
SpotBnB Backend — Custom Exception Hierarchy
==============================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"message": ...}` JSON bodies with the matching status code.
Who:   Raised by services and dependencies; caught by global handlers.

Exception Hierarchy:
    SpotBnbError (base)
    ├── ValidationError      → 400 Bad Request (client can fix)
    ├── AuthenticationError  → 401 Unauthorized
    ├── ForbiddenError       → 403 Forbidden (not the owner, duplicate review)
    ├── NotFoundError        → 404 Not Found
    └── DatabaseError        → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class SpotBnbError(Exception):
    """
    Base exception for all SpotBnB application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(SpotBnbError):
    """
    Raised when client input fails validation.

    HTTP: 400 Bad Request

    `errors` maps field names to one message each, for the declarative
    spot rules. The inline review checks raise with a message only.

    Example response:
        {
            "message": "Bad Request",
            "errors": {"lat": "Latitude must be a number between -90 and 90."}
        }
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Bad Request",
        errors: Optional[Dict[str, str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.errors = errors or {}


class AuthenticationError(SpotBnbError):
    """
    Raised when a protected route is called without a valid credential.

    HTTP: 401 Unauthorized
    """

    status_code = 401

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(SpotBnbError):
    """
    Raised when an authenticated user may not act on a resource.

    HTTP: 403 Forbidden
    When: The user does not own the spot, the image belongs to another
          spot, or the user already reviewed the spot.
    """

    status_code = 403

    def __init__(
        self,
        message: str = "Not authorized.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(SpotBnbError):
    """
    Raised when a requested resource does not exist.

    HTTP: 404 Not Found

    SQLAlchemy returns None for missing records (not an exception).
    Services convert None → NotFoundError so the global handler can
    answer with the correct status code.
    """

    status_code = 404

    def __init__(
        self,
        message: str = "The requested resource was not found",
        resource: Optional[str] = None,
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource:
            ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(SpotBnbError):
    """
    Raised when database operations fail unexpectedly.

    HTTP: 500 Internal Server Error

    Security Note:
        The message returned to the client is the generic per-operation
        message ("Failed to create spot."). The original exception type is
        kept in `context` and logged server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
