"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    FireflyException (base)
       │
       ├── AuthenticationError (401)    ← Missing or invalid identity token
       ├── AuthorizationError (403)     ← Policy denied the operation
       ├── NotFoundError (404)          ← Resource not found (or not visible)
       │      ├── ContentNotFoundError
       │      ├── AssignmentNotFoundError
       │      └── UserNotFoundError
       ├── ValidationError (400)        ← Invalid input data
       └── PersistenceError (500)       ← Store write failed

Content lookups deliberately collapse "missing" and "forbidden" into one
NotFoundError so private records are indistinguishable from missing ones.

Usage:
======
    from firefly.shared.core.exceptions import NotFoundError, ValidationError

    raise ContentNotFoundError(str(content_id))
    raise ValidationError("Rating must be between 1 and 5", details={"rating": 7})

Exception Handling:
===================
    Exceptions are caught by the error handler middleware and converted to JSON:
    {
        "error": {
            "code": "NOT_FOUND",
            "message": "Content not found or access denied",
            "details": {}
        }
    }
"""

from typing import Any, Optional


class FireflyException(Exception):
    """
    Base exception for all Firefly application errors.

    All custom exceptions inherit from this class, providing:
    - HTTP status code mapping
    - Error code for programmatic handling
    - Optional details dictionary
    - Consistent JSON serialization

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dictionary with error details for JSON response
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION & AUTHORIZATION ERRORS (401, 403)
# ═══════════════════════════════════════════════════════════════════════════════


class AuthenticationError(FireflyException):
    """
    Authentication failed error (401 Unauthorized).

    Raised when the identity provider's token is missing, expired or malformed.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
            details=details,
        )


class AuthorizationError(FireflyException):
    """
    Authorization failed error (403 Forbidden).

    Raised when the actor is known but the content policy denies the operation.
    """

    def __init__(
        self,
        message: str = "Permission denied",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            error_code="AUTHORIZATION_ERROR",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(FireflyException):
    """
    Resource not found error (404 Not Found).

    Either pass a resource name (and optional id) to get a formatted message,
    or pass ``message`` to use a fixed one.

    Example:
        raise NotFoundError("User", user_id)
        # Message: "User with id 'abc-123' not found"
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        message: Optional[str] = None,
    ) -> None:
        if message is None:
            message = f"{resource} not found"
            if resource_id:
                message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


class ContentNotFoundError(NotFoundError):
    """Content missing, soft-deleted, or not visible to the actor."""

    def __init__(self, message: str = "Content not found or access denied") -> None:
        super().__init__(resource="Content", message=message)


class AssignmentNotFoundError(NotFoundError):
    """Assignment not found error."""

    def __init__(self, assignment_id: str) -> None:
        super().__init__(resource="Assignment", resource_id=assignment_id)


class UserNotFoundError(NotFoundError):
    """User not found error."""

    def __init__(self, user_id: Optional[str] = None) -> None:
        super().__init__(resource="User", resource_id=user_id)


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION ERRORS (400)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(FireflyException):
    """
    Validation error (400 Bad Request).

    Raised when input data fails validation before any store call.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# STORE ERRORS (500)
# ═══════════════════════════════════════════════════════════════════════════════


class PersistenceError(FireflyException):
    """
    Store write failure.

    Wraps SQLAlchemy errors raised while flushing a write so the HTTP layer
    sees one error type regardless of driver.
    """

    def __init__(
        self,
        message: str = "Failed to write to the database",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_code="PERSISTENCE_ERROR",
            details=details,
        )
