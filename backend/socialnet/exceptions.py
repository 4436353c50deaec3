"""
SocialNet Backend — Custom Exception Hierarchy
================================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) and the auth routes
       catch these and return JSON error responses with the right status code.
Who:   Raised by services, the User Store and the token dependency.
When:  During request processing when recoverable errors occur.

Exception Hierarchy:
    SocialNetError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── AuthenticationError      → 400 Bad Request ({"msg": ...} on /auth/login)
    │   ├── UserNotFoundError      "User does not exist"
    │   └── InvalidPasswordError   "Password is wrong"
    ├── InvalidTokenError        → 401 Unauthorized
    ├── AccessDeniedError        → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    ├── FileStorageError         → 500 Internal Server Error
    └── PersistenceError         → 500 Internal Server Error
        ├── DuplicateEmailError
        └── StoreTimeoutError
"""

from typing import Any, Dict, Optional


class SocialNetError(Exception):
    """
    Base exception for all SocialNet application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
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


class ValidationError(SocialNetError):
    """
    Raised when client input fails validation.

    When:    File type mismatch, size exceeded, malformed form fields.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(SocialNetError):
    """
    Raised when a login attempt is rejected.

    The two subclasses are distinct, user-visible failure reasons; both are
    reported as client errors.
    """


class UserNotFoundError(AuthenticationError):
    """No account is registered under the supplied email."""

    def __init__(self, email: Optional[str] = None):
        super().__init__(message="User does not exist", context={"email": email})


class InvalidPasswordError(AuthenticationError):
    """The supplied password does not match the stored hash."""

    def __init__(self, user_id: Optional[str] = None):
        super().__init__(message="Password is wrong", context={"user_id": user_id})


class InvalidTokenError(SocialNetError):
    """
    Raised when a bearer token is malformed, badly signed or expired.

    HTTP:    401 Unauthorized
    """

    def __init__(
        self,
        message: str = "Invalid or expired token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AccessDeniedError(SocialNetError):
    """
    Raised when a protected route is called without a bearer token.

    HTTP:    403 Forbidden
    """

    def __init__(self, message: str = "Access Denied"):
        super().__init__(message=message)


class NotFoundError(SocialNetError):
    """
    Raised when a requested resource does not exist.

    When:    GET /users/{id} or PATCH /posts/{id}/like with an unknown id.
    HTTP:    404 Not Found

    The store returns None for missing records; services convert that
    None into NotFoundError.
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


class FileStorageError(SocialNetError):
    """
    Raised when file system operations fail.

    When:    Disk full, permission denied, directory not writable, I/O error.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PersistenceError(SocialNetError):
    """
    Raised when the store rejects a write or cannot be reached.

    HTTP:    500 Internal Server Error

    Security Note:
        The message is always a fixed, human-written sentence. Driver errors
        (SQL text, constraint names) go into `context` and are logged only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DuplicateEmailError(PersistenceError):
    """The unique index on users.email rejected an insert."""

    def __init__(self, email: Optional[str] = None):
        super().__init__(
            message="An account with this email already exists",
            context={"email": email},
        )


class StoreTimeoutError(PersistenceError):
    """A store round-trip exceeded STORE_TIMEOUT_SECONDS."""

    def __init__(self, operation: str, timeout: float):
        super().__init__(
            message="The database did not respond in time. Please try again later.",
            context={"operation": operation, "timeout_seconds": timeout},
        )
