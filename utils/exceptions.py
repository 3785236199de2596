"""
Custom Exceptions Module

Defines application-specific exceptions for clearer error handling.
All exceptions inherit from a base DictionaryError so a single handler
can turn them into the uniform error body:

    {"message": "...", "status": 404, "timestamp": "2024-01-01T00:00:00+00:00"}

Usage:
    from utils.exceptions import NotFoundError, ConflictError

    word = await session.get(Word, word_id)
    if word is None:
        raise NotFoundError("Word not found")
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Dict, Any


class ErrorKind(str, Enum):
    """Machine-readable error categories."""
    VALIDATION = "validation"
    INVALID_TOKEN = "invalid_token"
    NOT_FOUND_OR_ALREADY_VERIFIED = "not_found_or_already_verified"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    RATE_LIMITED = "rate_limited"
    INTERNAL = "internal"


def error_body(message: str, status_code: int) -> Dict[str, Any]:
    """Build the uniform error response body."""
    return {
        "message": message,
        "status": status_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


class DictionaryError(Exception):
    """
    Base exception for all dictionary application errors.

    Attributes:
        message: Human-readable error message
        details: Additional error details, logged but never returned
        status_code: HTTP status code to return
        kind: Machine-readable error category
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return error_body(self.message, self.status_code)


# =============================================================================
# Request Validation
# =============================================================================

class ValidationError(DictionaryError):
    """
    Raised when request input is missing or malformed.

    Common causes:
        - Required field missing or empty
        - Password too short
        - Update request with nothing to update
        - Self-deletion of the acting admin
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "Invalid request",
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"field": field, **(details or {})},
            status_code=400
        )


class InvalidTokenError(DictionaryError):
    """Raised when an email verification token matches no unverified user."""

    kind = ErrorKind.INVALID_TOKEN

    def __init__(
        self,
        message: str = "Invalid or expired verification token",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, details=details, status_code=400)


class NotFoundOrAlreadyVerifiedError(DictionaryError):
    """Raised when a verification resend targets an unknown or verified address."""

    kind = ErrorKind.NOT_FOUND_OR_ALREADY_VERIFIED

    def __init__(
        self,
        message: str = "User not found or already verified",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, details=details, status_code=400)


# =============================================================================
# Authentication Exceptions
# =============================================================================

class UnauthorizedError(DictionaryError):
    """
    Raised when credentials are missing or wrong.

    Common causes:
        - No bearer token on a protected route
        - Wrong username or password at login
    """

    kind = ErrorKind.UNAUTHORIZED

    def __init__(
        self,
        message: str = "Access token required",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, details=details, status_code=401)


class ForbiddenError(DictionaryError):
    """
    Raised when the caller is identified but not allowed.

    Common causes:
        - Invalid or expired session token
        - Role outside the permitted set
        - Email address not verified yet
    """

    kind = ErrorKind.FORBIDDEN

    def __init__(
        self,
        message: str = "Permission denied",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, details=details, status_code=403)


# =============================================================================
# Persistence Exceptions
# =============================================================================

class NotFoundError(DictionaryError):
    """Raised when a requested entity does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        message: str = "Resource not found",
        resource: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"resource": resource, "id": resource_id, **(details or {})},
            status_code=404
        )


class ConflictError(DictionaryError):
    """Raised on a unique constraint violation (username or email taken)."""

    kind = ErrorKind.CONFLICT

    def __init__(
        self,
        message: str = "Username or email already exists",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, details=details, status_code=409)


class InternalError(DictionaryError):
    """Raised when persistence fails in an unexpected way."""

    kind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str = "Internal server error",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, details=details, status_code=500)
