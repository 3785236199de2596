"""
Utilities Module

Provides shared utilities across the application:
- Logging configuration
- Custom exceptions
- Rate limiting
"""

from .logging import get_logger, setup_logging, log_account_event, log_email_dispatch
from .exceptions import (
    ErrorKind,
    error_body,
    DictionaryError,
    ValidationError,
    InvalidTokenError,
    NotFoundOrAlreadyVerifiedError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    ConflictError,
    InternalError,
)
from .rate_limit import (
    limiter,
    rate_limit_exceeded_handler,
    RATE_LIMITS,
    limit_auth,
    limit_smile,
)

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    "log_account_event",
    "log_email_dispatch",
    # Exceptions
    "ErrorKind",
    "error_body",
    "DictionaryError",
    "ValidationError",
    "InvalidTokenError",
    "NotFoundOrAlreadyVerifiedError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "InternalError",
    # Rate Limiting
    "limiter",
    "rate_limit_exceeded_handler",
    "RATE_LIMITS",
    "limit_auth",
    "limit_smile",
]
