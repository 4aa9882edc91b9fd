"""Core utilities and security modules."""

from dshop.core.exceptions import (
    AppException,
    AuthenticationError,
    AuthorizationError,
    DateConflict,
    NotFoundError,
    RateLimitExceeded,
    ValidationError,
)
from dshop.core.security import (
    create_access_token,
    create_user_token,
    verify_token,
)

__all__ = [
    "AppException",
    "AuthenticationError",
    "AuthorizationError",
    "DateConflict",
    "NotFoundError",
    "RateLimitExceeded",
    "ValidationError",
    "create_access_token",
    "create_user_token",
    "verify_token",
]
