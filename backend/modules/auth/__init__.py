"""
Authentication module.

Verifies bearer tokens issued by the identity provider (Supabase Auth).

Public API:
- IAuthService: Interface for token verification
- AuthService: JWT-secret based implementation
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService
from .models import JWTPayload
from .service import AuthService
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    AuthNotConfiguredError,
)

__all__ = [
    # Interface
    "IAuthService",
    "AuthService",
    # Models
    "JWTPayload",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "AuthNotConfiguredError",
]
