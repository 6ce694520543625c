"""
Bearer token authentication dependency.

Extracts the token from ``Authorization: Bearer <token>``, verifies it with
the auth service and hands the resulting identity to the route handler.
"""

import logging
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import InvalidTokenError, MissingTokenError
from modules.auth.interfaces import IAuthService
from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser

from ..dependencies import get_auth_service

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"

# Bearer token extractor; we raise our own error so the 401 body is uniform
bearer_scheme = HTTPBearer(auto_error=False)


def extract_bearer_token(credentials: Optional[HTTPAuthorizationCredentials]) -> str:
    """
    Return the raw token from parsed Authorization credentials.

    HTTPBearer accepts any capitalisation of the scheme; only the exact
    ``Bearer`` form is allowed here.

    Raises:
        MissingTokenError: If the header is absent or malformed
    """
    if credentials is None or credentials.scheme != BEARER_SCHEME:
        raise MissingTokenError()
    token = credentials.credentials.strip()
    if not token:
        raise MissingTokenError()
    return token


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}

    Any verification failure surfaces as AuthenticationError, which the
    app turns into ``401 {"error": "Unauthorized"}``.
    """
    token = extract_bearer_token(credentials)
    try:
        return await auth.validate_token(token)
    except AuthenticationError as e:
        logger.info("Rejected bearer token: %s", e.code)
        raise
    except Exception as e:
        # Verifier outages are reported as 401 too, never as 500.
        logger.exception("Token verification failed unexpectedly")
        raise InvalidTokenError() from e


# Type alias for cleaner route definitions
RequireAuth = Depends(get_current_user)
