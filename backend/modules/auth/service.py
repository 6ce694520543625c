"""
Authentication service implementation.

Validates Supabase JWT tokens and turns them into request identities.
"""

import logging
from typing import Optional
import jwt

from shared.config import Settings, get_settings
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import JWTPayload
from .exceptions import (
    AuthNotConfiguredError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Verifies HS256 tokens signed with the Supabase project's JWT secret.
    No network call is made, so a verification failure is always a
    property of the token (or of the server configuration).
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.
        """
        if not token:
            raise MissingTokenError()

        if not self._settings.supabase_jwt_secret:
            raise AuthNotConfiguredError()

        try:
            payload = jwt.decode(
                token,
                self._settings.supabase_jwt_secret,
                algorithms=["HS256"],
                audience=self._settings.supabase_jwt_audience,
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))

        try:
            jwt_payload = JWTPayload(**payload)
        except ValueError:
            raise InvalidTokenError("Token is missing required claims")

        if not jwt_payload.email:
            raise InvalidTokenError("Token has no email claim")

        logger.debug("Verified token for subject %s", jwt_payload.sub)
        return AuthenticatedUser(
            id=jwt_payload.sub,
            email=jwt_payload.email,
            claims=payload,
        )
