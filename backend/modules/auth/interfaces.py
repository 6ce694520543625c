"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks and swapping the identity provider.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for identity verification.

    The rest of the backend treats token verification as an opaque
    capability: a token goes in, an identity or an AuthenticationError
    comes out.
    """

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a bearer token and return the caller's identity.

        Args:
            token: JWT access token issued by Supabase Auth

        Returns:
            AuthenticatedUser with subject ID, email and raw claims

        Raises:
            AuthenticationError: If token is missing, invalid or expired
        """
        ...
