"""
Profiles module interface.

The API layer depends on IProfileService for every profile operation.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser

from .models import Profile, RankedProfilesPage


@runtime_checkable
class IProfileService(Protocol):
    """
    Interface for profile operations.

    Protected operations take the caller's identity as an explicit
    argument; it is produced by the auth dependency for each request.
    """

    async def verify_session(self, token: str) -> bool:
        """
        Check whether a token is accepted by the identity verifier.

        Returns:
            True for a valid token, False otherwise. Never raises for a
            bad token.
        """
        ...

    async def get_own_profile(self, identity: AuthenticatedUser) -> Profile:
        """
        Get the profile stored for the caller's email.

        Raises:
            ProfileNotFoundError: If the caller has no profile
        """
        ...

    async def update_own_profile(
        self,
        identity: AuthenticatedUser,
        patch: Any,
    ) -> None:
        """
        Apply a partial update to the caller's profile.

        Raises:
            ProfileNotFoundError: If the caller has no profile
            ProfileValidationError: If a patch field is invalid
            ProfileConflictError: If the new email is taken
        """
        ...

    async def create_profile(self, data: Any) -> str:
        """
        Create a profile and return its ID.

        Raises:
            ProfileValidationError: If the body is invalid
            ProfileConflictError: If the email is taken
        """
        ...

    async def list_ranked(
        self,
        cursor_id: Optional[str],
        page_size: int,
    ) -> RankedProfilesPage:
        """
        Get one page of profiles ordered by rank.

        Raises:
            ProfileValidationError: If page_size is out of range
            CursorNotFoundError: If cursor_id is unknown
        """
        ...
