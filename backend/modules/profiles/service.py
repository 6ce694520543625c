"""
Profiles service implementation.

Composes the identity verifier and the profile repository into the
operations exposed over HTTP.
"""

import logging
from typing import Any, Optional

from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser
from modules.auth.interfaces import IAuthService

from .exceptions import ProfileValidationError
from .interfaces import IProfileService
from .models import Profile, RankedProfilesPage
from .repository import ProfileRepository

logger = logging.getLogger(__name__)


class ProfileService(IProfileService):
    """Profile service backed by ProfileRepository."""

    def __init__(
        self,
        repository: ProfileRepository,
        auth: IAuthService,
        max_page_size: int = 100,
    ):
        self._repository = repository
        self._auth = auth
        self._max_page_size = max_page_size

    async def verify_session(self, token: str) -> bool:
        try:
            identity = await self._auth.validate_token(token)
        except AuthenticationError as e:
            logger.info("Session rejected: %s", e.code)
            return False
        except Exception:
            logger.exception("Session check failed unexpectedly")
            return False
        logger.info("Session verified for subject %s", identity.id)
        return True

    async def get_own_profile(self, identity: AuthenticatedUser) -> Profile:
        return self._repository.get_by_email(identity.email)

    async def update_own_profile(
        self,
        identity: AuthenticatedUser,
        patch: Any,
    ) -> None:
        # Resolve first so a caller without a profile gets 404, not a
        # validation error about their payload.
        self._repository.get_by_email(identity.email)
        self._repository.update_by_email(identity.email, patch)

    async def create_profile(self, data: Any) -> str:
        return self._repository.create(data)

    async def list_ranked(
        self,
        cursor_id: Optional[str],
        page_size: int,
    ) -> RankedProfilesPage:
        if page_size > self._max_page_size:
            raise ProfileValidationError(
                f"Invalid pageSize. It must not exceed {self._max_page_size}.",
                field="pageSize",
            )
        return self._repository.list_ranked(cursor_id, page_size)
