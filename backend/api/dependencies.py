"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The Supabase client and settings are created once and handed to the
services explicitly; nothing below the container reaches for a global.
"""

import logging
from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.profiles.interfaces import IProfileService
    from modules.profiles.repository import ProfileRepository

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._auth_service: "IAuthService | None" = None
        self._profile_repository: "ProfileRepository | None" = None
        self._profile_service: "IProfileService | None" = None

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            from shared.config import get_settings
            self._auth_service = AuthService(get_settings())
        return self._auth_service

    @property
    def profile_repository(self) -> "ProfileRepository":
        """Get the profile repository instance."""
        if self._profile_repository is None:
            from modules.profiles.repository import ProfileRepository
            from shared.config import get_settings
            from shared.database import get_supabase_client
            settings = get_settings()
            self._profile_repository = ProfileRepository(
                get_supabase_client(),
                table_name=settings.profiles_table,
                max_number_of_rents=settings.max_number_of_rents,
            )
        return self._profile_repository

    @property
    def profiles(self) -> "IProfileService":
        """Get the profile service instance."""
        if self._profile_service is None:
            from modules.profiles.service import ProfileService
            from shared.config import get_settings
            self._profile_service = ProfileService(
                repository=self.profile_repository,
                auth=self.auth,
                max_page_size=get_settings().max_page_size,
            )
        return self._profile_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._auth_service = None
        self._profile_repository = None
        self._profile_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Called on application shutdown and between tests.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_profile_service() -> "IProfileService":
    """FastAPI dependency for profile service."""
    return get_container().profiles


def get_profile_repository() -> "ProfileRepository":
    """FastAPI dependency for profile repository."""
    return get_container().profile_repository


def get_optional_profile_repository() -> "ProfileRepository | None":
    """
    FastAPI dependency for the readiness probe.

    Same as get_profile_repository, but returns None when the store is
    not configured instead of raising.
    """
    try:
        return get_container().profile_repository
    except RuntimeError as e:
        logger.warning("Profile store unavailable: %s", e)
        return None
