"""
Profiles module.

Owns the mapping between an authenticated email and its stored profile.

Public API:
- IProfileService: Interface for profile operations
- Profile, RankedProfilesPage: Stored profile and ranked listing page
- Profile exceptions: ProfileNotFoundError, ProfileValidationError, etc.
"""

from .interfaces import IProfileService
from .models import (
    Profile,
    ProfileCreate,
    ProfileUpdate,
    RankedProfilesPage,
    VerifySessionRequest,
    VerifySessionResponse,
    UpdateProfileResponse,
    CreateProfileResponse,
)
from .exceptions import (
    ProfileNotFoundError,
    CursorNotFoundError,
    ProfileValidationError,
    ProfileConflictError,
)

__all__ = [
    # Interface
    "IProfileService",
    # Models
    "Profile",
    "ProfileCreate",
    "ProfileUpdate",
    "RankedProfilesPage",
    "VerifySessionRequest",
    "VerifySessionResponse",
    "UpdateProfileResponse",
    "CreateProfileResponse",
    # Exceptions
    "ProfileNotFoundError",
    "CursorNotFoundError",
    "ProfileValidationError",
    "ProfileConflictError",
]
