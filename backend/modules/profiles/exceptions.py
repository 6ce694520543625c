"""
Profiles module exceptions.
"""

from typing import Optional

from shared.exceptions import ConflictError, NotFoundError, ValidationError


class ProfileNotFoundError(NotFoundError):
    """Raised when no profile is stored for an email."""

    def __init__(self, email: str):
        super().__init__(
            "User not found",
            code="PROFILE_NOT_FOUND",
            details={"email": email},
        )


class CursorNotFoundError(NotFoundError):
    """Raised when a pagination cursor points at a missing profile."""

    def __init__(self, cursor_id: str):
        super().__init__(
            f"Document with ID {cursor_id} does not exist.",
            code="CURSOR_NOT_FOUND",
            details={"cursor_id": cursor_id},
        )


class ProfileValidationError(ValidationError):
    """Raised when an email argument, patch or new profile fails validation."""

    def __init__(self, reason: str, field: Optional[str] = None):
        super().__init__(
            f"Validation failed: {reason}",
            code="PROFILE_VALIDATION_FAILED",
            details={"reason": reason, "field": field},
        )
        self.reason = reason
        self.field = field


class ProfileConflictError(ConflictError):
    """Raised when a write would give two profiles the same email."""

    def __init__(self, email: str):
        super().__init__(
            f"A user with email {email} already exists.",
            code="PROFILE_EMAIL_TAKEN",
            details={"email": email},
        )
