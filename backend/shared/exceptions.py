"""
Base exception classes for the eBuddy backend.

Each module defines its own exceptions on top of these bases. A base
fixes the HTTP status of every error derived from it; api/errors.py
reads ``status_code`` and ``public_message`` and never inspects the
concrete module exception.
"""

from typing import Any, ClassVar, Optional


class EBuddyError(Exception):
    """
    Base exception for all eBuddy errors.

    Attributes:
        message: Human readable description.
        code: Stable machine readable identifier, the class name by default.
        details: Context for logs. Never sent to clients.
    """

    status_code: ClassVar[int] = 500
    # Sent instead of ``message`` when set
    public_message: ClassVar[Optional[str]] = "Internal Server Error"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = dict(details or {})

    @property
    def client_message(self) -> str:
        """Text for the ``error`` field of the HTTP response."""
        return self.public_message if self.public_message is not None else self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for logs."""
        return {
            "error": self.code,
            "status": self.status_code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(EBuddyError):
    """A profile, or the profile a cursor points at, does not exist."""

    status_code = 404
    public_message = None


class ValidationError(EBuddyError):
    """Client-supplied data was rejected. The message names the reason."""

    status_code = 400
    public_message = None


class ConflictError(EBuddyError):
    """A write would give two profiles the same unique value."""

    status_code = 409
    public_message = None


class AuthenticationError(EBuddyError):
    """
    The bearer token was missing or not accepted.

    The concrete reason is only logged; clients always see "Unauthorized".
    """

    status_code = 401
    public_message = "Unauthorized"


class ExternalServiceError(EBuddyError):
    """The profile store or another backing service failed."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
