"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from typing import Any
from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Identity of the caller, produced by verifying a bearer token.

    Lives for one request only and is handed to route handlers through
    dependency injection. Never persisted.
    """

    id: str = Field(..., description="Subject ID (JWT 'sub' claim)")
    email: str = Field(..., description="Email address from the token")
    claims: dict[str, Any] = Field(default_factory=dict, description="All decoded claims")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }
