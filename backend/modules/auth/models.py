"""
Authentication module data models.
"""

from typing import Optional
from pydantic import BaseModel, Field


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    Only the claims the backend reads are declared; the rest are kept
    on AuthenticatedUser.claims.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    exp: int = Field(..., description="Expiration timestamp")
    iat: Optional[int] = Field(None, description="Issued at timestamp")
    aud: str | list[str] = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="User role")

    model_config = {"extra": "allow"}
