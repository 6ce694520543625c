"""
Error response models.

Every failed request returns a body of this shape.
"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str
