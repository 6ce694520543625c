"""
Profiles module data models.

Profiles travel as camelCase JSON and are stored as snake_case columns.
The alias generator bridges the two, so `model_dump()` yields column
names and FastAPI responses use the JSON names.
"""

import math
import re
from typing import Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

DEFAULT_MAX_NUMBER_OF_RENTS = 999

Number = Union[int, float]


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.match(value) is not None


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid JSON number here.
    # NaN and the infinities never count as numbers.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def whole_to_int(value: Any) -> Any:
    """Return integral floats as int (30.0 -> 30); other values unchanged."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class Profile(BaseModel):
    """A stored user profile."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Store-generated profile ID")
    name: Optional[str] = Field(None, description="Full name")
    email: str = Field(..., description="Email address, unique per profile")
    age: Optional[Number] = Field(None, description="Age in years")
    achievements: list[str] = Field(default_factory=list)
    total_average_weight_ratings: Number = Field(
        default=0,
        description="Weighted average of received ratings",
    )
    number_of_rents: Number = Field(default=0, description="Completed rentals")
    recently_active: Number = Field(
        default=0,
        description="Unix timestamp (seconds) of the latest activity",
    )


class RankedProfilesPage(BaseModel):
    """One page of the ranked profile listing."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    profiles: list[Profile]
    next_cursor_id: Optional[str] = Field(
        None,
        description="ID of the last profile on this page, null when the page is empty",
    )


class ProfileUpdate(BaseModel):
    """
    Partial profile as sent by a client.

    Field order is the order violations are reported in. The allowed
    numberOfRents ceiling comes from the validation context key
    ``max_number_of_rents``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=False,
        extra="forbid",
    )

    name: Optional[str] = None
    age: Optional[Number] = None
    number_of_rents: Optional[Number] = None
    email: Optional[str] = None
    achievements: Optional[list[str]] = None
    total_average_weight_ratings: Optional[Number] = None
    recently_active: Optional[Number] = None

    @model_validator(mode="before")
    @classmethod
    def reject_foreign_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object.")
        if "id" in data:
            raise ValueError("Field 'id' cannot be set by the client.")
        allowed = {field.alias for field in cls.model_fields.values()}
        for key in data:
            if key not in allowed:
                raise ValueError(f"Unknown field '{key}'.")
        return data

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, value: Any) -> Any:
        if not isinstance(value, str) or value.strip() == "":
            raise ValueError("Name cannot be empty.")
        return value

    @field_validator("age", mode="before")
    @classmethod
    def check_age(cls, value: Any) -> Any:
        if not _is_number(value) or value <= 0:
            raise ValueError("Age must be a positive number.")
        return value

    @field_validator("number_of_rents", mode="before")
    @classmethod
    def check_number_of_rents(cls, value: Any, info: ValidationInfo) -> Any:
        context = info.context or {}
        ceiling = context.get("max_number_of_rents", DEFAULT_MAX_NUMBER_OF_RENTS)
        if not _is_number(value) or value < 0 or value > ceiling:
            raise ValueError(f"Number of rents must be a number between 0 and {ceiling}.")
        return value

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, value: Any) -> Any:
        if not is_valid_email(value):
            raise ValueError("Invalid email format.")
        return value

    @field_validator("achievements", mode="before")
    @classmethod
    def check_achievements(cls, value: Any) -> Any:
        if not isinstance(value, list) or not all(isinstance(a, str) for a in value):
            raise ValueError("Achievements must be a list of strings.")
        return value

    @field_validator("total_average_weight_ratings", mode="before")
    @classmethod
    def check_ratings(cls, value: Any) -> Any:
        if not _is_number(value):
            raise ValueError("Total average weight ratings must be a number.")
        return value

    @field_validator("recently_active", mode="before")
    @classmethod
    def check_recently_active(cls, value: Any) -> Any:
        if not _is_number(value) or value < 0:
            raise ValueError("Recently active must be a Unix timestamp in seconds.")
        return value


class ProfileCreate(ProfileUpdate):
    """New profile body. Name and email are required, the rest defaults."""

    name: str
    email: str


class VerifySessionRequest(BaseModel):
    """Body of POST /verify-user."""

    token_id: Optional[str] = Field(None, alias="tokenId", description="Bearer token to check")


class VerifySessionResponse(BaseModel):
    """Result of a session check."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_logged_in: bool


class UpdateProfileResponse(BaseModel):
    message: str = "User updated successfully"


class CreateProfileResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: str
