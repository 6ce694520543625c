"""
Validation of client-supplied profile data.

Turns the pydantic models in models.py into column dicts, or a single
ProfileValidationError naming the first offending field.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from .exceptions import ProfileValidationError
from .models import DEFAULT_MAX_NUMBER_OF_RENTS, ProfileCreate, ProfileUpdate


def _first_violation(error: PydanticValidationError) -> ProfileValidationError:
    first = error.errors()[0]
    loc = first.get("loc") or ()
    field = to_camel(str(loc[0])) if loc else None

    if first["type"] == "value_error":
        reason = str(first["ctx"]["error"])
    elif first["type"] == "missing":
        reason = f"Field '{field}' is required."
    else:
        reason = f"Field '{field}': {first['msg']}."
    return ProfileValidationError(reason, field=field)


def validate_profile_patch(
    data: Any,
    max_number_of_rents: int = DEFAULT_MAX_NUMBER_OF_RENTS,
) -> dict[str, Any]:
    """
    Validate a partial profile.

    Returns:
        Column name -> value for every field present in ``data``.
        Absent fields are left out, never nulled.

    Raises:
        ProfileValidationError: On the first invalid field
    """
    try:
        patch = ProfileUpdate.model_validate(
            data,
            context={"max_number_of_rents": max_number_of_rents},
        )
    except PydanticValidationError as e:
        raise _first_violation(e)
    return patch.model_dump(exclude_unset=True)


def validate_new_profile(
    data: Any,
    max_number_of_rents: int = DEFAULT_MAX_NUMBER_OF_RENTS,
) -> dict[str, Any]:
    """Validate a full profile body for creation. Same rules, name and email required."""
    try:
        profile = ProfileCreate.model_validate(
            data,
            context={"max_number_of_rents": max_number_of_rents},
        )
    except PydanticValidationError as e:
        raise _first_violation(e)
    return profile.model_dump(exclude_unset=True)
