"""Tests for profile patch and creation validation."""

import pytest

from modules.profiles.exceptions import ProfileValidationError
from modules.profiles.validation import validate_new_profile, validate_profile_patch


class TestValidateProfilePatch:
    def test_empty_patch(self):
        assert validate_profile_patch({}) == {}

    def test_returns_column_names_for_present_fields_only(self):
        changes = validate_profile_patch({
            "name": "Jane Doe",
            "numberOfRents": 12,
            "totalAverageWeightRatings": 4.5,
        })
        assert changes == {
            "name": "Jane Doe",
            "number_of_rents": 12,
            "total_average_weight_ratings": 4.5,
        }

    def test_keeps_integer_values(self):
        changes = validate_profile_patch({"age": 30})
        assert changes["age"] == 30
        assert isinstance(changes["age"], int)

    @pytest.mark.parametrize("age", [0, -1, "30", True, None])
    def test_rejects_non_positive_or_non_numeric_age(self, age):
        with pytest.raises(ProfileValidationError) as exc_info:
            validate_profile_patch({"age": age})
        assert exc_info.value.message == "Validation failed: Age must be a positive number."
        assert exc_info.value.field == "age"

    @pytest.mark.parametrize("name", ["", "   ", None, 42])
    def test_rejects_empty_name(self, name):
        with pytest.raises(ProfileValidationError) as exc_info:
            validate_profile_patch({"name": name})
        assert exc_info.value.reason == "Name cannot be empty."

    @pytest.mark.parametrize("email", ["not-an-email", "a@b", "a b@c.d", "@example.com", 7])
    def test_rejects_invalid_email(self, email):
        with pytest.raises(ProfileValidationError) as exc_info:
            validate_profile_patch({"email": email})
        assert "Invalid email format." in exc_info.value.message

    def test_accepts_valid_email(self):
        assert validate_profile_patch({"email": "jane@example.com"}) == {"email": "jane@example.com"}

    @pytest.mark.parametrize("rents", [0, 999])
    def test_number_of_rents_bounds_inclusive(self, rents):
        assert validate_profile_patch({"numberOfRents": rents}) == {"number_of_rents": rents}

    @pytest.mark.parametrize("rents", [-1, 1000, "5"])
    def test_number_of_rents_out_of_range(self, rents):
        with pytest.raises(ProfileValidationError) as exc_info:
            validate_profile_patch({"numberOfRents": rents})
        assert exc_info.value.reason == "Number of rents must be a number between 0 and 999."

    def test_number_of_rents_configurable_ceiling(self):
        assert validate_profile_patch({"numberOfRents": 99}, max_number_of_rents=99)
        with pytest.raises(ProfileValidationError) as exc_info:
            validate_profile_patch({"numberOfRents": 100}, max_number_of_rents=99)
        assert "between 0 and 99." in exc_info.value.message

    def test_achievements_must_be_strings(self):
        assert validate_profile_patch({"achievements": ["Top Renter"]}) == {
            "achievements": ["Top Renter"]
        }
        with pytest.raises(ProfileValidationError):
            validate_profile_patch({"achievements": ["Top Renter", 5]})

    def test_recently_active_must_be_timestamp(self):
        assert validate_profile_patch({"recentlyActive": 1672531200}) == {
            "recently_active": 1672531200
        }
        with pytest.raises(ProfileValidationError):
            validate_profile_patch({"recentlyActive": -5})

    def test_rejects_id(self):
        with pytest.raises(ProfileValidationError) as exc_info:
            validate_profile_patch({"id": "other-id", "name": "Jane"})
        assert "'id'" in exc_info.value.message

    def test_rejects_unknown_field(self):
        with pytest.raises(ProfileValidationError) as exc_info:
            validate_profile_patch({"isAdmin": True})
        assert "Unknown field 'isAdmin'" in exc_info.value.message

    def test_rejects_snake_case_field_names(self):
        with pytest.raises(ProfileValidationError):
            validate_profile_patch({"number_of_rents": 3})

    @pytest.mark.parametrize("body", [None, [], "name", 3])
    def test_rejects_non_object_body(self, body):
        with pytest.raises(ProfileValidationError) as exc_info:
            validate_profile_patch(body)
        assert "JSON object" in exc_info.value.message

    def test_reports_first_violation_in_field_order(self):
        """name is checked before age, age before numberOfRents, that before email."""
        with pytest.raises(ProfileValidationError) as exc_info:
            validate_profile_patch({
                "email": "bad",
                "numberOfRents": 5000,
                "age": -3,
                "name": "",
            })
        assert exc_info.value.field == "name"

        with pytest.raises(ProfileValidationError) as exc_info:
            validate_profile_patch({"email": "bad", "numberOfRents": 5000, "age": -3})
        assert exc_info.value.field == "age"

        with pytest.raises(ProfileValidationError) as exc_info:
            validate_profile_patch({"email": "bad", "numberOfRents": 5000})
        assert exc_info.value.field == "numberOfRents"


class TestValidateNewProfile:
    def test_minimal_profile(self):
        fields = validate_new_profile({"name": "Jane", "email": "jane@example.com"})
        assert fields == {"name": "Jane", "email": "jane@example.com"}

    def test_requires_name(self):
        with pytest.raises(ProfileValidationError) as exc_info:
            validate_new_profile({"email": "jane@example.com"})
        assert exc_info.value.reason == "Field 'name' is required."
        assert exc_info.value.field == "name"

    def test_requires_email(self):
        with pytest.raises(ProfileValidationError) as exc_info:
            validate_new_profile({"name": "Jane"})
        assert exc_info.value.field == "email"

    def test_applies_field_rules(self):
        with pytest.raises(ProfileValidationError) as exc_info:
            validate_new_profile({"name": "Jane", "email": "jane@example.com", "age": 0})
        assert exc_info.value.field == "age"

    def test_rejects_client_id(self):
        with pytest.raises(ProfileValidationError):
            validate_new_profile({"id": "abc", "name": "Jane", "email": "jane@example.com"})


@pytest.mark.parametrize(
    "field",
    ["age", "numberOfRents", "totalAverageWeightRatings", "recentlyActive"],
)
@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_rejects_non_finite_numbers(field, value):
    with pytest.raises(ProfileValidationError) as exc_info:
        validate_profile_patch({field: value})
    assert exc_info.value.field == field


def test_new_profile_rejects_nan_rents():
    with pytest.raises(ProfileValidationError):
        validate_new_profile({
            "name": "Jane",
            "email": "jane@example.com",
            "numberOfRents": float("nan"),
        })
