"""
Profile repository for database access.

Encapsulates all Supabase queries and data mapping for the profiles table.
A profile is addressed by email everywhere except pagination cursors,
which use the store-generated ID.
"""

import logging
import time
from typing import Any, Optional

from postgrest.exceptions import APIError
from supabase import Client

from shared.repository import BaseRepository
from .exceptions import (
    CursorNotFoundError,
    ProfileConflictError,
    ProfileNotFoundError,
    ProfileValidationError,
)
from .models import (
    DEFAULT_MAX_NUMBER_OF_RENTS,
    Profile,
    RankedProfilesPage,
    is_valid_email,
    whole_to_int,
)
from .validation import validate_new_profile, validate_profile_patch

logger = logging.getLogger(__name__)

# Postgres SQLSTATE raised when a cursor is not a well-formed uuid
INVALID_TEXT_REPRESENTATION = "22P02"

# Ranking keys, all descending. The listing appends id ascending so that
# profiles tied on every key still have a stable position for cursors.
RANKING_COLUMNS = (
    "total_average_weight_ratings",
    "number_of_rents",
    "recently_active",
)


def keyset_after(row: dict[str, Any]) -> str:
    """
    Build a PostgREST ``or`` filter matching rows ranked strictly after ``row``.

    For keys k1..kn this expands to
    ``k1 < v1 OR (k1 = v1 AND k2 < v2) OR ... OR (k1..kn = v1..vn AND id > row.id)``.
    """
    keys = [(column, "lt") for column in RANKING_COLUMNS] + [("id", "gt")]
    clauses = []
    for position, (column, op) in enumerate(keys):
        conditions = [f"{prev}.eq.{row[prev]}" for prev, _ in keys[:position]]
        conditions.append(f"{column}.{op}.{row[column]}")
        if len(conditions) == 1:
            clauses.append(conditions[0])
        else:
            clauses.append(f"and({','.join(conditions)})")
    return ",".join(clauses)


class ProfileRepository(BaseRepository[Profile]):
    """
    Repository for profile data access.

    Note: This repository does NOT perform authorization checks.
    Callers must only pass the email of the authenticated identity.
    """

    table_name = "profiles"

    def __init__(
        self,
        db: Client,
        table_name: Optional[str] = None,
        max_number_of_rents: int = DEFAULT_MAX_NUMBER_OF_RENTS,
    ) -> None:
        super().__init__(db, table_name)
        self._max_number_of_rents = max_number_of_rents

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_by_email(self, email: str) -> Profile:
        """
        Get the profile stored for an email.

        Raises:
            ProfileNotFoundError: If no profile has this email.
        """
        row = self._find_row("email", email)
        if row is None:
            raise ProfileNotFoundError(email)
        return self._map_to_profile(row)

    def list_ranked(
        self,
        cursor_id: Optional[str],
        page_size: int,
    ) -> RankedProfilesPage:
        """
        List profiles by rank, one page at a time.

        Args:
            cursor_id: ID of the last profile of the previous page, or None
                for the first page.
            page_size: Maximum number of profiles to return.

        Returns:
            The page and the cursor for the next one (None when empty).

        Raises:
            ProfileValidationError: If page_size is not a positive integer.
            CursorNotFoundError: If cursor_id does not match a profile.
        """
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
            raise ProfileValidationError(
                "Invalid pageSize. It must be a positive number.",
                field="pageSize",
            )

        query = self._table().select("*")

        if cursor_id:
            cursor_row = self._find_row("id", cursor_id)
            if cursor_row is None:
                raise CursorNotFoundError(cursor_id)
            query = query.or_(keyset_after(cursor_row))

        for column in RANKING_COLUMNS:
            query = query.order(column, desc=True)
        query = query.order("id").limit(page_size)

        try:
            result = query.execute()
        except APIError as e:
            raise self._store_error("select", e)

        profiles = [self._map_to_profile(row) for row in result.data]
        return RankedProfilesPage(
            profiles=profiles,
            next_cursor_id=profiles[-1].id if profiles else None,
        )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def update_by_email(self, email: str, patch: Any) -> None:
        """
        Apply a validated partial update to the profile stored for an email.

        Only fields present in ``patch`` are written. The write is one
        conditional UPDATE, so there is no window between finding the row
        and changing it.

        Raises:
            ProfileValidationError: If email or any patch field is invalid.
                Nothing is written in that case.
            ProfileNotFoundError: If no profile has this email.
            ProfileConflictError: If the patch moves the profile onto an
                email another profile already uses.
        """
        if not is_valid_email(email):
            raise ProfileValidationError("Invalid email address provided.", field="email")

        changes = validate_profile_patch(patch, self._max_number_of_rents)

        if not changes:
            # Nothing to write; still report a missing profile.
            self.get_by_email(email)
            return

        try:
            result = self._table().update(changes).eq("email", email).execute()
        except APIError as e:
            if self._is_unique_violation(e):
                raise ProfileConflictError(changes.get("email", email))
            raise self._store_error("update", e)

        if not result.data:
            raise ProfileNotFoundError(email)

        logger.info("Updated profile fields %s", sorted(changes))

    def create(self, data: Any) -> str:
        """
        Insert a new profile.

        Returns:
            The store-generated profile ID.

        Raises:
            ProfileValidationError: If the body is invalid.
            ProfileConflictError: If a profile with this email exists.
        """
        fields = validate_new_profile(data, self._max_number_of_rents)
        email = fields["email"]

        if self._find_row("email", email) is not None:
            raise ProfileConflictError(email)

        row = {
            "achievements": [],
            "total_average_weight_ratings": 0,
            "number_of_rents": 0,
            "recently_active": int(time.time()),
            **fields,
        }

        try:
            result = self._table().insert(row).execute()
        except APIError as e:
            if self._is_unique_violation(e):
                raise ProfileConflictError(email)
            raise self._store_error("insert", e)

        profile_id = str(result.data[0]["id"])
        logger.info("Created profile %s", profile_id)
        return profile_id

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _find_row(self, column: str, value: str) -> Optional[dict[str, Any]]:
        try:
            result = self._table().select("*").eq(column, value).limit(1).execute()
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                return None
            raise self._store_error("select", e)
        if not result.data:
            return None
        return result.data[0]

    def _map_to_profile(self, row: dict[str, Any]) -> Profile:
        """
        Map a database row to a Profile model.

        Numeric columns are DOUBLE PRECISION, so whole values come back
        as floats; they are returned as ints.
        """
        return Profile(
            id=str(row["id"]),
            name=row.get("name"),
            email=row["email"],
            age=whole_to_int(row.get("age")),
            achievements=row.get("achievements") or [],
            total_average_weight_ratings=whole_to_int(row.get("total_average_weight_ratings") or 0),
            number_of_rents=whole_to_int(row.get("number_of_rents") or 0),
            recently_active=whole_to_int(row.get("recently_active") or 0),
        )
