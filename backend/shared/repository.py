"""
Base repository class for database access.

Encapsulates Supabase client access and the translation of PostgREST
failures into backend exceptions, so concrete repositories only deal
with queries and row mapping.
"""

import logging
from typing import TypeVar, Generic

from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import ExternalServiceError


T = TypeVar("T")

logger = logging.getLogger(__name__)

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides:
    - Supabase client access via self._db
    - the table this repository owns via self._table()
    - store error wrapping via self._store_error()

    Subclasses implement domain-specific data access methods and handle
    dict-to-Pydantic model mapping internally.

    Example:
        class ProfileRepository(BaseRepository[Profile]):
            table_name = "profiles"

            def get(self, profile_id: str) -> Optional[Profile]:
                result = self._table().select("*").eq("id", profile_id).execute()
                if not result.data:
                    return None
                return self._map_to_profile(result.data[0])
    """

    table_name: str = ""

    def __init__(self, db: Client, table_name: str | None = None) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
            table_name: Overrides the class-level table name.
        """
        self._db = db
        if table_name:
            self.table_name = table_name

    def _table(self):
        """Start a query builder on this repository's table."""
        return self._db.table(self.table_name)

    def _store_error(self, operation: str, error: APIError) -> ExternalServiceError:
        """Log a PostgREST failure and wrap it as an external service error."""
        logger.error(
            "Supabase %s on %s failed: %s (code=%s)",
            operation,
            self.table_name,
            error.message,
            error.code,
        )
        return ExternalServiceError(
            f"Database {operation} failed",
            service="supabase",
            details={"table": self.table_name, "code": error.code},
        )

    @staticmethod
    def _is_unique_violation(error: APIError) -> bool:
        return error.code == UNIQUE_VIOLATION
