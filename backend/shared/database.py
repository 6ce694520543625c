"""
Supabase client for the profile store.

One service-role client is created per process and shared by every
request handler. It bypasses Row Level Security, so repositories scope
their own queries (profiles by email).

The client never signs in as an end user: bearer tokens are verified
by the auth module, not by the client, so session persistence and
token refresh are switched off.
"""

from typing import Optional
from supabase import Client, ClientOptions, create_client

from .config import Settings, get_settings

# Module-level client cache
_service_client: Optional[Client] = None


def build_client_options(settings: Settings) -> ClientOptions:
    """PostgREST schema and session behaviour for the service client."""
    return ClientOptions(
        schema=settings.supabase_schema,
        auto_refresh_token=False,
        persist_session=False,
    )


def get_supabase_client() -> Client:
    """
    Get the shared service-role client.

    Raises:
        RuntimeError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is unset
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        missing = [
            name
            for name, value in (
                ("SUPABASE_URL", settings.supabase_url),
                ("SUPABASE_SERVICE_ROLE_KEY", settings.supabase_service_role_key),
            )
            if not value
        ]
        if missing:
            raise RuntimeError(
                f"Supabase configuration missing: set {', '.join(missing)}."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
            options=build_client_options(settings),
        )

    return _service_client


def reset_client_cache() -> None:
    """
    Drop the cached client.

    Called on application shutdown and between tests.
    """
    global _service_client
    _service_client = None
