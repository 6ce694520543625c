"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
import jwt  # PyJWT

from api.dependencies import reset_container
from shared.config import Settings
from shared.database import reset_client_cache


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


def create_test_token(
    user_id: str = "test-user-123",
    email: str | None = "test@example.com",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
    audience: str = "authenticated",
) -> str:
    """
    Create a test JWT token shaped like a Supabase access token.

    Args:
        user_id: Subject to include in the token
        email: Email claim, omitted when None
        expired: If True, creates an expired token
        secret: Signing secret
        audience: Audience claim

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "aud": audience,
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    if email is not None:
        payload["email"] = email
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the service container and Supabase client around each test."""
    reset_container()
    reset_client_cache()
    yield
    reset_container()
    reset_client_cache()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a known JWT secret and no real Supabase project."""
    return Settings(
        supabase_jwt_secret=TEST_JWT_SECRET,
        supabase_url="https://test.supabase.co",
        supabase_service_role_key="test-service-key",
    )


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
