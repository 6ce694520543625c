"""Tests for the profile service."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from modules.auth.exceptions import ExpiredTokenError, InvalidTokenError
from modules.auth.service import AuthService
from modules.profiles.exceptions import ProfileNotFoundError, ProfileValidationError
from modules.profiles.interfaces import IProfileService
from modules.profiles.models import Profile, RankedProfilesPage
from modules.profiles.repository import ProfileRepository
from modules.profiles.service import ProfileService
from shared.models import AuthenticatedUser
from tests.fakes import FakeSupabase


@pytest.fixture
def identity() -> AuthenticatedUser:
    return AuthenticatedUser(id="user-123", email="jane@example.com")


@pytest.fixture
def auth():
    mock = MagicMock()
    mock.validate_token = AsyncMock(
        return_value=AuthenticatedUser(id="user-123", email="jane@example.com")
    )
    return mock


@pytest.fixture
def repository():
    return MagicMock(spec=ProfileRepository)


@pytest.fixture
def service(repository, auth) -> ProfileService:
    return ProfileService(repository=repository, auth=auth, max_page_size=50)


class TestVerifySession:
    @pytest.mark.asyncio
    async def test_valid_token(self, service, auth):
        assert await service.verify_session("good-token") is True
        auth.validate_token.assert_awaited_once_with("good-token")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [InvalidTokenError(), ExpiredTokenError()])
    async def test_rejected_token(self, service, auth, error):
        auth.validate_token.side_effect = error
        assert await service.verify_session("bad-token") is False

    @pytest.mark.asyncio
    async def test_verifier_failure_is_false(self, service, auth):
        auth.validate_token.side_effect = ConnectionError("verifier down")
        assert await service.verify_session("token") is False

    @pytest.mark.asyncio
    async def test_missing_token(self, test_settings):
        real = ProfileService(repository=MagicMock(), auth=AuthService(test_settings))
        assert await real.verify_session(None) is False


class TestOwnProfile:
    @pytest.mark.asyncio
    async def test_reads_by_identity_email(self, service, repository, identity):
        repository.get_by_email.return_value = Profile(id="p1", email="jane@example.com")

        profile = await service.get_own_profile(identity)

        assert profile.id == "p1"
        repository.get_by_email.assert_called_once_with("jane@example.com")

    @pytest.mark.asyncio
    async def test_update_uses_identity_email(self, service, repository, identity):
        await service.update_own_profile(identity, {"age": 31})
        repository.update_by_email.assert_called_once_with("jane@example.com", {"age": 31})

    @pytest.mark.asyncio
    async def test_missing_profile_reported_before_bad_patch(self, identity):
        service = ProfileService(repository=ProfileRepository(FakeSupabase()), auth=MagicMock())

        with pytest.raises(ProfileNotFoundError):
            await service.update_own_profile(identity, {"age": -1})


class TestCreateProfile:
    @pytest.mark.asyncio
    async def test_returns_new_id(self, service, repository):
        repository.create.return_value = "new-id"
        assert await service.create_profile({"name": "Jane", "email": "j@x.io"}) == "new-id"


class TestListRanked:
    @pytest.mark.asyncio
    async def test_delegates_to_repository(self, service, repository):
        page = RankedProfilesPage(profiles=[], next_cursor_id=None)
        repository.list_ranked.return_value = page

        assert await service.list_ranked("cursor", 10) is page
        repository.list_ranked.assert_called_once_with("cursor", 10)

    @pytest.mark.asyncio
    async def test_rejects_oversized_page(self, service, repository):
        with pytest.raises(ProfileValidationError) as exc_info:
            await service.list_ranked(None, 51)
        assert "must not exceed 50" in exc_info.value.message
        repository.list_ranked.assert_not_called()


def test_service_satisfies_interface(service):
    assert isinstance(service, IProfileService)
