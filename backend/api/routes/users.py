"""
User profile endpoints.

Session check, own-profile read/update, profile creation and the ranked
profile listing. Errors are raised as backend exceptions and rendered
by the handlers in api/errors.py.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query

from shared.models import AuthenticatedUser
from modules.profiles.exceptions import ProfileValidationError
from modules.profiles.interfaces import IProfileService
from modules.profiles.models import (
    CreateProfileResponse,
    Profile,
    RankedProfilesPage,
    UpdateProfileResponse,
    VerifySessionRequest,
    VerifySessionResponse,
)
from ..dependencies import get_profile_service
from ..middleware.auth import get_current_user
from ..models.errors import ErrorResponse

router = APIRouter()

INVALID_PAGE_SIZE = "Invalid pageSize. It must be a positive number."


@router.post(
    "/verify-user",
    response_model=VerifySessionResponse,
    status_code=201,
    responses={500: {"model": ErrorResponse}},
)
async def verify_user(
    request: VerifySessionRequest,
    service: IProfileService = Depends(get_profile_service),
) -> VerifySessionResponse:
    """
    Check whether a token belongs to a logged-in user.

    An invalid token is not an error: the answer is simply false.
    """
    is_logged_in = await service.verify_session(request.token_id)
    return VerifySessionResponse(is_logged_in=is_logged_in)


@router.get(
    "/fetch-user-data",
    response_model=Profile,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def fetch_user_data(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IProfileService = Depends(get_profile_service),
) -> Profile:
    """
    Get the current user's profile.

    Requires authentication.
    """
    return await service.get_own_profile(user)


@router.put(
    "/update-user-data",
    response_model=UpdateProfileResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_user_data(
    patch: Any = Body(None),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IProfileService = Depends(get_profile_service),
) -> UpdateProfileResponse:
    """
    Update fields of the current user's profile.

    Only the fields present in the body are changed. Requires authentication.
    """
    await service.update_own_profile(user, patch)
    return UpdateProfileResponse()


@router.post(
    "/create-user",
    response_model=CreateProfileResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_user(
    data: Any = Body(None),
    service: IProfileService = Depends(get_profile_service),
) -> CreateProfileResponse:
    """Create a new profile. The ID is generated by the store."""
    user_id = await service.create_profile(data)
    return CreateProfileResponse(user_id=user_id)


def parse_page_size(raw: Optional[str]) -> int:
    """Parse the pageSize query parameter into a positive int."""
    try:
        page_size = int(raw) if raw is not None else 0
    except ValueError:
        raise ProfileValidationError(INVALID_PAGE_SIZE, field="pageSize")
    if page_size <= 0:
        raise ProfileValidationError(INVALID_PAGE_SIZE, field="pageSize")
    return page_size


@router.get(
    "/grouped-user",
    response_model=RankedProfilesPage,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def grouped_user(
    last_visible_id: Optional[str] = Query(
        default=None,
        alias="lastVisibleId",
        description="ID of the last profile of the previous page",
    ),
    page_size: Optional[str] = Query(
        default=None,
        alias="pageSize",
        description="Profiles per page (positive integer)",
    ),
    service: IProfileService = Depends(get_profile_service),
) -> RankedProfilesPage:
    """
    List profiles by rating, then rents, then recent activity.

    Pass the returned nextCursorId as lastVisibleId to get the next page.
    """
    return await service.list_ranked(last_visible_id, parse_page_size(page_size))
