"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from shared.config import Settings, get_settings
from modules.profiles.repository import ProfileRepository
from ..dependencies import get_optional_profile_repository

logger = logging.getLogger(__name__)

router = APIRouter()

# Mounted without the API prefix
root_router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str


@root_router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def banner(settings: Settings = Depends(get_settings)) -> str:
    return f"This is {settings.app_name} version {settings.app_version}"


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=settings.app_version)


@router.get("/ready", response_model=ReadinessResponse, responses={503: {"model": ReadinessResponse}})
async def readiness_check(
    repository: Optional[ProfileRepository] = Depends(get_optional_profile_repository),
):
    """
    Readiness check endpoint.

    Runs the ranked listing with a page size of one, which exercises the
    store connection, the table and its ranking columns.
    """
    unavailable = JSONResponse(
        status_code=503,
        content=ReadinessResponse(status="unavailable", database="unreachable").model_dump(),
    )
    if repository is None:
        return unavailable
    try:
        repository.list_ranked(None, 1)
    except Exception:
        logger.exception("Readiness probe failed")
        return unavailable
    return ReadinessResponse(status="ready", database="connected")
