import shutil

from fastapi import APIRouter, Depends, Response, status

from typings_fetcher.api.dependencies import get_settings
from typings_fetcher.api.schemas import HealthResponse, ReadinessResponse
from typings_fetcher.config import Settings

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()


@router.get("/healthz/live", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    """Liveness check: is the process alive?"""
    return HealthResponse()


@router.get("/healthz/ready", response_model=ReadinessResponse)
async def readiness(
    response: Response,
    settings: Settings = Depends(get_settings),
) -> ReadinessResponse:
    """Readiness check: is the installer executable on PATH?"""
    if shutil.which(settings.installer) is not None:
        return ReadinessResponse(status="ok", installer="up")
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(status="degraded", installer="down")
