"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from rtnpx.config import Settings
from rtnpx.dependencies import get_settings
from rtnpx.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(status="ok", version="0.1.0", environment=settings.rtnpx_env)
