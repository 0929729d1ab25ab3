"""
Health check endpoints

- /health (liveness): app is running (doesn't check dependencies)
- /health/ready (readiness): database is reachable

Reference: https://kubernetes.io/docs/tasks/configure-pod-container/configure-liveness-readiness-startup-probes/
"""
import logging

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel
from sqlalchemy import text

from closet_worthy.core.config import settings
from closet_worthy.core.database import engine

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/health",
    tags=["health"],
)


class HealthResponse(BaseModel):
    """
    Response model for health check endpoints
    """
    status: str
    message: str
    ai_enabled: bool


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check (liveness)",
    status_code=status.HTTP_200_OK,
)
async def health_check() -> HealthResponse:
    """
    Liveness probe. Does not touch the database.
    """
    return HealthResponse(
        status="healthy",
        message="Service is running",
        ai_enabled=settings.ai_enabled,
    )


@router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness check",
    status_code=status.HTTP_200_OK,
    responses={
        200: {"description": "Service is ready"},
        503: {"description": "Service is not ready (database unavailable)"}
    }
)
async def readiness_check() -> HealthResponse:
    """
    Readiness probe: checks database connectivity.

    **Raises:**
        HTTPException: 503 if database is unavailable
    """
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        return HealthResponse(
            status="ready",
            message="Service is ready to serve traffic",
            ai_enabled=settings.ai_enabled,
        )
    except Exception as e:
        logger.warning(f"Readiness check failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service is not ready - database unavailable"
        )
