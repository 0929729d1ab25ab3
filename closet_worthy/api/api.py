"""
API router aggregation
Combines all route handlers into a single router
Reference: https://fastapi.tiangolo.com/tutorial/bigger-applications/
"""
from fastapi import APIRouter

from closet_worthy.api.routes import ai, dashboard, health, items, photos, reference
from closet_worthy.core.config import settings


# All routes are prefixed with API_PREFIX (default /api)
api_router = APIRouter(prefix=settings.API_PREFIX)

api_router.include_router(ai.router)
api_router.include_router(items.router)
api_router.include_router(dashboard.router)
api_router.include_router(reference.router)
api_router.include_router(photos.router)
api_router.include_router(health.router)
