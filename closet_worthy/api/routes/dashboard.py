"""
Dashboard route
Totals and breakdowns recomputed from the full item list on every request
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from closet_worthy.api.schemas.dashboard import DashboardMetrics
from closet_worthy.core.database import get_db
from closet_worthy.services.closet_item import ClosetItemService
from closet_worthy.services.dashboard import compute_dashboard_metrics

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"],
)


@router.get(
    "",
    response_model=DashboardMetrics,
    summary="Dashboard metrics",
    description="Item count, total retail and resale value, to-do counts and value by brand/category.",
    status_code=status.HTTP_200_OK,
)
async def get_dashboard(db: AsyncSession = Depends(get_db)) -> DashboardMetrics:
    item_service = ClosetItemService()
    try:
        items = await item_service.list_items(db)
        return compute_dashboard_metrics(items)
    except Exception as e:
        logger.error(f"Dashboard error: {type(e).__name__}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred while computing the dashboard",
        ) from e
