"""
Closet item routes
Handles CRUD operations for closet items and item-scoped AI actions
"""

import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from closet_worthy.api.schemas.closet_item import (
    ClosetItemCreate,
    ClosetItemResponse,
    ClosetItemUpdate,
)
from closet_worthy.core.database import get_db
from closet_worthy.core.exceptions import AIServiceError, AIServiceNotConfiguredError
from closet_worthy.services.ai import AIGateway, get_ai_gateway
from closet_worthy.services.closet_item import ClosetItemService
from closet_worthy.services.item_filter import ItemFilter, filter_items

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/items",
    tags=["items"],
)

ITEM_NOT_FOUND = "Closet item not found"


@router.get(
    "",
    response_model=list[ClosetItemResponse],
    summary="List closet items",
    description="List all closet items, newest first, with optional search and filter.",
    status_code=status.HTTP_200_OK,
    responses={
        200: {"description": "Closet items retrieved successfully"},
        500: {"description": "Internal server error"},
    },
)
async def list_items(
    q: Optional[str] = Query(
        None, description="Case-insensitive search across name, brand, category and colour"
    ),
    item_filter: ItemFilter = Query(
        ItemFilter.ALL,
        alias="filter",
        description="all, keep, sell, donate, no-photos or no-pricing",
    ),
    db: AsyncSession = Depends(get_db),
) -> list[ClosetItemResponse]:
    """
    List closet items.

    The full item set is loaded and filtered in memory.

    Args:
        q: Optional search text
        item_filter: One of the six list filters
        db: Database session

    Returns:
        Matching closet items
    """
    item_service = ClosetItemService()
    try:
        db_query_start = time.time()
        items = await item_service.list_items(db)
        db_query_time = (time.time() - db_query_start) * 1000
        logger.debug(
            f"Database query (list_items) took {db_query_time:.1f}ms",
            extra={"timing_ms": db_query_time, "operation": "list_items"},
        )
        matching = filter_items(items, query=q, item_filter=item_filter)
        logger.info(
            f"Listed {len(matching)} of {len(items)} closet items (filter={item_filter.value})"
        )
        return matching
    except Exception as e:
        logger.error(
            f"Unexpected error listing closet items: {type(e).__name__}: {e}",
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred while retrieving closet items",
        ) from e


@router.get(
    "/{item_id}",
    response_model=ClosetItemResponse,
    summary="Get closet item",
    status_code=status.HTTP_200_OK,
    responses={
        200: {"description": "Closet item retrieved successfully"},
        404: {"description": "Closet item not found"},
        500: {"description": "Internal server error"},
    },
)
async def get_item(
    item_id: int,
    db: AsyncSession = Depends(get_db),
) -> ClosetItemResponse:
    """
    Get a closet item with its brand, category, subcategory and condition.

    Raises:
        HTTPException: 404 if item not found
    """
    item_service = ClosetItemService()
    try:
        item = await item_service.get_item(db, item_id)
        if not item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ITEM_NOT_FOUND)
        return item
    except HTTPException:
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error getting closet item {item_id}: {type(e).__name__}: {e}",
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred while retrieving the closet item",
        ) from e


@router.post(
    "",
    response_model=ClosetItemResponse,
    summary="Create closet item",
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Closet item created successfully"},
        400: {"description": "Invalid reference IDs or photo URLs"},
        500: {"description": "Internal server error"},
    },
)
async def create_item(
    item_data: ClosetItemCreate,
    db: AsyncSession = Depends(get_db),
) -> ClosetItemResponse:
    """
    Create a closet item.

    **Defaults:**
    - status defaults to "Keep"
    - estimated_resale_value_cad is computed from resale_price_cad

    Raises:
        HTTPException: 400 for validation errors, 500 for unexpected errors
    """
    item_service = ClosetItemService()
    try:
        return await item_service.create_item(db, item_data)
    except ValueError as e:
        logger.warning(f"Closet item creation failed: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.error(
            f"Unexpected error creating closet item: {type(e).__name__}: {e}",
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred while creating the closet item",
        ) from e


@router.put(
    "/{item_id}",
    response_model=ClosetItemResponse,
    summary="Replace closet item",
    description="Replace all editable fields of a closet item. Omit photo_urls to keep current photos.",
    status_code=status.HTTP_200_OK,
    responses={
        200: {"description": "Closet item updated successfully"},
        400: {"description": "Invalid reference IDs or photo URLs"},
        404: {"description": "Closet item not found"},
        500: {"description": "Internal server error"},
    },
)
async def update_item(
    item_id: int,
    item_data: ClosetItemUpdate,
    db: AsyncSession = Depends(get_db),
) -> ClosetItemResponse:
    """
    Replace a closet item's editable fields.

    Raises:
        HTTPException: 404 if item not found, 400 for validation errors
    """
    item_service = ClosetItemService()
    try:
        item = await item_service.update_item(db, item_id, item_data)
        if not item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ITEM_NOT_FOUND)
        return item
    except HTTPException:
        raise
    except ValueError as e:
        logger.warning(f"Closet item update failed: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.error(
            f"Unexpected error updating closet item {item_id}: {type(e).__name__}: {e}",
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred while updating the closet item",
        ) from e


@router.delete(
    "/{item_id}",
    summary="Delete closet item",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        204: {"description": "Closet item deleted successfully"},
        404: {"description": "Closet item not found"},
        500: {"description": "Internal server error"},
    },
)
async def delete_item(
    item_id: int,
    db: AsyncSession = Depends(get_db),
) -> None:
    """
    Delete a closet item. Brands, categories and other lookups are untouched.

    Raises:
        HTTPException: 404 if item not found
    """
    item_service = ClosetItemService()
    try:
        deleted = await item_service.delete_item(db, item_id)
        if not deleted:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ITEM_NOT_FOUND)
        return None
    except HTTPException:
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error deleting closet item {item_id}: {type(e).__name__}: {e}",
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred while deleting the closet item",
        ) from e


AI_ACTIONS = {
    "pricing": ("apply_pricing", "estimate pricing"),
    "listing": ("apply_listing", "generate listing"),
    "recognize": ("apply_recognition", "recognize item"),
}


@router.post(
    "/{item_id}/ai/{action}",
    response_model=ClosetItemResponse,
    summary="Run an AI action on a stored item",
    description=(
        "pricing: estimate and save retail/resale prices. "
        "listing: generate and save listing title and description. "
        "recognize: identify the item and save the result."
    ),
    status_code=status.HTTP_200_OK,
    responses={
        200: {"description": "AI result saved"},
        400: {"description": "Item is missing fields the action needs"},
        404: {"description": "Closet item or action not found"},
        500: {"description": "AI call failed; item left unchanged"},
        503: {"description": "AI features are disabled"},
    },
)
async def run_item_ai_action(
    item_id: int,
    action: str,
    db: AsyncSession = Depends(get_db),
    gateway: AIGateway = Depends(get_ai_gateway),
) -> ClosetItemResponse:
    """
    Run an AI action against a stored item and save the result.

    If the AI call fails nothing is written to the item.
    """
    if action not in AI_ACTIONS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown AI action: {action}"
        )
    method_name, verb = AI_ACTIONS[action]

    item_service = ClosetItemService()
    try:
        item = await getattr(item_service, method_name)(db, item_id, gateway)
        if not item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ITEM_NOT_FOUND)
        return item
    except HTTPException:
        raise
    except ValueError as e:
        logger.warning(f"Cannot {verb} for closet item {item_id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except AIServiceNotConfiguredError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="AI features are disabled"
        ) from e
    except AIServiceError as e:
        logger.error(f"AI {action} failed for closet item {item_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to {verb}"
        ) from e
    except Exception as e:
        logger.error(
            f"Unexpected error running AI {action} for closet item {item_id}: {type(e).__name__}: {e}",
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An unexpected error occurred while trying to {verb}",
        ) from e
