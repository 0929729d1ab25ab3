"""
Reference data routes
Lookups for the item form (brands, categories, subcategories, conditions)
Brands can also be added; the other tables come from the seed script
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from closet_worthy.api.schemas.reference import (
    BrandCreate,
    BrandResponse,
    CategoryResponse,
    ConditionResponse,
    ReferenceDataResponse,
    SubcategoryResponse,
)
from closet_worthy.core.database import get_db
from closet_worthy.services.reference import ReferenceService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/reference",
    tags=["reference"],
)


@router.get(
    "",
    response_model=ReferenceDataResponse,
    summary="All reference data",
    description="Brands, categories, subcategories and conditions in one payload.",
    status_code=status.HTTP_200_OK,
)
async def get_reference_data(db: AsyncSession = Depends(get_db)) -> ReferenceDataResponse:
    data = await ReferenceService().get_reference_data(db)
    return ReferenceDataResponse.model_validate(data, from_attributes=True)


@router.get("/brands", response_model=list[BrandResponse], summary="List brands")
async def list_brands(db: AsyncSession = Depends(get_db)) -> list[BrandResponse]:
    return await ReferenceService().list_brands(db)


@router.post(
    "/brands",
    response_model=BrandResponse,
    summary="Add a brand",
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Brand created"},
        400: {"description": "A brand with this name already exists"},
    },
)
async def create_brand(
    brand_data: BrandCreate,
    db: AsyncSession = Depends(get_db),
) -> BrandResponse:
    try:
        return await ReferenceService().create_brand(db, brand_data)
    except ValueError as e:
        logger.warning(f"Brand creation failed: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.get("/categories", response_model=list[CategoryResponse], summary="List categories")
async def list_categories(db: AsyncSession = Depends(get_db)) -> list[CategoryResponse]:
    return await ReferenceService().list_categories(db)


@router.get(
    "/subcategories",
    response_model=list[SubcategoryResponse],
    summary="List subcategories",
)
async def list_subcategories(
    category_id: Optional[int] = Query(None, description="Only subcategories of this category"),
    db: AsyncSession = Depends(get_db),
) -> list[SubcategoryResponse]:
    return await ReferenceService().list_subcategories(db, category_id=category_id)


@router.get(
    "/conditions",
    response_model=list[ConditionResponse],
    summary="List conditions",
    description="Condition scale, best first.",
)
async def list_conditions(db: AsyncSession = Depends(get_db)) -> list[ConditionResponse]:
    return await ReferenceService().list_conditions(db)
