"""
Reference data service (brands, categories, subcategories, conditions)
Reference: https://docs.sqlalchemy.org/en/21/orm/queryguide/
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from closet_worthy.api.schemas.reference import BrandCreate
from closet_worthy.models.reference import Brand, Category, Condition, Subcategory

logger = logging.getLogger(__name__)


class ReferenceService:
    """Access to the lookup tables; brands are the only table the API writes"""

    async def list_brands(self, db: AsyncSession) -> List[Brand]:
        """All brands ordered by name"""
        result = await db.execute(select(Brand).order_by(Brand.name))
        return list(result.scalars().all())

    async def create_brand(self, db: AsyncSession, brand_data: BrandCreate) -> Brand:
        """
        Add a brand to the lookup table.

        Names are unique ignoring case, so "agolde" is rejected once
        "Agolde" exists.

        Raises:
            ValueError: If a brand with the same name already exists
        """
        existing = await db.scalar(
            select(Brand.id).where(func.lower(Brand.name) == brand_data.name.lower())
        )
        if existing is not None:
            raise ValueError(f"Brand '{brand_data.name}' already exists")

        now = datetime.now(timezone.utc)
        brand = Brand(**brand_data.model_dump())
        brand.created_at = now
        brand.updated_at = now
        db.add(brand)

        try:
            await db.flush()
        except IntegrityError as e:
            await db.rollback()
            logger.error("Failed to create brand due to database error", exc_info=True)
            raise ValueError(f"Brand '{brand_data.name}' already exists") from e

        logger.info(f"Created brand {brand.id} '{brand.name}'")
        return brand

    async def list_categories(self, db: AsyncSession) -> List[Category]:
        """All categories ordered by name"""
        result = await db.execute(select(Category).order_by(Category.name))
        return list(result.scalars().all())

    async def list_subcategories(
        self, db: AsyncSession, category_id: Optional[int] = None
    ) -> List[Subcategory]:
        """
        Subcategories ordered by name.

        Args:
            db: Database session
            category_id: Only return subcategories of this category

        Returns:
            List of subcategories
        """
        query = select(Subcategory)
        if category_id is not None:
            query = query.where(Subcategory.category_id == category_id)
        result = await db.execute(query.order_by(Subcategory.name))
        return list(result.scalars().all())

    async def list_conditions(self, db: AsyncSession) -> List[Condition]:
        """All conditions, best (highest score) first"""
        result = await db.execute(select(Condition).order_by(Condition.score.desc()))
        return list(result.scalars().all())

    async def get_reference_data(self, db: AsyncSession) -> dict:
        """
        All four lookup tables, as needed to render the item form.

        Runs the queries one after another: an AsyncSession cannot run
        statements concurrently.
        """
        return {
            "brands": await self.list_brands(db),
            "categories": await self.list_categories(db),
            "subcategories": await self.list_subcategories(db),
            "conditions": await self.list_conditions(db),
        }

    async def missing_references(
        self,
        db: AsyncSession,
        brand_id: Optional[int] = None,
        category_id: Optional[int] = None,
        subcategory_id: Optional[int] = None,
        condition_id: Optional[int] = None,
    ) -> List[str]:
        """
        Describe every given lookup ID that has no row.

        Returns:
            Messages such as "Brand 7 does not exist"; empty when all exist
        """
        checks = (
            (Brand, "Brand", brand_id),
            (Category, "Category", category_id),
            (Subcategory, "Subcategory", subcategory_id),
            (Condition, "Condition", condition_id),
        )
        missing = []
        for model, label, row_id in checks:
            if row_id is not None and await db.get(model, row_id) is None:
                missing.append(f"{label} {row_id} does not exist")
        return missing
