"""
Closet item service: CRUD plus applying AI results to stored items
Reference: https://docs.sqlalchemy.org/en/21/orm/queryguide/
"""

import json
import logging
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from closet_worthy.api.schemas.closet_item import ClosetItemCreate, ClosetItemUpdate
from closet_worthy.core.config import settings
from closet_worthy.models.closet_item import ClosetItem, ItemStatus
from closet_worthy.services.ai import AIGateway
from closet_worthy.services.reference import ReferenceService
from closet_worthy.services.storage import is_allowed_image_url

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def estimate_resale_value(
    resale_price: Union[Decimal, float, int, None],
    ratio: Optional[Decimal] = None,
) -> Optional[Decimal]:
    """
    Expected net value after marketplace fees: resale price times the
    haircut ratio, rounded to cents. None when there is no resale price.
    """
    if resale_price is None:
        return None
    ratio = settings.RESALE_VALUE_RATIO if ratio is None else ratio
    value = Decimal(str(resale_price)) * Decimal(str(ratio))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def _price(value: float) -> Decimal:
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def _raw_price(value: float) -> str:
    """Render a model price the way it would print in JSON (325, not 325.0)"""
    return str(int(value)) if float(value).is_integer() else str(value)


class ClosetItemService:
    """Service for managing closet items"""

    def __init__(self, reference_service: Optional[ReferenceService] = None):
        self.reference_service = reference_service or ReferenceService()

    @staticmethod
    def _item_query():
        # Lookups are many-to-one, so joined eager loading is one query
        return select(ClosetItem).options(
            joinedload(ClosetItem.brand),
            joinedload(ClosetItem.category),
            joinedload(ClosetItem.subcategory),
            joinedload(ClosetItem.condition),
        )

    async def get_item(self, db: AsyncSession, item_id: int) -> Optional[ClosetItem]:
        """
        Get a closet item by ID with its reference data loaded.

        Args:
            db: Database session
            item_id: Item ID

        Returns:
            Closet item if found, None otherwise
        """
        result = await db.execute(
            self._item_query()
            .where(ClosetItem.id == item_id)
            # Reload even if the item is already in the session, so changed
            # foreign keys come back with the matching relationships
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_items(self, db: AsyncSession) -> List[ClosetItem]:
        """
        Get every closet item, newest first, with reference data loaded.

        The full set is returned; search and filtering happen in memory
        (see closet_worthy.services.item_filter).
        """
        result = await db.execute(
            self._item_query().order_by(ClosetItem.created_at.desc(), ClosetItem.id.desc())
        )
        return list(result.scalars().all())

    async def _validate(self, db: AsyncSession, data: Union[ClosetItemCreate, ClosetItemUpdate]) -> None:
        """
        Raises:
            ValueError: If a lookup ID has no row or a photo URL is not on an allowed host
        """
        missing = await self.reference_service.missing_references(
            db,
            brand_id=data.brand_id,
            category_id=data.category_id,
            subcategory_id=data.subcategory_id,
            condition_id=data.condition_id,
        )
        if missing:
            raise ValueError("; ".join(missing))

        for url in data.photo_urls or []:
            if not is_allowed_image_url(url):
                raise ValueError(f"Photo URL is not on an allowed image host: {url}")

    @staticmethod
    def _editable_fields(data: Union[ClosetItemCreate, ClosetItemUpdate]) -> dict:
        item_data = data.model_dump()
        item_data["status"] = ItemStatus(item_data["status"]).value
        item_data["estimated_resale_value_cad"] = estimate_resale_value(
            item_data.get("resale_price_cad")
        )
        return item_data

    async def create_item(self, db: AsyncSession, item_data: ClosetItemCreate) -> ClosetItem:
        """
        Create a new closet item.

        estimated_resale_value_cad is derived from resale_price_cad.

        Args:
            db: Database session
            item_data: Closet item data

        Returns:
            Created item with reference data loaded

        Raises:
            ValueError: If references are invalid or the database rejects the row
        """
        await self._validate(db, item_data)

        now = datetime.now(timezone.utc)
        item = ClosetItem(**self._editable_fields(item_data))
        item.created_at = now
        item.updated_at = now
        db.add(item)

        try:
            await db.flush()
        except IntegrityError as e:
            await db.rollback()
            logger.error("Failed to create closet item due to database error", exc_info=True)
            raise ValueError("Failed to create closet item due to database constraints") from e

        logger.info(f"Created closet item {item.id} '{item.item_name}'")
        return await self.get_item(db, item.id)

    async def update_item(
        self, db: AsyncSession, item_id: int, item_data: ClosetItemUpdate
    ) -> Optional[ClosetItem]:
        """
        Replace a closet item's editable fields.

        Every editable field is overwritten with the submitted value, except
        photo_urls which is kept when not supplied. Last write wins; there is
        no concurrency check.

        Args:
            db: Database session
            item_id: Item ID
            item_data: Replacement data

        Returns:
            Updated item if found, None otherwise
        """
        item = await self.get_item(db, item_id)
        if not item:
            return None

        await self._validate(db, item_data)

        update_data = self._editable_fields(item_data)
        if update_data.get("photo_urls") is None:
            update_data.pop("photo_urls", None)

        for field, value in update_data.items():
            setattr(item, field, value)
        item.updated_at = datetime.now(timezone.utc)

        try:
            await db.flush()
        except IntegrityError as e:
            await db.rollback()
            logger.error("Failed to update closet item due to database error", exc_info=True)
            raise ValueError("Failed to update closet item due to database constraints") from e

        logger.info(f"Updated closet item {item_id}")
        return await self.get_item(db, item_id)

    async def delete_item(self, db: AsyncSession, item_id: int) -> bool:
        """
        Delete a closet item. Reference rows are untouched.

        Returns:
            True if deleted, False if not found
        """
        item = await db.get(ClosetItem, item_id)
        if not item:
            return False

        await db.delete(item)
        await db.flush()
        logger.info(f"Deleted closet item {item_id}")
        return True

    @staticmethod
    def _require(item: ClosetItem, **fields: Optional[str]) -> None:
        missing = [name for name, value in fields.items() if not value]
        if missing:
            raise ValueError(f"Item {item.id} is missing {', '.join(missing)}")

    async def apply_pricing(
        self, db: AsyncSession, item_id: int, gateway: AIGateway
    ) -> Optional[ClosetItem]:
        """
        Estimate prices for a stored item and save them.

        Nothing is written unless both prices come back.

        Returns:
            Updated item, or None if not found

        Raises:
            ValueError: If brand, category or condition is missing
            AIServiceError: If the estimate fails
        """
        item = await self.get_item(db, item_id)
        if not item:
            return None

        self._require(
            item,
            brand=item.brand_name,
            category=item.category_name,
            condition=item.condition_label,
        )

        pricing = await gateway.estimate_pricing(
            brand_name=item.brand_name,
            item_name=item.item_name,
            model_style=item.model_style_text,
            category_name=item.category_name,
            subcategory_name=item.subcategory_name or "",
            condition_label=item.condition_label,
        )

        item.ai_retail_price_raw = _raw_price(pricing.retail_price)
        item.ai_resale_price_raw = _raw_price(pricing.resale_price)
        item.retail_price_cad = _price(pricing.retail_price)
        item.resale_price_cad = _price(pricing.resale_price)
        item.estimated_resale_value_cad = estimate_resale_value(item.resale_price_cad)
        item.updated_at = datetime.now(timezone.utc)
        await db.flush()

        logger.info(f"Applied AI pricing to closet item {item_id}")
        return await self.get_item(db, item_id)

    async def apply_listing(
        self, db: AsyncSession, item_id: int, gateway: AIGateway
    ) -> Optional[ClosetItem]:
        """
        Generate listing copy for a stored item and save it.

        Raises:
            ValueError: If brand, category, condition, size or colour is missing
            AIServiceError: If generation fails
        """
        item = await self.get_item(db, item_id)
        if not item:
            return None

        self._require(
            item,
            brand=item.brand_name,
            category=item.category_name,
            condition=item.condition_label,
            size=item.size,
            colour=item.colour,
        )

        listing = await gateway.generate_listing(
            brand_name=item.brand_name,
            item_name=item.item_name,
            model_style=item.model_style_text,
            category_name=item.category_name,
            subcategory_name=item.subcategory_name or "",
            size=item.size,
            colour=item.colour,
            condition_label=item.condition_label,
            condition_notes=item.condition.notes if item.condition else None,
        )

        item.ai_listing_title = listing.title
        item.ai_listing_description = listing.description
        item.updated_at = datetime.now(timezone.utc)
        await db.flush()

        logger.info(f"Applied AI listing to closet item {item_id}")
        return await self.get_item(db, item_id)

    async def apply_recognition(
        self, db: AsyncSession, item_id: int, gateway: AIGateway
    ) -> Optional[ClosetItem]:
        """
        Identify a stored item and keep the result as JSON text.

        Raises:
            AIServiceError: If recognition fails
        """
        item = await self.get_item(db, item_id)
        if not item:
            return None

        recognition = await gateway.recognize_item(
            item_name=item.item_name,
            brand_override=item.brand_name,
            model_style=item.model_style_text,
            category_name=item.category_name,
            subcategory_name=item.subcategory_name,
            size=item.size,
            colour=item.colour,
        )

        item.ai_item_recognition = json.dumps(
            recognition.model_dump(by_alias=True, exclude_none=True)
        )
        item.updated_at = datetime.now(timezone.utc)
        await db.flush()

        logger.info(f"Applied AI recognition to closet item {item_id}")
        return await self.get_item(db, item_id)
