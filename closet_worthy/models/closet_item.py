"""
Closet item model representing a catalogued piece of clothing.

Reference: https://docs.sqlalchemy.org/en/21/orm/basic_relationships.html
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    false,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from closet_worthy.core.database import Base
from closet_worthy.models.reference import Brand, Category, Condition, Subcategory


class ItemStatus(str, Enum):
    """What the owner intends to do with an item."""

    KEEP = "Keep"
    SELL = "Sell"
    DONATE = "Donate"


# Note: status is stored as String(10), not a database enum.
# Pydantic schemas handle enum validation at the API boundary


class ClosetItem(Base):
    """
    Closet item.

    Attributes:
        id: Primary key
        item_name: Item name (e.g., "90s Pinch Waist Jeans")
        brand_id, category_id, subcategory_id, condition_id: Optional lookups
        size, colour: Free text
        purchase_price_cad, purchase_date, currency: What the owner paid
        brand_override_text: Brand to use when the brand table has no match
        model_style_text: Model or style name
        ai_item_recognition: Last recognition result, as raw JSON text
        ai_retail_price_raw, ai_resale_price_raw: Prices as the model returned them
        retail_price_cad: Original retail price
        resale_price_cad: Expected resale asking price
        estimated_resale_value_cad: resale_price_cad after the marketplace haircut,
            computed on write
        ai_listing_title, ai_listing_description: Generated listing copy
        status: Keep, Sell or Donate
        for_sale: Whether the item is currently listed
        sell_platforms: Marketplaces the item is listed on
        photo_urls: Public photo URLs
        created_at, updated_at: Timestamps
    """

    __tablename__ = "closet_items"

    __table_args__ = (
        Index("ix_closet_items_status", "status"),
        Index("ix_closet_items_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    item_name: Mapped[str] = mapped_column(String(200), nullable=False)

    # Lookups are nullable: the override text fields let a user skip them
    brand_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("brands.id", ondelete="SET NULL"), nullable=True
    )
    category_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True
    )
    subcategory_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("subcategories.id", ondelete="SET NULL"), nullable=True
    )
    condition_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("conditions.id", ondelete="SET NULL"), nullable=True
    )

    brand: Mapped[Optional[Brand]] = relationship("Brand")
    category: Mapped[Optional[Category]] = relationship("Category")
    subcategory: Mapped[Optional[Subcategory]] = relationship("Subcategory")
    condition: Mapped[Optional[Condition]] = relationship("Condition")

    size: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    colour: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    purchase_price_cad: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2), nullable=True
    )
    purchase_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    currency: Mapped[str] = mapped_column(
        String(3), nullable=False, default="CAD", server_default="CAD"
    )

    brand_override_text: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    model_style_text: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    # AI output
    ai_item_recognition: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    ai_retail_price_raw: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    ai_resale_price_raw: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    retail_price_cad: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2), nullable=True
    )
    resale_price_cad: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2), nullable=True
    )
    estimated_resale_value_cad: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2),
        nullable=True,
        comment="resale_price_cad * RESALE_VALUE_RATIO, written by the service layer",
    )

    ai_listing_title: Mapped[Optional[str]] = mapped_column(String(300), nullable=True)
    ai_listing_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default=ItemStatus.KEEP.value,
        server_default=ItemStatus.KEEP.value,
        comment="Keep, Sell or Donate",
    )
    for_sale: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    sell_platforms: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    photo_urls: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # Derived display values. These read the joined relationships, so the
    # item must have been loaded with them (see ClosetItemService).

    @property
    def brand_name(self) -> Optional[str]:
        """Override text when set, else the joined brand's name"""
        if self.brand_override_text:
            return self.brand_override_text
        return self.brand.name if self.brand is not None else None

    @property
    def category_name(self) -> Optional[str]:
        return self.category.name if self.category is not None else None

    @property
    def subcategory_name(self) -> Optional[str]:
        return self.subcategory.name if self.subcategory is not None else None

    @property
    def condition_label(self) -> Optional[str]:
        return self.condition.label if self.condition is not None else None

    @property
    def has_photos(self) -> bool:
        return bool(self.photo_urls)

    @property
    def needs_pricing(self) -> bool:
        """True until both the retail and the resale price are set"""
        return self.retail_price_cad is None or self.resale_price_cad is None

    def __repr__(self) -> str:
        return f"<ClosetItem(id={self.id}, item_name='{self.item_name}', status='{self.status}')>"
