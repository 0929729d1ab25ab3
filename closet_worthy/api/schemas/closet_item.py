"""
Closet item schemas for request/response validation
Reference: https://fastapi.tiangolo.com/tutorial/body/
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from closet_worthy.api.schemas.reference import (
    BrandResponse,
    CategoryResponse,
    ConditionResponse,
    SubcategoryResponse,
)
from closet_worthy.models.closet_item import ItemStatus

# Optional text fields where an empty form input means "not set"
_OPTIONAL_TEXT_FIELDS = (
    "size",
    "colour",
    "brand_override_text",
    "model_style_text",
    "ai_item_recognition",
    "ai_retail_price_raw",
    "ai_resale_price_raw",
    "ai_listing_title",
    "ai_listing_description",
)


class ClosetItemBase(BaseModel):
    """Editable closet item fields"""
    model_config = ConfigDict(protected_namespaces=())

    item_name: str = Field(..., min_length=1, max_length=200, description="Item name")
    brand_id: Optional[int] = Field(None, description="Brand ID")
    category_id: Optional[int] = Field(None, description="Category ID")
    subcategory_id: Optional[int] = Field(None, description="Subcategory ID")
    condition_id: Optional[int] = Field(None, description="Condition ID")
    size: Optional[str] = Field(None, max_length=50, description="Size (e.g., '30', 'FR 38')")
    colour: Optional[str] = Field(None, max_length=100, description="Colour (e.g., 'Washed Black')")
    purchase_price_cad: Optional[Decimal] = Field(
        None, ge=0, max_digits=10, decimal_places=2, description="Price paid, in CAD"
    )
    purchase_date: Optional[date] = Field(None, description="Date of purchase")
    currency: str = Field("CAD", min_length=3, max_length=3, description="ISO currency code")
    brand_override_text: Optional[str] = Field(
        None, max_length=200, description="Brand name to use instead of the brand lookup"
    )
    model_style_text: Optional[str] = Field(None, max_length=200, description="Model or style name")
    ai_item_recognition: Optional[str] = Field(None, description="Recognition result (JSON text)")
    ai_retail_price_raw: Optional[str] = Field(None, max_length=50)
    ai_resale_price_raw: Optional[str] = Field(None, max_length=50)
    retail_price_cad: Optional[Decimal] = Field(
        None, ge=0, max_digits=10, decimal_places=2, description="Original retail price, in CAD"
    )
    resale_price_cad: Optional[Decimal] = Field(
        None, ge=0, max_digits=10, decimal_places=2, description="Expected resale price, in CAD"
    )
    ai_listing_title: Optional[str] = Field(None, max_length=300)
    ai_listing_description: Optional[str] = None
    status: ItemStatus = Field(ItemStatus.KEEP, description="Keep, Sell or Donate")
    for_sale: bool = Field(False, description="Whether the item is currently listed")
    sell_platforms: list[str] = Field(
        default_factory=list, description="Marketplaces (e.g., ['Grailed', 'Vestiaire'])"
    )

    @field_validator(*_OPTIONAL_TEXT_FIELDS, mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Treat empty or whitespace-only strings as unset"""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("item_name")
    @classmethod
    def strip_item_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Item name cannot be blank")
        return v


class ClosetItemCreate(ClosetItemBase):
    """
    Schema for creating a closet item.

    estimated_resale_value_cad is not accepted: it is computed from
    resale_price_cad on every write.
    """
    photo_urls: list[str] = Field(default_factory=list, description="Public photo URLs")


class ClosetItemUpdate(ClosetItemBase):
    """
    Schema for replacing a closet item's editable fields.

    Every editable field is overwritten. photo_urls is the exception:
    omit it (or send null) to keep the photos already on the item.
    """
    photo_urls: Optional[list[str]] = Field(
        None, description="Replacement photo URLs; null keeps the current photos"
    )


class ClosetItemResponse(BaseModel):
    """
    Closet item with its reference data joined in.
    """
    id: int
    item_name: str
    brand_id: Optional[int] = None
    category_id: Optional[int] = None
    subcategory_id: Optional[int] = None
    condition_id: Optional[int] = None
    brand: Optional[BrandResponse] = None
    category: Optional[CategoryResponse] = None
    subcategory: Optional[SubcategoryResponse] = None
    condition: Optional[ConditionResponse] = None
    size: Optional[str] = None
    colour: Optional[str] = None
    purchase_price_cad: Optional[float] = None
    purchase_date: Optional[date] = None
    currency: str = "CAD"
    brand_override_text: Optional[str] = None
    model_style_text: Optional[str] = None
    ai_item_recognition: Optional[str] = None
    ai_retail_price_raw: Optional[str] = None
    ai_resale_price_raw: Optional[str] = None
    retail_price_cad: Optional[float] = None
    resale_price_cad: Optional[float] = None
    estimated_resale_value_cad: Optional[float] = Field(
        None, description="resale_price_cad after the marketplace fee haircut"
    )
    ai_listing_title: Optional[str] = None
    ai_listing_description: Optional[str] = None
    status: ItemStatus
    for_sale: bool
    sell_platforms: list[str] = Field(default_factory=list)
    photo_urls: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())
