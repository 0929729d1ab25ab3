"""
Schemas for the AI endpoints (recognition, pricing, listing copy)

Bodies use camelCase keys (itemName, brandName, ...), the shape the
browser client already sends.
Reference: https://docs.pydantic.dev/latest/concepts/alias/#alias-generator
"""
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys"""
    # model_style would otherwise trip pydantic's reserved "model_" prefix warning
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, protected_namespaces=()
    )


class AIRequest(CamelModel):
    """
    Base for AI request bodies.

    Every field is optional at the schema level so that a missing field
    produces the endpoint's own 400 payload instead of a 422.
    """
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ()

    def missing_required_fields(self) -> list[str]:
        """Required fields that are absent or empty"""
        return [name for name in self.REQUIRED_FIELDS if not getattr(self, name)]


class RecognizeRequest(AIRequest):
    """Partial item descriptors to identify. Nothing is required."""
    item_name: Optional[str] = None
    brand_override: Optional[str] = None
    model_style: Optional[str] = None
    category_name: Optional[str] = None
    subcategory_name: Optional[str] = None
    size: Optional[str] = None
    colour: Optional[str] = None
    photo_base64: Optional[str] = Field(
        None, description="Photo as base64, optionally a data: URL"
    )


class PricingRequest(AIRequest):
    """Item attributes used to estimate retail and resale prices"""
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "brand_name",
        "item_name",
        "category_name",
        "condition_label",
    )

    brand_name: Optional[str] = None
    item_name: Optional[str] = None
    model_style: Optional[str] = None
    category_name: Optional[str] = None
    subcategory_name: Optional[str] = None
    condition_label: Optional[str] = None


class ListingRequest(AIRequest):
    """Item attributes used to write a marketplace title and description"""
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "brand_name",
        "item_name",
        "category_name",
        "size",
        "colour",
        "condition_label",
    )

    brand_name: Optional[str] = None
    item_name: Optional[str] = None
    model_style: Optional[str] = None
    category_name: Optional[str] = None
    subcategory_name: Optional[str] = None
    size: Optional[str] = None
    colour: Optional[str] = None
    condition_label: Optional[str] = None
    condition_notes: Optional[str] = None


class RecognitionResult(CamelModel):
    """Best-effort identification of an item"""
    brand: Optional[str] = None
    item_type: Optional[str] = Field(None, description="Specific item description")
    category: Optional[str] = None
    subcategory: Optional[str] = None
    colour: Optional[str] = None
    fabric: Optional[str] = None
    gender: Optional[str] = Field(None, description="Men's, Women's or Unisex")
    details: Optional[str] = None


class PricingResult(CamelModel):
    """Estimated prices in CAD"""
    retail_price: float = Field(..., description="Original retail price (CAD)")
    resale_price: float = Field(..., description="Current resale price (CAD)")


class ListingResult(CamelModel):
    """Resale-ready listing copy"""
    title: str
    description: str


class ErrorResponse(BaseModel):
    """Error payload returned by the AI endpoints"""
    error: str = Field(..., description="What went wrong")

    model_config = {"json_schema_extra": {"example": {"error": "Missing required fields"}}}
