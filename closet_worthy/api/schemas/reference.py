"""
Reference data schemas (brands, categories, subcategories, conditions)
Reference: https://fastapi.tiangolo.com/tutorial/response-model/
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from closet_worthy.models.reference import BodyArea


class BrandCreate(BaseModel):
    """Body for adding a brand"""
    name: str = Field(..., min_length=1, max_length=200, description="Brand name")
    website: Optional[str] = Field(None, max_length=500, description="Brand website")
    notes: Optional[str] = Field(None, description="Free-text notes")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Brand name cannot be blank")
        return v


class BrandResponse(BaseModel):
    """Brand as returned by the API"""
    id: int = Field(..., description="Brand ID")
    name: str = Field(..., description="Brand name")
    website: Optional[str] = Field(None, description="Brand website")
    notes: Optional[str] = Field(None, description="Free-text notes")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CategoryResponse(BaseModel):
    """Category as returned by the API"""
    id: int = Field(..., description="Category ID")
    name: str = Field(..., description="Category name (e.g., 'Jeans')")
    body_area: Optional[BodyArea] = Field(
        None, description="Body area (Top, Bottom, Footwear, Accessory)"
    )
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class SubcategoryResponse(BaseModel):
    """Subcategory as returned by the API"""
    id: int = Field(..., description="Subcategory ID")
    name: str = Field(..., description="Subcategory name (e.g., 'Denim')")
    category_id: Optional[int] = Field(None, description="Parent category ID")
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ConditionResponse(BaseModel):
    """Condition rating as returned by the API"""
    id: int = Field(..., description="Condition ID")
    label: str = Field(..., description="Condition label (e.g., 'Excellent')")
    score: int = Field(..., description="Numeric score, higher is better")
    notes: Optional[str] = Field(None, description="What the rating means")
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ReferenceDataResponse(BaseModel):
    """
    All lookup tables in one payload, as needed to render the item form.
    """
    brands: list[BrandResponse]
    categories: list[CategoryResponse]
    subcategories: list[SubcategoryResponse]
    conditions: list[ConditionResponse]
