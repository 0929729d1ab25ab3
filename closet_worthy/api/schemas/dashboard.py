"""
Dashboard schemas
"""
from pydantic import Field

from closet_worthy.api.schemas.ai import CamelModel


class GroupValue(CamelModel):
    """Estimated resale value summed for one brand or category"""
    name: str = Field(..., description="Brand or category name ('Unknown' when unset)")
    value: int = Field(..., description="Summed estimated resale value, rounded to whole CAD")


class DashboardMetrics(CamelModel):
    """
    Wardrobe totals and to-do counts.

    Attributes:
        total_items: Number of items
        total_retail_value: Sum of retail prices
        total_resale_value: Sum of estimated resale values
        items_to_sell: Items with status Sell
        items_to_photograph: Items without photos
        items_to_price: Items missing a retail or resale price
        brand_values: Top 10 brands by estimated resale value
        category_values: All categories by estimated resale value
    """
    total_items: int
    total_retail_value: float
    total_resale_value: float
    items_to_sell: int
    items_to_photograph: int
    items_to_price: int
    brand_values: list[GroupValue] = Field(default_factory=list)
    category_values: list[GroupValue] = Field(default_factory=list)
