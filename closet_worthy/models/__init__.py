"""
Database models
All SQLAlchemy models should be defined here or imported here
"""

# Import Base for models to inherit from
from closet_worthy.core.database import Base
from closet_worthy.models.closet_item import ClosetItem, ItemStatus
from closet_worthy.models.reference import BodyArea, Brand, Category, Condition, Subcategory

# Export all models for easy imports
__all__ = [
    "Base",
    "BodyArea",
    "Brand",
    "Category",
    "ClosetItem",
    "Condition",
    "ItemStatus",
    "Subcategory",
]
