"""
Reference data models: brands, categories, subcategories and conditions.

These lookup tables are seeded out of band and joined onto closet items
for display. The API only reads them.

Reference: https://docs.sqlalchemy.org/en/21/orm/basic_relationships.html
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from closet_worthy.core.database import Base


class BodyArea(str, Enum):
    """Body area a category is worn on."""

    TOP = "Top"
    BOTTOM = "Bottom"
    FOOTWEAR = "Footwear"
    ACCESSORY = "Accessory"


class Brand(Base):
    """
    Clothing brand.

    Attributes:
        id: Primary key
        name: Brand name (e.g., "Agolde")
        website: Optional brand website
        notes: Optional free-text notes
        created_at: Timestamp when brand was created
        updated_at: Timestamp when brand was last updated
    """

    __tablename__ = "brands"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    website: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Brand(id={self.id}, name='{self.name}')>"


class Category(Base):
    """
    Item category (e.g., "Jeans", "Jacket", "Shoes").

    body_area is stored as String (VARCHAR) rather than a database enum;
    Pydantic schemas validate it at the API boundary.
    """

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    body_area: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
        comment="Body area (Top, Bottom, Footwear, Accessory)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    subcategories: Mapped[list["Subcategory"]] = relationship(
        "Subcategory", back_populates="category"
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}', body_area='{self.body_area}')>"


class Subcategory(Base):
    """Subcategory (e.g., "Denim", "Overshirt"), optionally tied to a category."""

    __tablename__ = "subcategories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    category_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    category: Mapped[Optional["Category"]] = relationship(
        "Category", back_populates="subcategories"
    )

    def __repr__(self) -> str:
        return f"<Subcategory(id={self.id}, name='{self.name}', category_id={self.category_id})>"


class Condition(Base):
    """
    Condition rating (e.g., "Excellent"). Higher score means better condition.
    """

    __tablename__ = "conditions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    label: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<Condition(id={self.id}, label='{self.label}', score={self.score})>"
