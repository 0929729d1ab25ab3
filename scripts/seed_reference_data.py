#!/usr/bin/env python3
"""
Reference data seeding script.

Populates the conditions, categories and subcategories lookup tables with a
starter set so the item form has something to pick from. Brands depend
entirely on what is in the closet, so they are only added when named with
--brands (or later through POST /api/reference/brands).

Existing rows (matched on name / label) are skipped, so the script is safe to
run more than once.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import delete, select

from closet_worthy.api.schemas.reference import BrandCreate
from closet_worthy.core.database import async_session_maker, transaction
from closet_worthy.models import BodyArea, Brand, Category, Condition, Subcategory
from closet_worthy.services.reference import ReferenceService


CONDITIONS = [
    {"label": "New with tags", "score": 5, "notes": "Never worn, original tags attached"},
    {"label": "Excellent", "score": 4, "notes": "Worn a few times, no visible wear"},
    {"label": "Very good", "score": 3, "notes": "Light wear, no flaws"},
    {"label": "Good", "score": 2, "notes": "Visible wear or minor flaws, described in listing"},
    {"label": "Fair", "score": 1, "notes": "Noticeable flaws, priced accordingly"},
]

CATEGORIES = {
    "Tops": (BodyArea.TOP, ["T-shirts", "Shirts", "Sweaters", "Blouses"]),
    "Outerwear": (BodyArea.TOP, ["Jackets", "Coats", "Vests"]),
    "Jeans": (BodyArea.BOTTOM, ["Straight", "Wide leg", "Skinny"]),
    "Pants": (BodyArea.BOTTOM, ["Trousers", "Leggings", "Shorts"]),
    "Skirts": (BodyArea.BOTTOM, ["Mini", "Midi", "Maxi"]),
    "Shoes": (BodyArea.FOOTWEAR, ["Sneakers", "Boots", "Sandals", "Heels"]),
    "Bags": (BodyArea.ACCESSORY, ["Totes", "Crossbody", "Clutches"]),
    "Accessories": (BodyArea.ACCESSORY, ["Belts", "Scarves", "Hats", "Jewelry"]),
}


async def seed_reference_data():
    """Seed conditions, categories and subcategories."""
    try:
        async with async_session_maker() as db:
            added = 0
            skipped = 0

            for condition in CONDITIONS:
                result = await db.execute(
                    select(Condition).where(Condition.label == condition["label"])
                )
                if result.scalar_one_or_none():
                    print(f"  [SKIP] Condition: {condition['label']} (already exists)")
                    skipped += 1
                    continue
                db.add(Condition(**condition))
                print(f"  [ADD] Condition: {condition['label']}")
                added += 1

            for name, (body_area, subcategory_names) in CATEGORIES.items():
                result = await db.execute(select(Category).where(Category.name == name))
                category = result.scalar_one_or_none()
                if category:
                    print(f"  [SKIP] Category: {name} (already exists)")
                    skipped += 1
                else:
                    category = Category(name=name, body_area=body_area.value)
                    db.add(category)
                    await db.flush()
                    print(f"  [ADD] Category: {name}")
                    added += 1

                for subcategory_name in subcategory_names:
                    result = await db.execute(
                        select(Subcategory).where(
                            Subcategory.name == subcategory_name,
                            Subcategory.category_id == category.id,
                        )
                    )
                    if result.scalar_one_or_none():
                        skipped += 1
                        continue
                    db.add(Subcategory(name=subcategory_name, category_id=category.id))
                    print(f"    [ADD] Subcategory: {name} / {subcategory_name}")
                    added += 1

            try:
                await db.commit()
            except Exception as e:
                print(f"\nError: Failed to commit changes to database: {e}")
                await db.rollback()
                sys.exit(1)

            print("\nSeeding complete!")
            print(f"  - Added: {added}")
            print(f"  - Skipped: {skipped}")

    except Exception as e:
        print(f"\nError: Database connection failed: {e}")
        print("Make sure DATABASE_URL is set and migrations have been applied.")
        sys.exit(1)


def parse_brand_names(raw: str) -> list[str]:
    """Split a comma-separated --brands value, dropping blanks and repeats."""
    names = []
    for name in raw.split(","):
        name = name.strip()
        if name and name.lower() not in {existing.lower() for existing in names}:
            names.append(name)
    return names


async def seed_brands(names: list[str]):
    """Add each named brand unless one with the same name already exists."""
    service = ReferenceService()
    added = 0
    skipped = 0
    try:
        async with transaction(async_session_maker) as db:
            for name in names:
                try:
                    await service.create_brand(db, BrandCreate(name=name))
                except ValueError:
                    print(f"  [SKIP] Brand: {name} (already exists)")
                    skipped += 1
                    continue
                print(f"  [ADD] Brand: {name}")
                added += 1
    except Exception as e:
        print(f"\nError: Failed to seed brands: {e}")
        sys.exit(1)

    print("\nBrand seeding complete!")
    print(f"  - Added: {added}")
    print(f"  - Skipped: {skipped}")


async def list_reference_data():
    """Print brands, conditions and the category tree."""
    try:
        async with async_session_maker() as db:
            brands = (await db.execute(select(Brand).order_by(Brand.name))).scalars().all()
            conditions = (
                await db.execute(select(Condition).order_by(Condition.score.desc()))
            ).scalars().all()
            categories = (
                await db.execute(select(Category).order_by(Category.name))
            ).scalars().all()
            subcategories = (
                await db.execute(select(Subcategory).order_by(Subcategory.name))
            ).scalars().all()

            print(f"\nBrands ({len(brands)} total):")
            for brand in brands:
                print(f"  {brand.name}")

            print(f"\nConditions ({len(conditions)} total):")
            for condition in conditions:
                print(f"  [{condition.score}] {condition.label}")

            print(f"\nCategories ({len(categories)} total):")
            for category in categories:
                print(f"\n{category.name.upper()} ({category.body_area or 'n/a'})")
                print("-" * 40)
                for subcategory in subcategories:
                    if subcategory.category_id == category.id:
                        print(f"  {subcategory.name}")
    except Exception as e:
        print(f"Error: Failed to list reference data: {e}")
        sys.exit(1)


async def clear_reference_data():
    """Delete conditions, subcategories and categories. Items keep their rows with null references."""
    try:
        async with async_session_maker() as db:
            await db.execute(delete(Subcategory))
            await db.execute(delete(Category))
            await db.execute(delete(Condition))
            await db.commit()
            print("Reference data cleared.")
    except Exception as e:
        print(f"Error: Failed to clear reference data: {e}")
        sys.exit(1)


if __name__ == "__main__":
    if len(sys.argv) > 1:
        if sys.argv[1] == "--list":
            asyncio.run(list_reference_data())
        elif sys.argv[1] == "--clear":
            asyncio.run(clear_reference_data())
        elif sys.argv[1] == "--brands":
            if len(sys.argv) < 3:
                print("Usage: python scripts/seed_reference_data.py --brands \"Agolde,Khaite\"")
                sys.exit(1)
            asyncio.run(seed_brands(parse_brand_names(sys.argv[2])))
        elif sys.argv[1] == "--help":
            print("Usage: python scripts/seed_reference_data.py [OPTIONS]")
            print("")
            print("Options:")
            print("  --brands \"A,B\"  Add the comma-separated brands, skipping existing ones")
            print("  --list      List brands, conditions and categories")
            print("  --clear     Delete all conditions, categories and subcategories")
            print("  --help      Show this help message")
            print("")
            print("With no options, seeds the default reference data")
        else:
            print(f"Unknown option: {sys.argv[1]}")
    else:
        asyncio.run(seed_reference_data())
