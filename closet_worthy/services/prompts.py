"""Prompt templates for the AI gateway."""

from typing import Optional

NOT_SPECIFIED = "Not specified"


def _or(value: Optional[str], fallback: str = NOT_SPECIFIED) -> str:
    return value if value else fallback


def _item_line(item_name: str, model_style: Optional[str]) -> str:
    if model_style:
        return f"{item_name} - {model_style}"
    return item_name


def recognition_prompt(
    item_name: Optional[str] = None,
    brand_override: Optional[str] = None,
    model_style: Optional[str] = None,
    category_name: Optional[str] = None,
    subcategory_name: Optional[str] = None,
    size: Optional[str] = None,
    colour: Optional[str] = None,
) -> str:
    """Identify an item from whatever the owner has filled in so far."""
    return f"""You are helping catalogue a wardrobe of designer clothing for resale.

Given information:
- Item Name: {_or(item_name, "Unknown")}
- Brand Override: {_or(brand_override)}
- Model/Style: {_or(model_style)}
- Category: {_or(category_name)}
- Subcategory: {_or(subcategory_name)}
- Size: {_or(size)}
- Colour: {_or(colour)}

Please identify:
1. Brand (if not already specified)
2. Exact item type (e.g., "90s Pinch Waist High-Rise Straight Jeans")
3. Category (e.g., Jacket, Jeans, Shoes)
4. Subcategory (e.g., Denim, Overshirt, Low-top Sneaker)
5. Colour
6. Fabric/material if visible
7. Gender category if obvious (Men's, Women's, Unisex)
8. Any notable details (e.g., cropped fit, raw hem, embroidery)

Return ONLY a JSON object with this structure (no markdown, no code blocks):
{{
  "brand": "Brand Name",
  "itemType": "Specific item description",
  "category": "Category",
  "subcategory": "Subcategory",
  "colour": "Colour description",
  "fabric": "Material/fabric",
  "gender": "Men's/Women's/Unisex",
  "details": "Notable details"
}}"""


def retail_price_prompt(
    brand_name: str,
    item_name: str,
    model_style: Optional[str],
    category_name: str,
    subcategory_name: Optional[str],
) -> str:
    return f"""Estimate the original retail price in CAD for this item:
- Brand: {brand_name}
- Item: {_item_line(item_name, model_style)}
- Category: {category_name} / {_or(subcategory_name)}

Respond with ONLY a JSON object (no markdown, no code blocks):
{{
  "retailPrice": 325
}}

The retailPrice should be a number representing CAD."""


def resale_price_prompt(
    brand_name: str,
    item_name: str,
    model_style: Optional[str],
    category_name: str,
    subcategory_name: Optional[str],
    condition_label: str,
) -> str:
    return f"""Estimate the current resale price in CAD for this item:
- Brand: {brand_name}
- Item: {_item_line(item_name, model_style)}
- Category: {category_name} / {_or(subcategory_name)}
- Condition: {condition_label}

Consider platforms like Grailed, Vestiaire Collective, The RealReal, Poshmark.

Respond with ONLY a JSON object (no markdown, no code blocks):
{{
  "resalePrice": 140
}}

The resalePrice should be a number representing CAD."""


def listing_title_prompt(
    brand_name: str,
    item_name: str,
    model_style: Optional[str],
    category_name: str,
    size: str,
    colour: str,
) -> str:
    return f"""Create a short, resale-ready title for this item for platforms like Grailed and Vestiaire.

Format: Brand – Model – Category – Size – Colour

Examples:
- Agolde – 90s Pinch Waist Jeans – 30 – Washed Black
- Isabel Marant Étoile – Kotto Jacket – FR 38 – Khaki

Use:
- Brand: {brand_name}
- Model: {model_style or item_name}
- Category: {category_name}
- Size: {size}
- Colour: {colour}

Respond with ONLY a JSON object (no markdown):
{{
  "title": "Your title here"
}}"""


def listing_description_prompt(
    brand_name: str,
    item_name: str,
    model_style: Optional[str],
    category_name: str,
    subcategory_name: Optional[str],
    size: str,
    colour: str,
    condition_label: str,
    condition_notes: Optional[str] = None,
) -> str:
    condition = f"{condition_label} ({condition_notes})" if condition_notes else condition_label
    return f"""Write a compelling resale listing description for this clothing item.
Use a friendly, concise reseller tone (like Grailed or Vestiaire).

Include:
- Brand: {brand_name}
- Model/style: {_item_line(item_name, model_style)}
- Category: {category_name} / {_or(subcategory_name)}
- Size: {size}
- Colour: {colour}
- Condition: {condition}

Keep it under 120 words. No emojis. Add 3-6 SEO-style keywords at the end separated by commas.

Respond with ONLY a JSON object (no markdown):
{{
  "description": "Your description here"
}}"""
