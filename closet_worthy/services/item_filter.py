"""
Search and status filters for the item list

Applied in memory to the full item list. Fine for a personal wardrobe;
a large catalogue would need these pushed into the SQL query.
"""
from enum import Enum
from typing import Iterable, List, Optional

from closet_worthy.models.closet_item import ClosetItem, ItemStatus


class ItemFilter(str, Enum):
    """List filters offered by the item list"""

    ALL = "all"
    KEEP = "keep"
    SELL = "sell"
    DONATE = "donate"
    NO_PHOTOS = "no-photos"
    NO_PRICING = "no-pricing"


_STATUS_FILTERS = {
    ItemFilter.KEEP: ItemStatus.KEEP.value,
    ItemFilter.SELL: ItemStatus.SELL.value,
    ItemFilter.DONATE: ItemStatus.DONATE.value,
}


def matches_search(item: ClosetItem, query: Optional[str]) -> bool:
    """Case-insensitive substring match on name, brand, category and colour"""
    if not query:
        return True
    needle = query.lower()
    haystack = (item.item_name, item.brand_name, item.category_name, item.colour)
    return any(value and needle in value.lower() for value in haystack)


def matches_filter(item: ClosetItem, item_filter: ItemFilter = ItemFilter.ALL) -> bool:
    if item_filter in _STATUS_FILTERS:
        return item.status == _STATUS_FILTERS[item_filter]
    if item_filter == ItemFilter.NO_PHOTOS:
        return not item.has_photos
    if item_filter == ItemFilter.NO_PRICING:
        return item.needs_pricing
    return True


def filter_items(
    items: Iterable[ClosetItem],
    query: Optional[str] = None,
    item_filter: ItemFilter = ItemFilter.ALL,
) -> List[ClosetItem]:
    """
    Items matching the search text and the selected filter, order preserved.
    """
    query = query.strip() if query else None
    return [
        item for item in items
        if matches_search(item, query) and matches_filter(item, item_filter)
    ]
