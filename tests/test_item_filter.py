"""
Tests for in-memory search and list filters
"""

from decimal import Decimal

import pytest

from closet_worthy.models import Brand, Category, ClosetItem
from closet_worthy.services.item_filter import ItemFilter, filter_items, matches_search


@pytest.fixture
def items():
    return [
        ClosetItem(
            item_name="90s Pinch Waist Jeans",
            brand=Brand(name="Agolde"),
            category=Category(name="Jeans"),
            colour="Washed Black",
            status="Keep",
            photo_urls=["https://closet-photos.s3.amazonaws.com/a.jpg"],
        ),
        ClosetItem(
            item_name="Kotto Jacket",
            brand=Brand(name="Isabel Marant Étoile"),
            category=Category(name="Outerwear"),
            colour="Khaki",
            status="Sell",
            retail_price_cad=Decimal("890"),
            resale_price_cad=Decimal("400"),
            photo_urls=[],
        ),
        ClosetItem(
            item_name="Silk scarf",
            brand_override_text="Vintage Hermès",
            status="Donate",
            retail_price_cad=Decimal("500"),
            photo_urls=[],
        ),
    ]


def names(items):
    return [item.item_name for item in items]


def test_search_black_matches_washed_black_not_khaki(items):
    assert names(filter_items(items, query="black")) == ["90s Pinch Waist Jeans"]


def test_search_matches_brand_override_text(items):
    assert names(filter_items(items, query="hermès")) == ["Silk scarf"]


def test_search_matches_category(items):
    assert names(filter_items(items, query="OUTERWEAR")) == ["Kotto Jacket"]


def test_blank_search_matches_everything(items):
    assert len(filter_items(items, query="   ")) == 3
    assert matches_search(items[0], None)


@pytest.mark.parametrize(
    "item_filter, expected",
    [
        (ItemFilter.ALL, ["90s Pinch Waist Jeans", "Kotto Jacket", "Silk scarf"]),
        (ItemFilter.KEEP, ["90s Pinch Waist Jeans"]),
        (ItemFilter.SELL, ["Kotto Jacket"]),
        (ItemFilter.DONATE, ["Silk scarf"]),
        (ItemFilter.NO_PHOTOS, ["Kotto Jacket", "Silk scarf"]),
        (ItemFilter.NO_PRICING, ["90s Pinch Waist Jeans", "Silk scarf"]),
    ],
)
def test_filters(items, item_filter, expected):
    assert names(filter_items(items, item_filter=item_filter)) == expected


def test_status_filters_cover_all_items(items):
    by_status = sum(
        len(filter_items(items, item_filter=item_filter))
        for item_filter in (ItemFilter.KEEP, ItemFilter.SELL, ItemFilter.DONATE)
    )
    assert by_status == len(filter_items(items, item_filter=ItemFilter.ALL))
