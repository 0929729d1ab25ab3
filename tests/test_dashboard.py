"""
Tests for dashboard aggregation
"""

from decimal import Decimal

from closet_worthy.models import Brand, Category, ClosetItem
from closet_worthy.services.dashboard import compute_dashboard_metrics, group_resale_value


def make_item(
    name="Item",
    brand=None,
    brand_override_text=None,
    category=None,
    status="Keep",
    retail=None,
    resale=None,
    estimated=None,
    photo_urls=None,
):
    return ClosetItem(
        item_name=name,
        brand=Brand(name=brand) if brand else None,
        brand_override_text=brand_override_text,
        category=Category(name=category) if category else None,
        status=status,
        retail_price_cad=Decimal(retail) if retail is not None else None,
        resale_price_cad=Decimal(resale) if resale is not None else None,
        estimated_resale_value_cad=Decimal(estimated) if estimated is not None else None,
        photo_urls=photo_urls or [],
    )


def test_empty_wardrobe():
    metrics = compute_dashboard_metrics([])

    assert metrics.total_items == 0
    assert metrics.total_retail_value == 0
    assert metrics.total_resale_value == 0
    assert metrics.brand_values == []
    assert metrics.category_values == []


def test_totals_and_counts():
    items = [
        make_item(brand="Agolde", category="Jeans", retail="325", resale="140", estimated="126.00",
                  photo_urls=["https://x.amazonaws.com/a.jpg"]),
        make_item(brand="Isabel Marant Étoile", category="Outerwear", status="Sell",
                  retail="890", resale="400", estimated="360.00"),
        make_item(category="Jeans", status="Sell"),
    ]

    metrics = compute_dashboard_metrics(items)

    assert metrics.total_items == 3
    assert metrics.total_retail_value == 1215
    assert metrics.total_resale_value == 486
    assert metrics.items_to_sell == 2
    assert metrics.items_to_photograph == 2
    assert metrics.items_to_price == 1


def test_needs_pricing_until_both_prices_set():
    neither = make_item()
    retail_only = make_item(retail="100")
    resale_only = make_item(resale="50", estimated="45.00")
    both = make_item(retail="100", resale="50", estimated="45.00")
    zero_resale = make_item(retail="100", resale="0", estimated="0.00")

    assert compute_dashboard_metrics([neither]).items_to_price == 1
    assert compute_dashboard_metrics([retail_only]).items_to_price == 1
    assert compute_dashboard_metrics([resale_only]).items_to_price == 1
    assert compute_dashboard_metrics([both]).items_to_price == 0
    assert compute_dashboard_metrics([zero_resale]).items_to_price == 0


def test_brand_values_use_override_text_and_unknown():
    items = [
        make_item(brand="Agolde", estimated="126.00"),
        make_item(brand="Agolde", brand_override_text="Re/Done", estimated="50.00"),
        make_item(estimated="10.00"),
    ]

    metrics = compute_dashboard_metrics(items)

    assert [(group.name, group.value) for group in metrics.brand_values] == [
        ("Agolde", 126),
        ("Re/Done", 50),
        ("Unknown", 10),
    ]


def test_brand_values_limited_to_top_ten():
    items = [make_item(brand=f"Brand {i}", estimated=str(i * 10)) for i in range(1, 13)]

    metrics = compute_dashboard_metrics(items)

    assert len(metrics.brand_values) == 10
    assert metrics.brand_values[0].name == "Brand 12"
    assert metrics.brand_values[-1].name == "Brand 3"
    # Categories are not truncated
    assert len(metrics.category_values) == 1
    assert metrics.category_values[0].name == "Unknown"


def test_group_values_round_half_up_after_summing():
    items = [
        make_item(category="Jeans", estimated="10.25"),
        make_item(category="Jeans", estimated="10.25"),
        make_item(category="Shoes", estimated="0.49"),
    ]

    groups = group_resale_value(items, lambda item: item.category_name)

    assert [(group.name, group.value) for group in groups] == [("Jeans", 21), ("Shoes", 0)]


def test_group_values_ties_keep_first_seen_order():
    items = [
        make_item(category="Shoes", estimated="20"),
        make_item(category="Bags", estimated="20"),
    ]

    groups = group_resale_value(items, lambda item: item.category_name)

    assert [group.name for group in groups] == ["Shoes", "Bags"]


def test_items_without_estimate_count_as_zero():
    items = [make_item(category="Jeans", retail="100")]

    metrics = compute_dashboard_metrics(items)

    assert metrics.total_resale_value == 0
    assert metrics.category_values[0].value == 0


def test_metrics_serialize_camel_case():
    metrics = compute_dashboard_metrics([make_item(brand="Agolde", estimated="1.00")])

    data = metrics.model_dump(by_alias=True)

    assert set(data) == {
        "totalItems",
        "totalRetailValue",
        "totalResaleValue",
        "itemsToSell",
        "itemsToPhotograph",
        "itemsToPrice",
        "brandValues",
        "categoryValues",
    }


async def test_dashboard_endpoint(client, item_payload):
    await client.post("/api/items", json={**item_payload, "retail_price_cad": 325, "resale_price_cad": 140})
    await client.post("/api/items", json={"item_name": "Black tee", "status": "Sell"})

    response = await client.get("/api/dashboard")

    assert response.status_code == 200
    data = response.json()
    assert data["totalItems"] == 2
    assert data["totalRetailValue"] == 325
    assert data["totalResaleValue"] == 126
    assert data["itemsToSell"] == 1
    assert data["itemsToPhotograph"] == 2
    assert data["itemsToPrice"] == 1
    assert data["brandValues"] == [{"name": "Agolde", "value": 126}, {"name": "Unknown", "value": 0}]
    assert data["categoryValues"] == [{"name": "Jeans", "value": 126}, {"name": "Unknown", "value": 0}]
