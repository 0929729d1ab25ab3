"""
Tests for the reference data endpoints and service
"""

from closet_worthy.services.reference import ReferenceService


async def test_reference_data_in_one_payload(client, reference_data):
    response = await client.get("/api/reference")

    assert response.status_code == 200
    data = response.json()
    assert [brand["name"] for brand in data["brands"]] == ["Agolde", "Isabel Marant Étoile"]
    assert [category["name"] for category in data["categories"]] == ["Jeans", "Outerwear"]
    assert [sub["name"] for sub in data["subcategories"]] == ["Jackets", "Straight"]
    # Best condition first
    assert [condition["label"] for condition in data["conditions"]] == ["Excellent", "Good"]


async def test_reference_data_empty_tables(client):
    response = await client.get("/api/reference")

    assert response.status_code == 200
    assert response.json() == {"brands": [], "categories": [], "subcategories": [], "conditions": []}


async def test_subcategories_filtered_by_category(client, reference_data):
    response = await client.get(
        "/api/reference/subcategories", params={"category_id": reference_data.jeans}
    )

    assert response.status_code == 200
    assert [sub["name"] for sub in response.json()] == ["Straight"]


async def test_categories_include_body_area(client, reference_data):
    response = await client.get("/api/reference/categories")

    assert {category["name"]: category["body_area"] for category in response.json()} == {
        "Jeans": "Bottom",
        "Outerwear": "Top",
    }


async def test_conditions_endpoint(client, reference_data):
    response = await client.get("/api/reference/conditions")

    assert response.status_code == 200
    assert response.json()[0]["notes"] == "Worn a few times, no visible wear"


async def test_missing_references_reports_each_unknown_id(db_session, reference_data):
    missing = await ReferenceService().missing_references(
        db_session,
        brand_id=reference_data.agolde,
        category_id=404,
        subcategory_id=None,
        condition_id=405,
    )

    assert missing == ["Category 404 does not exist", "Condition 405 does not exist"]


async def test_create_brand(client):
    response = await client.post(
        "/api/reference/brands", json={"name": "  Khaite ", "website": "https://khaite.com"}
    )

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Khaite"
    assert data["website"] == "https://khaite.com"
    assert data["id"] > 0

    listed = await client.get("/api/reference/brands")
    assert [brand["name"] for brand in listed.json()] == ["Khaite"]


async def test_create_brand_rejects_duplicate_name_ignoring_case(client, reference_data):
    response = await client.post("/api/reference/brands", json={"name": "agolde"})

    assert response.status_code == 400
    assert "already exists" in response.json()["detail"]

    listed = await client.get("/api/reference/brands")
    assert len(listed.json()) == 2


async def test_create_brand_rejects_blank_name(client):
    response = await client.post("/api/reference/brands", json={"name": "   "})

    assert response.status_code == 422
