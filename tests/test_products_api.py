"""Tests for the product CRUD endpoints."""

import pytest

from src.services.product_service import ProductService


@pytest.mark.asyncio
async def test_crud_operations(client, product_payload):
    # Create
    response = await client.post("/api/products", json=product_payload)
    assert response.status_code == 200
    created = response.json()
    assert created["id"] == "p1"
    assert created["name"] == "Test Product"
    assert created["price"]["taxRate"] == 0.2

    # Get all
    response = await client.get("/api/products")
    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == ["p1"]

    # Get by id
    response = await client.get("/api/products/p1")
    assert response.status_code == 200
    assert response.json()["name"] == "Test Product"

    # Update
    updated_payload = {
        **product_payload,
        "name": "Updated Product",
        "slug": "updated-product",
    }
    response = await client.put("/api/products/p1", json=updated_payload)
    assert response.status_code == 200
    assert response.json()["name"] == "Updated Product"

    # Delete
    response = await client.delete("/api/products/p1")
    assert response.status_code == 204

    # Get by id (not found)
    response = await client.get("/api/products/p1")
    assert response.status_code == 404
    assert response.content == b""


@pytest.mark.asyncio
async def test_created_product_round_trips_all_fields(client, product_payload):
    await client.post("/api/products", json=product_payload)

    response = await client.get("/api/products/p1")

    data = response.json()
    assert data["discounts"] == ["D1"]
    assert data["images"]["front"]["altText"] == "Front view"
    assert data["images"]["front"]["variants"] == {
        "thumb": "https://cdn.example.com/p1/front-thumb.jpg"
    }
    assert data["images"]["front"]["watermarked"] is True
    assert data["kilos"] == 1.5
    assert data["volume"] == "10x10x10"
    assert data["warehouse"] == {"location": "Main Warehouse"}
    assert data["stock"] == 50


@pytest.mark.asyncio
async def test_get_product_by_slug(client, product_payload):
    await client.post("/api/products", json=product_payload)

    found = await client.get("/api/products/slug/test-product")
    missing = await client.get("/api/products/slug/no-such-slug")

    assert found.status_code == 200
    assert found.json()["id"] == "p1"
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_create_generates_id_and_slug_when_missing(client):
    response = await client.post(
        "/api/products", json={"name": "Aurora Horizon Floor Lamp"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["id"]
    assert data["slug"] == "aurora-horizon-floor-lamp"


@pytest.mark.asyncio
async def test_update_uses_path_id_over_body_id(client, product_payload):
    await client.post("/api/products", json=product_payload)

    response = await client.put(
        "/api/products/p1",
        json={**product_payload, "id": "other", "name": "Renamed"},
    )

    assert response.status_code == 200
    assert response.json()["id"] == "p1"
    assert (await client.get("/api/products/other")).status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   ", None])
async def test_create_rejects_blank_name(client, product_payload, name):
    response = await client.post(
        "/api/products", json={**product_payload, "name": name}
    )

    assert response.status_code == 424
    assert response.json()["detail"] == "Product name is missing"


@pytest.mark.asyncio
async def test_blank_name_wins_over_other_failures(client, product_payload):
    response = await client.post(
        "/api/products",
        json={**product_payload, "name": "", "kilos": 1000.0},
    )

    assert response.status_code == 424
    assert response.json()["detail"] == "Product name is missing"


@pytest.mark.asyncio
async def test_create_rejects_overweight_product(client, product_payload):
    response = await client.post(
        "/api/products", json={**product_payload, "kilos": 43.5}
    )

    assert response.status_code == 424
    assert "exceeds" in response.json()["detail"]
    assert (await client.get("/api/products/p1")).status_code == 404


@pytest.mark.asyncio
async def test_weight_at_limit_is_accepted(client, product_payload):
    response = await client.post(
        "/api/products", json={**product_payload, "kilos": 43.0}
    )

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_update_rejects_overweight_product(client, product_payload):
    await client.post("/api/products", json=product_payload)
    legacy_body = {k: v for k, v in product_payload.items() if k != "kilos"}
    legacy_body["weight"] = 99.0

    response = await client.put("/api/products/p1", json=legacy_body)

    assert response.status_code == 424
    assert (await client.get("/api/products/p1")).json()["kilos"] == 1.5


@pytest.mark.asyncio
async def test_duplicate_slug_is_rejected(client, product_payload):
    await client.post("/api/products", json=product_payload)

    response = await client.post(
        "/api/products", json={**product_payload, "id": "p2"}
    )

    assert response.status_code == 424
    assert "already used" in response.json()["detail"]


@pytest.mark.asyncio
async def test_unknown_supplier_reference_is_rejected(client, product_payload):
    response = await client.post(
        "/api/products", json={**product_payload, "supplierId": "ghost"}
    )

    assert response.status_code == 424


@pytest.mark.asyncio
async def test_update_missing_product_returns_404(client, product_payload):
    response = await client.put("/api/products/never-saved", json=product_payload)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_missing_product_returns_404(client):
    response = await client.delete("/api/products/never-saved")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_malformed_body_returns_422(client):
    response = await client.post("/api/products", json={"name": "x", "kilos": "heavy"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_same_name_products_without_slugs_are_both_accepted(client):
    first = await client.post("/api/products", json={"id": "p1", "name": "Widget"})
    second = await client.post("/api/products", json={"id": "p2", "name": "Widget"})

    assert first.status_code == 200
    assert second.status_code == 200
    assert first.json()["slug"] == "widget"
    assert second.json()["slug"] == "widget-p2"


@pytest.mark.asyncio
async def test_update_without_slug_keeps_derived_slug_unique(client):
    await client.post("/api/products", json={"id": "p1", "name": "Widget"})
    await client.post("/api/products", json={"id": "p2", "name": "Gadget"})

    response = await client.put("/api/products/p2", json={"name": "Widget"})

    assert response.status_code == 200
    assert response.json()["slug"] == "widget-p2"
    assert (await client.get("/api/products/slug/widget")).json()["id"] == "p1"


@pytest.mark.asyncio
@pytest.mark.parametrize("weight", ["NaN", "Infinity"])
async def test_non_finite_weight_is_rejected(client, weight):
    response = await client.post(
        "/api/products",
        content=f'{{"id": "p1", "name": "Crate", "kilos": {weight}}}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 422
    assert (await client.get("/api/products/p1")).status_code == 404


@pytest.mark.asyncio
async def test_slug_taken_after_validation_is_rejected_by_store(
    client, product_payload, monkeypatch
):
    await client.post("/api/products", json=product_payload)
    # Another request took the slug after this one was validated.
    monkeypatch.setattr(ProductService, "validate", lambda self, product: None)

    response = await client.post(
        "/api/products", json={**product_payload, "id": "p2"}
    )

    assert response.status_code == 424
    assert response.json()["detail"] == (
        "Slug 'test-product' is already used by product p1"
    )
    assert [p["id"] for p in (await client.get("/api/products")).json()] == ["p1"]
