"""Pytest configuration and fixtures for the catalog service."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.services.catalog_store import get_store
from src.services.storage.memory import MemoryCatalogStore
from src.services.storage.sql import create_sql_store


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "asyncio: marks tests as async tests")


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Provide a fresh, empty catalog store for each backend."""
    if request.param == "memory":
        yield MemoryCatalogStore()
        return

    sql_store = create_sql_store("sqlite://")
    try:
        yield sql_store
    finally:
        sql_store.dispose()


@pytest_asyncio.fixture()
async def client(store):
    """Return an HTTPX async client pointing at the FastAPI app."""
    from src.main import app

    app.dependency_overrides[get_store] = lambda: store
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://testserver",
        ) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.pop(get_store, None)


@pytest.fixture()
def product_payload():
    """Full product body in the camelCase wire format."""
    return {
        "id": "p1",
        "name": "Test Product",
        "slug": "test-product",
        "price": {"base": 100.0, "tax": 20.0, "taxRate": 0.2},
        "discounts": ["D1"],
        "images": {
            "front": {
                "url": "https://cdn.example.com/p1/front.jpg",
                "altText": "Front view",
                "variants": {"thumb": "https://cdn.example.com/p1/front-thumb.jpg"},
                "width": 800,
                "height": 600,
                "aspectRatio": 1.33,
                "transparent": False,
                "watermarked": True,
            }
        },
        "kilos": 1.5,
        "volume": "10x10x10",
        "quantity": 100,
        "stock": 50,
        "warehouse": {"location": "Main Warehouse"},
    }


@pytest.fixture()
def supplier_payload():
    return {
        "id": "sup1",
        "name": "Supplier A",
        "contactEmail": "contact@suppliera.com",
        "contactPhone": "+33123456789",
        "country": "France",
        "region": "Île-de-France",
    }
