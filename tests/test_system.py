"""Tests for the system routes."""

import pytest


@pytest.mark.asyncio
async def test_read_root(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json() == {"message": "Omniproduct catalog"}


@pytest.mark.asyncio
async def test_health_reports_storage(client, store):
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["storage"] == store.backend
    assert data["storage_status"] == "connected"
