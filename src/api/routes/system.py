"""System-level routes such as health checks."""

from __future__ import annotations

from fastapi import APIRouter

from src.config import settings
from src.services.catalog_store import StoreDependency
from src.services.storage.sql import SqlCatalogStore

router = APIRouter(tags=["system"])


@router.get("/")
async def read_root() -> dict[str, str]:
    """Service banner used by smoke tests."""

    return {"message": "Omniproduct catalog"}


@router.get("/health")
def health_check(store: StoreDependency) -> dict[str, str]:
    """Health check endpoint with storage connectivity check."""

    if isinstance(store, SqlCatalogStore):
        storage_status = "connected" if store.ping() else "disconnected"
    else:
        storage_status = "connected"

    return {
        "status": "healthy",
        "storage": store.backend,
        "storage_status": storage_status,
        "environment": settings.ENVIRONMENT,
    }
