"""Process-wide catalog store selected from configuration."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends

from src.config import settings
from src.services.storage.base import CatalogStore
from src.services.storage.memory import MemoryCatalogStore
from src.services.storage.sql import create_sql_store

logger = logging.getLogger(__name__)

_store: CatalogStore | None = None


def build_store() -> CatalogStore:
    """Create a new store for the configured backend."""

    if settings.uses_sql_storage:
        return create_sql_store(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    if settings.STORAGE_BACKEND.lower() != "memory":
        logger.warning(
            "Unknown STORAGE_BACKEND %r, falling back to in-memory storage",
            settings.STORAGE_BACKEND,
        )
    return MemoryCatalogStore()


def get_store() -> CatalogStore:
    """FastAPI dependency returning the singleton store for this process."""

    global _store
    if _store is None:
        _store = build_store()
        logger.info("Initialized %s catalog store", _store.backend)
    return _store


StoreDependency = Annotated[CatalogStore, Depends(get_store)]
