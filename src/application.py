"""FastAPI application factory and bootstrap helpers."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes import include_api_routes
from src.config import settings
from src.exceptions import NotFoundError, ProductValidationError
from src.services.catalog_store import get_store
from src.services.storage.sql import SqlCatalogStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events."""
    store = get_store()
    logger.info("Catalog service starting with %s storage", store.backend)

    yield

    if isinstance(store, SqlCatalogStore):
        store.dispose()
        logger.info("Closed SQL catalog store")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Omniproduct Catalog",
        description="Product and supplier catalog CRUD service",
        version="1.0.0",
        lifespan=lifespan,
    )

    _configure_cors(app)
    _register_exception_handlers(app)
    include_api_routes(app)

    return app


def _configure_cors(app: FastAPI) -> None:
    """Allow broad access in non-production environments."""

    if settings.is_production:
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )


async def _handle_not_found(request: Request, exc: NotFoundError) -> Response:
    logger.info("%s %s -> 404: %s", request.method, request.url.path, exc)
    return Response(status_code=status.HTTP_404_NOT_FOUND)


async def _handle_validation_failure(
    request: Request, exc: ProductValidationError
) -> JSONResponse:
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status.HTTP_424_FAILED_DEPENDENCY,
        content={"detail": exc.message},
    )


def _register_exception_handlers(app: FastAPI) -> None:
    """Translate catalog errors into HTTP responses."""

    app.add_exception_handler(NotFoundError, _handle_not_found)
    app.add_exception_handler(ProductValidationError, _handle_validation_failure)
