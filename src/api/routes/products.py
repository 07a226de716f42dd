"""Routes for managing catalog products."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Response, status

from src.exceptions import NotFoundError
from src.models.product import Product, ProductPayload
from src.services.product_service import ProductServiceDependency

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", summary="List every product")
def list_products(service: ProductServiceDependency) -> list[Product]:
    """Return every stored product."""
    return service.find_all()


@router.get("/slug/{slug}", summary="Fetch a product by slug")
def get_product_by_slug(slug: str, service: ProductServiceDependency) -> Product:
    """Return the product owning a slug, or 404."""
    product = service.find_by_slug(slug)
    if product is None:
        raise NotFoundError("Product", slug)
    return product


@router.get("/{product_id}", summary="Fetch a product by id")
def get_product(product_id: str, service: ProductServiceDependency) -> Product:
    """Return a product by id, or 404."""
    product = service.find_by_id(product_id)
    if product is None:
        raise NotFoundError("Product", product_id)
    return product


@router.post(
    "",
    status_code=status.HTTP_200_OK,
    summary="Create a product",
)
def create_product(
    payload: ProductPayload,
    service: ProductServiceDependency,
) -> Product:
    """Store a new product.

    Blank names and overweight products are rejected with 424.
    """
    logger.debug("Received payload: %s", payload.model_dump_json())
    return service.create(payload)


@router.put("/{product_id}", summary="Replace a product")
def update_product(
    product_id: str,
    payload: ProductPayload,
    service: ProductServiceDependency,
) -> Product:
    """Replace a product; the path id wins over any id in the body."""
    return service.update(product_id, payload)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product",
)
def delete_product(product_id: str, service: ProductServiceDependency) -> Response:
    """Delete a product, or 404 if it does not exist."""
    service.delete(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
