"""Product business rules on top of the catalog store."""

from __future__ import annotations

import logging
import re
import uuid
from typing import Annotated

from fastapi import Depends

from src.config import settings
from src.exceptions import NotFoundError, ProductValidationError
from src.models.product import Product, ProductPayload
from src.services.catalog_store import StoreDependency
from src.services.storage.base import CatalogStore

logger = logging.getLogger(__name__)

_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lowercase ``text`` and collapse anything non-alphanumeric into dashes."""
    return _SLUG_SEPARATORS.sub("-", text.lower()).strip("-")


class ProductService:
    """Create, replace, look up and delete products."""

    def __init__(self, store: CatalogStore, max_kilos: float) -> None:
        self._store = store
        self._products = store.products
        self._max_kilos = max_kilos

    def find_all(self) -> list[Product]:
        return self._products.find_all()

    def find_by_id(self, product_id: str) -> Product | None:
        return self._products.find_by_id(product_id)

    def find_by_slug(self, slug: str) -> Product | None:
        return self._products.find_by_slug(slug)

    def create(self, payload: ProductPayload) -> Product:
        """Validate and store a new product, filling in a missing id or slug."""

        product_id = payload.id or uuid.uuid4().hex
        product = self._build(product_id, payload)
        self.validate(product)

        saved = self._products.save(product)
        logger.info(
            "Created product %s",
            saved.id,
            extra={"product_id": saved.id, "slug": saved.slug},
        )
        return saved

    def update(self, product_id: str, payload: ProductPayload) -> Product:
        """Replace a stored product; the path id wins over any id in the body."""

        if self._products.find_by_id(product_id) is None:
            raise NotFoundError("Product", product_id)

        product = self._build(product_id, payload)
        self.validate(product)

        saved = self._products.save(product)
        logger.info("Updated product %s", product_id)
        return saved

    def delete(self, product_id: str) -> None:
        if self._products.find_by_id(product_id) is None:
            raise NotFoundError("Product", product_id)
        self._products.delete_by_id(product_id)
        logger.info("Deleted product %s", product_id)

    def validate(self, product: Product) -> None:
        """Raise ProductValidationError when a catalog rule is broken.

        The name is checked first so that a blank name always yields the same
        failure whatever the other fields hold.
        """

        if product.name is None or not product.name.strip():
            raise ProductValidationError("Product name is missing")

        if product.kilos is not None and product.kilos > self._max_kilos:
            raise ProductValidationError(
                f"Product weight {product.kilos} kg exceeds the "
                f"{self._max_kilos} kg limit"
            )

        if not product.slug:
            raise ProductValidationError("Product slug is missing")

        owner = self._products.find_by_slug(product.slug)
        if owner is not None and owner.id != product.id:
            raise ProductValidationError.slug_taken(product.slug, owner.id)

        if (
            product.supplier_id is not None
            and self._store.suppliers.find_by_id(product.supplier_id) is None
        ):
            raise ProductValidationError.unknown_supplier(product.supplier_id)

    def _build(self, product_id: str, payload: ProductPayload) -> Product:
        data = payload.model_dump(exclude={"id", "slug"})
        slug = payload.slug or self._derive_slug(product_id, payload.name or "")
        return Product(id=product_id, slug=slug, **data)

    def _derive_slug(self, product_id: str, name: str) -> str:
        """Slug from the name, suffixed with the id when another product owns it.

        Only a slug supplied by the client can fail with "already used".
        """
        slug = slugify(name)
        owner = self._products.find_by_slug(slug)
        if owner is None or owner.id == product_id:
            return slug
        return f"{slug}-{slugify(product_id)}"


def get_product_service(store: StoreDependency) -> ProductService:
    """FastAPI dependency factory."""

    return ProductService(store, max_kilos=settings.MAX_PRODUCT_KILOS)


ProductServiceDependency = Annotated[ProductService, Depends(get_product_service)]
