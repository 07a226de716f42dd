"""In-memory catalog storage."""

from __future__ import annotations

import logging
from threading import RLock

from src.exceptions import ProductValidationError
from src.models.product import Product
from src.models.supplier import Supplier
from src.services.storage.base import (
    CatalogStore,
    ProductRepository,
    SupplierRepository,
)

logger = logging.getLogger(__name__)


class MemoryProductRepository(ProductRepository):
    """Products kept in an insertion-ordered dict.

    Slug ownership and the supplier reference are checked under the shared
    lock in `save`, so no other write can slip in between check and store.
    """

    def __init__(self, lock: RLock, suppliers: MemorySupplierRepository) -> None:
        self._lock = lock
        self._suppliers = suppliers
        self._storage: dict[str, Product] = {}

    def find_all(self) -> list[Product]:
        with self._lock:
            return list(self._storage.values())

    def find_by_id(self, product_id: str) -> Product | None:
        with self._lock:
            return self._storage.get(product_id)

    def find_by_slug(self, slug: str) -> Product | None:
        with self._lock:
            return next(
                (p for p in self._storage.values() if p.slug == slug),
                None,
            )

    def find_by_supplier(self, supplier_id: str) -> list[Product]:
        with self._lock:
            return [p for p in self._storage.values() if p.supplier_id == supplier_id]

    def save(self, product: Product) -> Product:
        stored = product.model_copy(deep=True)
        with self._lock:
            owner = self.find_by_slug(product.slug)
            if owner is not None and owner.id != product.id:
                raise ProductValidationError.slug_taken(product.slug, owner.id)
            if (
                product.supplier_id is not None
                and self._suppliers.find_by_id(product.supplier_id) is None
            ):
                raise ProductValidationError.unknown_supplier(product.supplier_id)
            self._storage[product.id] = stored
        logger.debug("Stored product %s", product.id)
        return stored

    def delete_by_id(self, product_id: str) -> None:
        with self._lock:
            self._storage.pop(product_id, None)

    def delete_by_slug(self, slug: str) -> None:
        with self._lock:
            product = self.find_by_slug(slug)
            if product is not None:
                del self._storage[product.id]

    def count(self) -> int:
        with self._lock:
            return len(self._storage)


class MemorySupplierRepository(SupplierRepository):
    """Suppliers kept in an insertion-ordered dict."""

    def __init__(self, lock: RLock) -> None:
        self._lock = lock
        self._storage: dict[str, Supplier] = {}

    def find_all(self) -> list[Supplier]:
        with self._lock:
            return list(self._storage.values())

    def find_by_id(self, supplier_id: str) -> Supplier | None:
        with self._lock:
            return self._storage.get(supplier_id)

    def find_by_country(self, country: str) -> list[Supplier]:
        with self._lock:
            return [s for s in self._storage.values() if s.country == country]

    def find_by_region(self, region: str) -> list[Supplier]:
        with self._lock:
            return [s for s in self._storage.values() if s.region == region]

    def save(self, supplier: Supplier) -> Supplier:
        stored = supplier.model_copy(deep=True)
        with self._lock:
            self._storage[supplier.id] = stored
        return stored

    def remove(self, supplier_id: str) -> None:
        with self._lock:
            self._storage.pop(supplier_id, None)


class MemoryCatalogStore(CatalogStore):
    """Catalog held in process memory.

    Both repositories share one re-entrant lock. Every read and write takes
    it, so the supplier cascade observes and mutates a consistent snapshot.
    Values are copied on save; later changes the caller makes to the saved
    object do not reach the store.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self.suppliers = MemorySupplierRepository(self._lock)
        self.products = MemoryProductRepository(self._lock, self.suppliers)

    @property
    def backend(self) -> str:
        return "memory"

    def delete_supplier(self, supplier_id: str) -> int:
        with self._lock:
            owned = self.products.find_by_supplier(supplier_id)
            for product in owned:
                self.products.delete_by_id(product.id)
            self.suppliers.remove(supplier_id)

        logger.info(
            "Deleted supplier %s with %d owned products", supplier_id, len(owned)
        )
        return len(owned)
