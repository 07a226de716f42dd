"""Repository interfaces shared by the storage backends."""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.product import Product
from src.models.supplier import Supplier


class ProductRepository(ABC):
    """Key-by-id access to stored products."""

    @abstractmethod
    def find_all(self) -> list[Product]:
        """Return every stored product."""

    @abstractmethod
    def find_by_id(self, product_id: str) -> Product | None:
        """Return a product by id, or None if it is not stored."""

    @abstractmethod
    def find_by_slug(self, slug: str) -> Product | None:
        """Return a product by slug, or None if no product owns it."""

    @abstractmethod
    def find_by_supplier(self, supplier_id: str) -> list[Product]:
        """Return the products owned by a supplier."""

    @abstractmethod
    def save(self, product: Product) -> Product:
        """Insert or replace the product keyed by its id.

        Raises:
            ProductValidationError: If another product owns the slug or the
                referenced supplier does not exist.
        """

    @abstractmethod
    def delete_by_id(self, product_id: str) -> None:
        """Remove a product; absent ids are ignored."""

    @abstractmethod
    def delete_by_slug(self, slug: str) -> None:
        """Remove the product owning a slug; unknown slugs are ignored."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored products."""

    def exists_by_slug(self, slug: str) -> bool:
        return self.find_by_slug(slug) is not None


class SupplierRepository(ABC):
    """Key-by-id access to stored suppliers."""

    @abstractmethod
    def find_all(self) -> list[Supplier]:
        """Return every stored supplier."""

    @abstractmethod
    def find_by_id(self, supplier_id: str) -> Supplier | None:
        """Return a supplier by id, or None if it is not stored."""

    @abstractmethod
    def find_by_country(self, country: str) -> list[Supplier]:
        """Return suppliers whose country matches exactly."""

    @abstractmethod
    def find_by_region(self, region: str) -> list[Supplier]:
        """Return suppliers whose region matches exactly."""

    @abstractmethod
    def save(self, supplier: Supplier) -> Supplier:
        """Insert or replace the supplier keyed by its id."""


class CatalogStore(ABC):
    """Owns both repositories and the operations spanning them."""

    products: ProductRepository
    suppliers: SupplierRepository

    @property
    @abstractmethod
    def backend(self) -> str:
        """Short name of the storage backend, used in health reports."""

    @abstractmethod
    def delete_supplier(self, supplier_id: str) -> int:
        """Delete a supplier and every product it owns as one step.

        Returns the number of products removed along with the supplier.
        """
