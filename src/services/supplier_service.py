"""Supplier business rules on top of the catalog store."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends

from src.exceptions import NotFoundError
from src.models.product import Product
from src.models.supplier import Supplier
from src.services.catalog_store import StoreDependency
from src.services.storage.base import CatalogStore

logger = logging.getLogger(__name__)


class SupplierService:
    """Manage suppliers and the products they own."""

    def __init__(self, store: CatalogStore) -> None:
        self._store = store
        self._suppliers = store.suppliers
        self._products = store.products

    def create_supplier(
        self,
        supplier_id: str,
        name: str | None,
        contact_email: str | None,
        contact_phone: str | None,
        country: str | None,
        region: str | None,
    ) -> Supplier:
        supplier = Supplier(
            id=supplier_id,
            name=name,
            contact_email=contact_email,
            contact_phone=contact_phone,
            country=country,
            region=region,
        )
        saved = self._suppliers.save(supplier)
        logger.info("Created supplier %s (country=%s)", supplier_id, country)
        return saved

    def get_supplier(self, supplier_id: str) -> Supplier | None:
        return self._suppliers.find_by_id(supplier_id)

    def get_all_suppliers(self) -> list[Supplier]:
        return self._suppliers.find_all()

    def get_suppliers_by_product(self, product_id: str) -> list[Supplier]:
        """Return the suppliers owning ``product_id``.

        Raises:
            NotFoundError: If the product does not exist.
        """
        if self._products.find_by_id(product_id) is None:
            raise NotFoundError("Product", product_id)

        return [
            supplier
            for supplier in self._suppliers.find_all()
            if any(
                product.id == product_id
                for product in self._products.find_by_supplier(supplier.id)
            )
        ]

    def get_suppliers_by_country(self, country: str) -> list[Supplier]:
        return self._suppliers.find_by_country(country)

    def get_suppliers_by_region(self, region: str) -> list[Supplier]:
        return self._suppliers.find_by_region(region)

    def get_supplier_products(self, supplier_id: str) -> list[Product]:
        if self._suppliers.find_by_id(supplier_id) is None:
            raise NotFoundError("Supplier", supplier_id)
        return self._products.find_by_supplier(supplier_id)

    def update_supplier(
        self,
        supplier_id: str,
        name: str | None,
        contact_email: str | None,
        contact_phone: str | None,
        country: str | None,
        region: str | None,
    ) -> Supplier:
        supplier = self._suppliers.find_by_id(supplier_id)
        if supplier is None:
            raise NotFoundError("Supplier", supplier_id)

        updated = supplier.model_copy(
            update={
                "name": name,
                "contact_email": contact_email,
                "contact_phone": contact_phone,
                "country": country,
                "region": region,
            }
        )
        saved = self._suppliers.save(updated)
        logger.info("Updated supplier %s", supplier_id)
        return saved

    def delete_supplier(self, supplier_id: str) -> None:
        """Delete a supplier together with every product it owns.

        Raises:
            NotFoundError: If the supplier does not exist.
        """
        if self._suppliers.find_by_id(supplier_id) is None:
            raise NotFoundError("Supplier", supplier_id)

        removed = self._store.delete_supplier(supplier_id)
        logger.info(
            "Supplier deletion cascaded",
            extra={"supplier_id": supplier_id, "products_removed": removed},
        )


def get_supplier_service(store: StoreDependency) -> SupplierService:
    """FastAPI dependency factory."""

    return SupplierService(store)


SupplierServiceDependency = Annotated[SupplierService, Depends(get_supplier_service)]
