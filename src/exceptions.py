"""Domain errors raised by the catalog services."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog failures surfaced at the HTTP boundary."""


class NotFoundError(CatalogError):
    """Raised when an entity looked up by id does not exist."""

    def __init__(self, entity: str, identifier: str) -> None:
        super().__init__(f"{entity} not found: {identifier}")
        self.entity = entity
        self.identifier = identifier


class ProductValidationError(CatalogError):
    """Raised when a product payload breaks a catalog rule.

    Surfaced as HTTP 424 (Failed Dependency) rather than 400.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @classmethod
    def slug_taken(cls, slug: str, owner_id: str) -> ProductValidationError:
        return cls(f"Slug '{slug}' is already used by product {owner_id}")

    @classmethod
    def unknown_supplier(cls, supplier_id: str) -> ProductValidationError:
        return cls(f"Unknown supplier: {supplier_id}")
