"""Supplier domain models and API schemas."""

from __future__ import annotations

from pydantic import Field

from src.models.product import CatalogModel


class SupplierUpdate(CatalogModel):
    """Body of a supplier update; every field is replaced."""

    name: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    country: str | None = None
    region: str | None = None


class SupplierCreate(SupplierUpdate):
    """Body of a supplier creation request."""

    id: str = Field(..., description="Unique identifier of the supplier")


class Supplier(SupplierCreate):
    """Stored representation of a supplier."""
