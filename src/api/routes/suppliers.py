"""Routes for managing suppliers."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from src.exceptions import NotFoundError
from src.models.product import Product
from src.models.supplier import Supplier, SupplierCreate, SupplierUpdate
from src.services.supplier_service import SupplierServiceDependency

router = APIRouter(prefix="/api/suppliers", tags=["suppliers"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a supplier",
)
def create_supplier(
    payload: SupplierCreate,
    service: SupplierServiceDependency,
) -> Supplier:
    """Store a new supplier."""
    return service.create_supplier(
        payload.id,
        payload.name,
        payload.contact_email,
        payload.contact_phone,
        payload.country,
        payload.region,
    )


@router.get("", summary="List every supplier")
def list_suppliers(service: SupplierServiceDependency) -> list[Supplier]:
    """Return every stored supplier."""
    return service.get_all_suppliers()


@router.get(
    "/product/{product_id}",
    summary="List the suppliers owning a product",
)
def get_suppliers_by_product(
    product_id: str,
    service: SupplierServiceDependency,
) -> list[Supplier]:
    """Return the suppliers owning a product, or 404 for an unknown product."""
    return service.get_suppliers_by_product(product_id)


@router.get("/country/{country}", summary="List suppliers in a country")
def get_suppliers_by_country(
    country: str,
    service: SupplierServiceDependency,
) -> list[Supplier]:
    """Return suppliers whose country matches exactly."""
    return service.get_suppliers_by_country(country)


@router.get("/region/{region}", summary="List suppliers in a region")
def get_suppliers_by_region(
    region: str,
    service: SupplierServiceDependency,
) -> list[Supplier]:
    """Return suppliers whose region matches exactly."""
    return service.get_suppliers_by_region(region)


@router.get("/{supplier_id}", summary="Fetch a supplier by id")
def get_supplier(supplier_id: str, service: SupplierServiceDependency) -> Supplier:
    """Return a supplier by id, or 404."""
    supplier = service.get_supplier(supplier_id)
    if supplier is None:
        raise NotFoundError("Supplier", supplier_id)
    return supplier


@router.get("/{supplier_id}/products", summary="List the products of a supplier")
def get_supplier_products(
    supplier_id: str,
    service: SupplierServiceDependency,
) -> list[Product]:
    """Return the products owned by a supplier."""
    return service.get_supplier_products(supplier_id)


@router.put("/{supplier_id}", summary="Replace a supplier's details")
def update_supplier(
    supplier_id: str,
    payload: SupplierUpdate,
    service: SupplierServiceDependency,
) -> Supplier:
    """Replace every field of a supplier, or 404."""
    return service.update_supplier(
        supplier_id,
        payload.name,
        payload.contact_email,
        payload.contact_phone,
        payload.country,
        payload.region,
    )


@router.delete(
    "/{supplier_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a supplier and the products it owns",
)
def delete_supplier(supplier_id: str, service: SupplierServiceDependency) -> Response:
    """Delete a supplier and its products, or 404."""
    service.delete_supplier(supplier_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
