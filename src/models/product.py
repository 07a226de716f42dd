"""Product domain models and API schemas."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CatalogModel(BaseModel):
    """Base model exposing camelCase JSON keys while accepting snake_case input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Price(CatalogModel):
    """Embedded price breakdown."""

    base: float | None = None
    tax: float | None = None
    tax_rate: float | None = None


class Warehouse(CatalogModel):
    """Embedded storage location of a product."""

    location: str | None = None


class ImageDetail(CatalogModel):
    """Structured image descriptor, the canonical form of a product image."""

    url: str | None = None
    alt_text: str | None = None
    variants: dict[str, str] = Field(
        default_factory=dict,
        description="Alternate renditions keyed by size or format",
    )
    width: int | None = None
    height: int | None = None
    aspect_ratio: float | None = None
    transparent: bool = False
    watermarked: bool = False


class SupplierRegion(CatalogModel):
    """Supplier descriptor attached to a product for a given region."""

    name: str | None = None
    siren: str | None = None
    tva_id: str | None = None


class ProductPayload(CatalogModel):
    """Incoming product body for creation and full replacement."""

    id: str | None = Field(
        None,
        description="Unique identifier; generated on creation when omitted",
    )
    # Blank names are rejected by the service with a 424, not by the schema.
    name: str | None = None
    slug: str | None = Field(
        None,
        description="Unique URL-friendly key; derived from the name when omitted",
    )
    price: Price | None = None
    discounts: list[str] = Field(default_factory=list)
    images: dict[str, ImageDetail] = Field(default_factory=dict)
    kilos: float | None = Field(
        None,
        validation_alias=AliasChoices("kilos", "weight"),
        allow_inf_nan=False,
        description="Product weight in kilograms",
    )
    volume: str | None = Field(
        None,
        validation_alias=AliasChoices("volume", "dimensions"),
    )
    quantity: int | None = None
    stock: int | None = None
    warehouse: Warehouse | None = None
    suppliers_regions: dict[str, SupplierRegion] = Field(default_factory=dict)
    supplier_id: str | None = Field(
        None,
        description="Identifier of the owning supplier, if any",
    )

    @field_validator("images", mode="before")
    @classmethod
    def _normalize_flat_images(cls, value: Any) -> Any:
        """Accept the legacy ``{key: url}`` image map."""
        if not isinstance(value, dict):
            return value
        return {
            key: {"url": image} if isinstance(image, str) else image
            for key, image in value.items()
        }


class Product(ProductPayload):
    """Stored representation of a product."""

    id: str
    slug: str
