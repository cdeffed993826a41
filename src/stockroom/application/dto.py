"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockroom.domain.model.product import ProductRecord
from stockroom.domain.model.upload import UploadRecord


@dataclass(frozen=True)
class ProductDTO:
    """Output: a product as displayed to the user."""

    name: str
    price: str  # formatted, e.g. "$15.00"
    quantity: int
    description: str | None
    image_ref: str | None

    @staticmethod
    def from_domain(product: ProductRecord) -> ProductDTO:
        return ProductDTO(
            name=product.name,
            price=str(product.price),
            quantity=product.quantity,
            description=product.description,
            image_ref=product.image_ref,
        )


@dataclass(frozen=True)
class CatalogDTO:
    """Output: every product plus the value of the stock on hand."""

    products: list[ProductDTO]
    stock_value: str


@dataclass(frozen=True)
class UploadDTO:
    """Output: where an uploaded file ended up."""

    file_url: str
    content_type: str
    size: int
    uploaded_at: str

    @staticmethod
    def from_domain(record: UploadRecord) -> UploadDTO:
        return UploadDTO(
            file_url=record.file_url,
            content_type=record.content_type,
            size=record.size,
            uploaded_at=record.uploaded_at.isoformat(timespec="seconds"),
        )
