"""Application service: Show Product use case (query)."""

from __future__ import annotations

from stockroom.application.dto import ProductDTO
from stockroom.domain.exceptions import NotFoundError
from stockroom.domain.service.product_catalog import ProductCatalog


class ShowProductHandler:

    def __init__(self, catalog: ProductCatalog) -> None:
        self._catalog = catalog

    def handle(self, name: str) -> ProductDTO:
        product = self._catalog.find_by_name(name)
        if product is None:
            raise NotFoundError(f"Product not found: '{name.strip()}'")
        return ProductDTO.from_domain(product)
