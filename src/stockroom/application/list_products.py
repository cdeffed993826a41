"""Application service: List Products use case (query)."""

from __future__ import annotations

from stockroom.application.dto import CatalogDTO, ProductDTO
from stockroom.domain.service.product_catalog import ProductCatalog


class ListProductsHandler:

    def __init__(self, catalog: ProductCatalog) -> None:
        self._catalog = catalog

    def handle(self) -> CatalogDTO:
        products = self._catalog.list()
        return CatalogDTO(
            products=[ProductDTO.from_domain(p) for p in products],
            stock_value=str(self._catalog.stock_value(products)),
        )
