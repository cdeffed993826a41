"""Read-only view over the product store.

Reads go straight to the repository and take no ledger locks; a single
record read is as atomic as the repository makes it.
"""

from __future__ import annotations

from stockroom.domain.model.product import ProductRecord, normalize_name
from stockroom.domain.model.value_objects import Money
from stockroom.domain.repository.product_repository import ProductRepository


class ProductCatalog:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def find_by_name(self, name: str) -> ProductRecord | None:
        return self._product_repo.get_by_name(normalize_name(name))

    def list(self) -> list[ProductRecord]:
        return self._product_repo.list_all()

    def stock_value(self, products: list[ProductRecord] | None = None) -> Money:
        """Total of price x quantity over *products*, or over the whole store."""
        if products is None:
            products = self._product_repo.list_all()
        total = Money.zero()
        for product in products:
            total = total + product.stock_value
        return total
