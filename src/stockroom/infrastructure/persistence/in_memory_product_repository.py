"""In-process implementation of ProductRepository.

Records are copied on the way in and on the way out, so the only way to
change stored state is ``save``.
"""

from __future__ import annotations

import threading
from dataclasses import replace

from stockroom.domain.model.product import ProductRecord
from stockroom.domain.repository.product_repository import ProductRepository


class InMemoryProductRepository(ProductRepository):

    def __init__(self, products: list[ProductRecord] | None = None) -> None:
        self._lock = threading.Lock()
        self._store: dict[str, ProductRecord] = {}
        for p in products or []:
            self._store[p.name] = replace(p)

    def get_by_name(self, name: str) -> ProductRecord | None:
        with self._lock:
            product = self._store.get(name)
            return replace(product) if product is not None else None

    def list_all(self) -> list[ProductRecord]:
        with self._lock:
            return [replace(p) for p in self._store.values()]

    def save(self, product: ProductRecord) -> None:
        with self._lock:
            self._store[product.name] = replace(product)
