"""Application service: Restock Product use case.

Creates the product on its first restock; afterwards only the quantity
grows.
"""

from __future__ import annotations

from stockroom.application.dto import ProductDTO
from stockroom.domain.service.inventory_ledger import InventoryLedger


class RestockProductHandler:

    def __init__(self, ledger: InventoryLedger) -> None:
        self._ledger = ledger

    def handle(
        self,
        name: str,
        quantity: int,
        price: str | None = None,
        description: str | None = None,
        image_ref: str | None = None,
    ) -> ProductDTO:
        product = self._ledger.restock(
            name,
            quantity,
            price=price,
            description=description,
            image_ref=image_ref,
        )
        return ProductDTO.from_domain(product)
