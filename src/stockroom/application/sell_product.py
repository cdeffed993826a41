"""Application service: Sell Product use case."""

from __future__ import annotations

from stockroom.application.dto import ProductDTO
from stockroom.domain.service.inventory_ledger import InventoryLedger


class SellProductHandler:

    def __init__(self, ledger: InventoryLedger) -> None:
        self._ledger = ledger

    def handle(self, name: str, quantity: int) -> ProductDTO:
        return ProductDTO.from_domain(self._ledger.sell(name, quantity))
