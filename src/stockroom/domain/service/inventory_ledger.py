"""Domain service: Inventory Ledger.

The ledger is the only code path that changes a product's quantity.  Every
mutation runs as read-modify-write inside the product's own critical
section, so concurrent restocks and sells of one product behave as if they
ran one after another, while different products never wait on each other.

Restocking an existing product only accumulates quantity.  Price,
description and image are taken from the first restock and kept; changing
them is a separate update concern.
"""

from __future__ import annotations

import logging

from stockroom.domain.exceptions import (
    InsufficientStockError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from stockroom.domain.model.product import ProductRecord, normalize_name
from stockroom.domain.model.value_objects import Money, Quantity
from stockroom.domain.repository.product_repository import ProductRepository
from stockroom.domain.service.key_locks import KeyLockTable

logger = logging.getLogger(__name__)


class InventoryLedger:

    def __init__(
        self,
        product_repo: ProductRepository,
        lock_timeout: float | None = None,
        locks: KeyLockTable | None = None,
    ) -> None:
        if lock_timeout is not None and lock_timeout < 0:
            raise ValidationError("Lock timeout cannot be negative")
        self._product_repo = product_repo
        self._lock_timeout = lock_timeout
        self._locks = locks or KeyLockTable()

    def restock(
        self,
        name: str,
        quantity: int,
        price: Money | str | int | float | None = None,
        description: str | None = None,
        image_ref: str | None = None,
    ) -> ProductRecord:
        """Create a product, or add *quantity* to an existing one.

        ``price`` is required when the product does not exist yet and is
        ignored otherwise.
        """
        name = normalize_name(name)
        qty = Quantity(quantity)
        new_price = _to_money(price) if price is not None else None

        with self._locks.hold(name, self._lock_timeout):
            product = self._load(name)
            if product is None:
                if new_price is None:
                    raise ValidationError(f"Price is required to create product '{name}'")
                product = ProductRecord.create(
                    name, new_price, qty, description=description, image_ref=image_ref
                )
                self._store(product)
                logger.info("created %s with quantity %d", name, product.quantity)
            else:
                product.add_stock(qty)
                self._store(product)
                logger.info("restocked %s by %d to %d", name, qty.value, product.quantity)
        return product

    def sell(self, name: str, quantity: int) -> ProductRecord:
        """Remove *quantity* units of a product from stock."""
        name = normalize_name(name)
        qty = Quantity(quantity)

        with self._locks.hold(name, self._lock_timeout):
            product = self._load(name)
            if product is None:
                raise NotFoundError(f"Product not found: '{name}'")
            try:
                product.remove_stock(qty)
            except InsufficientStockError as exc:
                logger.warning(
                    "rejected sale of %d %s: only %d available",
                    exc.requested, name, exc.available,
                )
                raise
            self._store(product)
            logger.info("sold %d of %s, %d left", qty.value, name, product.quantity)
        return product

    def get_all(self) -> list[ProductRecord]:
        return self._product_repo.list_all()

    # --- Internal helpers -----------------------------------------------------

    def _load(self, name: str) -> ProductRecord | None:
        try:
            return self._product_repo.get_by_name(name)
        except StorageError:
            logger.error("failed to read product %s", name)
            raise

    def _store(self, product: ProductRecord) -> None:
        try:
            self._product_repo.save(product)
        except StorageError:
            logger.error("failed to write product %s", product.name)
            raise


def _to_money(price: Money | str | int | float) -> Money:
    if isinstance(price, Money):
        return price
    return Money.of(price)
