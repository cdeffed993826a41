"""ProductRecord aggregate: one catalog entry and its stock level.

A record is keyed by its name.  It is created on the first restock of an
unknown name and never deleted.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockroom.domain.exceptions import InsufficientStockError, ValidationError
from stockroom.domain.model.value_objects import Money, Quantity


def normalize_name(name: str) -> str:
    """Strip surrounding whitespace, rejecting names that end up empty."""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Product name is required")
    return name.strip()


@dataclass
class ProductRecord:
    """Aggregate root for a product and its stock.

    Invariants:
    - ``quantity`` is never negative
    - ``name`` never changes once the record exists

    Use ``ProductRecord.create()`` for new products.  The ``__init__`` is
    kept plain so repositories can reconstitute stored records.
    """

    name: str
    price: Money
    quantity: int
    description: str | None = None
    image_ref: str | None = None

    @staticmethod
    def create(
        name: str,
        price: Money,
        quantity: Quantity,
        description: str | None = None,
        image_ref: str | None = None,
    ) -> ProductRecord:
        return ProductRecord(
            name=normalize_name(name),
            price=price,
            quantity=quantity.value,
            description=description,
            image_ref=image_ref,
        )

    def add_stock(self, quantity: Quantity) -> None:
        """Increase stock.  Price, description and image are left alone."""
        self.quantity += quantity.value

    def remove_stock(self, quantity: Quantity) -> None:
        """Decrease stock.

        Raises InsufficientStockError, leaving the record untouched, if
        fewer than ``quantity`` units are available.
        """
        if quantity.value > self.quantity:
            raise InsufficientStockError(
                self.name, available=self.quantity, requested=quantity.value
            )
        self.quantity -= quantity.value

    @property
    def stock_value(self) -> Money:
        return self.price * self.quantity
