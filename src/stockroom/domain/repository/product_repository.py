"""Abstract repository for ProductRecord aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (in-memory, JSON) live in the
infrastructure layer.

Implementations must make a single ``get_by_name`` or ``save`` atomic and
must raise StorageError, not return quietly, when a read or write fails.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockroom.domain.model.product import ProductRecord


class ProductRepository(ABC):

    @abstractmethod
    def get_by_name(self, name: str) -> ProductRecord | None:
        """Return a copy of the product stored under *name*, or None."""

    @abstractmethod
    def list_all(self) -> list[ProductRecord]:
        """Return every product, in insertion order."""

    @abstractmethod
    def save(self, product: ProductRecord) -> None:
        """Insert or replace the product keyed by its name."""
