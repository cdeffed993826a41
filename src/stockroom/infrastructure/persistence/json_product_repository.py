"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from pathlib import Path

from stockroom.domain.exceptions import DomainException, StorageError
from stockroom.domain.model.product import ProductRecord
from stockroom.domain.model.value_objects import Money
from stockroom.domain.repository.product_repository import ProductRepository
from stockroom.infrastructure.persistence.json_file import JsonRecordFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonRecordFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_name(self, name: str) -> ProductRecord | None:
        for raw in self._file.load():
            if raw.get("name") == name:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[ProductRecord]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, product: ProductRecord) -> None:
        with self._file.transaction() as records:
            # Upsert: replace if exists, otherwise append
            for i, raw in enumerate(records):
                if raw.get("name") == product.name:
                    records[i] = self._to_raw(product)
                    break
            else:
                records.append(self._to_raw(product))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: ProductRecord) -> dict:
        return {
            "name": product.name,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "quantity": product.quantity,
            "description": product.description,
            "image_ref": product.image_ref,
        }

    def _to_domain(self, raw: dict) -> ProductRecord:
        try:
            quantity = raw["quantity"]
            if not isinstance(quantity, int) or quantity < 0:
                raise ValueError(f"bad quantity {quantity!r}")
            return ProductRecord(
                name=raw["name"],
                price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
                quantity=quantity,
                description=raw.get("description"),
                image_ref=raw.get("image_ref"),
            )
        except (KeyError, TypeError, ValueError, InvalidOperation, DomainException) as exc:
            raise StorageError(
                f"Corrupt product record in {self._file.path}: {exc}"
            ) from exc
