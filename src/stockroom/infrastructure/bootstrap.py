"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions, and receives its
collaborators through its constructor.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from stockroom.domain.repository.blob_resolver import BlobReferenceResolver
from stockroom.domain.repository.product_repository import ProductRepository
from stockroom.domain.repository.upload_repository import UploadRepository
from stockroom.domain.service.inventory_ledger import InventoryLedger
from stockroom.domain.service.product_catalog import ProductCatalog
from stockroom.infrastructure.blob.local_blob_store import LocalBlobStore
from stockroom.infrastructure.locking.file_key_locks import FileKeyLockTable
from stockroom.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from stockroom.infrastructure.persistence.json_upload_repository import (
    JsonUploadRepository,
)


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    blob_base_url: str | None = None
    lock_timeout: float | None = None


@dataclass(frozen=True)
class Services:
    product_repo: ProductRepository
    upload_repo: UploadRepository
    blob_resolver: BlobReferenceResolver
    ledger: InventoryLedger
    catalog: ProductCatalog


def build_services(settings: Settings) -> Services:
    product_repo = JsonProductRepository(settings.data_dir / "products.json")
    upload_repo = JsonUploadRepository(settings.data_dir / "uploads.json")
    blob_resolver = LocalBlobStore(
        settings.data_dir / "blobs", base_url=settings.blob_base_url
    )
    return Services(
        product_repo=product_repo,
        upload_repo=upload_repo,
        blob_resolver=blob_resolver,
        ledger=InventoryLedger(
            product_repo,
            lock_timeout=settings.lock_timeout,
            locks=FileKeyLockTable(settings.data_dir / "locks"),
        ),
        catalog=ProductCatalog(product_repo),
    )
