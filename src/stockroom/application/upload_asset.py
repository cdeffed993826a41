"""Application service: Upload Asset use case.

Sends the bytes to the blob store and records the returned URL.  The
ledger is not involved: a caller that wants the image on a product
restocks it with the URL afterwards, and only if this call succeeded.
"""

from __future__ import annotations

from stockroom.application.dto import UploadDTO
from stockroom.domain.model.upload import UploadRecord
from stockroom.domain.repository.blob_resolver import BlobReferenceResolver
from stockroom.domain.repository.upload_repository import UploadRepository


class UploadAssetHandler:

    def __init__(
        self,
        resolver: BlobReferenceResolver,
        upload_repo: UploadRepository,
    ) -> None:
        self._resolver = resolver
        self._upload_repo = upload_repo

    def handle(self, data: bytes, content_type: str) -> UploadDTO:
        url = self._resolver.upload(data, content_type)
        record = UploadRecord(file_url=url, content_type=content_type, size=len(data))
        self._upload_repo.save(record)
        return UploadDTO.from_domain(record)
