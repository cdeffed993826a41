"""Application service: List Uploads use case (query)."""

from __future__ import annotations

from stockroom.application.dto import UploadDTO
from stockroom.domain.repository.upload_repository import UploadRepository


class ListUploadsHandler:

    def __init__(self, upload_repo: UploadRepository) -> None:
        self._upload_repo = upload_repo

    def handle(self) -> list[UploadDTO]:
        return [UploadDTO.from_domain(r) for r in self._upload_repo.list_all()]
