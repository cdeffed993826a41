"""JSON-file-backed implementation of UploadRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from stockroom.domain.exceptions import DomainException, StorageError
from stockroom.domain.model.upload import UploadRecord
from stockroom.domain.repository.upload_repository import UploadRepository
from stockroom.infrastructure.persistence.json_file import JsonRecordFile


class JsonUploadRepository(UploadRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonRecordFile(file_path)

    def list_all(self) -> list[UploadRecord]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, record: UploadRecord) -> None:
        with self._file.transaction() as records:
            records.append(
                {
                    "file_url": record.file_url,
                    "content_type": record.content_type,
                    "size": record.size,
                    "uploaded_at": record.uploaded_at.isoformat(),
                }
            )

    def _to_domain(self, raw: dict) -> UploadRecord:
        try:
            return UploadRecord(
                file_url=raw["file_url"],
                content_type=raw.get("content_type", "application/octet-stream"),
                size=raw.get("size", 0),
                uploaded_at=datetime.fromisoformat(raw["uploaded_at"]),
            )
        except (KeyError, TypeError, ValueError, DomainException) as exc:
            raise StorageError(
                f"Corrupt upload record in {self._file.path}: {exc}"
            ) from exc
