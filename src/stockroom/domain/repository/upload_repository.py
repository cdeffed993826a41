"""Abstract repository for UploadRecord."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockroom.domain.model.upload import UploadRecord


class UploadRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[UploadRecord]:
        """Return every upload record, oldest first."""

    @abstractmethod
    def save(self, record: UploadRecord) -> None:
        """Persist a new upload record."""
