"""Abstract blob store: takes raw bytes, hands back a URL.

The ledger never calls a resolver.  Callers upload first and only then
pass the returned URL into a ledger operation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class BlobReferenceResolver(ABC):

    @abstractmethod
    def upload(self, data: bytes, content_type: str) -> str:
        """Store *data* and return a stable URL for it.

        Raises UploadError on size/type rejection or transport failure.
        """
