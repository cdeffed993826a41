"""UploadRecord: the stored URL of an uploaded asset.

Uploads are not owned by the ledger.  A record only remembers where the
blob store put the bytes, so the URL can later be attached to a product.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from stockroom.domain.exceptions import ValidationError


@dataclass(frozen=True)
class UploadRecord:

    file_url: str
    content_type: str
    size: int
    uploaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.file_url:
            raise ValidationError("Upload record requires a file URL")
