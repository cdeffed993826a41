"""Filesystem-backed BlobReferenceResolver.

Blobs are named after a BLAKE2b digest of their content, so uploading the
same bytes twice yields the same URL.  Bytes are written to a temporary
file beside the target and renamed into place; nothing is left behind
when an upload is rejected or the write fails.
"""

from __future__ import annotations

import hashlib
import logging
import os
import tempfile
from pathlib import Path

from stockroom.domain.exceptions import UploadError
from stockroom.domain.repository.blob_resolver import BlobReferenceResolver

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 5 * 1024 * 1024  # 5 MB

CONTENT_TYPE_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "application/pdf": ".pdf",
}


class LocalBlobStore(BlobReferenceResolver):

    def __init__(
        self,
        root: Path,
        base_url: str | None = None,
        max_bytes: int = MAX_UPLOAD_BYTES,
    ) -> None:
        self._root = root
        self._base_url = base_url.rstrip("/") if base_url else None
        self._max_bytes = max_bytes

    def upload(self, data: bytes, content_type: str) -> str:
        if not data:
            raise UploadError("No file uploaded")
        if len(data) > self._max_bytes:
            raise UploadError(
                f"File too large: {len(data)} bytes (limit {self._max_bytes})"
            )
        media_type = (content_type or "").split(";", 1)[0].strip().lower()
        extension = CONTENT_TYPE_EXTENSIONS.get(media_type)
        if extension is None:
            raise UploadError(f"Unsupported content type: {content_type!r}")

        digest = hashlib.blake2b(data, digest_size=16).hexdigest()
        target = self._root / f"{digest}{extension}"
        try:
            self._write(target, data)
        except OSError as exc:
            logger.error("failed to store blob %s: %s", target.name, exc)
            raise UploadError(f"Failed to store upload: {exc}") from exc

        logger.info("stored %d bytes as %s", len(data), target.name)
        return self._url_for(target)

    def _write(self, target: Path, data: bytes) -> None:
        self._root.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._root, prefix=".upload.")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _url_for(self, target: Path) -> str:
        if self._base_url:
            return f"{self._base_url}/{target.name}"
        return target.resolve().as_uri()
