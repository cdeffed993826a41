"""A JSON file holding a list of records, shared by the JSON repositories.

Every read and write holds ``<file>.lock`` (a ``filelock.FileLock``), so a
read-modify-write of the whole file cannot interleave with another one,
whether it comes from another thread or another process.  Writes land in a
temporary file first and are moved into place with ``os.replace``, so a
reader never sees a half-written file.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from filelock import FileLock

from stockroom.domain.exceptions import StorageError


class JsonRecordFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.RLock()
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create {file_path}: {exc}") from exc
        self._file_lock = FileLock(str(file_path) + ".lock")
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def load(self) -> list[dict]:
        with self._locked():
            try:
                raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                raise StorageError(f"Cannot read {self._file_path}: {exc}") from exc
        if not isinstance(raw, list):
            raise StorageError(f"Cannot read {self._file_path}: expected a JSON list")
        return raw

    def persist(self, records: list[dict]) -> None:
        payload = json.dumps(records, indent=2) + "\n"
        with self._locked():
            try:
                fd, tmp_name = tempfile.mkstemp(
                    dir=self._file_path.parent, prefix=f".{self._file_path.name}."
                )
                try:
                    with os.fdopen(fd, "w", encoding="utf-8") as fh:
                        fh.write(payload)
                    os.replace(tmp_name, self._file_path)
                except BaseException:
                    Path(tmp_name).unlink(missing_ok=True)
                    raise
            except OSError as exc:
                raise StorageError(f"Cannot write {self._file_path}: {exc}") from exc

    @contextmanager
    def transaction(self) -> Iterator[list[dict]]:
        """Load records, let the caller edit the list, then persist it."""
        with self._locked():
            records = self.load()
            yield records
            self.persist(records)

    @contextmanager
    def _locked(self) -> Iterator[None]:
        with self._lock:
            try:
                self._file_lock.acquire()
            except OSError as exc:
                raise StorageError(f"Cannot lock {self._file_path}: {exc}") from exc
            try:
                yield
            finally:
                self._file_lock.release()

    def _ensure_file(self) -> None:
        # Checked under the file lock: another process may be creating it too.
        with self._locked():
            if not self._file_path.exists():
                self.persist([])
