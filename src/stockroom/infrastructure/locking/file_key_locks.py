"""Per-key locks that also hold across processes.

Each CLI command is its own process, so the in-process ``KeyLockTable``
alone cannot keep two ``sell`` commands on one product apart.  Here the
in-process lock is taken first, then a ``filelock.FileLock`` on
``<locks_dir>/<digest>.lock`` for the key.  Lock files are named by a
BLAKE2b digest so any product name maps to a safe file name.
"""

from __future__ import annotations

import hashlib
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from filelock import FileLock, Timeout

from stockroom.domain.exceptions import LockTimeoutError, StorageError
from stockroom.domain.service.key_locks import KeyLockTable


def key_to_filename(key: str) -> str:
    digest = hashlib.blake2b(key.encode("utf-8"), digest_size=16).hexdigest()
    return f"{digest}.lock"


class FileKeyLockTable(KeyLockTable):

    def __init__(self, locks_dir: Path) -> None:
        super().__init__()
        self._locks_dir = locks_dir
        try:
            locks_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create lock directory {locks_dir}: {exc}") from exc

    @contextmanager
    def hold(self, key: str, timeout: float | None = None) -> Iterator[None]:
        deadline = None if timeout is None else time.monotonic() + timeout
        with super().hold(key, timeout):
            remaining = -1 if deadline is None else max(0.0, deadline - time.monotonic())
            file_lock = FileLock(str(self._locks_dir / key_to_filename(key)))
            try:
                file_lock.acquire(timeout=remaining)
            except Timeout as exc:
                raise LockTimeoutError(
                    f"Failed to acquire lock for '{key}' within {timeout}s"
                ) from exc
            except OSError as exc:
                raise StorageError(f"Cannot lock '{key}': {exc}") from exc
            try:
                yield
            finally:
                file_lock.release()
