"""Per-key mutual exclusion for in-process callers.

Each key gets its own ``threading.Lock``, created the first time somebody
asks for it and dropped again as soon as nobody holds or waits for it, so
the table only ever contains keys that are currently contended.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

from stockroom.domain.exceptions import LockTimeoutError


@dataclass
class _Entry:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0  # holders + waiters


class KeyLockTable:

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[str, _Entry] = {}

    @contextmanager
    def hold(self, key: str, timeout: float | None = None) -> Iterator[None]:
        """Run the ``with`` block while holding the lock for *key*.

        ``timeout=None`` waits forever; otherwise LockTimeoutError is raised
        if the lock is not acquired within *timeout* seconds.
        """
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.users += 1

        try:
            acquired = entry.lock.acquire(timeout=-1 if timeout is None else timeout)
            if not acquired:
                raise LockTimeoutError(
                    f"Failed to acquire lock for '{key}' within {timeout}s"
                )
            try:
                yield
            finally:
                entry.lock.release()
        finally:
            with self._guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._entries[key]

    def __len__(self) -> int:
        """Number of keys currently held or waited on."""
        with self._guard:
            return len(self._entries)
