"""Domain-level exceptions.

Every failure a caller can observe is a subclass of DomainException.  Each
class carries a machine-readable ``code`` so the CLI layer can report errors
uniformly (``<code>: <message>``) without inspecting their types.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    code: str = "domain_error"


class ValidationError(DomainException):
    """Caller-supplied arguments violate a stated constraint."""

    code = "validation_error"


class NotFoundError(DomainException):
    """A referenced product does not exist."""

    code = "not_found"


class InsufficientStockError(DomainException):
    """A sell asked for more units than are in stock."""

    code = "insufficient_stock"

    def __init__(self, name: str, available: int, requested: int) -> None:
        self.name = name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for {name} "
            f"(requested {requested}, have {available} available)"
        )


class StorageError(DomainException):
    """The underlying record store failed a read or write."""

    code = "storage_error"


class UploadError(DomainException):
    """The blob store rejected or failed to store an upload."""

    code = "upload_error"


class LockTimeoutError(DomainException):
    """A product's critical section could not be entered in time."""

    code = "lock_timeout"
