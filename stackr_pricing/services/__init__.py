"""Services package."""

from stackr_pricing.services.storage import (
    AuditStorageInterface,
    DuplicateError,
    InMemoryAuditStorage,
    InMemoryQuoteStorage,
    NotFoundError,
    QuoteStorageInterface,
    StorageError,
)

__all__ = [
    "AuditStorageInterface",
    "DuplicateError",
    "InMemoryAuditStorage",
    "InMemoryQuoteStorage",
    "NotFoundError",
    "QuoteStorageInterface",
    "StorageError",
]
