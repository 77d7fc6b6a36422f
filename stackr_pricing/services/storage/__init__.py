"""
Storage Services Package

Provides abstract interfaces for quote history and audit storage, plus
in-memory implementations. Designed so a persistent backend can be swapped in.
"""

from stackr_pricing.services.storage.interface import (
    AuditStorageInterface,
    DuplicateError,
    NotFoundError,
    QuoteStorageInterface,
    StorageError,
)
from stackr_pricing.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryQuoteStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "QuoteStorageInterface",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryQuoteStorage",
]
