"""
Abstract Storage Interface

DESIGN DECISION: Quote history lives behind an abstract interface.
The pricing core never touches storage; the quote flow hands finished
quotes to whatever backend is configured. This allows us to:
1. Plug in a real database later
2. Use in-memory storage for testing
3. Keep pricing logic decoupled from persistence

Saving an edited quote is a FULL REPLACE of the stored record, never a
field-level patch. Two concurrent edits can't interleave into a record
that neither of them produced.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from stackr_pricing.models.audit import AuditEvent
from stackr_pricing.models.quote import MultiQuoteResult


class QuoteStorageInterface(ABC):
    """
    Abstract interface for quote history storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    async def save_quote(self, quote: MultiQuoteResult) -> bool:
        """
        Save a newly generated quote.

        Args:
            quote: The quote to save

        Returns:
            True if saved successfully

        Raises:
            DuplicateError: If a quote with the same ID already exists
            StorageError: If save fails
        """
        pass

    @abstractmethod
    async def get_quote(self, quote_id: UUID) -> Optional[MultiQuoteResult]:
        """
        Retrieve a quote by its ID.

        Returns:
            The quote if found, None otherwise
        """
        pass

    @abstractmethod
    async def replace_quote(self, quote: MultiQuoteResult) -> bool:
        """
        Replace a stored quote with a new version (all three tiers).

        Raises:
            NotFoundError: If the quote doesn't exist
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def delete_quote(self, quote_id: UUID) -> bool:
        """
        Delete a quote by ID.

        Returns:
            True if a quote was deleted
        """
        pass

    @abstractmethod
    async def list_quotes(
        self,
        owner_id: Optional[str] = None,
        service_category: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[MultiQuoteResult]:
        """
        List quotes, newest first, with optional filters.

        Args:
            owner_id: Only quotes belonging to this user
            service_category: Only quotes for this category key
            limit: Maximum number of results
            offset: Number of results to skip
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a correlation ID (e.g., one generate-and-save flow).

        Returns:
            List of related events in chronological order
        """
        pass

    @abstractmethod
    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a specific entity.

        Args:
            entity_type: Type of entity (e.g., 'quote')
            entity_id: The entity's ID
        """
        pass

    @abstractmethod
    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events (newest first).
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass
