"""
In-memory storage backends.

Used by the tests and as the default collaborator when no persistent
backend is configured. Quotes are immutable, so records are stored as-is.
"""

from typing import Optional
from uuid import UUID

import structlog

from stackr_pricing.models.audit import AuditEvent
from stackr_pricing.models.quote import MultiQuoteResult
from stackr_pricing.services.storage.interface import (
    AuditStorageInterface,
    DuplicateError,
    NotFoundError,
    QuoteStorageInterface,
)


logger = structlog.get_logger(__name__)


class InMemoryQuoteStorage(QuoteStorageInterface):
    """Quote history held in a dict keyed by quote ID."""

    def __init__(self):
        self._quotes: dict[UUID, MultiQuoteResult] = {}

    async def save_quote(self, quote: MultiQuoteResult) -> bool:
        if quote.quote_id in self._quotes:
            raise DuplicateError(f"Quote {quote.quote_id} already exists")
        self._quotes[quote.quote_id] = quote
        logger.debug("quote_stored", quote_id=str(quote.quote_id))
        return True

    async def get_quote(self, quote_id: UUID) -> Optional[MultiQuoteResult]:
        return self._quotes.get(quote_id)

    async def replace_quote(self, quote: MultiQuoteResult) -> bool:
        if quote.quote_id not in self._quotes:
            raise NotFoundError(f"Quote {quote.quote_id} not found")
        self._quotes[quote.quote_id] = quote
        logger.debug("quote_replaced", quote_id=str(quote.quote_id))
        return True

    async def delete_quote(self, quote_id: UUID) -> bool:
        return self._quotes.pop(quote_id, None) is not None

    async def list_quotes(
        self,
        owner_id: Optional[str] = None,
        service_category: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[MultiQuoteResult]:
        quotes = [
            q for q in self._quotes.values()
            if (owner_id is None or q.owner_id == owner_id)
            and (service_category is None or q.request.service_category == service_category)
        ]
        quotes.sort(key=lambda q: q.created_at, reverse=True)
        return quotes[offset:offset + limit]


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only list of audit events."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    @property
    def events(self) -> list[AuditEvent]:
        return list(self._events)

    async def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: UUID,
    ) -> list[AuditEvent]:
        return [
            e for e in self._events
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]

    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
