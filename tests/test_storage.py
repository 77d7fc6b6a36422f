"""
Tests for the in-memory quote and audit storage backends.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from stackr_pricing.models.audit import AuditEventBuilder, AuditEventType
from stackr_pricing.services.storage import (
    DuplicateError,
    InMemoryAuditStorage,
    InMemoryQuoteStorage,
    NotFoundError,
)


@pytest.fixture
def storage():
    return InMemoryQuoteStorage()


@pytest.fixture
def quote(engine, locksmith_request):
    return engine.price_request(locksmith_request, owner_id="user-1")


class TestInMemoryQuoteStorage:
    """Tests for quote history storage."""

    @pytest.mark.asyncio
    async def test_save_and_get(self, storage, quote):
        assert await storage.save_quote(quote) is True
        assert await storage.get_quote(quote.quote_id) == quote

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, storage):
        assert await storage.get_quote(uuid4()) is None

    @pytest.mark.asyncio
    async def test_duplicate_save_rejected(self, storage, quote):
        """Test saving the same quote twice raises instead of overwriting."""
        await storage.save_quote(quote)
        with pytest.raises(DuplicateError):
            await storage.save_quote(quote)

    @pytest.mark.asyncio
    async def test_replace_missing_rejected(self, storage, quote):
        with pytest.raises(NotFoundError):
            await storage.replace_quote(quote)

    @pytest.mark.asyncio
    async def test_replace_is_full_record(self, storage, quote):
        """Test replace stores the new record in place of the old one."""
        await storage.save_quote(quote)
        edited = quote.model_copy(update={"owner_id": "user-2"})
        await storage.replace_quote(edited)
        stored = await storage.get_quote(quote.quote_id)
        assert stored.owner_id == "user-2"

    @pytest.mark.asyncio
    async def test_delete(self, storage, quote):
        await storage.save_quote(quote)
        assert await storage.delete_quote(quote.quote_id) is True
        assert await storage.delete_quote(quote.quote_id) is False

    @pytest.mark.asyncio
    async def test_list_newest_first_with_filters(self, storage, engine, make_request):
        """Test listing order, owner and category filters, and paging."""
        now = datetime.now(timezone.utc)
        plumbing = engine.price_request(make_request(), owner_id="a")
        hvac = engine.price_request(make_request(service_category="hvac"), owner_id="a")
        other = engine.price_request(make_request(), owner_id="b")
        for offset, q in enumerate([plumbing, hvac, other]):
            await storage.save_quote(
                q.model_copy(update={"created_at": now + timedelta(minutes=offset)})
            )

        owned = await storage.list_quotes(owner_id="a")
        assert [q.quote_id for q in owned] == [hvac.quote_id, plumbing.quote_id]

        by_category = await storage.list_quotes(service_category="plumbing")
        assert {q.quote_id for q in by_category} == {plumbing.quote_id, other.quote_id}

        page = await storage.list_quotes(limit=1, offset=1)
        assert [q.quote_id for q in page] == [hvac.quote_id]


class TestInMemoryAuditStorage:
    """Tests for the append-only audit store."""

    @pytest.mark.asyncio
    async def test_queries(self):
        storage = InMemoryAuditStorage()
        correlation_id = uuid4()
        quote_id = uuid4()
        events = [
            AuditEventBuilder.quote_requested("plumbing", "Albany, NY", correlation_id),
            AuditEventBuilder.quote_generated(quote_id, "plumbing", {"basic": 100.0}, correlation_id),
            AuditEventBuilder.quote_saved(quote_id, None, False, uuid4()),
        ]
        for event in events:
            await storage.append_event(event)

        related = await storage.get_events_by_correlation_id(correlation_id)
        assert [e.event_type for e in related] == [
            AuditEventType.QUOTE_REQUESTED,
            AuditEventType.QUOTE_GENERATED,
        ]

        about_quote = await storage.get_events_by_entity("quote", quote_id)
        assert len(about_quote) == 2

        recent = await storage.get_recent_events(limit=2)
        assert [e.event_type for e in recent] == [
            AuditEventType.QUOTE_SAVED,
            AuditEventType.QUOTE_GENERATED,
        ]
        assert len(storage.events) == 3
