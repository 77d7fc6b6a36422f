"""
Audit Logger

DESIGN DECISION: Every significant step of the quote flow is logged:
request, validation failure, pricing, fallbacks, overrides and saves.
A user can always answer "why is this quote priced like that?"

The audit logger:
- Is async so it composes with the async quote flow
- Gracefully handles failures (a broken audit store never fails a quote)
- Supports correlation IDs to trace related events
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from stackr_pricing.config import get_settings
from stackr_pricing.models.audit import AuditEvent, AuditEventBuilder
from stackr_pricing.services.storage import AuditStorageInterface


def configure_logging(log_level: Optional[str] = None) -> None:
    """Configure structlog for JSON output through stdlib logging."""
    level = log_level or get_settings().app.log_level
    logging.basicConfig(format="%(message)s", level=getattr(logging, level))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit store (for persistence and user visibility), if configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger(__name__)

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return await self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    async def log_quote_requested(
        self,
        category: str,
        location: str,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.quote_requested(
            category=category,
            location=location,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_validation_failed(
        self,
        issues: list[dict],
        correlation_id: UUID,
    ) -> None:
        """Log request rejection."""
        event = AuditEventBuilder.validation_failed(
            issues=issues,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_quote_generated(
        self,
        quote_id: UUID,
        category: str,
        totals: dict[str, float],
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.quote_generated(
            quote_id=quote_id,
            category=category,
            totals=totals,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_pricing_fallback(
        self,
        quote_id: UUID,
        fallbacks: list[str],
        correlation_id: UUID,
    ) -> None:
        """Log that a quote was priced with default rates or location."""
        event = AuditEventBuilder.pricing_fallback_used(
            quote_id=quote_id,
            fallbacks=fallbacks,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_override_applied(
        self,
        quote_id: UUID,
        tier: str,
        changed_fields: list[str],
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.tier_override_applied(
            quote_id=quote_id,
            tier=tier,
            changed_fields=changed_fields,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_override_rejected(
        self,
        quote_id: UUID,
        tier: str,
        reason: str,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.tier_override_rejected(
            quote_id=quote_id,
            tier=tier,
            reason=reason,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_quote_saved(
        self,
        quote_id: UUID,
        owner_id: Optional[str],
        replaced: bool,
        correlation_id: UUID,
    ) -> None:
        """Log quote save (or full replace after an override)."""
        event = AuditEventBuilder.quote_saved(
            quote_id=quote_id,
            owner_id=owner_id,
            replaced=replaced,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_save_failed(
        self,
        quote_id: UUID,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.save_failed(
            quote_id=quote_id,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        await self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., requesting a quote).
    Pass it through all subsequent operations.
    """
    return uuid4()
