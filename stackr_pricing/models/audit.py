"""
Audit Models for Stackr Pricing

Every quote that is requested, priced, edited or saved leaves an audit trail.
This lets a user answer "why did this quote come out at that price?" and
"who changed the premium tier?" long after the fact.

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Pricing
    QUOTE_REQUESTED = "quote_requested"
    QUOTE_GENERATED = "quote_generated"
    PRICING_FALLBACK_USED = "pricing_fallback_used"

    # Validation
    VALIDATION_FAILED = "validation_failed"

    # User edits
    TIER_OVERRIDE_APPLIED = "tier_override_applied"
    TIER_OVERRIDE_REJECTED = "tier_override_rejected"

    # Persistence
    QUOTE_SAVED = "quote_saved"
    QUOTE_REPLACED = "quote_replaced"
    SAVE_FAILED = "save_failed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'quote', 'request')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., generate then save)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_code: Optional[str] = None
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }

    def to_row(self) -> list:
        """
        Convert to a flat row for tabular storage.

        Returns columns in order:
        [event_id, timestamp, event_type, severity, entity_type, entity_id,
         correlation_id, description, details_json, error_message, is_user_action]
        """
        return [
            str(self.event_id),
            self.timestamp.isoformat(),
            self.event_type.value,
            self.severity.value,
            self.entity_type or "",
            str(self.entity_id) if self.entity_id else "",
            str(self.correlation_id) if self.correlation_id else "",
            self.description,
            json.dumps(self.details) if self.details else "",
            self.error_message or "",
            str(self.is_user_action),
        ]


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.quote_generated(quote_id, category, totals, correlation_id)
        event = AuditEventBuilder.tier_override_applied(quote_id, "premium", fields, correlation_id)
    """

    @staticmethod
    def quote_requested(
        category: str,
        location: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.QUOTE_REQUESTED,
            entity_type="request",
            correlation_id=correlation_id,
            description=f"Quote requested: {category} in {location}",
            details={
                "service_category": category,
                "location": location,
            },
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(
        issues: list[dict],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="request",
            correlation_id=correlation_id,
            description=f"Quote request rejected with {len(issues)} issues",
            details={
                "issues": issues,
            },
        )

    @staticmethod
    def quote_generated(
        quote_id: UUID,
        category: str,
        totals: dict[str, float],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.QUOTE_GENERATED,
            entity_type="quote",
            entity_id=quote_id,
            correlation_id=correlation_id,
            description=f"Three-tier quote generated for {category}",
            details={
                "service_category": category,
                "totals": totals,
            },
        )

    @staticmethod
    def pricing_fallback_used(
        quote_id: UUID,
        fallbacks: list[str],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PRICING_FALLBACK_USED,
            severity=AuditSeverity.WARNING,
            entity_type="quote",
            entity_id=quote_id,
            correlation_id=correlation_id,
            description=f"Quote priced with default values for: {', '.join(fallbacks)}",
            details={
                "fallbacks": fallbacks,
            },
        )

    @staticmethod
    def tier_override_applied(
        quote_id: UUID,
        tier: str,
        changed_fields: list[str],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TIER_OVERRIDE_APPLIED,
            entity_type="quote",
            entity_id=quote_id,
            correlation_id=correlation_id,
            description=f"User edited {tier} tier: {', '.join(changed_fields)}",
            details={
                "tier": tier,
                "changed_fields": changed_fields,
            },
            is_user_action=True,
        )

    @staticmethod
    def tier_override_rejected(
        quote_id: UUID,
        tier: str,
        reason: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TIER_OVERRIDE_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="quote",
            entity_id=quote_id,
            correlation_id=correlation_id,
            description=f"Edit to {tier} tier rejected",
            error_message=reason,
            details={
                "tier": tier,
            },
            is_user_action=True,
        )

    @staticmethod
    def quote_saved(
        quote_id: UUID,
        owner_id: Optional[str],
        replaced: bool,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=(
                AuditEventType.QUOTE_REPLACED if replaced else AuditEventType.QUOTE_SAVED
            ),
            entity_type="quote",
            entity_id=quote_id,
            correlation_id=correlation_id,
            description="Quote record replaced" if replaced else "Quote saved to history",
            details={
                "owner_id": owner_id,
            },
        )

    @staticmethod
    def save_failed(
        quote_id: UUID,
        error_message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="quote",
            entity_id=quote_id,
            correlation_id=correlation_id,
            description="Quote could not be saved",
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
