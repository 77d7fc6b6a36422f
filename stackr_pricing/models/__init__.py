"""
Data Models Package

This package contains all Pydantic models used by the tiered quote engine.
All data flowing through the system must conform to these schemas.
"""

from stackr_pricing.models.quote import (
    CategoryClass,
    ExperienceLevel,
    InvoiceLineItem,
    MultiQuoteResult,
    ProfitAssessment,
    QuoteOverride,
    QuoteTier,
    RateContext,
    Region,
    ServiceRequest,
    Tier,
    TierAdjustment,
    ValidationIssue,
    ValidationResult,
)
from stackr_pricing.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Quote models
    "CategoryClass",
    "ExperienceLevel",
    "InvoiceLineItem",
    "MultiQuoteResult",
    "ProfitAssessment",
    "QuoteOverride",
    "QuoteTier",
    "RateContext",
    "Region",
    "ServiceRequest",
    "Tier",
    "TierAdjustment",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
