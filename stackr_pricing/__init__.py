"""
Stackr Pricing - Tiered Service Quote Engine

Prices a service job (locksmith call, brake service, haircut, ...) into three
packages - basic, standard and premium - from regional labor rates, state
materials tax, tier multipliers and a target profit margin.

DESIGN PRINCIPLES:
1. Pricing is a pure function of the request and the injected tables
2. Reject bad input before any arithmetic; never emit partial quotes
3. Unknown categories and locations price through documented fallbacks
4. Generated quotes are immutable; edits are explicit override commands
5. Every step of the quote flow is auditable
"""

__version__ = "1.0.0"
__author__ = "Stackr Team"

from stackr_pricing.models.quote import (
    MultiQuoteResult,
    QuoteOverride,
    QuoteTier,
    ServiceRequest,
    Tier,
)
from stackr_pricing.pricing.engine import QuotePricingEngine, price_request
from stackr_pricing.pricing.overrides import QuoteOverrideError, apply_override
from stackr_pricing.pricing.tables import PricingTables
from stackr_pricing.validation.validator import QuoteValidationError

__all__ = [
    "MultiQuoteResult",
    "QuoteOverride",
    "QuoteTier",
    "ServiceRequest",
    "Tier",
    "QuotePricingEngine",
    "price_request",
    "QuoteOverrideError",
    "apply_override",
    "PricingTables",
    "QuoteValidationError",
]
