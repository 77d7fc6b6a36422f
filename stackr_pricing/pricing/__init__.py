"""
Pricing Package

Leaf pricing components: tables, location/rate resolution, tier multipliers,
cost arithmetic, feature curation and descriptions.

The engine and the override command are imported from their modules
(stackr_pricing.pricing.engine, stackr_pricing.pricing.overrides) or from
the top-level package.
"""

from stackr_pricing.pricing.tables import PricingTables
from stackr_pricing.pricing.location import resolve_state
from stackr_pricing.pricing.rates import rates_for_state, resolve_rates
from stackr_pricing.pricing.tiers import (
    EXPERIENCE_MULTIPLIERS,
    max_margin_adjustment,
    tier_adjustment,
)
from stackr_pricing.pricing.costs import (
    MarginOutOfRangeError,
    TierCosts,
    calculate_tier_costs,
    effective_margin_percent,
    quantity_discount,
)
from stackr_pricing.pricing.features import (
    PRICE_THRESHOLDS,
    curate_features,
    dedupe,
)
from stackr_pricing.pricing.descriptions import describe_tier

__all__ = [
    "PricingTables",
    "resolve_state",
    "rates_for_state",
    "resolve_rates",
    "EXPERIENCE_MULTIPLIERS",
    "max_margin_adjustment",
    "tier_adjustment",
    "MarginOutOfRangeError",
    "TierCosts",
    "calculate_tier_costs",
    "effective_margin_percent",
    "quantity_discount",
    "PRICE_THRESHOLDS",
    "curate_features",
    "dedupe",
    "describe_tier",
]
