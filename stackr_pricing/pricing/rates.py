"""
Rate Resolver

Combines the location resolver with the pricing tables to produce the
RateContext shared by all three tiers of a quote.

The three lookups (region, hourly rate, tax rate) are independent: an
unknown category still gets the real tax rate for a known state, and an
unknown state still gets a rate for a known category via the default region.
"""

import structlog

from stackr_pricing.models.quote import RateContext
from stackr_pricing.pricing.location import resolve_state
from stackr_pricing.pricing.tables import PricingTables


logger = structlog.get_logger(__name__)


def resolve_rates(
    service_category: str,
    location: str,
    tables: PricingTables,
) -> RateContext:
    """Resolve state, region, base hourly rate and tax rate for a request."""
    state, location_resolved = resolve_state(location, tables)
    return rates_for_state(service_category, state, tables, location_resolved)


def rates_for_state(
    service_category: str,
    state: str,
    tables: PricingTables,
    location_resolved: bool = True,
) -> RateContext:
    region = tables.state_regions.get(state, tables.default_region)

    category_rates = tables.hourly_rates.get(service_category, {})
    rate = category_rates.get(region)
    rate_from_table = rate is not None
    if not rate_from_table:
        logger.info(
            "hourly_rate_fallback",
            service_category=service_category,
            region=region.value,
            fallback_rate=tables.fallback_hourly_rate,
        )
        rate = tables.fallback_hourly_rate

    tax_rate = tables.tax_rates.get(state)
    tax_from_table = tax_rate is not None
    if not tax_from_table:
        logger.info("tax_rate_fallback", state=state, fallback_rate=tables.fallback_tax_rate)
        tax_rate = tables.fallback_tax_rate

    return RateContext(
        state=state,
        region=region,
        base_hourly_rate=rate,
        tax_rate=tax_rate,
        location_resolved=location_resolved,
        rate_from_table=rate_from_table,
        tax_from_table=tax_from_table,
    )
