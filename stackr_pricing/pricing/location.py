"""
Location Resolver

Turns a free-text location into a two-letter state code.

Accepted forms:
    "Albany, NY"          -> "NY"
    "Albany, New York"    -> "NY"
    "Austin, TX, USA"     -> "TX"   (second comma-separated segment)
    "12207" / "somewhere" -> configured default state

DESIGN DECISION: This never raises. Every downstream table is keyed by state,
so an unresolvable location silently resolves to the configured default.
The second element of the returned tuple tells callers whether that happened
so they can warn the user.
"""

import structlog

from stackr_pricing.pricing.tables import PricingTables


logger = structlog.get_logger(__name__)


def resolve_state(location: str, tables: PricingTables) -> tuple[str, bool]:
    """
    Resolve a location string to a state code.

    Returns:
        (state_code, resolved) - resolved is False when the default was used
    """
    if location and "," in location:
        candidate = location.split(",")[1].strip().upper()

        if len(candidate) == 2 and candidate in tables.state_regions:
            return candidate, True

        code = tables.state_names.get(candidate)
        if code:
            return code, True

    logger.info(
        "location_unresolved",
        location=location,
        default_state=tables.default_state,
    )
    return tables.default_state, False
