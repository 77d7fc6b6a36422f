"""Shared fixtures for Stackr Pricing tests."""

import pytest

from stackr_pricing.config import PricingSettings
from stackr_pricing.models.quote import ExperienceLevel, Region, ServiceRequest
from stackr_pricing.pricing.engine import QuotePricingEngine
from stackr_pricing.pricing.tables import PricingTables


@pytest.fixture
def pricing_settings():
    """Settings with the documented defaults, ignoring any local .env."""
    return PricingSettings(_env_file=None)


@pytest.fixture
def tables(pricing_settings):
    """The built-in reference tables."""
    return PricingTables.builtin(pricing_settings)


@pytest.fixture
def small_tables():
    """
    A tiny fixture table: one category at $100/hour.

    OR has no sales tax, WA taxes materials at 6%.
    """
    return PricingTables(
        version="fixture",
        hourly_rates={"handyman": {Region.WEST: 100.0}},
        tax_rates={"OR": 0.0, "WA": 0.06},
        state_regions={"OR": Region.WEST, "WA": Region.WEST},
        state_names={"OREGON": "OR", "WASHINGTON": "WA"},
        default_state="OR",
        default_region=Region.WEST,
    )


@pytest.fixture
def engine(tables):
    return QuotePricingEngine(tables)


@pytest.fixture
def locksmith_request():
    """Two-hour lock job with $50 of hardware and a 25% target margin."""
    return ServiceRequest(
        service_category="locksmith",
        service_subcategory="lock_replacement",
        location="12207",
        experience_level=ExperienceLevel.INTERMEDIATE,
        labor_hours=2,
        quantity=1,
        materials_cost=50,
        target_margin_percent=25,
    )


def build_request(**overrides) -> ServiceRequest:
    """Build a ServiceRequest with sensible defaults."""
    data = {
        "service_category": "plumbing",
        "service_subcategory": "leak_repair",
        "location": "Albany, NY",
        "experience_level": ExperienceLevel.INTERMEDIATE,
        "labor_hours": 2,
        "materials_cost": 40,
        "target_margin_percent": 25,
    }
    data.update(overrides)
    return ServiceRequest(**data)


@pytest.fixture
def make_request():
    """Factory fixture: make_request(labor_hours=3, emergency=True, ...)."""
    return build_request
