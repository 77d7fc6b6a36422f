"""
Tests for feature curation and tier descriptions.
"""

import pytest

from stackr_pricing.models.quote import CategoryClass, ExperienceLevel, Tier
from stackr_pricing.pricing.descriptions import describe_tier
from stackr_pricing.pricing.features import (
    BULK_EFFICIENCY_FEATURE,
    GENERIC_BASE_FEATURES,
    SECOND_UNIT_FEATURE,
    SENIOR_FEATURE,
    base_features,
    curate_features,
    dedupe,
    price_features,
    quantity_features,
)


class TestBaseFeatures:
    """Tests for the three fallback layers of base features."""

    def test_class_list_wins(self):
        """Test a classified category uses its class list."""
        features = base_features(Tier.BASIC, "hair_stylist", CategoryClass.BEAUTY)
        assert features[0] == "30-minute appointment"

    def test_specific_category_list(self):
        """Test an unclassified category with its own list uses it."""
        features = base_features(Tier.PREMIUM, "plumbing", CategoryClass.GENERAL)
        assert "365-day leak-free guarantee" in features

    def test_generic_fallback(self):
        """Test anything else gets the generic tier list."""
        features = base_features(Tier.STANDARD, "landscaping", CategoryClass.GENERAL)
        assert features == GENERIC_BASE_FEATURES[Tier.STANDARD]

    def test_returns_a_copy(self):
        """Test callers can't mutate the shared tables."""
        features = base_features(Tier.BASIC, "landscaping", CategoryClass.GENERAL)
        features.append("extra")
        assert "extra" not in GENERIC_BASE_FEATURES[Tier.BASIC]


class TestPriceFeatures:
    """Tests for price-threshold features."""

    def test_below_mid_adds_nothing(self):
        assert price_features(99.99, CategoryClass.BEAUTY) == []

    def test_mid_threshold_is_inclusive(self):
        """Test a total exactly at the mid threshold earns one feature."""
        assert len(price_features(100.0, CategoryClass.BEAUTY)) == 1

    def test_high_threshold_adds_two(self):
        """Test a total at or above the high threshold earns two features."""
        features = price_features(800.0, CategoryClass.AUTOMOTIVE)
        assert features == [
            "Courtesy vehicle or shuttle service",
            "Extended parts and labor warranty",
        ]


class TestQuantityFeatures:
    """Tests for multi-unit features."""

    @pytest.mark.parametrize("quantity,expected", [
        (1, []),
        (2, [SECOND_UNIT_FEATURE]),
        (3, ["Multi-unit discount: 15% off materials"]),
        (4, ["Multi-unit discount: 20% off materials"]),
        (5, ["Multi-unit discount: 25% off materials", BULK_EFFICIENCY_FEATURE]),
        (50, ["Multi-unit discount: 25% off materials", BULK_EFFICIENCY_FEATURE]),
    ])
    def test_quantity_features(self, quantity, expected):
        assert quantity_features(quantity) == expected

    def test_non_bearing_category_ignores_quantity(self):
        """Test quantity features only appear for quantity-bearing categories."""
        features = curate_features(
            Tier.BASIC, "plumbing", CategoryClass.GENERAL,
            total=50, experience_level=ExperienceLevel.INTERMEDIATE,
            quantity=10, quantity_bearing=False,
        )
        assert BULK_EFFICIENCY_FEATURE not in features


class TestCurateFeatures:
    """Tests for the combined, deduplicated feature list."""

    def test_source_order(self):
        """Test base, price, experience, then quantity features."""
        features = curate_features(
            Tier.STANDARD, "computer_repair", CategoryClass.ELECTRONICS,
            total=250, experience_level=ExperienceLevel.EXPERT,
            quantity=3, quantity_bearing=True,
        )
        assert features[-3:] == (
            "Free diagnostic re-check within 30 days",
            "Certified master technician",
            "Multi-unit discount: 15% off materials",
        )
        assert features[0] == "Thorough diagnostics and testing"

    def test_senior_feature(self):
        features = curate_features(
            Tier.BASIC, "landscaping", CategoryClass.GENERAL,
            total=10, experience_level=ExperienceLevel.SENIOR,
        )
        assert features[-1] == SENIOR_FEATURE

    def test_duplicate_string_appears_once(self):
        """Test a base feature repeated by the price threshold is kept once, first position."""
        features = curate_features(
            Tier.PREMIUM, "landscaping", CategoryClass.GENERAL,
            total=1000, experience_level=ExperienceLevel.INTERMEDIATE,
        )
        assert features.count("Priority scheduling and service") == 1
        assert features.index("Priority scheduling and service") == 4
        assert features[-1] == "Extended satisfaction guarantee"
        assert len(features) == len(GENERIC_BASE_FEATURES[Tier.PREMIUM]) + 1

    def test_dedupe_preserves_first_seen_order(self):
        assert dedupe(["b", "a", "b", "c", "a"]) == ("b", "a", "c")

    def test_dedupe_is_exact_match(self):
        """Test near-duplicates differing in case are both kept."""
        assert dedupe(["Warranty", "warranty"]) == ("Warranty", "warranty")

    def test_engine_dedupes_premium_features(self, engine, make_request):
        """Test the engine output for a high-priced generic premium tier."""
        request = make_request(
            service_category="landscaping",
            labor_hours=10,
            materials_cost=0,
        )
        premium = engine.price_request(request).premium
        assert premium.total >= 600
        assert premium.features.count("Priority scheduling and service") == 1


class TestDescriptions:
    """Tests for tier prose lookup."""

    def test_category_specific(self):
        assert describe_tier(Tier.PREMIUM, "brake_service", CategoryClass.AUTOMOTIVE) == (
            "Premium brake service with ceramic pads and a 1-year warranty."
        )

    def test_class_default(self):
        assert describe_tier(Tier.BASIC, "tv_repair", CategoryClass.ELECTRONICS) == (
            "Standard diagnosis and repair with compatible parts."
        )

    def test_generic_default(self):
        assert describe_tier(Tier.STANDARD, "landscaping", CategoryClass.GENERAL).startswith(
            "Standard service package"
        )
