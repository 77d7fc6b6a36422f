"""
Tests for the quote assembler: full three-tier pricing of a request.
"""

import pytest

from stackr_pricing import price_request
from stackr_pricing.models.quote import (
    CategoryClass,
    ExperienceLevel,
    ProfitAssessment,
    QuoteTier,
    Tier,
    TierAdjustment,
)
from stackr_pricing.pricing.engine import QuotePricingEngine
from stackr_pricing.validation import QuoteValidationError


LEDGER_TOLERANCE = 1e-6


def ledger_tier(labor_cost, materials_cost, materials_tax, total):
    """A bare QuoteTier built straight from ledger figures."""
    return QuoteTier(
        tier=Tier.STANDARD,
        name="Standard",
        labor_hours=1,
        labor_rate=labor_cost,
        labor_cost=labor_cost,
        materials_cost=materials_cost,
        materials_tax=materials_tax,
        subtotal=labor_cost + materials_cost,
        total=total,
        target_margin_percent=25,
        adjustment=TierAdjustment(
            tier=Tier.STANDARD,
            labor_multiplier=1.0,
            rate_multiplier=1.0,
            material_multiplier=1.0,
            margin_adjustment_points=0,
        ),
    )


class TestLocksmithScenario:
    """Regression fixture: two-hour lock job in the default state (NY)."""

    def test_rate_context(self, engine, locksmith_request):
        """Test the shared rates come from the NY default."""
        result = engine.price_request(locksmith_request)
        assert result.rate_context.state == "NY"
        assert result.rate_context.region.value == "northeast"
        assert result.rate_context.base_hourly_rate == 95
        assert result.rate_context.tax_rate == pytest.approx(0.04)
        assert result.rate_context.location_resolved is False

    def test_standard_tier(self, engine, locksmith_request):
        """Test the standard tier ledger."""
        standard = engine.price_request(locksmith_request).standard
        assert standard.labor_rate == pytest.approx(95)
        assert standard.labor_cost == pytest.approx(190)
        assert standard.materials_cost == pytest.approx(50)
        assert standard.subtotal == pytest.approx(240)
        assert standard.materials_tax == pytest.approx(2)
        assert standard.price_before_tax == pytest.approx(320)
        assert standard.total == pytest.approx(322)
        assert standard.profit_amount == pytest.approx(80)
        assert standard.actual_margin_percent == pytest.approx(100 * 80 / 322)
        assert standard.profit_assessment == ProfitAssessment.ACCEPTABLE

    def test_basic_and_premium_tiers(self, engine, locksmith_request):
        """Test the other two tiers against hand-computed totals."""
        result = engine.price_request(locksmith_request)
        # 1.6h x $85.50 + $40 materials at 20% margin, plus $1.60 tax
        assert result.basic.total == pytest.approx(222.6)
        # 2.4h x $114 + $75 materials at 30% margin, plus $3 tax
        assert result.premium.total == pytest.approx(501.0)

    def test_tiers_in_display_order(self, engine, locksmith_request):
        """Test tiers come back basic, standard, premium."""
        result = engine.price_request(locksmith_request)
        assert [t.tier for t in result.tiers] == [Tier.BASIC, Tier.STANDARD, Tier.PREMIUM]
        assert [t.name for t in result.tiers] == ["Basic", "Standard", "Premium"]

    def test_metadata(self, engine, locksmith_request):
        """Test display names and shared request metadata."""
        result = engine.price_request(locksmith_request)
        assert result.category_display_name == "Locksmith"
        assert result.subcategory_display_name == "Lock Replacement"
        assert result.category_class == CategoryClass.GENERAL
        assert result.location == "12207"
        assert result.emergency is False

    def test_features_and_description(self, engine, locksmith_request):
        """Test the standard tier's curated features and prose."""
        standard = engine.price_request(locksmith_request).standard
        assert standard.features == (
            "Priority service call",
            "Commercial-grade lock hardware",
            "90-day workmanship warranty",
            "Key duplication included",
            "Follow-up satisfaction check",
        )
        assert "commercial-grade hardware" in standard.description

    def test_tiers_are_editable(self, engine, locksmith_request):
        """Test generated tiers accept overrides by default."""
        result = engine.price_request(locksmith_request)
        assert all(t.editable and not t.overridden for t in result.tiers)


class TestLedger:
    """Ledger invariants across many requests."""

    @pytest.mark.parametrize("category", [
        "plumbing", "locksmith", "hair_stylist", "computer_repair",
        "brake_service", "landscaping",
    ])
    @pytest.mark.parametrize("experience", list(ExperienceLevel))
    @pytest.mark.parametrize("emergency", [False, True])
    def test_ledger_holds_for_every_tier(self, engine, make_request, category, experience, emergency):
        """Test subtotal, profit and tax always add up to the total."""
        request = make_request(
            service_category=category,
            experience_level=experience,
            emergency=emergency,
            quantity=3,
            materials_cost=65.5,
            target_margin_percent=30,
        )
        for tier in engine.price_request(request).tiers:
            assert abs(tier.subtotal - (tier.labor_cost + tier.materials_cost)) < LEDGER_TOLERANCE
            assert abs(tier.total - (tier.subtotal + tier.profit_amount + tier.materials_tax)) < LEDGER_TOLERANCE
            margin = tier.target_margin_percent / 100
            assert abs(tier.price_before_tax * (1 - margin) - tier.subtotal) < LEDGER_TOLERANCE

    def test_margin_inversion_without_tax(self, small_tables, make_request):
        """Test $100 subtotal at 25% with no tax prices at $133.33 and 25% margin."""
        engine = QuotePricingEngine(small_tables)
        request = make_request(
            service_category="handyman",
            location="Portland, OR",
            labor_hours=1,
            materials_cost=0,
            target_margin_percent=25,
        )
        standard = engine.price_request(request).standard
        assert standard.subtotal == pytest.approx(100)
        assert standard.price_before_tax == pytest.approx(133.33, abs=0.005)
        assert standard.total == pytest.approx(133.33, abs=0.005)
        assert standard.actual_margin_percent == pytest.approx(25.0)
        # 25.000000000000007 after the inversion; still the lower band
        assert standard.profit_assessment == ProfitAssessment.ACCEPTABLE

    def test_tax_dilutes_realized_margin(self):
        """Test $100 of taxed materials at 25% realizes less than 25%."""
        tier = ledger_tier(
            labor_cost=0,
            materials_cost=100,
            materials_tax=6,
            total=100 / 0.75 + 6,
        )
        assert tier.total == pytest.approx(139.33, abs=0.005)
        assert tier.actual_margin_percent < 25

    def test_tax_dilution_through_engine(self, small_tables, make_request):
        """Test the same dilution when pricing a real request."""
        engine = QuotePricingEngine(small_tables)
        request = make_request(
            service_category="handyman",
            location="Seattle, WA",
            labor_hours=1,
            materials_cost=100,
            target_margin_percent=25,
        )
        standard = engine.price_request(request).standard
        assert standard.materials_tax == pytest.approx(6)
        assert standard.actual_margin_percent < 25

    def test_emergency_is_exactly_one_and_a_half(self, engine, make_request):
        """Test emergency labor cost is 1.5x, all else equal."""
        normal = engine.price_request(make_request())
        urgent = engine.price_request(make_request(emergency=True))
        for n, u in zip(normal.tiers, urgent.tiers):
            assert u.labor_cost == pytest.approx(1.5 * n.labor_cost)
            assert u.materials_cost == pytest.approx(n.materials_cost)

    def test_negative_basic_margin_prices_below_subtotal(self, engine, make_request):
        """Test a 2% target minus the basic tier's 5 points inverts at -3%."""
        basic = engine.price_request(make_request(target_margin_percent=2)).basic
        assert basic.target_margin_percent == -3
        assert basic.price_before_tax == pytest.approx(basic.subtotal / 1.03)
        assert basic.profit_amount < 0
        assert basic.profit_assessment == ProfitAssessment.LOW


class TestFallbacksAndRejection:
    """Fallbacks never raise; invalid input is rejected before pricing."""

    def test_unknown_category_prices_at_default_rate(self, engine, make_request):
        """Test an unknown category yields a full quote at $85/hour."""
        result = engine.price_request(make_request(service_category="dog_walking"))
        assert result.rate_context.base_hourly_rate == 85
        assert result.standard.labor_rate == pytest.approx(85)

    def test_missing_quantity_rejected(self, engine, make_request):
        """Test quantity-bearing categories require a quantity."""
        with pytest.raises(QuoteValidationError) as exc_info:
            engine.price_request(make_request(service_category="cellphone_repair"))
        assert [i.field for i in exc_info.value.issues if i.severity == "error"] == ["quantity"]

    def test_margin_reaching_100_after_bump_rejected(self, engine, make_request):
        """Test 96% + the premium bump is refused, not priced at infinity."""
        with pytest.raises(QuoteValidationError):
            engine.price_request(make_request(target_margin_percent=96))

    def test_module_level_price_request(self, tables, locksmith_request):
        """Test the convenience function matches the engine."""
        result = price_request(locksmith_request, tables)
        assert result.standard.total == pytest.approx(322)

    def test_supplied_validation_with_errors_rejected(self, engine, make_request):
        """Test a prior validation result carrying errors is honored."""
        request = make_request(service_category="cellphone_repair")
        validation = engine.validator.validate(request)
        with pytest.raises(QuoteValidationError):
            engine.price_request(request, validation=validation)

    def test_supplied_validation_is_reused(self, engine, locksmith_request):
        """Test a clean prior validation result prices without revalidating."""
        validation = engine.validator.validate(locksmith_request)
        result = engine.price_request(locksmith_request, validation=validation)
        assert result.standard.total == pytest.approx(322)


class TestExports:
    """Flat records and invoice lines."""

    def test_to_records(self, engine, locksmith_request):
        """Test one flat record per tier carrying the shared metadata."""
        result = engine.price_request(locksmith_request)
        records = result.to_records()
        assert [r["tier"] for r in records] == ["basic", "standard", "premium"]
        assert all(r["quote_id"] == str(result.quote_id) for r in records)
        assert records[1]["total"] == 322.0
        assert records[1]["profit_amount"] == 80.0
        assert records[1]["state"] == "NY"

    def test_invoice_lines_sum_to_total(self, engine, locksmith_request):
        """Test labor, materials, margin and tax lines add up to the tier total."""
        result = engine.price_request(locksmith_request)
        lines = result.to_invoice_line_items(Tier.STANDARD)
        assert [line.kind for line in lines] == ["labor", "materials", "margin", "tax"]
        assert sum(line.amount for line in lines) == pytest.approx(322)
        assert lines[1].description == "Materials"
        assert lines[3].description == "Sales tax on materials (NY)"

    def test_invoice_materials_label_by_class(self, engine, make_request):
        """Test automotive materials are labelled as parts and fluids."""
        result = engine.price_request(make_request(service_category="brake_service"))
        lines = result.to_invoice_line_items(Tier.BASIC)
        assert lines[1].description == "Parts & fluids"

    def test_invoice_skips_empty_materials(self, engine, make_request):
        """Test a labor-only job has no materials or tax lines."""
        result = engine.price_request(make_request(materials_cost=0))
        kinds = [line.kind for line in result.to_invoice_line_items(Tier.PREMIUM)]
        assert kinds == ["labor", "margin"]
