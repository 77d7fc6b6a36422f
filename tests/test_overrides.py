"""
Tests for user overrides on generated tiers.
"""

import pytest
from pydantic import ValidationError

from stackr_pricing.models.quote import QuoteOverride, Tier
from stackr_pricing.pricing.overrides import (
    QuoteOverrideError,
    apply_override,
    changed_fields,
)


@pytest.fixture
def quote(engine, locksmith_request):
    return engine.price_request(locksmith_request)


class TestApplyOverride:
    """Tests for apply_override."""

    def test_price_override_recomputes_profit(self, quote):
        """Test a new total flows through profit and margin, not labor or tax."""
        updated = apply_override(quote, Tier.STANDARD, QuoteOverride(total=350))
        standard = updated.standard
        assert standard.total == 350
        assert standard.overridden is True
        assert standard.subtotal == pytest.approx(240)
        assert standard.materials_tax == pytest.approx(2)
        assert standard.profit_amount == pytest.approx(108)
        assert standard.actual_margin_percent == pytest.approx(100 * 108 / 350)

    def test_original_quote_untouched(self, quote):
        """Test overrides build a new quote instead of mutating."""
        apply_override(quote, Tier.STANDARD, QuoteOverride(total=350))
        assert quote.standard.total == pytest.approx(322)
        assert quote.standard.overridden is False

    def test_other_tiers_and_identity_kept(self, quote):
        """Test only the named tier changes."""
        updated = apply_override(quote, Tier.BASIC, QuoteOverride(description="Quick fix"))
        assert updated.quote_id == quote.quote_id
        assert updated.basic.description == "Quick fix"
        assert updated.standard == quote.standard
        assert updated.premium == quote.premium

    def test_price_cut_can_drop_to_low_band(self, quote):
        """Test a steep discount is allowed and assessed as low margin."""
        updated = apply_override(quote, Tier.STANDARD, QuoteOverride(total=250))
        assert updated.standard.profit_assessment.value == "low"

    def test_total_below_tax_rejected(self, quote):
        """Test a total that doesn't cover the materials tax is refused."""
        with pytest.raises(QuoteOverrideError) as exc_info:
            apply_override(quote, Tier.STANDARD, QuoteOverride(total=1.0))
        assert exc_info.value.tier == Tier.STANDARD
        assert "materials tax" in exc_info.value.reason

    def test_features_deduped_and_stripped(self, quote):
        """Test edited feature lists keep first occurrence order and drop blanks."""
        override = QuoteOverride(features=[" Same-day visit ", "Warranty", "", "Same-day visit"])
        updated = apply_override(quote, Tier.PREMIUM, override)
        assert updated.premium.features == ("Same-day visit", "Warranty")

    def test_lock_then_edit_rejected(self, quote):
        """Test a locked tier refuses further edits."""
        locked = apply_override(quote, Tier.PREMIUM, QuoteOverride(lock=True))
        assert locked.premium.editable is False
        with pytest.raises(QuoteOverrideError, match="locked"):
            apply_override(locked, Tier.PREMIUM, QuoteOverride(total=600))

    def test_accepts_tier_value(self, quote):
        """Test the tier can be named by its string value."""
        updated = apply_override(quote, "basic", QuoteOverride(total=230))
        assert updated.basic.total == 230


class TestQuoteOverrideModel:
    """Tests for the override payload itself."""

    def test_empty_override_rejected(self):
        with pytest.raises(ValidationError):
            QuoteOverride()

    def test_non_positive_total_rejected(self):
        with pytest.raises(ValidationError):
            QuoteOverride(total=0)

    def test_changed_fields(self):
        override = QuoteOverride(total=100, features=["a"], lock=True)
        assert changed_fields(override) == ["total", "features", "editable"]
