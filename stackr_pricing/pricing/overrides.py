"""
Apply-override command for generated quotes.

A generated quote is never edited in place. Applying an override builds a
new QuoteTier and a new MultiQuoteResult around it; the caller decides
whether to persist the new record (as a full replace).

A price override moves the total only. Labor, materials, subtotal and tax
stay as priced, so the profit figures (derived from total) absorb the change.
"""

import structlog
from pydantic import ValidationError

from stackr_pricing.models.quote import (
    MultiQuoteResult,
    QuoteOverride,
    Tier,
)
from stackr_pricing.pricing.features import dedupe


logger = structlog.get_logger(__name__)


class QuoteOverrideError(ValueError):
    """Override refused: tier is locked or the new values break the ledger."""

    def __init__(self, tier: Tier, reason: str):
        self.tier = tier
        self.reason = reason
        super().__init__(f"Cannot override {tier.value} tier: {reason}")


def changed_fields(override: QuoteOverride) -> list[str]:
    fields = [
        name for name in ("total", "description", "features")
        if getattr(override, name) is not None
    ]
    if override.lock:
        fields.append("editable")
    return fields


def apply_override(
    result: MultiQuoteResult,
    tier: Tier,
    override: QuoteOverride,
) -> MultiQuoteResult:
    """
    Return a new quote with one tier's price, description or features replaced.

    Raises:
        QuoteOverrideError: If the tier is not editable or the new total
                            would not cover the materials tax
    """
    tier = Tier(tier)
    current = result.get_tier(tier)

    if not current.editable:
        raise QuoteOverrideError(tier, "tier is locked")

    updates = {"overridden": True}
    if override.total is not None:
        if override.total < current.materials_tax:
            raise QuoteOverrideError(
                tier,
                f"total ${override.total:.2f} is below the materials tax "
                f"${current.materials_tax:.2f}",
            )
        updates["total"] = override.total
    if override.description is not None:
        updates["description"] = override.description
    if override.features is not None:
        updates["features"] = dedupe(f.strip() for f in override.features if f.strip())
    if override.lock:
        updates["editable"] = False

    # model_copy skips validation, so rebuild to re-run the ledger checks
    try:
        new_tier = current.model_validate({
            **current.model_dump(exclude={
                "price_before_tax",
                "profit_amount",
                "actual_margin_percent",
                "profit_assessment",
            }),
            **updates,
        })
    except ValidationError as e:
        raise QuoteOverrideError(tier, str(e)) from e

    logger.info(
        "tier_override_applied",
        quote_id=str(result.quote_id),
        tier=tier.value,
        fields=changed_fields(override),
        new_total=round(new_tier.total, 2),
    )
    return result.with_tier(new_tier)
