"""
Quote Advisor

Produces short advisory strings for the professional reviewing a quote:
margin health, category-specific upsell ideas, entry-price and emergency
notes, and a heads-up when default rates were used.

DESIGN DECISION: Which strings are shown, and in what order, is an injected
SelectionStrategy. The default keeps the natural order so output is stable.
ShuffledSelection rotates the advice for variety; give it a seed to make
it reproducible.
"""

import random
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from stackr_pricing.models.quote import (
    CategoryClass,
    MultiQuoteResult,
    ProfitAssessment,
    Tier,
)
from stackr_pricing.pricing.features import PRICE_THRESHOLDS


# Realized margin above which we warn about pricing out of competitive bids
HIGH_MARGIN_PERCENT = 45.0

CATEGORY_ADVICE: dict[CategoryClass, str] = {
    CategoryClass.BEAUTY: (
        "Bundle take-home products into the standard and premium tiers "
        "to raise the average ticket."
    ),
    CategoryClass.ELECTRONICS: (
        "Offer a repair-plus-protection option with an extended warranty "
        "alongside the premium tier."
    ),
    CategoryClass.AUTOMOTIVE: (
        "Use a free multi-point inspection to surface follow-up maintenance work."
    ),
    CategoryClass.GENERAL: (
        "Packaged services with clear deliverables tend to close better "
        "than hourly billing."
    ),
}


class SelectionStrategy(ABC):
    """Chooses which advice strings to show and in what order."""

    @abstractmethod
    def select(self, items: Sequence[str]) -> list[str]:
        pass


class OrderedSelection(SelectionStrategy):
    """Keep the natural order, optionally truncated."""

    def __init__(self, limit: Optional[int] = None):
        self._limit = limit

    def select(self, items: Sequence[str]) -> list[str]:
        items = list(items)
        return items if self._limit is None else items[:self._limit]


class ShuffledSelection(SelectionStrategy):
    """
    Shuffle, then truncate.

    The generator is owned by the instance: two instances built with the
    same seed produce the same sequence of selections.
    """

    def __init__(self, seed: Optional[int] = None, limit: int = 3):
        self._random = random.Random(seed)
        self._limit = limit

    def select(self, items: Sequence[str]) -> list[str]:
        items = list(items)
        self._random.shuffle(items)
        return items[:self._limit]


class QuoteAdvisor:
    """Builds advisory text for one tier of a generated quote."""

    def __init__(self, strategy: Optional[SelectionStrategy] = None):
        self._strategy = strategy or OrderedSelection()

    def candidate_advice(
        self,
        result: MultiQuoteResult,
        tier: Tier = Tier.STANDARD,
    ) -> list[str]:
        """All applicable advice in natural order, before selection."""
        quote_tier = result.get_tier(tier)
        margin = quote_tier.actual_margin_percent
        advice = []

        if quote_tier.profit_assessment == ProfitAssessment.LOW:
            advice.append(
                f"Your {quote_tier.name.lower()} margin is only {margin:.1f}%. "
                "Consider raising the price or reducing materials cost."
            )
        elif quote_tier.profit_assessment == ProfitAssessment.ACCEPTABLE:
            advice.append(
                f"Your {quote_tier.name.lower()} margin of {margin:.1f}% is workable; "
                "a small price increase would move it into the healthy range."
            )
        elif margin > HIGH_MARGIN_PERCENT:
            advice.append(
                f"Your {quote_tier.name.lower()} margin of {margin:.1f}% is very high "
                "and may price you out of competitive bids. Consider adding value-adds."
            )

        advice.append(CATEGORY_ADVICE[result.category_class])

        entry_price = PRICE_THRESHOLDS[result.category_class].low
        if quote_tier.total < entry_price:
            advice.append(
                f"At ${quote_tier.total:.2f} this is below typical entry pricing "
                f"for {result.category_display_name}. Make sure travel and setup "
                "time are covered."
            )

        if result.emergency:
            advice.append(
                "Emergency pricing is applied to labor. State the surcharge "
                "clearly before starting work."
            )

        context = result.rate_context
        if not (context.location_resolved and context.rate_from_table and context.tax_from_table):
            advice.append(
                "Some rates came from defaults rather than local data. "
                "Double-check the price against your market."
            )

        return advice

    def advise(
        self,
        result: MultiQuoteResult,
        tier: Tier = Tier.STANDARD,
    ) -> list[str]:
        return self._strategy.select(self.candidate_advice(result, tier))
