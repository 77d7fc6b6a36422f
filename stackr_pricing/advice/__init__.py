"""Advisory text for generated quotes."""

from stackr_pricing.advice.recommendations import (
    OrderedSelection,
    QuoteAdvisor,
    SelectionStrategy,
    ShuffledSelection,
)

__all__ = [
    "OrderedSelection",
    "QuoteAdvisor",
    "SelectionStrategy",
    "ShuffledSelection",
]
