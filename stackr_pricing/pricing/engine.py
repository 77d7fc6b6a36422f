"""
Quote Assembler

DESIGN DECISION: The engine is a pure, synchronous function of the request
and the injected PricingTables. It holds no per-request state, does no I/O
and needs no locking, so one instance can serve concurrent callers.

Flow:
    ServiceRequest
      -> validation (rejects before any arithmetic)
      -> resolve_rates (shared RateContext)
      -> per tier: tier_adjustment -> calculate_tier_costs
                   -> curate_features -> describe_tier
      -> MultiQuoteResult

The three tiers never read each other's results.
"""

from typing import Optional

import structlog

from stackr_pricing.models.quote import (
    CategoryClass,
    MultiQuoteResult,
    QuoteTier,
    RateContext,
    ServiceRequest,
    Tier,
    ValidationResult,
)
from stackr_pricing.pricing.costs import calculate_tier_costs
from stackr_pricing.pricing.descriptions import describe_tier
from stackr_pricing.pricing.features import curate_features
from stackr_pricing.pricing.rates import resolve_rates
from stackr_pricing.pricing.tables import PricingTables
from stackr_pricing.pricing.tiers import tier_adjustment
from stackr_pricing.validation.validator import (
    QuoteRequestValidator,
    QuoteValidationError,
)


logger = structlog.get_logger(__name__)


class QuotePricingEngine:
    """
    Prices one service request into basic, standard and premium tiers.

    Usage:
        engine = QuotePricingEngine()
        result = engine.price_request(request)
        result.standard.total
    """

    def __init__(
        self,
        tables: Optional[PricingTables] = None,
        validator: Optional[QuoteRequestValidator] = None,
    ):
        """
        Args:
            tables: Rate, tax and region tables. Defaults to
                    PricingTables.default() (built-ins or the configured file).
            validator: Request validator. Defaults to one bound to the same tables.
        """
        self._tables = tables or PricingTables.default()
        self._validator = validator or QuoteRequestValidator(self._tables)

    @property
    def tables(self) -> PricingTables:
        return self._tables

    @property
    def validator(self) -> QuoteRequestValidator:
        return self._validator

    def price_request(
        self,
        request: ServiceRequest,
        owner_id: Optional[str] = None,
        validation: Optional[ValidationResult] = None,
    ) -> MultiQuoteResult:
        """
        Price a request into a complete three-tier quote.

        Args:
            validation: Result of an earlier validate() of this same request.
                        When given, the request is not validated again.

        Raises:
            QuoteValidationError: If the request fails validation
        """
        if validation is None:
            validation = self._validator.ensure_valid(request)
        elif validation.has_errors:
            raise QuoteValidationError(validation.issues)

        tables = self._tables
        rates = resolve_rates(request.service_category, request.location, tables)
        category_class = tables.classify(request.service_category)

        tiers = {
            tier.value: self._price_tier(tier, request, rates, category_class)
            for tier in Tier
        }

        result = MultiQuoteResult(
            owner_id=owner_id,
            request=request,
            rate_context=rates,
            category_class=category_class,
            category_display_name=tables.display_name(request.service_category),
            subcategory_display_name=tables.display_name(request.service_subcategory),
            **tiers,
        )

        logger.info(
            "quote_priced",
            quote_id=str(result.quote_id),
            service_category=request.service_category,
            category_class=category_class.value,
            state=rates.state,
            region=rates.region.value,
            totals={t.tier.value: round(t.total, 2) for t in result.tiers},
            warnings=len(validation.warnings),
            tables_version=tables.version,
        )
        return result

    def _price_tier(
        self,
        tier: Tier,
        request: ServiceRequest,
        rates: RateContext,
        category_class: CategoryClass,
    ) -> QuoteTier:
        tables = self._tables
        adjustment = tier_adjustment(
            tier,
            category_class,
            request.experience_level,
            emergency=request.emergency,
            emergency_multiplier=tables.emergency_multiplier,
        )
        costs = calculate_tier_costs(request, rates, adjustment, tables)

        features = curate_features(
            tier,
            request.service_category,
            category_class,
            total=costs.total,
            experience_level=request.experience_level,
            quantity=request.units,
            quantity_bearing=tables.is_quantity_bearing(request.service_category),
        )

        return QuoteTier(
            tier=tier,
            name=tier.display_name,
            labor_hours=costs.labor_hours,
            labor_rate=costs.labor_rate,
            labor_cost=costs.labor_cost,
            materials_cost=costs.materials_cost,
            quantity=costs.quantity,
            quantity_discount=costs.quantity_discount,
            materials_tax=costs.materials_tax,
            subtotal=costs.subtotal,
            total=costs.total,
            target_margin_percent=costs.target_margin_percent,
            features=features,
            description=describe_tier(tier, request.service_category, category_class),
            adjustment=adjustment,
        )


def price_request(
    request: ServiceRequest,
    tables: Optional[PricingTables] = None,
) -> MultiQuoteResult:
    """Convenience wrapper: price one request with a throwaway engine."""
    return QuotePricingEngine(tables).price_request(request)
