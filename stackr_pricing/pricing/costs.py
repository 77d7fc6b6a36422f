"""
Cost Calculator

Applies a tier's multipliers to the raw request and the resolved rates:

    labor_hours   = request hours x labor multiplier
    labor_rate    = base rate x rate x experience x emergency multipliers
    labor_cost    = labor_rate x labor_hours
    materials     = raw materials x material multiplier [x units x (1 - discount)]
    subtotal      = labor_cost + materials
    materials_tax = materials x tax rate            (labor is never taxed)
    price         = subtotal / (1 - margin)         (margin inversion)
    total         = price + materials_tax

The requested margin is a pre-tax target. Because the tax sits in the total
but earns nothing, the realized margin (profit / total) comes out slightly
below the target whenever materials are taxed. That dilution is intended.
"""

from typing import NamedTuple

from stackr_pricing.models.quote import RateContext, ServiceRequest, TierAdjustment
from stackr_pricing.pricing.tables import PricingTables


class MarginOutOfRangeError(ValueError):
    """Effective target margin reached 100% - no finite price exists."""

    def __init__(self, margin_percent: float):
        self.margin_percent = margin_percent
        super().__init__(
            f"Effective target margin {margin_percent:.1f}% must be below 100%"
        )


class TierCosts(NamedTuple):
    labor_hours: float
    labor_rate: float
    labor_cost: float
    materials_cost: float
    quantity: int
    quantity_discount: float
    materials_tax: float
    subtotal: float
    price_before_tax: float
    total: float
    target_margin_percent: float


def quantity_discount(quantity: int, tables: PricingTables) -> float:
    """Materials discount for multiple units, capped at the configured maximum."""
    if quantity <= 1:
        return 0.0
    return min(tables.max_quantity_discount, (quantity - 1) * tables.quantity_discount_step)


def effective_margin_percent(target_margin_percent: float, adjustment: TierAdjustment) -> float:
    """
    Request target plus the tier's margin points.

    A negative result is kept: the basic tier of a very low target prices
    below its subtotal.

    Raises:
        MarginOutOfRangeError: If the result is 100% or more
    """
    margin = target_margin_percent + adjustment.margin_adjustment_points
    if margin >= 100.0:
        raise MarginOutOfRangeError(margin)
    return margin


def calculate_tier_costs(
    request: ServiceRequest,
    rates: RateContext,
    adjustment: TierAdjustment,
    tables: PricingTables,
) -> TierCosts:
    """Run the full cost arithmetic for one tier."""
    margin_percent = effective_margin_percent(request.target_margin_percent, adjustment)

    labor_hours = request.labor_hours * adjustment.labor_multiplier
    labor_rate = rates.base_hourly_rate * adjustment.effective_rate_multiplier
    labor_cost = labor_rate * labor_hours

    materials_cost = request.materials_cost * adjustment.material_multiplier
    units = 1
    discount = 0.0
    if tables.is_quantity_bearing(request.service_category) and request.units > 1:
        units = request.units
        discount = quantity_discount(units, tables)
        materials_cost = materials_cost * units * (1.0 - discount)

    subtotal = labor_cost + materials_cost
    materials_tax = materials_cost * rates.tax_rate

    price_before_tax = subtotal / (1.0 - margin_percent / 100.0)
    total = price_before_tax + materials_tax

    return TierCosts(
        labor_hours=labor_hours,
        labor_rate=labor_rate,
        labor_cost=labor_cost,
        materials_cost=materials_cost,
        quantity=units,
        quantity_discount=discount,
        materials_tax=materials_tax,
        subtotal=subtotal,
        price_before_tax=price_before_tax,
        total=total,
        target_margin_percent=margin_percent,
    )
