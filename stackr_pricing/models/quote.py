"""
Core Data Models for Stackr Pricing

These models define the strict schemas for everything that flows through the
tiered quote engine:
1. ServiceRequest - what the user asked us to price
2. RateContext / TierAdjustment - derived, read-only pricing inputs
3. QuoteTier / MultiQuoteResult - the priced, explainable output

DESIGN DECISION: Every model here is frozen. The engine is a pure function of
its inputs, and post-generation edits go through an explicit override command
that produces a NEW record. Nothing mutates a quote in place.

DESIGN DECISION: The profit figures on a tier are computed fields derived from
subtotal, materials tax and total. They can never drift from the price they
describe, even after the price is overridden.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


# Floating point tolerance for ledger checks
LEDGER_TOLERANCE = 1e-6


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExperienceLevel(str, Enum):
    """Experience level of the professional doing the work."""
    JUNIOR = "junior"
    INTERMEDIATE = "intermediate"
    SENIOR = "senior"
    EXPERT = "expert"


class Tier(str, Enum):
    """
    The three priced packages derived from one request.

    Declaration order is display order.
    """
    BASIC = "basic"
    STANDARD = "standard"
    PREMIUM = "premium"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class Region(str, Enum):
    """Coarse geographic buckets used for base-rate lookup."""
    NORTHEAST = "northeast"
    MIDWEST = "midwest"
    SOUTHEAST = "southeast"
    SOUTHWEST = "southwest"
    WEST = "west"
    SOUTH = "south"


class CategoryClass(str, Enum):
    """
    Coarse grouping of service categories.

    Resolved once per request, then switched on by the multiplier engine,
    the feature curator and the description writer.
    """
    BEAUTY = "beauty"
    ELECTRONICS = "electronics"
    AUTOMOTIVE = "automotive"
    GENERAL = "general"


class ProfitAssessment(str, Enum):
    """Three-band label for the realized margin on a tier."""
    LOW = "low"
    ACCEPTABLE = "acceptable"
    GOOD = "good"

    @property
    def message(self) -> str:
        return {
            ProfitAssessment.LOW: "Low margin - consider repricing",
            ProfitAssessment.ACCEPTABLE: "Acceptable margin - room for improvement",
            ProfitAssessment.GOOD: "Good margin",
        }[self]


# =============================================================================
# REQUEST MODEL
# =============================================================================

class ServiceRequest(BaseModel):
    """
    A job description to be priced.

    Transient: constructed once per pricing call and never mutated.
    Accepts snake_case field names or the camelCase wire names
    (serviceCategory, laborHours, targetMarginPercent, ...).
    Field-level constraints are enforced here; cross-field rules
    (quantity for product-based categories, effective margin) are checked
    by the request validator before any arithmetic happens.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    service_category: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Key into the rate table (e.g. 'locksmith')"
    )
    service_subcategory: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Display-only subcategory key"
    )
    location: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Free text location, e.g. 'Albany, NY'"
    )
    experience_level: ExperienceLevel = Field(
        ...,
        description="Experience level of the professional"
    )
    labor_hours: float = Field(
        ...,
        gt=0,
        description="Estimated labor hours before tier multipliers"
    )
    quantity: Optional[int] = Field(
        default=None,
        ge=1,
        description="Number of units; required for quantity-bearing categories"
    )
    materials_cost: float = Field(
        default=0.0,
        ge=0,
        description="Raw materials cost before tier multipliers"
    )
    emergency: bool = Field(
        default=False,
        description="Emergency call-out (labor rate surcharge)"
    )
    target_margin_percent: float = Field(
        ...,
        ge=0,
        lt=100,
        description="Requested pre-tax profit margin in percent"
    )

    @field_validator("service_category", "service_subcategory")
    @classmethod
    def normalize_key(cls, v: str) -> str:
        """Category keys are lowercase snake_case."""
        return v.lower().replace(" ", "_").replace("-", "_")

    @property
    def units(self) -> int:
        """Quantity with the 'absent means one' rule applied."""
        return self.quantity or 1


# =============================================================================
# DERIVED PRICING INPUTS
# =============================================================================

class RateContext(BaseModel):
    """Rates resolved for one request. Shared by all three tiers."""
    model_config = ConfigDict(frozen=True)

    state: str = Field(..., min_length=2, max_length=2)
    region: Region
    base_hourly_rate: float = Field(..., gt=0)
    tax_rate: float = Field(..., ge=0, lt=1)

    # Which lookups fell back to configured defaults
    location_resolved: bool = True
    rate_from_table: bool = True
    tax_from_table: bool = True


class TierAdjustment(BaseModel):
    """
    Multipliers for a single tier after category overrides.

    rate_multiplier is the tier's own value; experience and emergency are
    kept separate so the tier ordering can be checked at this layer.
    """
    model_config = ConfigDict(frozen=True)

    tier: Tier
    labor_multiplier: float = Field(..., gt=0)
    rate_multiplier: float = Field(..., gt=0)
    material_multiplier: float = Field(..., ge=0)
    margin_adjustment_points: int
    experience_multiplier: float = Field(default=1.0, gt=0)
    emergency_multiplier: float = Field(default=1.0, ge=1.0)

    @property
    def effective_rate_multiplier(self) -> float:
        return self.rate_multiplier * self.experience_multiplier * self.emergency_multiplier


# =============================================================================
# OUTPUT MODELS
# =============================================================================

class InvoiceLineItem(BaseModel):
    """One line of an invoice built from a quote tier."""
    model_config = ConfigDict(frozen=True)

    description: str
    kind: str = Field(..., pattern="^(labor|materials|margin|tax)$")
    quantity: float = Field(default=1.0, ge=0)
    unit_price: float
    amount: float


class QuoteTier(BaseModel):
    """
    One priced package (basic, standard or premium).

    Ledger:
        subtotal        = labor_cost + materials_cost
        price_before_tax = subtotal / (1 - margin)       (stored via total)
        total           = price_before_tax + materials_tax
        profit_amount   = total - subtotal - materials_tax

    Only subtotal, materials_tax and total are stored; everything about
    profit is derived from them.
    """
    model_config = ConfigDict(frozen=True)

    tier: Tier
    name: str
    labor_hours: float = Field(..., ge=0)
    labor_rate: float = Field(..., ge=0)
    labor_cost: float = Field(..., ge=0)
    materials_cost: float = Field(..., ge=0)
    quantity: int = Field(default=1, ge=1)
    quantity_discount: float = Field(default=0.0, ge=0, le=1)
    materials_tax: float = Field(..., ge=0)
    subtotal: float = Field(..., ge=0)
    total: float = Field(..., ge=0)
    target_margin_percent: float = Field(
        ...,
        description="Effective target margin (request target + tier adjustment)"
    )
    features: tuple[str, ...] = Field(default_factory=tuple)
    description: str = ""
    editable: bool = Field(
        default=True,
        description="Tier permits user overrides of price/description/features"
    )
    overridden: bool = Field(
        default=False,
        description="Set when a user override has been applied"
    )
    adjustment: TierAdjustment

    @computed_field
    @property
    def price_before_tax(self) -> float:
        return self.total - self.materials_tax

    @computed_field
    @property
    def profit_amount(self) -> float:
        return self.total - self.subtotal - self.materials_tax

    @computed_field
    @property
    def actual_margin_percent(self) -> float:
        if self.total <= 0:
            return 0.0
        return 100.0 * self.profit_amount / self.total

    @computed_field
    @property
    def profit_assessment(self) -> ProfitAssessment:
        # Boundary values belong to the lower band, within float noise
        margin = self.actual_margin_percent
        if margin <= 15.0 + LEDGER_TOLERANCE:
            return ProfitAssessment.LOW
        if margin <= 25.0 + LEDGER_TOLERANCE:
            return ProfitAssessment.ACCEPTABLE
        return ProfitAssessment.GOOD

    @model_validator(mode="after")
    def validate_ledger(self) -> "QuoteTier":
        """Subtotal must be labor + materials; total must cover the tax."""
        if abs(self.subtotal - (self.labor_cost + self.materials_cost)) > LEDGER_TOLERANCE:
            raise ValueError("Subtotal must equal labor cost plus materials cost")
        if self.total + LEDGER_TOLERANCE < self.materials_tax:
            raise ValueError("Total cannot be less than materials tax")
        return self

    def to_record(self) -> dict:
        """
        Flat, rounded record for persistence and printing collaborators.
        """
        return {
            "tier": self.tier.value,
            "name": self.name,
            "labor_hours": round(self.labor_hours, 2),
            "labor_rate": round(self.labor_rate, 2),
            "labor_cost": round(self.labor_cost, 2),
            "materials_cost": round(self.materials_cost, 2),
            "quantity": self.quantity,
            "quantity_discount": self.quantity_discount,
            "materials_tax": round(self.materials_tax, 2),
            "subtotal": round(self.subtotal, 2),
            "price_before_tax": round(self.price_before_tax, 2),
            "total": round(self.total, 2),
            "profit_amount": round(self.profit_amount, 2),
            "target_margin_percent": round(self.target_margin_percent, 2),
            "actual_margin_percent": round(self.actual_margin_percent, 2),
            "profit_assessment": self.profit_assessment.value,
            "description": self.description,
            "features": list(self.features),
            "editable": self.editable,
            "overridden": self.overridden,
        }


class QuoteOverride(BaseModel):
    """
    A user edit to one tier of a generated quote.

    Any field left as None keeps the generated value.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    total: Optional[float] = Field(
        default=None,
        gt=0,
        description="New customer-facing price (tax included)"
    )
    description: Optional[str] = Field(
        default=None,
        min_length=1,
        max_length=1000
    )
    features: Optional[list[str]] = None
    lock: bool = Field(
        default=False,
        description="Mark the tier non-editable after applying"
    )

    @model_validator(mode="after")
    def validate_not_empty(self) -> "QuoteOverride":
        if self.total is None and self.description is None and self.features is None and not self.lock:
            raise ValueError("Override must change at least one field")
        return self


class MultiQuoteResult(BaseModel):
    """
    The three tiers for one request, plus shared metadata.

    Produced once by the engine. Edits produce a new instance via
    with_tier(); the pricing engine itself holds no state.
    """
    model_config = ConfigDict(frozen=True)

    quote_id: UUID = Field(default_factory=uuid4)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    owner_id: Optional[str] = Field(
        default=None,
        description="User the quote belongs to, if known"
    )

    request: ServiceRequest
    rate_context: RateContext
    category_class: CategoryClass
    category_display_name: str
    subcategory_display_name: str

    basic: QuoteTier
    standard: QuoteTier
    premium: QuoteTier

    @property
    def location(self) -> str:
        return self.request.location

    @property
    def emergency(self) -> bool:
        return self.request.emergency

    @property
    def tiers(self) -> tuple[QuoteTier, QuoteTier, QuoteTier]:
        return (self.basic, self.standard, self.premium)

    def get_tier(self, tier: Tier) -> QuoteTier:
        return getattr(self, Tier(tier).value)

    def expires_at(self, validity_days: int) -> datetime:
        return self.created_at + timedelta(days=validity_days)

    def with_tier(self, quote_tier: QuoteTier) -> "MultiQuoteResult":
        """Return a copy with one tier replaced."""
        return self.model_copy(update={quote_tier.tier.value: quote_tier})

    def to_records(self) -> list[dict]:
        """One flat record per tier, carrying the shared metadata."""
        shared = {
            "quote_id": str(self.quote_id),
            "created_at": self.created_at.isoformat(),
            "owner_id": self.owner_id,
            "service_category": self.request.service_category,
            "category_display_name": self.category_display_name,
            "subcategory_display_name": self.subcategory_display_name,
            "category_class": self.category_class.value,
            "location": self.location,
            "state": self.rate_context.state,
            "region": self.rate_context.region.value,
            "base_hourly_rate": self.rate_context.base_hourly_rate,
            "tax_rate": self.rate_context.tax_rate,
            "emergency": self.emergency,
        }
        return [{**shared, **tier.to_record()} for tier in self.tiers]

    def to_invoice_line_items(self, tier: Tier) -> list[InvoiceLineItem]:
        """
        Convert one tier into invoice lines.

        One labor line, then one-to-three lines for materials, service
        margin and sales tax. Lines always sum to the tier total.
        """
        quote_tier = self.get_tier(tier)
        materials_label = {
            CategoryClass.BEAUTY: "Products",
            CategoryClass.ELECTRONICS: "Replacement parts",
            CategoryClass.AUTOMOTIVE: "Parts & fluids",
            CategoryClass.GENERAL: "Materials",
        }[self.category_class]

        lines = [
            InvoiceLineItem(
                description=f"{self.category_display_name} labor ({quote_tier.name})",
                kind="labor",
                quantity=round(quote_tier.labor_hours, 2),
                unit_price=round(quote_tier.labor_rate, 2),
                amount=quote_tier.labor_cost,
            )
        ]

        if quote_tier.materials_cost > 0:
            units = quote_tier.quantity
            lines.append(InvoiceLineItem(
                description=materials_label,
                kind="materials",
                quantity=units,
                unit_price=quote_tier.materials_cost / units,
                amount=quote_tier.materials_cost,
            ))

        if abs(quote_tier.profit_amount) > LEDGER_TOLERANCE:
            lines.append(InvoiceLineItem(
                description="Service margin",
                kind="margin",
                unit_price=quote_tier.profit_amount,
                amount=quote_tier.profit_amount,
            ))

        if quote_tier.materials_tax > 0:
            lines.append(InvoiceLineItem(
                description=f"Sales tax on {materials_label.lower()} ({self.rate_context.state})",
                kind="tax",
                unit_price=quote_tier.materials_tax,
                amount=quote_tier.materials_tax,
            ))

        return lines


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'out_of_range', 'fallback')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of the two-stage request validation.

    Stage 1: Schema validation (types, ranges, required fields)
    Stage 2: Semantic validation (cross-field and table-dependent rules)
    """

    validated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    schema_valid: bool = Field(
        ...,
        description="Did schema validation pass?"
    )
    semantic_valid: bool = Field(
        ...,
        description="Did semantic validation pass?"
    )

    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    # Warnings don't block pricing but should be shown
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking warnings"
    )

    @property
    def is_valid(self) -> bool:
        return self.schema_valid and self.semantic_valid

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]
