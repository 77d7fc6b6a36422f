"""
Tier Multiplier Engine

Derives the multipliers for one tier in four layers:

1. Tier base multipliers (labor hours, hourly rate, materials, margin points)
2. Category-class overrides - REPLACE the base values they name
3. Experience multiplier - multiplies the hourly rate only
4. Emergency surcharge - multiplies the effective hourly rate

Only the basic and premium tiers carry category overrides, except for
electronics where the standard tier also gets extra bench time.

Ordering guarantee at this layer: for every category and experience level,
rate_multiplier and margin_adjustment_points never decrease from basic to
standard to premium. Overrides never touch the rate multiplier and only
push basic margins down or premium margins up, which keeps that true.
"""

from typing import NamedTuple, Optional

from stackr_pricing.models.quote import CategoryClass, ExperienceLevel, Tier, TierAdjustment


class TierBase(NamedTuple):
    labor: float
    rate: float
    material: float
    margin: int


class CategoryOverride(NamedTuple):
    labor: float
    material: float
    margin: Optional[int] = None


TIER_BASE: dict[Tier, TierBase] = {
    Tier.BASIC: TierBase(labor=0.80, rate=0.90, material=0.80, margin=-5),
    Tier.STANDARD: TierBase(labor=1.00, rate=1.00, material=1.00, margin=0),
    Tier.PREMIUM: TierBase(labor=1.20, rate=1.20, material=1.50, margin=5),
}

CATEGORY_OVERRIDES: dict[CategoryClass, dict[Tier, CategoryOverride]] = {
    # Quicker basic appointments on cheaper product; luxury product at the top
    CategoryClass.BEAUTY: {
        Tier.BASIC: CategoryOverride(labor=0.75, material=0.70),
        Tier.PREMIUM: CategoryOverride(labor=1.30, material=2.00, margin=8),
    },
    # Compatible vs OEM parts; standard repairs include extra testing time
    CategoryClass.ELECTRONICS: {
        Tier.BASIC: CategoryOverride(labor=0.85, material=0.75, margin=-3),
        Tier.STANDARD: CategoryOverride(labor=1.10, material=1.00),
        Tier.PREMIUM: CategoryOverride(labor=1.25, material=1.60, margin=7),
    },
    # Labor is book time, so it moves less; parts quality moves a lot
    CategoryClass.AUTOMOTIVE: {
        Tier.BASIC: CategoryOverride(labor=0.90, material=0.85),
        Tier.PREMIUM: CategoryOverride(labor=1.15, material=1.40, margin=6),
    },
}

EXPERIENCE_MULTIPLIERS: dict[ExperienceLevel, float] = {
    ExperienceLevel.JUNIOR: 0.8,
    ExperienceLevel.INTERMEDIATE: 1.0,
    ExperienceLevel.SENIOR: 1.2,
    ExperienceLevel.EXPERT: 1.4,
}


def tier_adjustment(
    tier: Tier,
    category_class: CategoryClass,
    experience_level: ExperienceLevel,
    emergency: bool = False,
    emergency_multiplier: float = 1.5,
) -> TierAdjustment:
    """Build the full multiplier set for one tier."""
    base = TIER_BASE[tier]
    labor, material, margin = base.labor, base.material, base.margin

    override = CATEGORY_OVERRIDES.get(category_class, {}).get(tier)
    if override is not None:
        labor = override.labor
        material = override.material
        if override.margin is not None:
            margin = override.margin

    return TierAdjustment(
        tier=tier,
        labor_multiplier=labor,
        rate_multiplier=base.rate,
        material_multiplier=material,
        margin_adjustment_points=margin,
        experience_multiplier=EXPERIENCE_MULTIPLIERS[experience_level],
        emergency_multiplier=emergency_multiplier if emergency else 1.0,
    )


def max_margin_adjustment(category_class: CategoryClass) -> int:
    """Largest margin bump any tier can add for this class."""
    return max(
        tier_adjustment(tier, category_class, ExperienceLevel.INTERMEDIATE).margin_adjustment_points
        for tier in Tier
    )
