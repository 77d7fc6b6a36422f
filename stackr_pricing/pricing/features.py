"""
Feature Curator

Builds the feature list shown on each tier card from four sources, in order:

1. Base features for (tier, category): category-class list, else a list for
   the specific category, else the generic list for the tier
2. Price-threshold features: 1 at/above the class's mid threshold,
   2 at/above its high threshold
3. Experience features: expert and senior only
4. Quantity features: quantity-bearing categories with more than one unit

The combined list is deduplicated by exact string, keeping first occurrence.
"""

from typing import Iterable, NamedTuple

from stackr_pricing.models.quote import CategoryClass, ExperienceLevel, Tier


class PriceThresholds(NamedTuple):
    low: float
    mid: float
    high: float


# =============================================================================
# BASE FEATURES
# =============================================================================

CLASS_BASE_FEATURES: dict[CategoryClass, dict[Tier, list[str]]] = {
    CategoryClass.BEAUTY: {
        Tier.BASIC: [
            "30-minute appointment",
            "Essential service only",
            "Standard products",
            "1 complimentary add-on",
        ],
        Tier.STANDARD: [
            "45-minute appointment",
            "Complete service package",
            "Professional-grade products",
            "2 complimentary add-ons",
            "Basic styling consultation",
        ],
        Tier.PREMIUM: [
            "60-minute appointment",
            "Premium service package",
            "Luxury professional products",
            "3 complimentary add-ons",
            "Personalized consultation",
            "Complimentary beverage service",
        ],
    },
    CategoryClass.ELECTRONICS: {
        Tier.BASIC: [
            "Basic diagnostics",
            "Compatible replacement parts",
            "30-day repair warranty",
            "Standard turnaround time",
        ],
        Tier.STANDARD: [
            "Thorough diagnostics and testing",
            "High-quality replacement parts",
            "90-day repair warranty",
            "Expedited turnaround time",
            "Basic device optimization",
        ],
        Tier.PREMIUM: [
            "Comprehensive diagnostics and testing",
            "Premium or OEM replacement parts",
            "180-day repair warranty",
            "Express turnaround service",
            "Complete device optimization and cleaning",
            "Data backup and recovery",
        ],
    },
    CategoryClass.AUTOMOTIVE: {
        Tier.BASIC: [
            "Standard diagnostics",
            "OEM-equivalent parts",
            "90-day parts warranty",
            "Standard appointment scheduling",
        ],
        Tier.STANDARD: [
            "Comprehensive diagnostics",
            "OEM-quality parts",
            "180-day parts and labor warranty",
            "Priority scheduling",
            "Detailed vehicle inspection",
        ],
        Tier.PREMIUM: [
            "Advanced computer diagnostics",
            "OEM or premium aftermarket parts",
            "365-day parts and labor warranty",
            "Same-day service when available",
            "Comprehensive vehicle inspection",
            "Complimentary detailing",
        ],
    },
}

CATEGORY_BASE_FEATURES: dict[str, dict[Tier, list[str]]] = {
    "plumbing": {
        Tier.BASIC: [
            "Standard service call",
            "Basic components and materials",
            "30-day leak-free guarantee",
            "Standard scheduling",
        ],
        Tier.STANDARD: [
            "Priority service call",
            "Quality components and materials",
            "90-day leak-free guarantee",
            "Flexible scheduling",
            "Detailed plumbing inspection",
        ],
        Tier.PREMIUM: [
            "Same-day service call",
            "Top-tier components and materials",
            "365-day leak-free guarantee",
            "Priority scheduling with 2-hour window",
            "Comprehensive plumbing inspection",
            "Complimentary water pressure test",
        ],
    },
    "locksmith": {
        Tier.BASIC: [
            "Standard service call",
            "Standard-grade lock hardware",
            "30-day workmanship warranty",
        ],
        Tier.STANDARD: [
            "Priority service call",
            "Commercial-grade lock hardware",
            "90-day workmanship warranty",
            "Key duplication included",
        ],
        Tier.PREMIUM: [
            "Same-day service call",
            "High-security lock hardware",
            "1-year workmanship warranty",
            "Key duplication included",
            "Home security assessment",
        ],
    },
}

GENERIC_BASE_FEATURES: dict[Tier, list[str]] = {
    Tier.BASIC: [
        "Basic service package",
        "Standard components",
        "30-day warranty",
        "Essential service elements only",
    ],
    Tier.STANDARD: [
        "Standard service package",
        "Quality components",
        "90-day warranty",
        "Comprehensive service coverage",
    ],
    Tier.PREMIUM: [
        "Premium service package",
        "Top-tier components",
        "1-year warranty",
        "Comprehensive coverage with extras",
        "Priority scheduling and service",
    ],
}


# =============================================================================
# PRICE THRESHOLDS
# =============================================================================

PRICE_THRESHOLDS: dict[CategoryClass, PriceThresholds] = {
    CategoryClass.BEAUTY: PriceThresholds(low=40.0, mid=100.0, high=200.0),
    CategoryClass.ELECTRONICS: PriceThresholds(low=75.0, mid=200.0, high=400.0),
    CategoryClass.AUTOMOTIVE: PriceThresholds(low=150.0, mid=400.0, high=800.0),
    CategoryClass.GENERAL: PriceThresholds(low=100.0, mid=300.0, high=600.0),
}

MID_PRICE_FEATURES: dict[CategoryClass, str] = {
    CategoryClass.BEAUTY: "Complimentary take-home product sample",
    CategoryClass.ELECTRONICS: "Free diagnostic re-check within 30 days",
    CategoryClass.AUTOMOTIVE: "Complimentary multi-point inspection",
    CategoryClass.GENERAL: "Follow-up satisfaction check",
}

HIGH_PRICE_FEATURES: dict[CategoryClass, tuple[str, str]] = {
    CategoryClass.BEAUTY: (
        "Luxury product upgrade",
        "Complimentary touch-up within 2 weeks",
    ),
    CategoryClass.ELECTRONICS: (
        "Extended parts warranty",
        "Priority bench service",
    ),
    CategoryClass.AUTOMOTIVE: (
        "Courtesy vehicle or shuttle service",
        "Extended parts and labor warranty",
    ),
    CategoryClass.GENERAL: (
        "Priority scheduling and service",
        "Extended satisfaction guarantee",
    ),
}


# =============================================================================
# EXPERIENCE AND QUANTITY
# =============================================================================

EXPERT_FEATURES: dict[CategoryClass, str] = {
    CategoryClass.BEAUTY: "Service by a master stylist",
    CategoryClass.ELECTRONICS: "Certified master technician",
    CategoryClass.AUTOMOTIVE: "ASE master-certified technician",
    CategoryClass.GENERAL: "Master-level certified professional",
}

SENIOR_FEATURE = "Senior professional with 5+ years of experience"
SECOND_UNIT_FEATURE = "Second unit discount"
BULK_EFFICIENCY_FEATURE = "Bulk service efficiency - all units handled in one visit"


def base_features(tier: Tier, category: str, category_class: CategoryClass) -> list[str]:
    if category_class in CLASS_BASE_FEATURES:
        return list(CLASS_BASE_FEATURES[category_class][tier])
    if category in CATEGORY_BASE_FEATURES:
        return list(CATEGORY_BASE_FEATURES[category][tier])
    return list(GENERIC_BASE_FEATURES[tier])


def price_features(total: float, category_class: CategoryClass) -> list[str]:
    thresholds = PRICE_THRESHOLDS[category_class]
    if total >= thresholds.high:
        return list(HIGH_PRICE_FEATURES[category_class])
    if total >= thresholds.mid:
        return [MID_PRICE_FEATURES[category_class]]
    return []


def experience_features(experience_level: ExperienceLevel, category_class: CategoryClass) -> list[str]:
    if experience_level == ExperienceLevel.EXPERT:
        return [EXPERT_FEATURES[category_class]]
    if experience_level == ExperienceLevel.SENIOR:
        return [SENIOR_FEATURE]
    return []


def quantity_features(quantity: int) -> list[str]:
    """Features for a multi-unit job. Callers check quantity-bearing first."""
    if quantity >= 5:
        return [
            f"Multi-unit discount: {min(25, 5 * quantity)}% off materials",
            BULK_EFFICIENCY_FEATURE,
        ]
    if quantity >= 3:
        return [f"Multi-unit discount: {5 * quantity}% off materials"]
    if quantity == 2:
        return [SECOND_UNIT_FEATURE]
    return []


def dedupe(features: Iterable[str]) -> tuple[str, ...]:
    """Exact-match dedupe keeping first occurrence."""
    return tuple(dict.fromkeys(features))


def curate_features(
    tier: Tier,
    category: str,
    category_class: CategoryClass,
    total: float,
    experience_level: ExperienceLevel,
    quantity: int = 1,
    quantity_bearing: bool = False,
) -> tuple[str, ...]:
    """Assemble the ordered, deduplicated feature list for one tier."""
    features = base_features(tier, category, category_class)
    features += price_features(total, category_class)
    features += experience_features(experience_level, category_class)
    if quantity_bearing:
        features += quantity_features(quantity)
    return dedupe(features)
