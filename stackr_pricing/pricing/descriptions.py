"""
Tier descriptions.

Lookup order: the specific category, then the category class, then a
generic sentence for the tier.
"""

from stackr_pricing.models.quote import CategoryClass, Tier


CATEGORY_DESCRIPTIONS: dict[str, dict[Tier, str]] = {
    "plumbing": {
        Tier.BASIC: "Basic plumbing service with standard parts and a 30-day guarantee.",
        Tier.STANDARD: "Complete plumbing service with quality parts and a 90-day guarantee.",
        Tier.PREMIUM: "Premium plumbing service with top-quality parts and a 1-year guarantee.",
    },
    "electrical": {
        Tier.BASIC: "Basic electrical service with standard parts and a 30-day guarantee.",
        Tier.STANDARD: "Thorough electrical service with quality components and a 90-day guarantee.",
        Tier.PREMIUM: "Premium electrical service with high-end components and a 1-year guarantee.",
    },
    "hvac": {
        Tier.BASIC: "Basic HVAC service with standard components and a 30-day guarantee.",
        Tier.STANDARD: "Complete HVAC service with quality components and a 90-day guarantee.",
        Tier.PREMIUM: "Premium HVAC service with top-tier components and a 1-year guarantee.",
    },
    "locksmith": {
        Tier.BASIC: "Standard lock service with standard-grade hardware.",
        Tier.STANDARD: "Complete lock service with commercial-grade hardware and key duplication.",
        Tier.PREMIUM: "High-security lock service with premium hardware and a home security assessment.",
    },
    "oil_change": {
        Tier.BASIC: "Standard oil change with conventional oil and a basic inspection.",
        Tier.STANDARD: "Oil change with synthetic-blend oil and a comprehensive inspection.",
        Tier.PREMIUM: "Full synthetic oil change with a detailed inspection and preventative maintenance.",
    },
    "brake_service": {
        Tier.BASIC: "Basic brake service with standard parts and a 90-day warranty.",
        Tier.STANDARD: "Complete brake service with quality parts and a 6-month warranty.",
        Tier.PREMIUM: "Premium brake service with ceramic pads and a 1-year warranty.",
    },
    "hair_stylist": {
        Tier.BASIC: "Basic cut and style with standard products.",
        Tier.STANDARD: "Cut, style and treatment with quality products.",
        Tier.PREMIUM: "Cut, color and treatment with luxury products and a styling lesson.",
    },
    "nail_technician": {
        Tier.BASIC: "Basic manicure or pedicure with standard polish.",
        Tier.STANDARD: "Manicure or pedicure with gel polish and a hand treatment.",
        Tier.PREMIUM: "Manicure or pedicure with gel extensions and a paraffin treatment.",
    },
    "computer_repair": {
        Tier.BASIC: "Basic computer diagnostics and repair with compatible parts.",
        Tier.STANDARD: "Computer repair with thorough diagnostics and quality replacement parts.",
        Tier.PREMIUM: "Computer repair with detailed diagnostics, premium parts and performance tuning.",
    },
    "cellphone_repair": {
        Tier.BASIC: "Phone repair with compatible replacement parts.",
        Tier.STANDARD: "Phone repair with high-quality parts and a screen protector.",
        Tier.PREMIUM: "Phone repair with OEM parts, tempered glass and a case.",
    },
}

CLASS_DESCRIPTIONS: dict[CategoryClass, dict[Tier, str]] = {
    CategoryClass.BEAUTY: {
        Tier.BASIC: "Standard service with essential products and techniques.",
        Tier.STANDARD: "Complete service with quality products and detailed techniques.",
        Tier.PREMIUM: "Premium service with luxury products and advanced techniques.",
    },
    CategoryClass.ELECTRONICS: {
        Tier.BASIC: "Standard diagnosis and repair with compatible parts.",
        Tier.STANDARD: "Thorough diagnosis and repair with high-quality replacement parts.",
        Tier.PREMIUM: "Comprehensive diagnosis and repair with premium parts and optimization.",
    },
    CategoryClass.AUTOMOTIVE: {
        Tier.BASIC: "Standard service with OEM-equivalent parts and a basic warranty.",
        Tier.STANDARD: "Complete service with OEM-quality parts and an extended warranty.",
        Tier.PREMIUM: "Premium service with OEM parts and a comprehensive warranty.",
    },
}

GENERIC_DESCRIPTIONS: dict[Tier, str] = {
    Tier.BASIC: "Basic service package with essential components.",
    Tier.STANDARD: "Standard service package with quality components and comprehensive coverage.",
    Tier.PREMIUM: "Premium service package with top-tier components and comprehensive coverage.",
}


def describe_tier(tier: Tier, category: str, category_class: CategoryClass) -> str:
    if category in CATEGORY_DESCRIPTIONS:
        return CATEGORY_DESCRIPTIONS[category][tier]
    if category_class in CLASS_DESCRIPTIONS:
        return CLASS_DESCRIPTIONS[category_class][tier]
    return GENERIC_DESCRIPTIONS[tier]
