"""
Built-in reference data for the quote engine.

Market hourly rates by service category and region, state sales tax rates,
state-to-region mapping and category groupings. These are the defaults that
PricingTables.builtin() wraps; a JSON tables file can replace any of them.
"""

# Hourly market rates by service category and region
HOURLY_RATES: dict[str, dict[str, float]] = {
    # Home services
    "plumbing": {"northeast": 125, "southeast": 95, "midwest": 90, "southwest": 100, "west": 130},
    "electrical": {"northeast": 115, "southeast": 90, "midwest": 85, "southwest": 95, "west": 120},
    "hvac": {"northeast": 120, "southeast": 100, "midwest": 95, "southwest": 105, "west": 125},
    "handyman": {"northeast": 85, "southeast": 65, "midwest": 60, "southwest": 70, "west": 90},
    "locksmith": {"northeast": 95, "southeast": 75, "midwest": 70, "southwest": 80, "west": 100},

    # Automotive
    "automotive_repair": {"northeast": 110, "southeast": 90, "midwest": 85, "southwest": 95, "west": 115},
    "oil_change": {"northeast": 85, "southeast": 70, "midwest": 65, "southwest": 75, "west": 90},
    "brake_service": {"northeast": 110, "southeast": 90, "midwest": 85, "southwest": 95, "west": 115},
    "transmission": {"northeast": 130, "southeast": 110, "midwest": 105, "southwest": 115, "west": 135},

    # Beauty / wellness
    "hair_stylist": {"northeast": 85, "southeast": 65, "midwest": 60, "southwest": 70, "west": 95},
    "nail_technician": {"northeast": 70, "southeast": 55, "midwest": 50, "southwest": 60, "west": 80},
    "makeup_artist": {"northeast": 110, "southeast": 85, "midwest": 80, "southwest": 90, "west": 120},
    "esthetician": {"northeast": 95, "southeast": 75, "midwest": 70, "southwest": 80, "west": 100},

    # Electronics repair
    "computer_repair": {"northeast": 100, "southeast": 80, "midwest": 75, "southwest": 85, "west": 110},
    "cellphone_repair": {"northeast": 85, "southeast": 70, "midwest": 65, "southwest": 75, "west": 90},
    "tv_repair": {"northeast": 95, "southeast": 80, "midwest": 75, "southwest": 85, "west": 100},
    "appliance_repair": {"northeast": 105, "southeast": 85, "midwest": 80, "southwest": 90, "west": 110},

    # Professional services
    "legal_services": {"northeast": 300, "southeast": 250, "midwest": 225, "southwest": 240, "west": 325},
    "accounting": {"northeast": 200, "southeast": 170, "midwest": 160, "southwest": 175, "west": 220},
    "consulting": {"northeast": 250, "southeast": 200, "midwest": 190, "southwest": 210, "west": 275},
    "design_services": {"northeast": 125, "southeast": 100, "midwest": 95, "southwest": 105, "west": 135},
}

STATE_REGIONS: dict[str, str] = {
    # Northeast
    "ME": "northeast", "NH": "northeast", "VT": "northeast", "MA": "northeast",
    "RI": "northeast", "CT": "northeast", "NY": "northeast", "NJ": "northeast",
    "PA": "northeast",
    # Southeast
    "DE": "southeast", "MD": "southeast", "DC": "southeast", "VA": "southeast",
    "WV": "southeast", "KY": "southeast", "NC": "southeast", "SC": "southeast",
    "TN": "southeast", "GA": "southeast", "FL": "southeast", "AL": "southeast",
    "MS": "southeast", "AR": "southeast", "LA": "southeast",
    # Midwest
    "OH": "midwest", "IN": "midwest", "MI": "midwest", "IL": "midwest",
    "WI": "midwest", "MN": "midwest", "IA": "midwest", "MO": "midwest",
    "KS": "midwest", "NE": "midwest", "SD": "midwest", "ND": "midwest",
    # Southwest
    "TX": "southwest", "OK": "southwest", "NM": "southwest", "AZ": "southwest",
    # West
    "MT": "west", "WY": "west", "CO": "west", "UT": "west", "ID": "west",
    "NV": "west", "CA": "west", "OR": "west", "WA": "west", "AK": "west",
    "HI": "west",
}

STATE_TAX_RATES: dict[str, float] = {
    "AK": 0.00, "AL": 0.09, "AR": 0.065, "AZ": 0.08, "CA": 0.0725,
    "CO": 0.029, "CT": 0.0635, "DC": 0.06, "DE": 0.00, "FL": 0.06,
    "GA": 0.04, "HI": 0.04, "IA": 0.06, "ID": 0.06, "IL": 0.0625,
    "IN": 0.07, "KS": 0.065, "KY": 0.06, "LA": 0.0445, "MA": 0.0625,
    "MD": 0.06, "ME": 0.055, "MI": 0.06, "MN": 0.06875, "MO": 0.04225,
    "MS": 0.07, "MT": 0.00, "NC": 0.0475, "ND": 0.05, "NE": 0.055,
    "NH": 0.00, "NJ": 0.06625, "NM": 0.05125, "NV": 0.0685, "NY": 0.04,
    "OH": 0.0575, "OK": 0.045, "OR": 0.00, "PA": 0.06, "RI": 0.07,
    "SC": 0.06, "SD": 0.045, "TN": 0.07, "TX": 0.0625, "UT": 0.0595,
    "VA": 0.053, "VT": 0.06, "WA": 0.065, "WI": 0.05, "WV": 0.06,
    "WY": 0.04,
}

# Upper-case full state name -> two-letter code
STATE_NAMES: dict[str, str] = {
    "ALABAMA": "AL", "ALASKA": "AK", "ARIZONA": "AZ", "ARKANSAS": "AR",
    "CALIFORNIA": "CA", "COLORADO": "CO", "CONNECTICUT": "CT", "DELAWARE": "DE",
    "DISTRICT OF COLUMBIA": "DC", "FLORIDA": "FL", "GEORGIA": "GA", "HAWAII": "HI",
    "IDAHO": "ID", "ILLINOIS": "IL", "INDIANA": "IN", "IOWA": "IA",
    "KANSAS": "KS", "KENTUCKY": "KY", "LOUISIANA": "LA", "MAINE": "ME",
    "MARYLAND": "MD", "MASSACHUSETTS": "MA", "MICHIGAN": "MI", "MINNESOTA": "MN",
    "MISSISSIPPI": "MS", "MISSOURI": "MO", "MONTANA": "MT", "NEBRASKA": "NE",
    "NEVADA": "NV", "NEW HAMPSHIRE": "NH", "NEW JERSEY": "NJ", "NEW MEXICO": "NM",
    "NEW YORK": "NY", "NORTH CAROLINA": "NC", "NORTH DAKOTA": "ND", "OHIO": "OH",
    "OKLAHOMA": "OK", "OREGON": "OR", "PENNSYLVANIA": "PA", "RHODE ISLAND": "RI",
    "SOUTH CAROLINA": "SC", "SOUTH DAKOTA": "SD", "TENNESSEE": "TN", "TEXAS": "TX",
    "UTAH": "UT", "VERMONT": "VT", "VIRGINIA": "VA", "WASHINGTON": "WA",
    "WEST VIRGINIA": "WV", "WISCONSIN": "WI", "WYOMING": "WY",
}

# Closed membership sets for the category classes
CATEGORY_CLASSES: dict[str, str] = {
    "hair_stylist": "beauty",
    "nail_technician": "beauty",
    "makeup_artist": "beauty",
    "esthetician": "beauty",
    "massage_therapist": "beauty",
    "spa_services": "beauty",
    "computer_repair": "electronics",
    "cellphone_repair": "electronics",
    "tv_repair": "electronics",
    "appliance_repair": "electronics",
    "automotive_repair": "automotive",
    "oil_change": "automotive",
    "brake_service": "automotive",
    "transmission": "automotive",
    "engine_repair": "automotive",
    "tire_service": "automotive",
    "diagnostics": "automotive",
}

# Product-based categories where several physical units are priced
QUANTITY_BEARING: frozenset[str] = frozenset({
    "computer_repair",
    "cellphone_repair",
    "tv_repair",
    "appliance_repair",
    "locksmith",
    "tire_service",
})

# Display names that can't be derived from the key
DISPLAY_NAMES: dict[str, str] = {
    "hvac": "HVAC",
    "tv_repair": "TV Repair",
    "cellphone_repair": "Cell Phone Repair",
    "oil_change": "Oil Change",
    "spa_services": "Spa Services",
}
