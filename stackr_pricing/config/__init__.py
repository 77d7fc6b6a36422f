"""Configuration package."""

from stackr_pricing.config.settings import (
    AppSettings,
    PricingSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "PricingSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
