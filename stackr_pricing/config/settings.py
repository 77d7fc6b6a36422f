"""
Configuration Management for Stackr Pricing

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The pricing fallbacks (default state, fallback hourly rate, fallback tax rate)
materially change quotes for unresolved inputs, so they live in settings
instead of being buried in the pricing code.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PricingSettings(BaseSettings):
    """Fallbacks and knobs for the tiered quote engine."""

    model_config = SettingsConfigDict(
        env_prefix="PRICING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    default_state: str = Field(
        default="NY",
        min_length=2,
        max_length=2,
        description="State code used when a location cannot be resolved"
    )
    default_region: str = Field(
        default="northeast",
        description="Region used when a state is missing from the region table"
    )
    fallback_hourly_rate: float = Field(
        default=85.0,
        gt=0,
        description="Base hourly rate when category/region is not in the rate table"
    )
    fallback_tax_rate: float = Field(
        default=0.06,
        ge=0.0,
        lt=1.0,
        description="Materials tax rate when the state is not in the tax table"
    )
    emergency_multiplier: float = Field(
        default=1.5,
        ge=1.0,
        description="Labor rate multiplier for emergency call-outs"
    )
    quantity_discount_step: float = Field(
        default=0.05,
        ge=0.0,
        le=1.0,
        description="Materials discount per additional unit"
    )
    max_quantity_discount: float = Field(
        default=0.25,
        ge=0.0,
        le=1.0,
        description="Cap on the multi-unit materials discount"
    )
    tables_path: Optional[str] = Field(
        default=None,
        description="Optional JSON file replacing the built-in rate/tax/region tables"
    )

    @field_validator("default_state")
    @classmethod
    def normalize_state(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("tables_path")
    @classmethod
    def validate_tables_path(cls, v: Optional[str]) -> Optional[str]:
        """Warn if the tables file doesn't exist (but don't fail - might be mounted later)."""
        if v and not Path(v).exists():
            import warnings
            warnings.warn(
                f"Pricing tables file not found at {v}. "
                "Built-in tables will be used until it exists."
            )
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for structured logs"
    )
    quote_validity_days: int = Field(
        default=30,
        ge=1,
        le=365,
        description="How long a generated quote stays valid"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def pricing(self) -> PricingSettings:
        return PricingSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.pricing
        results["pricing"] = True
    except Exception as e:
        results["pricing"] = False
        results["pricing_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
