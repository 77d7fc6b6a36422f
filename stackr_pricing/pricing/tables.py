"""
Pricing Tables

DESIGN DECISION: The rate, tax and region tables are an explicit value passed
into the engine, not module-level globals consulted from deep inside the
pricing code. This lets us:
1. Version the tables (the version travels with every quote)
2. Test with small fixture tables
3. Ship regional rate updates as a JSON file without touching pricing logic

Tables are read-only once built and safe to share across threads.
"""

import json
from pathlib import Path
from typing import Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator

from stackr_pricing.config import PricingSettings, get_settings
from stackr_pricing.models.quote import CategoryClass, Region
from stackr_pricing.pricing import reference_data


logger = structlog.get_logger(__name__)


class PricingTables(BaseModel):
    """All static data the engine consults, plus its fallback constants."""
    model_config = ConfigDict(frozen=True)

    version: str = Field(default="builtin")

    hourly_rates: dict[str, dict[Region, float]] = Field(default_factory=dict)
    tax_rates: dict[str, float] = Field(default_factory=dict)
    state_regions: dict[str, Region] = Field(default_factory=dict)
    state_names: dict[str, str] = Field(default_factory=dict)
    category_classes: dict[str, CategoryClass] = Field(default_factory=dict)
    quantity_bearing: frozenset[str] = Field(default_factory=frozenset)
    display_names: dict[str, str] = Field(default_factory=dict)

    # Fallbacks
    default_state: str = Field(default="NY", min_length=2, max_length=2)
    default_region: Region = Region.NORTHEAST
    fallback_hourly_rate: float = Field(default=85.0, gt=0)
    fallback_tax_rate: float = Field(default=0.06, ge=0, lt=1)

    # Surcharge and discount knobs
    emergency_multiplier: float = Field(default=1.5, ge=1.0)
    quantity_discount_step: float = Field(default=0.05, ge=0, le=1)
    max_quantity_discount: float = Field(default=0.25, ge=0, le=1)

    @field_validator("default_state", mode="before")
    @classmethod
    def normalize_default_state(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("tax_rates", "state_regions")
    @classmethod
    def normalize_state_keys(cls, v: dict) -> dict:
        """State codes are looked up uppercased."""
        return {key.strip().upper(): value for key, value in v.items()}

    @field_validator("state_names")
    @classmethod
    def normalize_state_names(cls, v: dict[str, str]) -> dict[str, str]:
        """Names and codes are both matched uppercased, e.g. "NEW YORK" -> "NY"."""
        return {name.strip().upper(): code.strip().upper() for name, code in v.items()}

    def classify(self, category: str) -> CategoryClass:
        """Resolve a category key to its class (general if unlisted)."""
        return self.category_classes.get(category, CategoryClass.GENERAL)

    def is_quantity_bearing(self, category: str) -> bool:
        return category in self.quantity_bearing

    def display_name(self, key: str) -> str:
        """Human-readable name for a category or subcategory key."""
        if key in self.display_names:
            return self.display_names[key]
        return " ".join(part.capitalize() for part in key.split("_") if part)

    @classmethod
    def builtin(cls, settings: Optional[PricingSettings] = None) -> "PricingTables":
        """Tables from the bundled reference data and the configured fallbacks."""
        settings = settings or get_settings().pricing
        return cls.model_validate({
            "version": "builtin",
            "hourly_rates": reference_data.HOURLY_RATES,
            "tax_rates": reference_data.STATE_TAX_RATES,
            "state_regions": reference_data.STATE_REGIONS,
            "state_names": reference_data.STATE_NAMES,
            "category_classes": reference_data.CATEGORY_CLASSES,
            "quantity_bearing": reference_data.QUANTITY_BEARING,
            "display_names": reference_data.DISPLAY_NAMES,
            **_fallbacks_from(settings),
        })

    @classmethod
    def from_json_file(
        cls,
        path: str | Path,
        settings: Optional[PricingSettings] = None,
    ) -> "PricingTables":
        """
        Load tables from a JSON file.

        Keys present in the file replace the built-in value for that table;
        missing keys keep the built-in value.

        Raises:
            FileNotFoundError: If the file doesn't exist
            pydantic.ValidationError: If the file content is malformed
        """
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

        base = cls.builtin(settings).model_dump()
        base.update(data)
        tables = cls.model_validate(base)
        logger.info(
            "pricing_tables_loaded",
            path=str(path),
            version=tables.version,
            categories=len(tables.hourly_rates),
        )
        return tables

    @classmethod
    def default(cls, settings: Optional[PricingSettings] = None) -> "PricingTables":
        """Tables file from settings if configured and present, else built-ins."""
        settings = settings or get_settings().pricing
        if settings.tables_path and Path(settings.tables_path).exists():
            return cls.from_json_file(settings.tables_path, settings)
        return cls.builtin(settings)


def _fallbacks_from(settings: PricingSettings) -> dict:
    return {
        "default_state": settings.default_state,
        "default_region": settings.default_region,
        "fallback_hourly_rate": settings.fallback_hourly_rate,
        "fallback_tax_rate": settings.fallback_tax_rate,
        "emergency_multiplier": settings.emergency_multiplier,
        "quantity_discount_step": settings.quantity_discount_step,
        "max_quantity_discount": settings.max_quantity_discount,
    }
