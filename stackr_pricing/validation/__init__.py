"""
Validation Package

Two-stage validation of quote requests before pricing.
"""

from stackr_pricing.validation.validator import (
    QuoteRequestValidator,
    QuoteValidationError,
)

__all__ = [
    "QuoteRequestValidator",
    "QuoteValidationError",
]
