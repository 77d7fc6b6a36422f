"""
Two-Stage Request Validation

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - SCHEMA VALIDATION:
- Type checking
- Required field presence
- Ranges (labor hours > 0, quantity >= 1, margin in [0, 100))
- Handled by the ServiceRequest pydantic model

STAGE 2 - SEMANTIC VALIDATION:
- Quantity required for quantity-bearing categories
- Effective margin (target + tier bump) must stay below 100%
- Unknown category / unresolvable location (warnings only, they price
  through the configured fallbacks)

Both stages run before any pricing arithmetic. A request with any
error-level issue is rejected as a whole; there are no partial quotes.
"""

from typing import Any, Optional

import structlog
from pydantic import ValidationError

from stackr_pricing.models.quote import (
    ServiceRequest,
    ValidationIssue,
    ValidationResult,
)
from stackr_pricing.pricing.location import resolve_state
from stackr_pricing.pricing.tables import PricingTables
from stackr_pricing.pricing.tiers import max_margin_adjustment


logger = structlog.get_logger(__name__)


class QuoteValidationError(ValueError):
    """Raised when a request fails validation. Carries every issue found."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        errors = [issue.message for issue in issues if issue.severity == "error"]
        super().__init__("Invalid quote request: " + "; ".join(errors))


class QuoteRequestValidator:
    """
    Validates service requests through a two-stage pipeline.

    Stage 1: Schema validation (pydantic, raw payloads only)
    Stage 2: Semantic validation (needs the pricing tables)
    """

    def __init__(self, tables: Optional[PricingTables] = None):
        self._tables = tables or PricingTables.default()

    def _schema_issues(self, error: ValidationError) -> list[ValidationIssue]:
        """Convert pydantic errors into validation issues."""
        issues = []
        for err in error.errors():
            field = ".".join(str(part) for part in err["loc"]) or "request"
            issues.append(ValidationIssue(
                field=field,
                issue_type="missing" if err["type"] == "missing" else "invalid_value",
                message=f"{field}: {err['msg']}",
                severity="error",
            ))
        return issues

    def _validate_semantic(
        self,
        request: ServiceRequest,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 2: Semantic validation.

        Returns: (is_valid, list_of_issues)
        """
        issues = []
        tables = self._tables
        category = request.service_category

        if tables.is_quantity_bearing(category):
            if request.quantity is None:
                issues.append(ValidationIssue(
                    field="quantity",
                    issue_type="missing",
                    message=f"Quantity is required for {tables.display_name(category)}",
                    severity="error",
                    suggested_fix="Enter how many units are being serviced",
                ))
        elif request.quantity is not None and request.quantity > 1:
            issues.append(ValidationIssue(
                field="quantity",
                issue_type="ignored",
                message=f"Quantity is not used when pricing {tables.display_name(category)}",
                severity="info",
            ))

        category_class = tables.classify(category)
        peak_margin = request.target_margin_percent + max_margin_adjustment(category_class)
        if peak_margin >= 100.0:
            issues.append(ValidationIssue(
                field="target_margin_percent",
                issue_type="out_of_range",
                message=(
                    f"Target margin {request.target_margin_percent:g}% reaches "
                    f"{peak_margin:g}% on the premium tier; it must stay below 100%"
                ),
                severity="error",
                suggested_fix="Lower the target margin",
            ))

        if category not in tables.hourly_rates:
            issues.append(ValidationIssue(
                field="service_category",
                issue_type="fallback",
                message=(
                    f"No rate data for '{category}'; using the default rate of "
                    f"${tables.fallback_hourly_rate:.2f}/hour"
                ),
                severity="warning",
                suggested_fix="Check the category or add it to the rate table",
            ))

        _, location_resolved = resolve_state(request.location, tables)
        if not location_resolved:
            issues.append(ValidationIssue(
                field="location",
                issue_type="fallback",
                message=(
                    f"Could not determine a state from '{request.location}'; "
                    f"pricing as {tables.default_state}"
                ),
                severity="warning",
                suggested_fix="Use the form 'City, ST'",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def validate(self, request: ServiceRequest) -> ValidationResult:
        """Validate an already-constructed request (schema stage is implied)."""
        semantic_valid, issues = self._validate_semantic(request)
        result = ValidationResult(
            schema_valid=True,
            semantic_valid=semantic_valid,
            issues=issues,
            warnings=[i.message for i in issues if i.severity == "warning"],
        )
        if not result.is_valid:
            logger.info(
                "quote_request_rejected",
                service_category=request.service_category,
                errors=[i.message for i in result.errors],
            )
        return result

    def validate_payload(
        self,
        payload: dict[str, Any],
    ) -> tuple[Optional[ServiceRequest], ValidationResult]:
        """
        Run full two-stage validation on a raw request payload.

        Returns:
            (request, result) - request is None if stage 1 failed
        """
        try:
            request = ServiceRequest.model_validate(payload)
        except ValidationError as e:
            issues = self._schema_issues(e)
            logger.info("quote_request_schema_invalid", error_count=len(issues))
            return None, ValidationResult(
                schema_valid=False,
                semantic_valid=False,
                issues=issues,
            )
        return request, self.validate(request)

    def ensure_valid(self, request: ServiceRequest) -> ValidationResult:
        """
        Validate and raise on any error-level issue.

        Raises:
            QuoteValidationError: If the request cannot be priced
        """
        result = self.validate(request)
        if result.has_errors:
            raise QuoteValidationError(result.issues)
        return result

    def get_user_friendly_summary(
        self,
        result: ValidationResult,
    ) -> str:
        """
        Generate a user-friendly summary of validation results.
        """
        if result.is_valid and not result.warnings:
            return "✅ All checks passed."

        lines = []

        if result.has_errors:
            lines.append("❌ This request can't be priced yet:")
            for issue in result.errors:
                lines.append(f"   • {issue.message}")
                if issue.suggested_fix:
                    lines.append(f"     💡 {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Priced with default values:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
