"""
Main Orchestrator for Stackr Pricing

Ties the pricing core to its collaborators and defines the end-to-end flow:
    request -> validate -> price -> audit -> (review) -> save
    saved quote -> override one tier -> save as full replace

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing is priced until the request passes validation
- Nothing is persisted implicitly; saving is a separate explicit step
- Edits go through apply_override and replace the whole stored record
- Every step is audited

The pricing engine itself stays synchronous and pure. The flow is async
because storage and audit backends are.
"""

from datetime import datetime, timezone
from typing import Any, Optional, Union
from uuid import UUID

import structlog

from stackr_pricing.advice import QuoteAdvisor
from stackr_pricing.audit import AuditLogger, create_correlation_id
from stackr_pricing.config import get_settings
from stackr_pricing.models.quote import (
    MultiQuoteResult,
    QuoteOverride,
    ServiceRequest,
    Tier,
)
from stackr_pricing.pricing.engine import QuotePricingEngine
from stackr_pricing.pricing.overrides import (
    QuoteOverrideError,
    apply_override,
    changed_fields,
)
from stackr_pricing.services.storage import (
    InMemoryAuditStorage,
    InMemoryQuoteStorage,
    NotFoundError,
    QuoteStorageInterface,
    StorageError,
)
from stackr_pricing.validation import QuoteValidationError


logger = structlog.get_logger(__name__)


def fallbacks_used(result: MultiQuoteResult) -> list[str]:
    """Names of the lookups that fell back to configured defaults."""
    context = result.rate_context
    fallbacks = []
    if not context.location_resolved:
        fallbacks.append("location")
    if not context.rate_from_table:
        fallbacks.append("hourly_rate")
    if not context.tax_from_table:
        fallbacks.append("tax_rate")
    return fallbacks


class QuoteFlow:
    """
    Orchestrates the quote flow.

    Flow:
    1. Request -> audit
    2. Validate -> reject with every issue, or continue
    3. Price -> three tiers from the engine
    4. Review -> caller shows tiers and advice (PAUSE)
    5. Save -> explicit, to quote history
    6. Override -> new record for one tier, saved as a full replace
    """

    def __init__(
        self,
        engine: Optional[QuotePricingEngine] = None,
        quote_storage: Optional[QuoteStorageInterface] = None,
        audit_logger: Optional[AuditLogger] = None,
        advisor: Optional[QuoteAdvisor] = None,
    ):
        self._engine = engine or QuotePricingEngine()
        self._quote_storage = quote_storage
        self._audit_logger = audit_logger
        self._advisor = advisor or QuoteAdvisor()
        self._settings = get_settings().app

    @property
    def engine(self) -> QuotePricingEngine:
        return self._engine

    async def generate_quote(
        self,
        request: Union[ServiceRequest, dict[str, Any]],
        owner_id: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> MultiQuoteResult:
        """
        Validate and price a request.

        Args:
            request: A ServiceRequest or a raw payload (snake_case or camelCase keys)

        Raises:
            QuoteValidationError: If the request is rejected
        """
        correlation_id = correlation_id or create_correlation_id()
        validator = self._engine.validator

        if isinstance(request, ServiceRequest):
            parsed, validation = request, validator.validate(request)
            category, location = request.service_category, request.location
        else:
            parsed, validation = validator.validate_payload(request)
            category = str(request.get("service_category", request.get("serviceCategory", "")))
            location = str(request.get("location", ""))

        if self._audit_logger:
            await self._audit_logger.log_quote_requested(
                category=category,
                location=location,
                correlation_id=correlation_id,
            )

        if parsed is None or validation.has_errors:
            if self._audit_logger:
                await self._audit_logger.log_validation_failed(
                    issues=[issue.model_dump() for issue in validation.issues],
                    correlation_id=correlation_id,
                )
            raise QuoteValidationError(validation.issues)

        try:
            result = self._engine.price_request(
                parsed,
                owner_id=owner_id,
                validation=validation,
            )
        except QuoteValidationError:
            raise
        except Exception as e:
            if self._audit_logger:
                await self._audit_logger.log_error(
                    error_type=type(e).__name__,
                    error_message=str(e),
                    details={"service_category": parsed.service_category},
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            await self._audit_logger.log_quote_generated(
                quote_id=result.quote_id,
                category=parsed.service_category,
                totals={t.tier.value: round(t.total, 2) for t in result.tiers},
                correlation_id=correlation_id,
            )
            fallbacks = fallbacks_used(result)
            if fallbacks:
                await self._audit_logger.log_pricing_fallback(
                    quote_id=result.quote_id,
                    fallbacks=fallbacks,
                    correlation_id=correlation_id,
                )

        return result

    async def save_quote(
        self,
        result: MultiQuoteResult,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Save a generated quote to history.

        Returns False when no quote storage is configured.

        Raises:
            StorageError: If the backend rejects the write
        """
        correlation_id = correlation_id or create_correlation_id()

        if not self._quote_storage:
            logger.warning("quote_storage_not_configured", quote_id=str(result.quote_id))
            return False

        try:
            await self._quote_storage.save_quote(result)
        except StorageError as e:
            if self._audit_logger:
                await self._audit_logger.log_save_failed(
                    quote_id=result.quote_id,
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            await self._audit_logger.log_quote_saved(
                quote_id=result.quote_id,
                owner_id=result.owner_id,
                replaced=False,
                correlation_id=correlation_id,
            )
        return True

    async def override_tier(
        self,
        result: MultiQuoteResult,
        tier: Tier,
        override: QuoteOverride,
        correlation_id: Optional[UUID] = None,
    ) -> MultiQuoteResult:
        """
        Apply a user edit to one tier. Returns a new quote; nothing is saved.

        Raises:
            QuoteOverrideError: If the tier is locked or the edit is invalid
        """
        correlation_id = correlation_id or create_correlation_id()
        tier = Tier(tier)

        try:
            updated = apply_override(result, tier, override)
        except QuoteOverrideError as e:
            if self._audit_logger:
                await self._audit_logger.log_override_rejected(
                    quote_id=result.quote_id,
                    tier=tier.value,
                    reason=e.reason,
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            await self._audit_logger.log_override_applied(
                quote_id=result.quote_id,
                tier=tier.value,
                changed_fields=changed_fields(override),
                correlation_id=correlation_id,
            )
        return updated

    async def override_and_save(
        self,
        quote_id: UUID,
        tier: Tier,
        override: QuoteOverride,
        correlation_id: Optional[UUID] = None,
    ) -> MultiQuoteResult:
        """
        Load a saved quote, override one tier and store the full new record.

        Raises:
            StorageError: If no quote storage is configured
            NotFoundError: If the quote doesn't exist
            QuoteOverrideError: If the edit is refused
        """
        correlation_id = correlation_id or create_correlation_id()

        if not self._quote_storage:
            raise StorageError("Quote storage is not configured")

        stored = await self._quote_storage.get_quote(quote_id)
        if stored is None:
            raise NotFoundError(f"Quote {quote_id} not found")

        updated = await self.override_tier(stored, tier, override, correlation_id)

        try:
            await self._quote_storage.replace_quote(updated)
        except StorageError as e:
            if self._audit_logger:
                await self._audit_logger.log_save_failed(
                    quote_id=quote_id,
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            await self._audit_logger.log_quote_saved(
                quote_id=quote_id,
                owner_id=updated.owner_id,
                replaced=True,
                correlation_id=correlation_id,
            )
        return updated

    async def list_history(
        self,
        owner_id: Optional[str] = None,
        limit: int = 20,
    ) -> list[MultiQuoteResult]:
        """Most recent quotes first. Empty when no storage is configured."""
        if not self._quote_storage:
            return []
        return await self._quote_storage.list_quotes(owner_id=owner_id, limit=limit)

    def advise(
        self,
        result: MultiQuoteResult,
        tier: Tier = Tier.STANDARD,
    ) -> list[str]:
        return self._advisor.advise(result, tier)

    def is_expired(
        self,
        result: MultiQuoteResult,
        now: Optional[datetime] = None,
    ) -> bool:
        """Has the quote passed its validity window?"""
        now = now or datetime.now(timezone.utc)
        return now > result.expires_at(self._settings.quote_validity_days)


def create_app_components(
    use_storage: bool = True,
) -> QuoteFlow:
    """
    Factory function to create a ready-to-use quote flow.

    Args:
        use_storage: Whether to attach in-memory quote and audit storage.
                    Set to False for local-only audit logging.

    Returns:
        QuoteFlow
    """
    if use_storage:
        quote_storage = InMemoryQuoteStorage()
        audit_logger = AuditLogger(InMemoryAuditStorage())
    else:
        quote_storage = None
        audit_logger = AuditLogger()  # Local-only logging

    return QuoteFlow(
        quote_storage=quote_storage,
        audit_logger=audit_logger,
    )
