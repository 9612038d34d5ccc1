"""Fallback orchestrator - tries providers in priority order until one is accepted."""

import logging
import time
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence

from translatrix.config import Settings
from translatrix.core.errors import AllProvidersFailedError, UnsupportedMediaTypeError
from translatrix.core.media import MediaCategory

from .acceptance import AcceptancePolicy, ProviderTier, policies_from_settings
from .models import OrchestrationOutcome, ProviderAttempt, ProviderResult, TranslationRequest, Verdict
from .providers import TranslationProvider

logger = logging.getLogger(__name__)


class OrchestrationState(str, Enum):
    NOT_STARTED = "not_started"
    TRYING_PROVIDER = "trying_provider"
    ACCEPTED = "accepted"
    ALL_EXHAUSTED = "all_exhausted"


def plans_from_settings(settings: Settings) -> Dict[MediaCategory, List[str]]:
    """Provider plans per media category, from configuration."""
    return {
        MediaCategory.IMAGE: list(settings.image_plan),
        MediaCategory.PDF: list(settings.pdf_plan),
        MediaCategory.DOCX: list(settings.text_plan),
        MediaCategory.TEXT: list(settings.text_plan),
        MediaCategory.JSON: list(settings.text_plan),
    }


class FallbackOrchestrator:
    """Runs the provider plan for a request's media category.

    Providers are tried strictly one at a time. The first output that passes
    the acceptance policy for its provider's tier is returned; anything else
    (None, empty, too short) moves on to the next provider. Results are never
    combined.
    """

    def __init__(
        self,
        providers: Mapping[str, TranslationProvider],
        plans: Mapping[MediaCategory, Sequence[str]],
        policies: Optional[Mapping[ProviderTier, AcceptancePolicy]] = None,
    ):
        """Initialize the orchestrator.

        Args:
            providers: Registered providers keyed by provider id
            plans: Ordered provider ids per media category
            policies: Acceptance policy per provider tier; defaults accept any
                non-empty output
        """
        self.providers = dict(providers)
        self.plans = {category: list(plan) for category, plan in plans.items()}
        self.policies = dict(policies or {})

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        providers: Mapping[str, TranslationProvider],
    ) -> "FallbackOrchestrator":
        return cls(providers, plans_from_settings(settings), policies_from_settings(settings))

    def plan_for(self, category: MediaCategory) -> List[str]:
        return list(self.plans.get(category, []))

    def policy_for(self, provider: TranslationProvider) -> AcceptancePolicy:
        return self.policies.get(provider.tier, AcceptancePolicy())

    async def translate(
        self,
        request: TranslationRequest,
        source_text: str = "",
    ) -> OrchestrationOutcome:
        """Translate a request using the plan for its media category.

        Args:
            request: Document and language pair
            source_text: Extracted text, empty for images

        Returns:
            The first accepted translation

        Raises:
            UnsupportedMediaTypeError: If the request's media type has no category
            AllProvidersFailedError: If no provider produced an acceptable result
        """
        category = request.payload.category
        if category is None:
            raise UnsupportedMediaTypeError(
                f"Unsupported file type: {request.payload.media_type}"
            )

        plan = self.plan_for(category)
        attempts: List[ProviderAttempt] = []
        state = OrchestrationState.NOT_STARTED
        logger.info(
            f"[Orchestrator] {request.payload.filename}: category={category.value}, "
            f"plan={' -> '.join(plan)}"
        )

        for index, provider_id in enumerate(plan):
            state = OrchestrationState.TRYING_PROVIDER
            provider = self.providers.get(provider_id)
            if provider is None:
                logger.warning(f"[Orchestrator] Unknown provider in plan: {provider_id}")
                attempts.append(ProviderAttempt(provider_id=provider_id, verdict=Verdict.UNKNOWN))
                continue

            logger.info(f"[Orchestrator] Step {index + 1}/{len(plan)}: {provider_id}")
            start = time.monotonic()
            result = ProviderResult(
                provider_id=provider_id,
                text=await provider.translate(request, source_text),
            )
            text = result.text
            elapsed_ms = int((time.monotonic() - start) * 1000)
            output_chars = len(text.strip()) if text else 0

            if text is None or not text.strip():
                attempts.append(ProviderAttempt(
                    provider_id=provider_id,
                    verdict=Verdict.DECLINED,
                    elapsed_ms=elapsed_ms,
                ))
                continue

            if not self.policy_for(provider).accepts(text, source_text):
                logger.warning(
                    f"[Orchestrator] {provider_id} output rejected: {output_chars} chars "
                    f"for {len(source_text)} chars of source"
                )
                attempts.append(ProviderAttempt(
                    provider_id=provider_id,
                    verdict=Verdict.REJECTED,
                    output_chars=output_chars,
                    elapsed_ms=elapsed_ms,
                ))
                continue

            attempts.append(ProviderAttempt(
                provider_id=provider_id,
                verdict=Verdict.ACCEPTED,
                output_chars=output_chars,
                elapsed_ms=elapsed_ms,
            ))
            state = OrchestrationState.ACCEPTED
            logger.info(f"[Orchestrator] {state.value}: {provider_id} ({output_chars} chars)")
            return OrchestrationOutcome(
                translated_text=text.strip(),
                provider_id=provider_id,
                provider_name=provider.display_name,
                attempts=attempts,
            )

        state = OrchestrationState.ALL_EXHAUSTED
        logger.error(
            f"[Orchestrator] {state.value}: all providers failed for {request.payload.filename}: "
            + ", ".join(f"{a.provider_id}={a.verdict.value}" for a in attempts)
        )
        raise AllProvidersFailedError(attempted=[a.provider_id for a in attempts])
