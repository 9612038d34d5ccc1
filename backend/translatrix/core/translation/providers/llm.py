"""LiteLLM-backed translation providers.

Vision providers send the document itself (image, or PDF for models that read
PDFs); text providers send the extracted text. Every call goes through the
retry wrapper, and every litellm failure is folded into None here.
"""

import asyncio
import logging
from abc import abstractmethod
from functools import partial
from typing import Awaitable, Callable, FrozenSet, Optional

import litellm

from translatrix.core.llm import LLMGateway, LLMRuntimeConfig
from translatrix.core.media import IMAGE_MEDIA_TYPES
from translatrix.utils.text import safe_truncate

from ..acceptance import ProviderTier
from ..models import PromptBundle, TranslationRequest
from ..prompts import build_text_prompt, build_vision_prompt
from ..retry import retry
from .base import TranslationProvider

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPES = frozenset({"application/pdf"})


def describe_failure(error: Exception) -> str:
    """Short category hint for a provider failure, used in log lines."""
    if isinstance(error, litellm.AuthenticationError):
        return "authentication failed, check the API key"
    if isinstance(error, litellm.RateLimitError):
        return "rate limited or quota exhausted"
    if isinstance(error, litellm.Timeout):
        return "timed out"
    if isinstance(error, litellm.APIConnectionError):
        return "connection failed"
    if isinstance(error, litellm.BadRequestError):
        return "request rejected"
    return "unexpected error"


class LiteLLMProvider(TranslationProvider):
    """Shared plumbing for providers reached through LiteLLM."""

    def __init__(
        self,
        provider_id: str,
        display_name: str,
        config: LLMRuntimeConfig,
        max_attempts: int = 2,
        base_delay: float = 2.0,
        sleep: Callable[[float], Awaitable] = asyncio.sleep,
    ):
        self._provider_id = provider_id
        self._display_name = display_name
        self.config = config
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self._sleep = sleep

    @property
    def provider_id(self) -> str:
        return self._provider_id

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def is_configured(self) -> bool:
        return self.config.is_configured

    def declines(self, request: TranslationRequest, source_text: str) -> Optional[str]:
        """Return a reason to skip this request, or None to proceed."""
        if not self.is_configured:
            return "no API key configured"
        return None

    @abstractmethod
    def build_prompt(self, request: TranslationRequest, source_text: str) -> PromptBundle:
        """Build the prompt bundle sent to the model."""
        pass

    async def _complete(self, bundle: PromptBundle) -> Optional[str]:
        response = await LLMGateway.execute(bundle, self.config)
        return response.content.strip() or None

    async def translate(self, request: TranslationRequest, source_text: str) -> Optional[str]:
        reason = self.declines(request, source_text)
        if reason:
            logger.info(f"[{self.provider_id}] Skipped: {reason}")
            return None

        bundle = self.build_prompt(request, source_text)
        logger.info(
            f"[{self.provider_id}] Translating {request.payload.filename} "
            f"({request.language_pair})"
        )

        try:
            text = await retry(
                partial(self._complete, bundle),
                max_attempts=self.max_attempts,
                base_delay=self.base_delay,
                sleep=self._sleep,
            )
        except Exception as e:
            logger.warning(f"[{self.provider_id}] Failed ({describe_failure(e)}): {e}")
            return None

        if not text:
            logger.warning(f"[{self.provider_id}] Returned an empty response")
            return None

        logger.info(
            f"[{self.provider_id}] Returned {len(text)} chars: {safe_truncate(text, 80)!r}"
        )
        return text


class VisionTranslationProvider(LiteLLMProvider):
    """Reads the uploaded document directly (Gemini, GPT-4o, Claude)."""

    tier = ProviderTier.VISION

    def __init__(
        self,
        provider_id: str,
        display_name: str,
        config: LLMRuntimeConfig,
        media_types: FrozenSet[str] = IMAGE_MEDIA_TYPES,
        **kwargs,
    ):
        super().__init__(provider_id, display_name, config, **kwargs)
        self.media_types = media_types

    def declines(self, request: TranslationRequest, source_text: str) -> Optional[str]:
        media_type = request.payload.media_type.lower()
        if media_type not in self.media_types:
            return f"media type {media_type} not supported"
        return super().declines(request, source_text)

    def build_prompt(self, request: TranslationRequest, source_text: str) -> PromptBundle:
        return build_vision_prompt(request, self.config.max_tokens)


class TextTranslationProvider(LiteLLMProvider):
    """Translates extracted text (Claude, OpenRouter)."""

    tier = ProviderTier.TEXT

    def declines(self, request: TranslationRequest, source_text: str) -> Optional[str]:
        if not source_text.strip():
            return "no extracted text"
        return super().declines(request, source_text)

    def build_prompt(self, request: TranslationRequest, source_text: str) -> PromptBundle:
        return build_text_prompt(request, source_text, self.config.max_tokens)
