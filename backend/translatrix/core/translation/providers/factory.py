"""Build the provider registry from settings."""

import asyncio
import logging
from typing import Awaitable, Callable, Dict

from translatrix.config import Settings
from translatrix.core.llm import LLMRuntimeConfig

from .base import TranslationProvider
from .free import FreeTranslationChain, GoogleFreeService, LibreTranslateService, MyMemoryService
from .llm import IMAGE_MEDIA_TYPES, PDF_MEDIA_TYPES, TextTranslationProvider, VisionTranslationProvider

logger = logging.getLogger(__name__)


class ProviderFactory:
    """Creates every known provider, keyed by provider id."""

    @staticmethod
    def from_settings(
        settings: Settings,
        sleep: Callable[[float], Awaitable] = asyncio.sleep,
    ) -> Dict[str, TranslationProvider]:
        """Create providers with credentials and limits taken from settings.

        Providers without a key are still registered; they decline at call time
        so the plan order stays visible in logs.
        """
        retry_kwargs = {
            "max_attempts": settings.provider_max_attempts,
            "base_delay": settings.retry_base_delay,
            "sleep": sleep,
        }

        def llm_config(provider: str, model: str, max_tokens: int) -> LLMRuntimeConfig:
            return LLMRuntimeConfig.from_settings(settings, provider, model, max_tokens)

        providers: list[TranslationProvider] = [
            VisionTranslationProvider(
                "gemini-vision",
                "Google Gemini Vision",
                llm_config("gemini", settings.gemini_model, settings.vision_max_tokens),
                media_types=IMAGE_MEDIA_TYPES,
                **retry_kwargs,
            ),
            VisionTranslationProvider(
                "openai-vision",
                "OpenAI GPT-4o Vision",
                llm_config("openai", settings.openai_model, settings.vision_max_tokens),
                media_types=IMAGE_MEDIA_TYPES,
                **retry_kwargs,
            ),
            VisionTranslationProvider(
                "claude-vision",
                "Claude Sonnet Vision",
                llm_config("anthropic", settings.anthropic_model, settings.vision_max_tokens),
                media_types=IMAGE_MEDIA_TYPES | PDF_MEDIA_TYPES,
                **retry_kwargs,
            ),
            TextTranslationProvider(
                "claude-text",
                "Claude Sonnet",
                llm_config("anthropic", settings.anthropic_model, settings.text_max_tokens),
                **retry_kwargs,
            ),
            TextTranslationProvider(
                "openrouter-text",
                "OpenRouter",
                llm_config("openrouter", settings.openrouter_model, settings.text_max_tokens),
                **retry_kwargs,
            ),
            FreeTranslationChain(
                services=[
                    GoogleFreeService(),
                    MyMemoryService(email=settings.mymemory_email),
                    LibreTranslateService(
                        url=settings.libretranslate_url,
                        api_key=settings.libretranslate_api_key,
                    ),
                ],
                race_threshold_chars=settings.free_race_threshold_chars,
                chunk_max_chars=settings.free_chunk_max_chars,
                max_concurrency=settings.free_max_concurrency,
                timeout=settings.free_request_timeout_seconds,
            ),
        ]

        configured = [p.provider_id for p in providers if p.is_configured]
        logger.info(f"Providers configured: {', '.join(configured)}")
        return {p.provider_id: p for p in providers}
