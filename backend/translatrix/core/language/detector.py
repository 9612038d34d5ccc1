"""LLM-based source language detection.

The detector is a gate, not a provider: it either names a language or
declines, and the request pipeline decides what a mismatch means.
"""

import logging
from typing import Optional

from translatrix.config import Settings
from translatrix.core.errors import LanguageMismatchError, UnsupportedLanguageError
from translatrix.core.languages import Language, normalize_language_name
from translatrix.core.llm import LLMGateway, LLMRuntimeConfig
from translatrix.core.translation.prompts import build_detection_prompt
from translatrix.utils.text import safe_truncate

logger = logging.getLogger(__name__)


class LanguageDetector:
    """Names the language of a text sample using a small LLM."""

    def __init__(self, config: LLMRuntimeConfig, sample_chars: int = 500):
        self.config = config
        self.sample_chars = sample_chars

    @classmethod
    def from_settings(cls, settings: Settings) -> "LanguageDetector":
        config = LLMRuntimeConfig.from_settings(
            settings,
            settings.language_detection_provider,
            settings.language_detection_model,
            max_tokens=10,
        )
        return cls(config, sample_chars=settings.language_sample_chars)

    @property
    def is_configured(self) -> bool:
        return self.config.is_configured

    async def detect(self, text: str) -> Optional[str]:
        """Detect the language of the first ``sample_chars`` characters.

        Returns:
            Normalized lower-case language name, or None when detection is
            unavailable (no key, blank sample, provider error)
        """
        sample = text[: self.sample_chars].strip()
        if not sample:
            return None
        if not self.is_configured:
            logger.debug("Language detection skipped: no API key configured")
            return None

        bundle = build_detection_prompt(sample, [lang.value for lang in Language])
        try:
            response = await LLMGateway.execute(bundle, self.config)
        except Exception as e:
            logger.warning(f"Language detection failed: {e}")
            return None

        answer = response.content.strip()
        detected = normalize_language_name(answer)
        if detected is None:
            logger.warning(f"Language detection gave an unusable answer: {safe_truncate(answer, 60)!r}")
            return None
        logger.info(f"Detected language: {detected}")
        return detected


def check_declared_language(declared: Language, detected: Optional[str]) -> None:
    """Compare a detection result with the language the client declared.

    Raises:
        UnsupportedLanguageError: If the detected language is outside the supported set
        LanguageMismatchError: If it is supported but differs from ``declared``
    """
    if detected is None:
        return

    try:
        language = Language.parse(detected)
    except UnsupportedLanguageError:
        raise UnsupportedLanguageError(
            f"Detected language '{detected}' is not supported",
            details="Upload a document in Spanish, French, German, Mandarin, Hindi or English.",
        ) from None

    if language != declared:
        raise LanguageMismatchError(
            f"Document appears to be {language.display_name}, not {declared.display_name}",
            details="Choose the correct source language and try again.",
        )
