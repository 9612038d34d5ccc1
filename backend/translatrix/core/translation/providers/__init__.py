"""Translation providers.

- base.py: the TranslationProvider contract
- llm.py: LiteLLM vision and text providers
- free.py: keyless services and the free fallback chain
- factory.py: builds the registry from settings
"""

from .base import TranslationProvider
from .factory import ProviderFactory
from .free import (
    FreeTranslationChain,
    FreeTranslationService,
    GoogleFreeService,
    LibreTranslateService,
    MyMemoryService,
)
from .llm import LiteLLMProvider, TextTranslationProvider, VisionTranslationProvider

__all__ = [
    "TranslationProvider",
    "ProviderFactory",
    "LiteLLMProvider",
    "VisionTranslationProvider",
    "TextTranslationProvider",
    "FreeTranslationService",
    "GoogleFreeService",
    "MyMemoryService",
    "LibreTranslateService",
    "FreeTranslationChain",
]
