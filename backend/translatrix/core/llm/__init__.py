"""LLM integration package.

All completion calls go through LLMGateway with an LLMRuntimeConfig resolved
from settings.
"""

from .gateway import LLMGateway, UnifiedLLMGateway
from .runtime_config import LLMRuntimeConfig

__all__ = [
    "LLMGateway",
    "UnifiedLLMGateway",
    "LLMRuntimeConfig",
]
