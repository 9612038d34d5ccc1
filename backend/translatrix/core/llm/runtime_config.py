"""LLM runtime configuration.

Everything a single completion call needs, resolved once from settings when
the provider adapters are built. Adapters never read the environment.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from translatrix.config import Settings

logger = logging.getLogger(__name__)

# LiteLLM routes on a "<provider>/" model prefix; OpenAI models take none
PROVIDER_PREFIXES = {
    "openai": "",
    "anthropic": "anthropic/",
    "gemini": "gemini/",
    "openrouter": "openrouter/",
}


@dataclass(frozen=True)
class LLMRuntimeConfig:
    """Complete LLM configuration for one provider adapter."""

    # Connection parameters
    provider: str
    model: str
    api_key: Optional[str] = None
    base_url: Optional[str] = None

    # Generation parameters
    temperature: float = 0.3
    max_tokens: int = 4096
    timeout: float = 60.0

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def get_litellm_model(self) -> str:
        """Get model string in LiteLLM format (provider/model)."""
        prefix = PROVIDER_PREFIXES.get(self.provider, f"{self.provider}/")
        if prefix and self.model.startswith(prefix):
            return self.model
        return f"{prefix}{self.model}"

    def to_litellm_kwargs(self) -> Dict[str, Any]:
        """Convert to kwargs for litellm.acompletion()."""
        kwargs: Dict[str, Any] = {
            "model": self.get_litellm_model(),
            "api_key": self.api_key,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "timeout": self.timeout,
        }

        if self.base_url:
            kwargs["api_base"] = self.base_url

        return kwargs

    def with_overrides(
        self,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> "LLMRuntimeConfig":
        """Create a copy with specific overrides applied."""
        return replace(
            self,
            temperature=temperature if temperature is not None else self.temperature,
            max_tokens=max_tokens if max_tokens is not None else self.max_tokens,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        provider: str,
        model: str,
        max_tokens: int,
    ) -> "LLMRuntimeConfig":
        """Resolve a config for ``provider`` using its key from settings."""
        api_key = settings.get_api_key(provider)
        if not api_key:
            logger.debug(f"No API key configured for provider={provider}")
        return cls(
            provider=provider,
            model=model,
            api_key=api_key,
            max_tokens=max_tokens,
            timeout=settings.llm_timeout_seconds,
        )
