"""Unified LLM gateway.

Single entry point for every completion call the service makes, so model
naming, parameter passing and logging are consistent across the vision
adapters, the text adapters and the language detector.
"""

import logging
import time

from litellm import acompletion

from translatrix.core.translation.models import LLMResponse, PromptBundle, TokenUsage
from translatrix.utils.text import safe_truncate

from .runtime_config import LLMRuntimeConfig

logger = logging.getLogger(__name__)


class UnifiedLLMGateway:
    """Gateway for all LLM interactions.

    Usage:
        config = LLMRuntimeConfig(provider="anthropic", model="...", api_key="...")
        response = await UnifiedLLMGateway.execute(bundle, config)
    """

    @classmethod
    async def execute(cls, bundle: PromptBundle, config: LLMRuntimeConfig) -> LLMResponse:
        """Execute an LLM call for a prompt bundle.

        Args:
            bundle: Messages plus generation parameters
            config: Provider, model and credentials

        Returns:
            Standardized LLMResponse

        Raises:
            Exception: Whatever litellm raises; callers decide how to fold it
        """
        start_time = time.time()

        kwargs = config.to_litellm_kwargs()
        kwargs["messages"] = bundle.to_messages()
        kwargs["temperature"] = bundle.temperature
        kwargs["max_tokens"] = min(bundle.max_tokens, config.max_tokens)

        logger.info(
            f"LLM call: model={kwargs['model']}, mode={bundle.mode}, "
            f"max_tokens={kwargs['max_tokens']}"
        )

        try:
            response = await acompletion(**kwargs)
        except Exception as e:
            logger.error(f"LLM call failed: model={kwargs['model']}, error={e}")
            raise

        latency_ms = int((time.time() - start_time) * 1000)
        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""

        usage = getattr(response, "usage", None)
        result = LLMResponse(
            content=content,
            model=config.model,
            provider=config.provider,
            usage=TokenUsage(
                prompt_tokens=usage.prompt_tokens if usage else 0,
                completion_tokens=usage.completion_tokens if usage else 0,
            ),
            latency_ms=latency_ms,
        )

        logger.info(
            f"LLM response: tokens={result.usage.total_tokens}, latency={latency_ms}ms, "
            f"preview={safe_truncate(content, 60)!r}"
        )
        return result


# Convenience alias for shorter imports
LLMGateway = UnifiedLLMGateway
