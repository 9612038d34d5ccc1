"""Translation package.

Architecture:
- models/: Data models (TranslationRequest, PromptBundle, OrchestrationOutcome)
- providers/: Provider adapters behind one TranslationProvider contract
- retry.py: Exponential backoff around provider calls
- acceptance.py: Per-tier acceptance policies
- orchestrator.py: Ordered fallback across providers
- assembler.py: Response payload and display metrics
- service.py: The request pipeline tying it all together

Only the models are re-exported here; import the components from their
modules.
"""

from .models import (
    FilePayload,
    LLMResponse,
    Message,
    OrchestrationOutcome,
    PromptBundle,
    ProviderAttempt,
    ProviderResult,
    TokenUsage,
    TranslationRequest,
    Verdict,
)

__all__ = [
    "FilePayload",
    "TranslationRequest",
    "Message",
    "PromptBundle",
    "TokenUsage",
    "LLMResponse",
    "Verdict",
    "ProviderResult",
    "ProviderAttempt",
    "OrchestrationOutcome",
]
