"""Translation data models.

Structured models for the contracts between the request pipeline, the
provider adapters and the orchestrator.
"""

from .prompt import Message, PromptBundle
from .request import FilePayload, TranslationRequest
from .response import LLMResponse, TokenUsage
from .result import OrchestrationOutcome, ProviderAttempt, ProviderResult, Verdict

__all__ = [
    # Request models
    "FilePayload",
    "TranslationRequest",
    # Prompt models
    "Message",
    "PromptBundle",
    # Response models
    "TokenUsage",
    "LLMResponse",
    # Result models
    "Verdict",
    "ProviderResult",
    "ProviderAttempt",
    "OrchestrationOutcome",
]
