"""Orchestration result models.

A ProviderResult is ephemeral: it lives only long enough to be judged by the
acceptance policy for its tier. The OrchestrationOutcome is what the rest of
the pipeline sees.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class Verdict(str, Enum):
    """What happened to one provider in the plan."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"  # Output did not pass the acceptance policy
    DECLINED = "declined"  # Provider returned nothing (unconfigured, wrong media, failure)
    UNKNOWN = "unknown"  # Plan entry has no registered provider


class ProviderResult(BaseModel):
    """Raw output of one provider invocation."""

    provider_id: str
    text: Optional[str] = None


class ProviderAttempt(BaseModel):
    """Record of one provider's turn in the fallback sequence."""

    provider_id: str
    verdict: Verdict
    output_chars: int = Field(default=0, description="Stripped length of the output")
    elapsed_ms: int = Field(default=0)


class OrchestrationOutcome(BaseModel):
    """The accepted translation and how it was reached."""

    translated_text: str
    provider_id: str
    provider_name: str
    attempts: List[ProviderAttempt] = Field(default_factory=list)

    @property
    def attempted_ids(self) -> List[str]:
        return [a.provider_id for a in self.attempts]
