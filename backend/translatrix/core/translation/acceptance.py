"""Acceptance policies for provider output."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from translatrix.config import Settings

# One CJK character carries roughly as much text as three Latin letters
CJK_CHAR_WEIGHT = 3
_CJK_CHARS = re.compile(r"[\u3000-\u303f\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff\uff00-\uffef]")


def weighted_length(text: str) -> int:
    """Length of ``text`` with CJK characters counted CJK_CHAR_WEIGHT times."""
    cjk = len(_CJK_CHARS.findall(text))
    return len(text) + cjk * (CJK_CHAR_WEIGHT - 1)


class ProviderTier(str, Enum):
    VISION = "vision"
    TEXT = "text"
    FREE = "free"


@dataclass(frozen=True)
class AcceptancePolicy:
    """Minimum bar a provider's output must clear to end the fallback sequence.

    Attributes:
        min_chars: Minimum length of the stripped output
        min_source_ratio: Minimum output length as a fraction of the source
            text length, both measured with weighted_length so scripts of
            different density compare fairly. Ignored when the source text
            is empty (images).
    """

    min_chars: int = 1
    min_source_ratio: float = 0.0

    def accepts(self, text: Optional[str], source_text: str = "") -> bool:
        if not text:
            return False
        stripped = text.strip()
        if len(stripped) < max(self.min_chars, 1):
            return False
        if self.min_source_ratio > 0 and source_text:
            source_length = weighted_length(source_text.strip())
            return weighted_length(stripped) > self.min_source_ratio * source_length
        return True


def policies_from_settings(settings: Settings) -> dict[ProviderTier, AcceptancePolicy]:
    """Build one policy per provider tier from configuration."""
    return {
        ProviderTier.VISION: AcceptancePolicy(min_chars=settings.vision_min_chars),
        ProviderTier.TEXT: AcceptancePolicy(
            min_chars=settings.text_min_chars,
            min_source_ratio=settings.text_min_source_ratio,
        ),
        ProviderTier.FREE: AcceptancePolicy(min_chars=settings.free_min_chars),
    }
