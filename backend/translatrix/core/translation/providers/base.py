"""Translation provider contract."""

from abc import ABC, abstractmethod
from typing import Optional

from ..acceptance import ProviderTier
from ..models import TranslationRequest


class TranslationProvider(ABC):
    """One way of turning a request into translated text.

    Implementations never raise for provider-side failures. Missing
    credentials, unsupported media, authentication errors, rate limits,
    timeouts and empty responses all come back as None.
    """

    tier: ProviderTier = ProviderTier.TEXT

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """Stable identifier used in provider plans."""
        pass

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human readable model name for responses and reports."""
        pass

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the credentials this provider needs are present."""
        pass

    @abstractmethod
    async def translate(self, request: TranslationRequest, source_text: str) -> Optional[str]:
        """Translate the request.

        Args:
            request: The document and language pair
            source_text: Text extracted from the document; empty for images

        Returns:
            Translated text, or None when the provider declines or fails
        """
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.provider_id}>"
