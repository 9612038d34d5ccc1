"""Free translation services used as the last resort.

None of these need credentials. Short texts race every service and keep the
first usable answer; long texts are split into sentence-bounded chunks that
are translated concurrently and reassembled in their original order.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import httpx

from translatrix.core.languages import Language
from translatrix.utils.text import chunk_text

from ..acceptance import ProviderTier
from ..models import TranslationRequest
from .base import TranslationProvider

logger = logging.getLogger(__name__)


class FreeTranslationService(ABC):
    """A keyless HTTP translation endpoint."""

    name: str = "free"

    def language_code(self, language: Language) -> str:
        return language.iso_code

    @abstractmethod
    async def translate(
        self,
        client: httpx.AsyncClient,
        text: str,
        source: Language,
        target: Language,
    ) -> Optional[str]:
        """Translate text, returning None when the service has no answer.

        HTTP and decoding errors may propagate; the chain logs and absorbs them.
        """
        pass


class GoogleFreeService(FreeTranslationService):
    """Google Translate's public web endpoint (client=gtx)."""

    name = "google"
    url = "https://translate.googleapis.com/translate_a/single"

    def language_code(self, language: Language) -> str:
        return "zh-CN" if language == Language.MANDARIN else language.iso_code

    async def translate(self, client, text, source, target):
        response = await client.get(
            self.url,
            params={
                "client": "gtx",
                "sl": self.language_code(source),
                "tl": self.language_code(target),
                "dt": "t",
                "q": text,
            },
        )
        response.raise_for_status()
        data = response.json()

        # [[["translated", "original", ...], ...], ...]
        if not data or not isinstance(data[0], list):
            return None
        parts = [segment[0] for segment in data[0] if segment and isinstance(segment[0], str)]
        return "".join(parts) or None


class MyMemoryService(FreeTranslationService):
    """MyMemory translation memory API."""

    name = "mymemory"
    url = "https://api.mymemory.translated.net/get"

    def __init__(self, email: Optional[str] = None):
        self.email = email

    def language_code(self, language: Language) -> str:
        return "zh-CN" if language == Language.MANDARIN else language.iso_code

    async def translate(self, client, text, source, target):
        params = {
            "q": text,
            "langpair": f"{self.language_code(source)}|{self.language_code(target)}",
        }
        if self.email:
            params["de"] = self.email

        response = await client.get(self.url, params=params)
        response.raise_for_status()
        data = response.json()

        if data.get("responseStatus") != 200:
            logger.debug(f"MyMemory status {data.get('responseStatus')}: {data.get('responseDetails')}")
            return None
        return (data.get("responseData") or {}).get("translatedText") or None


class LibreTranslateService(FreeTranslationService):
    """LibreTranslate instance (public or self-hosted)."""

    name = "libretranslate"

    def __init__(self, url: str = "https://libretranslate.com/translate", api_key: Optional[str] = None):
        self.url = url
        self.api_key = api_key

    async def translate(self, client, text, source, target):
        payload = {
            "q": text,
            "source": self.language_code(source),
            "target": self.language_code(target),
            "format": "text",
        }
        if self.api_key:
            payload["api_key"] = self.api_key

        response = await client.post(self.url, json=payload)
        response.raise_for_status()
        return response.json().get("translatedText") or None


class FreeTranslationChain(TranslationProvider):
    """Last-resort provider built from keyless services."""

    tier = ProviderTier.FREE

    def __init__(
        self,
        services: Sequence[FreeTranslationService],
        race_threshold_chars: int = 3000,
        chunk_max_chars: int = 2000,
        max_concurrency: int = 8,
        timeout: float = 30.0,
    ):
        """Initialize the chain.

        Args:
            services: Services in priority order
            race_threshold_chars: Texts shorter than this race all services
            chunk_max_chars: Maximum chunk size for longer texts
            max_concurrency: Maximum chunks in flight at once
            timeout: Per-request HTTP timeout in seconds
        """
        self.services = list(services)
        self.race_threshold_chars = race_threshold_chars
        self.chunk_max_chars = chunk_max_chars
        self.max_concurrency = max_concurrency
        self.timeout = timeout

    @property
    def provider_id(self) -> str:
        return "free-fallback"

    @property
    def display_name(self) -> str:
        return "Free Translation Services"

    @property
    def is_configured(self) -> bool:
        return bool(self.services)

    async def translate(self, request: TranslationRequest, source_text: str) -> Optional[str]:
        text = source_text.strip()
        if not text:
            logger.info(f"[{self.provider_id}] Skipped: no extracted text")
            return None
        if not self.services:
            logger.info(f"[{self.provider_id}] Skipped: no services configured")
            return None

        source, target = request.source_language, request.target_language
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            if len(text) < self.race_threshold_chars:
                return await self._race(client, text, source, target)
            return await self._translate_chunks(client, text, source, target)

    async def _call(
        self,
        service: FreeTranslationService,
        client: httpx.AsyncClient,
        text: str,
        source: Language,
        target: Language,
    ) -> Optional[str]:
        try:
            result = await service.translate(client, text, source, target)
        except Exception as e:
            logger.warning(f"[{self.provider_id}] {service.name} failed: {e}")
            return None
        if result and result.strip():
            return result.strip()
        return None

    async def _race(self, client, text, source, target) -> Optional[str]:
        """First non-empty answer wins; the rest are cancelled."""
        tasks = [
            asyncio.create_task(self._call(service, client, text, source, target))
            for service in self.services
        ]
        try:
            for next_done in asyncio.as_completed(tasks):
                result = await next_done
                if result:
                    return result
            logger.warning(f"[{self.provider_id}] No service returned a translation")
            return None
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _translate_chunks(self, client, text, source, target) -> Optional[str]:
        chunks = chunk_text(text, self.chunk_max_chars)
        semaphore = asyncio.Semaphore(self.max_concurrency)
        logger.info(f"[{self.provider_id}] Translating {len(chunks)} chunks")

        async def translate_chunk(index: int, chunk: str) -> Optional[str]:
            async with semaphore:
                for service in self.services:
                    result = await self._call(service, client, chunk, source, target)
                    if result:
                        return result
            logger.warning(f"[{self.provider_id}] Chunk {index + 1}/{len(chunks)} left untranslated")
            return None

        results: List[Optional[str]] = await asyncio.gather(
            *(translate_chunk(i, chunk) for i, chunk in enumerate(chunks))
        )

        if not any(results):
            return None
        return " ".join(
            translated if translated else original
            for translated, original in zip(results, chunks)
        )
