"""
Pytest Configuration and Fixtures

Shared fakes and fixtures for all tests. Coroutines are driven with
asyncio.run; providers are replaced by in-memory fakes so nothing touches
the network.
"""

import asyncio
from typing import Optional

import pytest

from translatrix.core.languages import Language
from translatrix.core.media import MediaCategory
from translatrix.core.translation.acceptance import AcceptancePolicy, ProviderTier
from translatrix.core.translation.models import FilePayload, TranslationRequest
from translatrix.core.translation.orchestrator import FallbackOrchestrator
from translatrix.core.translation.providers import TranslationProvider
from translatrix.core.translation.service import TranslationService


class FakeProvider(TranslationProvider):
    """Provider returning a canned result and counting calls."""

    def __init__(
        self,
        provider_id: str,
        result: Optional[str] = None,
        tier: ProviderTier = ProviderTier.TEXT,
        delay: float = 0.0,
        configured: bool = True,
    ):
        self._provider_id = provider_id
        self.result = result
        self.tier = tier
        self.delay = delay
        self.configured = configured
        self.calls = 0
        self.seen_source_texts = []

    @property
    def provider_id(self) -> str:
        return self._provider_id

    @property
    def display_name(self) -> str:
        return f"Fake {self._provider_id}"

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def translate(self, request, source_text):
        self.calls += 1
        self.seen_source_texts.append(source_text)
        if self.delay:
            await asyncio.sleep(self.delay)
        if not self.configured:
            return None
        return self.result


class RecordingSleep:
    """Awaitable sleep replacement that records requested delays."""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


DEFAULT_POLICIES = {
    ProviderTier.VISION: AcceptancePolicy(min_chars=50),
    ProviderTier.TEXT: AcceptancePolicy(min_chars=1, min_source_ratio=0.3),
    ProviderTier.FREE: AcceptancePolicy(min_chars=1),
}


def make_request(
    content: bytes = b"Hola mundo.",
    media_type: str = "text/plain",
    filename: str = "document.txt",
    source: Language = Language.SPANISH,
    target: Language = Language.ENGLISH,
) -> TranslationRequest:
    return TranslationRequest(
        payload=FilePayload(content=content, media_type=media_type, filename=filename),
        source_language=source,
        target_language=target,
    )


def make_orchestrator(providers, plans=None, policies=None) -> FallbackOrchestrator:
    registry = {p.provider_id: p for p in providers}
    ids = list(registry)
    if plans is None:
        plans = {category: ids for category in MediaCategory}
    return FallbackOrchestrator(registry, plans, policies or DEFAULT_POLICIES)


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def image_request():
    return make_request(content=b"\x89PNG\r\n\x1a\nfakeimage", media_type="image/png", filename="scan.png")


@pytest.fixture
def text_request():
    return make_request()


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def make_service(upload_dir):
    """Build a TranslationService around fake providers."""

    def factory(providers, plans=None, detector=None, timeout=5.0, max_upload_size=1024 * 1024):
        return TranslationService(
            orchestrator=make_orchestrator(providers, plans),
            detector=detector,
            upload_dir=upload_dir,
            max_upload_size=max_upload_size,
            timeout=timeout,
        )

    return factory
