"""Tests for the free translation services and the free fallback chain."""

import asyncio
import json

import httpx
import pytest

from conftest import make_orchestrator, make_request
from translatrix.core.languages import Language
from translatrix.core.llm import LLMRuntimeConfig
from translatrix.core.translation.providers import (
    FreeTranslationChain,
    FreeTranslationService,
    GoogleFreeService,
    LibreTranslateService,
    MyMemoryService,
    TextTranslationProvider,
)
from translatrix.utils.text import chunk_text


class ScriptedService(FreeTranslationService):
    """Service whose latency and answer depend on the input text."""

    def __init__(self, name="scripted", delays=None, fail_on=(), prefix=None):
        self.name = name
        self.delays = delays or {}
        self.fail_on = set(fail_on)
        self.prefix = prefix
        self.calls = []
        self.completed = []
        self.cancelled = False

    async def translate(self, client, text, source, target):
        self.calls.append(text)
        try:
            await asyncio.sleep(self.delays.get(text, 0))
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if text in self.fail_on or "*" in self.fail_on:
            raise httpx.ConnectError("unreachable")
        self.completed.append(text)
        if self.prefix:
            return f"{self.prefix}:{text}"
        return f"{text[0]}-result"


def run_chain(chain, text, source=Language.SPANISH, target=Language.ENGLISH):
    request = make_request(source=source, target=target)
    return asyncio.run(chain.translate(request, text))


class TestChunking:
    """Tests for sentence-bounded chunking"""

    def test_chunks_respect_max_chars(self):
        text = " ".join(f"Sentence number {i} ends here." for i in range(200))
        chunks = chunk_text(text, 300)
        assert all(len(chunk) <= 300 for chunk in chunks)
        assert " ".join(chunks) == text

    def test_oversize_sentence_is_wrapped(self):
        sentence = "word " * 100 + "end."
        chunks = chunk_text(sentence, 50)
        assert len(chunks) > 1
        assert all(len(chunk) <= 50 for chunk in chunks)

    def test_single_letters(self):
        assert chunk_text("A. B. C.", 2) == ["A.", "B.", "C."]

    def test_rejects_non_positive_limit(self):
        with pytest.raises(ValueError):
            chunk_text("text", 0)


class TestFreeTranslationChain:
    """Tests for racing and chunked translation"""

    def test_chunked_translation_preserves_input_order(self):
        service = ScriptedService(delays={"A.": 0.02, "B.": 0.04, "C.": 0.0})
        chain = FreeTranslationChain([service], race_threshold_chars=0, chunk_max_chars=2)

        result = run_chain(chain, "A. B. C.")

        assert service.completed == ["C.", "A.", "B."]
        assert result == "A-result B-result C-result"

    def test_chunk_falls_through_services_in_order(self):
        broken = ScriptedService(name="broken", fail_on={"B."})
        backup = ScriptedService(name="backup", prefix="backup")
        chain = FreeTranslationChain([broken, backup], race_threshold_chars=0, chunk_max_chars=2)

        result = run_chain(chain, "A. B.")

        assert result == "A-result backup:B."
        assert backup.calls == ["B."]

    def test_untranslated_chunk_kept_when_every_service_fails(self):
        service = ScriptedService(fail_on={"B."})
        chain = FreeTranslationChain([service], race_threshold_chars=0, chunk_max_chars=2)

        assert run_chain(chain, "A. B. C.") == "A-result B. C-result"

    def test_nothing_translated_returns_none(self):
        service = ScriptedService(fail_on={"*"})
        chain = FreeTranslationChain([service], race_threshold_chars=0, chunk_max_chars=2)

        assert run_chain(chain, "A. B.") is None

    def test_short_text_races_and_cancels_losers(self):
        slow = ScriptedService(name="slow", delays={"Hola.": 5.0}, prefix="slow")
        fast = ScriptedService(name="fast", prefix="fast")
        chain = FreeTranslationChain([slow, fast])

        result = run_chain(chain, "Hola.")

        assert result == "fast:Hola."
        assert slow.cancelled

    def test_race_skips_failed_services(self):
        failing = ScriptedService(name="failing", fail_on={"*"})
        working = ScriptedService(name="working", delays={"Hola.": 0.01}, prefix="ok")
        chain = FreeTranslationChain([failing, working])

        assert run_chain(chain, "Hola.") == "ok:Hola."

    def test_empty_text_declines(self):
        service = ScriptedService()
        chain = FreeTranslationChain([service])

        assert run_chain(chain, "   ") is None
        assert service.calls == []

    def test_five_thousand_chars_without_primary_providers(self):
        sentences = [f"Frase {i:03d}".ljust(48, "x") + "." for i in range(100)]
        sentences[-1] = sentences[-1][:-1] + "x."
        text = " ".join(sentences)
        assert len(text) == 5000

        service = ScriptedService(prefix="EN")
        chain = FreeTranslationChain([service], race_threshold_chars=3000, chunk_max_chars=2000)
        unconfigured = LLMRuntimeConfig(provider="anthropic", model="claude", api_key=None)
        providers = [
            TextTranslationProvider("claude-text", "Claude", unconfigured),
            TextTranslationProvider(
                "openrouter-text",
                "OpenRouter",
                LLMRuntimeConfig(provider="openrouter", model="free", api_key=None),
            ),
            chain,
        ]
        orchestrator = make_orchestrator(providers)

        outcome = asyncio.run(orchestrator.translate(make_request(), text))

        assert outcome.provider_id == "free-fallback"
        assert len(service.calls) == 3
        assert all(len(chunk) <= 2000 for chunk in service.calls)
        assert outcome.translated_text == " ".join(f"EN:{chunk}" for chunk in service.calls)
        assert " ".join(service.calls) == text


def mock_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def _call(service, handler, text="Hola mundo", source=Language.SPANISH, target=Language.ENGLISH):
    async with mock_client(handler) as client:
        return await service.translate(client, text, source, target)


class TestFreeServices:
    """Tests for each service's request and response handling"""

    def test_google_joins_segments(self):
        seen = {}

        def handler(request):
            seen.update(request.url.params)
            body = [[["Hello ", "Hola ", None], ["world", "mundo", None]], None, "es"]
            return httpx.Response(200, json=body)

        result = asyncio.run(_call(GoogleFreeService(), handler))

        assert result == "Hello world"
        assert seen["client"] == "gtx"
        assert seen["sl"] == "es"
        assert seen["tl"] == "en"

    def test_google_uses_simplified_chinese_code(self):
        seen = {}

        def handler(request):
            seen.update(request.url.params)
            return httpx.Response(200, json=[[["Hello", "你好", None]]])

        asyncio.run(_call(GoogleFreeService(), handler, source=Language.MANDARIN))

        assert seen["sl"] == "zh-CN"

    def test_google_http_error_propagates(self):
        def handler(request):
            return httpx.Response(429)

        with pytest.raises(httpx.HTTPStatusError):
            asyncio.run(_call(GoogleFreeService(), handler))

    def test_mymemory_success(self):
        seen = {}

        def handler(request):
            seen.update(request.url.params)
            return httpx.Response(200, json={
                "responseStatus": 200,
                "responseData": {"translatedText": "Hello world"},
            })

        result = asyncio.run(_call(MyMemoryService(email="ops@example.com"), handler))

        assert result == "Hello world"
        assert seen["langpair"] == "es|en"
        assert seen["de"] == "ops@example.com"

    def test_mymemory_quota_response_is_none(self):
        def handler(request):
            return httpx.Response(200, json={
                "responseStatus": 429,
                "responseDetails": "MYMEMORY WARNING: YOU USED ALL AVAILABLE FREE TRANSLATIONS",
                "responseData": {"translatedText": "MYMEMORY WARNING"},
            })

        assert asyncio.run(_call(MyMemoryService(), handler)) is None

    def test_libretranslate_posts_json(self):
        seen = {}

        def handler(request):
            seen.update(json.loads(request.content))
            return httpx.Response(200, json={"translatedText": "Hello world"})

        service = LibreTranslateService(url="https://lt.example.com/translate", api_key="secret")
        result = asyncio.run(_call(service, handler))

        assert result == "Hello world"
        assert seen == {
            "q": "Hola mundo",
            "source": "es",
            "target": "en",
            "format": "text",
            "api_key": "secret",
        }
