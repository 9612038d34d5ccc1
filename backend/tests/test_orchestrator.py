"""Unit tests for the fallback orchestrator and acceptance policies."""

import asyncio

import pytest

from conftest import FakeProvider, make_orchestrator, make_request
from translatrix.config import Settings
from translatrix.core.errors import AllProvidersFailedError, UnsupportedMediaTypeError
from translatrix.core.media import MediaCategory
from translatrix.core.languages import Language
from translatrix.core.translation.acceptance import (
    AcceptancePolicy,
    ProviderTier,
    policies_from_settings,
    weighted_length,
)
from translatrix.core.translation.models import Verdict
from translatrix.core.translation.orchestrator import FallbackOrchestrator, plans_from_settings

VALID_TRANSLATION = "This is the complete English translation of the scanned page. " * 2


class TestAcceptancePolicy:
    """Tests for acceptance thresholds"""

    def test_rejects_none_and_blank(self):
        policy = AcceptancePolicy(min_chars=1)
        assert not policy.accepts(None)
        assert not policy.accepts("   ")

    def test_min_chars_uses_stripped_length(self):
        policy = AcceptancePolicy(min_chars=50)
        assert not policy.accepts(" " * 10 + "x" * 49 + " " * 10)
        assert policy.accepts("x" * 50)

    def test_source_ratio(self):
        policy = AcceptancePolicy(min_chars=1, min_source_ratio=0.3)
        source = "y" * 1000
        assert not policy.accepts("x" * 300, source)
        assert policy.accepts("x" * 301, source)

    def test_cjk_output_weighted_against_latin_source(self):
        policy = AcceptancePolicy(min_chars=1, min_source_ratio=0.3)
        source = "The quick brown fox jumps over the lazy dog."
        assert weighted_length("\u654f\u6377\u7684\u72d0\u72f8") == 15
        assert policy.accepts("\u654f\u6377\u7684\u68d5\u8272\u72d0\u72f8\u8df3\u8fc7\u4e86\u61d2\u72d7\u3002", source)
        assert not policy.accepts("\u72d0\u72f8", source)

    def test_source_ratio_ignored_without_source(self):
        policy = AcceptancePolicy(min_chars=1, min_source_ratio=0.3)
        assert policy.accepts("short", "")

    def test_policies_from_settings(self):
        settings = Settings(_env_file=None)
        policies = policies_from_settings(settings)
        assert policies[ProviderTier.VISION].min_chars == 50
        assert policies[ProviderTier.TEXT].min_source_ratio == 0.3
        assert policies[ProviderTier.FREE].min_chars == 1


class TestFallbackOrchestrator:
    """Tests for ordered fallback"""

    def test_first_null_second_accepted_third_never_called(self, image_request):
        first = FakeProvider("vision-a", None, tier=ProviderTier.VISION)
        second = FakeProvider("vision-b", VALID_TRANSLATION, tier=ProviderTier.VISION)
        third = FakeProvider("vision-c", "never used " * 10, tier=ProviderTier.VISION)
        orchestrator = make_orchestrator([first, second, third])

        outcome = asyncio.run(orchestrator.translate(image_request))

        assert outcome.translated_text == VALID_TRANSLATION.strip()
        assert outcome.provider_id == "vision-b"
        assert outcome.provider_name == "Fake vision-b"
        assert (first.calls, second.calls, third.calls) == (1, 1, 0)
        assert [a.verdict for a in outcome.attempts] == [Verdict.DECLINED, Verdict.ACCEPTED]

    def test_short_result_treated_like_null(self, image_request):
        truncated = FakeProvider("vision-a", "Only twenty chars...", tier=ProviderTier.VISION)
        complete = FakeProvider("vision-b", VALID_TRANSLATION, tier=ProviderTier.VISION)
        orchestrator = make_orchestrator([truncated, complete])

        outcome = asyncio.run(orchestrator.translate(image_request))

        assert outcome.provider_id == "vision-b"
        assert outcome.attempts[0].verdict == Verdict.REJECTED
        assert outcome.attempts[0].output_chars == 20

    def test_text_result_below_source_fraction_rejected(self):
        request = make_request()
        source_text = "palabra " * 125
        partial = FakeProvider("claude-text", "x" * 100)
        full = FakeProvider("openrouter-text", "word " * 120)
        orchestrator = make_orchestrator([partial, full])

        outcome = asyncio.run(orchestrator.translate(request, source_text))

        assert outcome.provider_id == "openrouter-text"
        assert partial.seen_source_texts == [source_text]

    def test_english_to_mandarin_text_translation_accepted(self):
        request = make_request(
            content=b"The quick brown fox jumps over the lazy dog.",
            source=Language.ENGLISH,
            target=Language.MANDARIN,
        )
        claude = FakeProvider("claude-text", "\u654f\u6377\u7684\u68d5\u8272\u72d0\u72f8\u8df3\u8fc7\u4e86\u61d2\u72d7\u3002")
        free = FakeProvider("free-fallback", "unused", tier=ProviderTier.FREE)
        orchestrator = make_orchestrator([claude, free])

        outcome = asyncio.run(orchestrator.translate(request, "The quick brown fox jumps over the lazy dog."))

        assert outcome.provider_id == "claude-text"
        assert free.calls == 0

    def test_all_providers_fail(self, image_request):
        providers = [
            FakeProvider("vision-a", None, tier=ProviderTier.VISION),
            FakeProvider("vision-b", None, tier=ProviderTier.VISION, configured=False),
            FakeProvider("vision-c", "", tier=ProviderTier.VISION),
        ]
        orchestrator = make_orchestrator(providers)

        with pytest.raises(AllProvidersFailedError) as exc_info:
            asyncio.run(orchestrator.translate(image_request))

        assert exc_info.value.message == "All translation methods failed"
        assert "check API keys" in exc_info.value.details
        assert exc_info.value.attempted == ["vision-a", "vision-b", "vision-c"]
        assert all(p.calls == 1 for p in providers)

    def test_plan_order_depends_on_category(self, image_request, text_request):
        vision = FakeProvider("vision", VALID_TRANSLATION, tier=ProviderTier.VISION)
        text = FakeProvider("text", "Hello world.")
        orchestrator = make_orchestrator(
            [vision, text],
            plans={MediaCategory.IMAGE: ["vision"], MediaCategory.TEXT: ["text"]},
        )

        image_outcome = asyncio.run(orchestrator.translate(image_request))
        text_outcome = asyncio.run(orchestrator.translate(text_request, "Hola mundo."))

        assert image_outcome.provider_id == "vision"
        assert text_outcome.provider_id == "text"
        assert (vision.calls, text.calls) == (1, 1)

    def test_unknown_provider_in_plan_is_skipped(self, text_request):
        provider = FakeProvider("claude-text", "Hello world.")
        orchestrator = FallbackOrchestrator(
            {"claude-text": provider},
            {MediaCategory.TEXT: ["missing", "claude-text"]},
        )

        outcome = asyncio.run(orchestrator.translate(text_request, "Hola mundo."))

        assert outcome.provider_id == "claude-text"
        assert outcome.attempts[0].verdict == Verdict.UNKNOWN

    def test_unclassifiable_media_type(self):
        request = make_request(media_type="application/x-msdownload", filename="setup.exe")
        orchestrator = make_orchestrator([FakeProvider("claude-text", "x")])

        with pytest.raises(UnsupportedMediaTypeError):
            asyncio.run(orchestrator.translate(request, "text"))

    def test_default_plans(self):
        plans = plans_from_settings(Settings(_env_file=None))
        assert plans[MediaCategory.IMAGE] == ["gemini-vision", "openai-vision", "claude-vision"]
        assert plans[MediaCategory.PDF] == ["claude-vision", "claude-text", "openrouter-text", "free-fallback"]
        assert plans[MediaCategory.DOCX] == ["claude-text", "openrouter-text", "free-fallback"]
        assert plans[MediaCategory.JSON] == plans[MediaCategory.TEXT]
