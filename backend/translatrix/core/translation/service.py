"""Translation request pipeline.

upload -> temp file -> extract -> language gate -> orchestrate -> assemble,
with the temp file removed whatever happens and the whole run bounded by the
request timeout.
"""

import asyncio
import logging
import time
from pathlib import Path
from typing import BinaryIO, Optional

from translatrix.config import Settings
from translatrix.core.errors import MissingInputError, TranslationTimeoutError, UnsupportedMediaTypeError
from translatrix.core.extraction import TextExtractor
from translatrix.core.language import LanguageDetector, check_declared_language
from translatrix.core.languages import Language, validate_language_pair
from translatrix.core.media import classify_media, resolve_media_type
from translatrix.models.schemas import TranslationData
from translatrix.utils.files import delete_file, save_upload

from .assembler import ResponseAssembler
from .models import FilePayload, TranslationRequest
from .orchestrator import FallbackOrchestrator
from .providers import ProviderFactory

logger = logging.getLogger(__name__)


def parse_language_pair(source_lang: str, target_lang: str) -> tuple[Language, Language]:
    source = Language.parse(source_lang)
    target = Language.parse(target_lang)
    validate_language_pair(source, target)
    return source, target


class TranslationService:
    """Runs a translation request end to end."""

    def __init__(
        self,
        orchestrator: FallbackOrchestrator,
        extractor: Optional[TextExtractor] = None,
        assembler: Optional[ResponseAssembler] = None,
        detector: Optional[LanguageDetector] = None,
        upload_dir: Path = Path("."),
        max_upload_size: int = 50 * 1024 * 1024,
        timeout: float = 300.0,
    ):
        self.orchestrator = orchestrator
        self.extractor = extractor or TextExtractor()
        self.assembler = assembler or ResponseAssembler()
        self.detector = detector
        self.upload_dir = upload_dir
        self.max_upload_size = max_upload_size
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "TranslationService":
        providers = ProviderFactory.from_settings(settings)
        return cls(
            orchestrator=FallbackOrchestrator.from_settings(settings, providers),
            detector=LanguageDetector.from_settings(settings) if settings.language_check_enabled else None,
            upload_dir=settings.upload_dir,
            max_upload_size=settings.max_upload_size_bytes,
            timeout=settings.request_timeout_seconds,
        )

    async def _with_timeout(self, coro):
        try:
            return await asyncio.wait_for(coro, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"Translation exceeded {self.timeout:.0f}s and was abandoned")
            raise TranslationTimeoutError(
                f"Translation timed out after {self.timeout:.0f} seconds"
            ) from None

    async def translate_upload(
        self,
        file_obj: BinaryIO,
        filename: Optional[str],
        media_type: Optional[str],
        source_lang: str = "spanish",
        target_lang: str = "english",
    ) -> TranslationData:
        """Translate an uploaded document.

        Args:
            file_obj: Readable binary stream of the upload
            filename: Original filename
            media_type: Declared MIME type
            source_lang: Source language name or code
            target_lang: Target language name or code

        Returns:
            Response payload for the client

        Raises:
            TranslatrixError: Input errors, total exhaustion or timeout
        """
        if not filename:
            raise MissingInputError("No file uploaded")

        source, target = parse_language_pair(source_lang, target_lang)
        resolved_type = resolve_media_type(media_type, filename)
        if classify_media(resolved_type, filename) is None:
            raise UnsupportedMediaTypeError(
                f"Unsupported file type: {media_type or 'unknown'}",
                details="Supported types: images, PDF, DOCX, plain text and JSON.",
            )

        path = await save_upload(file_obj, self.upload_dir, filename, self.max_upload_size)
        logger.info(f"New translation request: {filename} ({resolved_type}), {source.value} -> {target.value}")
        try:
            return await self._with_timeout(
                self._process_file(path, filename, resolved_type, source, target)
            )
        finally:
            delete_file(path)

    async def _process_file(
        self,
        path: Path,
        filename: str,
        media_type: str,
        source: Language,
        target: Language,
    ) -> TranslationData:
        start = time.monotonic()

        loop = asyncio.get_running_loop()
        content = await loop.run_in_executor(None, path.read_bytes)
        if not content:
            raise MissingInputError("Uploaded file is empty")

        extracted = await self.extractor.extract(path, media_type, filename)
        await self._check_language(extracted.text, source)

        request = TranslationRequest(
            payload=FilePayload(content=content, media_type=media_type, filename=filename),
            source_language=source,
            target_language=target,
        )
        outcome = await self.orchestrator.translate(request, extracted.text)

        latency = time.monotonic() - start
        logger.info(
            f"Translation complete: {filename} via {outcome.provider_id} in {latency:.2f}s"
        )
        return self.assembler.assemble(request, outcome, extracted.text, latency)

    async def translate_text(
        self,
        text: str,
        source_lang: str = "spanish",
        target_lang: str = "english",
    ) -> TranslationData:
        """Translate raw text using the plain-text provider plan."""
        if not text or not text.strip():
            raise MissingInputError("No text provided")

        source, target = parse_language_pair(source_lang, target_lang)
        return await self._with_timeout(self._process_text(text, source, target))

    async def _process_text(self, text: str, source: Language, target: Language) -> TranslationData:
        start = time.monotonic()
        await self._check_language(text, source)

        request = TranslationRequest(
            payload=FilePayload(
                content=text.encode("utf-8"),
                media_type="text/plain",
                filename="text-input.txt",
            ),
            source_language=source,
            target_language=target,
        )
        outcome = await self.orchestrator.translate(request, text)
        return self.assembler.assemble(
            request, outcome, text, time.monotonic() - start, include_preview=False
        )

    async def _check_language(self, text: str, declared: Language) -> None:
        if self.detector is None or not text.strip():
            return
        detected = await self.detector.detect(text)
        check_declared_language(declared, detected)
