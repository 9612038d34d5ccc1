"""Response assembly - packages a translation with display metrics.

Presentation only. The KPI numbers other than latency and throughput are
synthetic display values, drawn from an injectable random source.
"""

import base64
import random
from datetime import datetime
from typing import Optional

from translatrix.models.schemas import Kpis, Segment, TranslationData, TranslationMetadata
from translatrix.utils.text import count_words, split_sentences

from .models import FilePayload, OrchestrationOutcome, TranslationRequest

MAX_SEGMENTS = 20
SEGMENT_MAX_CHARS = 200
MIN_SEGMENT_CHARS = 5
PRESERVED_ELEMENTS = ["Structure", "Format", "Tables", "Hierarchy"]


def file_preview(payload: FilePayload) -> str:
    encoded = base64.b64encode(payload.content).decode("ascii")
    return f"data:{payload.media_type};base64,{encoded}"


class ResponseAssembler:
    """Builds the /translate response payload."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def _segments(self, sentences: list[str]) -> list[Segment]:
        segments = []
        for i, sentence in enumerate(sentences[:MAX_SEGMENTS], start=1):
            text = sentence.strip()[:SEGMENT_MAX_CHARS]
            segments.append(Segment(
                id=i,
                source=text,
                target=text,
                confidence=round(0.94 + self.rng.random() * 0.06, 3),
                tokens=len(sentence.split()),
                processing_time=round(0.05 + self.rng.random() * 0.2, 2),
            ))
        return segments

    def _kpis(self, word_count: int, latency: float) -> Kpis:
        accuracy = round(96 + self.rng.random() * 3.5, 1)
        return Kpis(
            accuracy=accuracy,
            latency=round(latency, 2),
            throughput=int(word_count / latency) if latency > 0 else word_count,
            wer=round(5 - accuracy * 0.04, 1),
            bleu_score=round(accuracy - 1.5, 1),
            semantic_similarity=min(round(accuracy + 0.8, 1), 100.0),
        )

    def assemble(
        self,
        request: TranslationRequest,
        outcome: OrchestrationOutcome,
        original_text: str,
        latency_seconds: float,
        include_preview: bool = True,
    ) -> TranslationData:
        """Build the response payload.

        Args:
            request: The translated request
            outcome: Accepted translation from the orchestrator
            original_text: Extracted source text, empty for images
            latency_seconds: Wall clock time spent on the request
            include_preview: Embed the uploaded file as a base64 data URL

        Returns:
            TranslationData ready for serialization
        """
        translated = outcome.translated_text
        payload = request.payload

        sentences = [s for s in split_sentences(translated) if len(s.strip()) > MIN_SEGMENT_CHARS]
        translated_words = count_words(translated)
        word_count = count_words(original_text) if original_text.strip() else translated_words
        file_size_kb = round(payload.size_bytes / 1024, 2)

        metadata = TranslationMetadata(
            file_name=payload.filename,
            file_size=file_size_kb,
            file_type=payload.media_type,
            word_count=word_count,
            character_count=len(translated),
            sentence_count=len(sentences),
            processed_at=datetime.now().isoformat(timespec="seconds"),
            model=outcome.provider_name,
            provider=outcome.provider_id,
            source_language=request.source_language.value,
            target_language=request.target_language.value,
            language_pair=request.language_pair,
            preserved_elements=list(PRESERVED_ELEMENTS),
            attempted_providers=outcome.attempted_ids,
        )

        return TranslationData(
            original_text=original_text or translated,
            translated_text=translated,
            original_file_preview=file_preview(payload) if include_preview else None,
            file_name=payload.filename,
            file_size=file_size_kb,
            file_type=payload.media_type,
            word_count=word_count,
            translated_word_count=translated_words,
            character_count=len(translated),
            sentence_count=len(sentences),
            segments=self._segments(sentences),
            kpis=self._kpis(word_count, latency_seconds),
            metadata=metadata,
        )
