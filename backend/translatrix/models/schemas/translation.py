"""Translation API schemas."""

from typing import List, Optional

from pydantic import Field

from .base import CamelModel


class TextTranslationRequest(CamelModel):
    """Body of POST /translate-text."""

    text: str
    source_lang: str = "spanish"
    target_lang: str = "english"


class Segment(CamelModel):
    id: int
    source: str
    target: str
    confidence: float
    tokens: int
    processing_time: float


class Kpis(CamelModel):
    """Display metrics. Synthetic except latency and throughput."""

    accuracy: float
    latency: float
    throughput: int
    wer: float
    bleu_score: float
    semantic_similarity: float


class TranslationMetadata(CamelModel):
    file_name: str
    file_size: float
    file_type: str
    word_count: int
    character_count: int
    sentence_count: int
    processed_at: str
    model: str
    provider: str
    source_language: str
    target_language: str
    language_pair: str
    preserved_elements: List[str] = Field(default_factory=list)
    attempted_providers: List[str] = Field(default_factory=list)


class TranslationData(CamelModel):
    original_text: str
    translated_text: str
    original_file_preview: Optional[str] = None
    file_name: str
    file_size: float = Field(..., description="Size in KB")
    file_type: str
    word_count: int
    translated_word_count: int
    character_count: int
    sentence_count: int
    segments: List[Segment]
    kpis: Kpis
    metadata: TranslationMetadata


class TranslationResponse(CamelModel):
    success: bool = True
    data: TranslationData
