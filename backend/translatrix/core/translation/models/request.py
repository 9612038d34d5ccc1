"""Inbound translation request models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from translatrix.core.languages import Language
from translatrix.core.media import MediaCategory, classify_media


class FilePayload(BaseModel):
    """Uploaded document bytes plus what the client said they are."""

    model_config = ConfigDict(frozen=True)

    content: bytes = Field(..., description="Raw file bytes")
    media_type: str = Field(..., description="Declared or resolved MIME type")
    filename: str = Field(default="document", description="Original filename")

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @property
    def category(self) -> Optional[MediaCategory]:
        return classify_media(self.media_type, self.filename)

    @property
    def is_image(self) -> bool:
        return self.category == MediaCategory.IMAGE


class TranslationRequest(BaseModel):
    """One translation job. Built per upload and never mutated."""

    model_config = ConfigDict(frozen=True)

    payload: FilePayload
    source_language: Language = Field(default=Language.SPANISH)
    target_language: Language = Field(default=Language.ENGLISH)

    @property
    def language_pair(self) -> str:
        return f"{self.source_language.display_name} → {self.target_language.display_name}"
