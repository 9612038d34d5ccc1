"""Report API schemas."""

from typing import Any, Dict

from pydantic import Field

from .base import CamelModel


class ReportRequest(CamelModel):
    """Body of POST /generate-pdf."""

    translated_text: str
    file_name: str = "document"
    source_lang: str = "spanish"
    target_lang: str = "english"
    metadata: Dict[str, Any] = Field(default_factory=dict)
