"""Document text extraction.

Turns an uploaded file into plain text for the text providers and the
language gate. Images yield an empty string: vision providers read them
directly.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import pdfplumber
from docx import Document

from translatrix.core.errors import ExtractionError, UnsupportedMediaTypeError
from translatrix.core.media import MediaCategory, classify_media
from translatrix.utils.text import clean_text, count_words

logger = logging.getLogger(__name__)


@dataclass
class ExtractedText:
    """Extraction result with a few numbers for logging."""

    text: str
    category: MediaCategory
    page_count: int = 0

    @property
    def word_count(self) -> int:
        return count_words(self.text)

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()


def _extract_pdf(path: Path) -> ExtractedText:
    with pdfplumber.open(path) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return ExtractedText(
        text=clean_text("\n".join(pages)),
        category=MediaCategory.PDF,
        page_count=len(pages),
    )


def _extract_docx(path: Path) -> ExtractedText:
    document = Document(str(path))
    lines = [p.text for p in document.paragraphs if p.text.strip()]

    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells]
            if any(cells):
                lines.append(" | ".join(cells))

    return ExtractedText(text="\n".join(lines), category=MediaCategory.DOCX)


def _extract_text(path: Path) -> ExtractedText:
    return ExtractedText(
        text=path.read_bytes().decode("utf-8", errors="replace"),
        category=MediaCategory.TEXT,
    )


def _extract_json(path: Path) -> ExtractedText:
    raw = path.read_bytes().decode("utf-8", errors="replace")
    try:
        text = json.dumps(json.loads(raw), indent=2, ensure_ascii=False)
    except json.JSONDecodeError:
        logger.warning(f"Invalid JSON in {path.name}, using raw text")
        text = raw
    return ExtractedText(text=text, category=MediaCategory.JSON)


_EXTRACTORS = {
    MediaCategory.PDF: _extract_pdf,
    MediaCategory.DOCX: _extract_docx,
    MediaCategory.TEXT: _extract_text,
    MediaCategory.JSON: _extract_json,
}


class TextExtractor:
    """Extracts plain text from stored uploads."""

    def extract_sync(
        self,
        path: Path,
        media_type: Optional[str],
        filename: Optional[str] = None,
    ) -> ExtractedText:
        """Extract text from a file on disk.

        Args:
            path: Stored upload
            media_type: Declared MIME type
            filename: Original filename, used when the media type is generic

        Returns:
            ExtractedText, empty for images

        Raises:
            UnsupportedMediaTypeError: If the type cannot be classified
            ExtractionError: If the parser fails on the file
        """
        category = classify_media(media_type, filename or path.name)
        if category is None:
            raise UnsupportedMediaTypeError(
                f"Unsupported file type: {media_type or 'unknown'}",
                details="Supported types: images, PDF, DOCX, plain text and JSON.",
            )

        if category == MediaCategory.IMAGE:
            return ExtractedText(text="", category=category)

        try:
            result = _EXTRACTORS[category](path)
        except Exception as e:
            logger.error(f"Text extraction failed for {filename or path.name}: {e}")
            raise ExtractionError(
                f"Could not read {category.value.upper()} file",
                details=str(e),
            ) from e

        logger.info(
            f"Extracted {len(result.text)} chars ({result.word_count} words) "
            f"from {filename or path.name}"
        )
        return result

    async def extract(
        self,
        path: Path,
        media_type: Optional[str],
        filename: Optional[str] = None,
    ) -> ExtractedText:
        """Async wrapper running the blocking parsers in the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.extract_sync, path, media_type, filename)
