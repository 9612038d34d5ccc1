"""Text extraction from uploaded documents."""

from .text_extractor import ExtractedText, TextExtractor

__all__ = ["ExtractedText", "TextExtractor"]
