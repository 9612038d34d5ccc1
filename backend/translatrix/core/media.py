"""Media type classification for uploaded documents."""

from enum import Enum
from pathlib import Path
from typing import Optional


class MediaCategory(str, Enum):
    """Kind of document, which selects the extractor and the provider plan."""

    IMAGE = "image"
    PDF = "pdf"
    DOCX = "docx"
    TEXT = "text"
    JSON = "json"


DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

# Image formats the vision models accept
IMAGE_MEDIA_TYPES = frozenset({"image/png", "image/jpeg", "image/jpg", "image/gif", "image/webp"})

_MEDIA_TYPES = {
    "application/pdf": MediaCategory.PDF,
    DOCX_MEDIA_TYPE: MediaCategory.DOCX,
    "application/json": MediaCategory.JSON,
    "text/plain": MediaCategory.TEXT,
    "text/markdown": MediaCategory.TEXT,
}

_EXTENSIONS = {
    ".pdf": (MediaCategory.PDF, "application/pdf"),
    ".docx": (MediaCategory.DOCX, DOCX_MEDIA_TYPE),
    ".json": (MediaCategory.JSON, "application/json"),
    ".txt": (MediaCategory.TEXT, "text/plain"),
    ".md": (MediaCategory.TEXT, "text/markdown"),
    ".png": (MediaCategory.IMAGE, "image/png"),
    ".jpg": (MediaCategory.IMAGE, "image/jpeg"),
    ".jpeg": (MediaCategory.IMAGE, "image/jpeg"),
    ".gif": (MediaCategory.IMAGE, "image/gif"),
    ".webp": (MediaCategory.IMAGE, "image/webp"),
}

# Browsers and curl send these when they cannot tell
_GENERIC_MEDIA_TYPES = {"", "application/octet-stream", "binary/octet-stream"}


def classify_media(media_type: Optional[str], filename: Optional[str] = None) -> Optional[MediaCategory]:
    """Classify a document by declared media type, then by file extension.

    Args:
        media_type: Declared MIME type, possibly with parameters
        filename: Original filename used when the media type is missing or generic

    Returns:
        The media category, or None when neither source identifies one
    """
    declared = (media_type or "").split(";")[0].strip().lower()

    if declared in IMAGE_MEDIA_TYPES:
        return MediaCategory.IMAGE
    if declared.startswith("image/"):
        return None
    if declared in _MEDIA_TYPES:
        return _MEDIA_TYPES[declared]

    if filename:
        entry = _EXTENSIONS.get(Path(filename).suffix.lower())
        if entry and (declared in _GENERIC_MEDIA_TYPES or declared.startswith("text/")):
            return entry[0]

    return None


def resolve_media_type(media_type: Optional[str], filename: Optional[str] = None) -> str:
    """Return a concrete media type, guessing from the extension when needed."""
    declared = (media_type or "").split(";")[0].strip().lower()
    if declared and declared not in _GENERIC_MEDIA_TYPES:
        return declared
    if filename:
        entry = _EXTENSIONS.get(Path(filename).suffix.lower())
        if entry:
            return entry[1]
    return declared or "application/octet-stream"
