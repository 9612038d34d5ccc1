"""Text utilities shared by extraction, chunking and metrics.

Sentence boundaries are a period, exclamation or question mark followed by
whitespace. This is deliberately simple: it only has to produce stable chunk
edges for the free translation services and display segments.
"""

import re
import textwrap

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")
_WHITESPACE = re.compile(r"\s+")
_SPACE_BEFORE_PUNCT = re.compile(r"\s+([,.;:!?])")


def clean_text(text: str) -> str:
    """Normalize extracted text: unify newlines, collapse whitespace.

    Also removes stray whitespace before punctuation, which PDF text layers
    tend to introduce.
    """
    text = text.replace("\r\n", "\n")
    text = _WHITESPACE.sub(" ", text)
    text = _SPACE_BEFORE_PUNCT.sub(r"\1", text)
    return text.strip()


def split_sentences(text: str) -> list[str]:
    """Split text on sentence-ending punctuation, dropping empty pieces."""
    return [s for s in _SENTENCE_BOUNDARY.split(text) if s]


def count_words(text: str) -> int:
    return len(text.split())


def chunk_text(text: str, max_chars: int) -> list[str]:
    """Group sentences into chunks of at most ``max_chars`` characters.

    Sentences are joined with a single space and never split unless a single
    sentence is longer than ``max_chars``, in which case it is wrapped on
    whitespace (and very long words are broken).

    Args:
        text: Text to split
        max_chars: Maximum chunk length, must be positive

    Returns:
        Chunks in original order
    """
    if max_chars <= 0:
        raise ValueError("max_chars must be positive")

    pieces: list[str] = []
    for sentence in split_sentences(text.strip()):
        if len(sentence) > max_chars:
            pieces.extend(textwrap.wrap(sentence, max_chars, break_long_words=True))
        else:
            pieces.append(sentence)

    chunks: list[str] = []
    current = ""
    for piece in pieces:
        if current and len(current) + 1 + len(piece) > max_chars:
            chunks.append(current)
            current = piece
        else:
            current = f"{current} {piece}" if current else piece

    if current:
        chunks.append(current)
    return chunks


def safe_truncate(text: str, max_chars: int, suffix: str = "...") -> str:
    """Truncate text for logs and previews, preferring a word boundary.

    Looks back up to 20 characters for a break character so previews do not
    end mid-word.
    """
    if not text or len(text) <= max_chars:
        return text

    truncated = text[:max_chars]
    break_chars = {" ", "\n", "\t", ",", ".", "!", "?", ";", ":", "-", "。", "，", "、"}
    for i in range(min(20, max_chars - 1), 0, -1):
        if truncated[-i] in break_chars:
            truncated = truncated[: -i].rstrip()
            break

    return truncated + suffix
