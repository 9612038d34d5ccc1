"""Utility modules for the translatrix backend."""

from .text import chunk_text, clean_text, count_words, safe_truncate, split_sentences

__all__ = ["chunk_text", "clean_text", "count_words", "safe_truncate", "split_sentences"]
