"""Source language detection."""

from .detector import LanguageDetector, check_declared_language

__all__ = ["LanguageDetector", "check_declared_language"]
