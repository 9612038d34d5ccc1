"""Supported languages and language pair rules."""

import re
from enum import Enum
from typing import Optional

from translatrix.core.errors import InvalidLanguagePairError, UnsupportedLanguageError


class Language(str, Enum):
    """Closed set of languages the translator accepts."""

    SPANISH = "spanish"
    FRENCH = "french"
    GERMAN = "german"
    MANDARIN = "mandarin"
    HINDI = "hindi"
    ENGLISH = "english"

    @property
    def iso_code(self) -> str:
        return _ISO_CODES[self]

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def parse(cls, value: str) -> "Language":
        """Parse a language name, display name or ISO code (case-insensitive).

        Raises:
            UnsupportedLanguageError: If the value is not in the closed set
        """
        key = (value or "").strip().lower()
        language = _LOOKUP.get(key)
        if language is None:
            supported = ", ".join(lang.value for lang in cls)
            raise UnsupportedLanguageError(
                f"Unsupported language: {value!r}",
                details=f"Supported languages: {supported}",
            )
        return language


_ISO_CODES = {
    Language.SPANISH: "es",
    Language.FRENCH: "fr",
    Language.GERMAN: "de",
    Language.MANDARIN: "zh",
    Language.HINDI: "hi",
    Language.ENGLISH: "en",
}

_DISPLAY_NAMES = {
    Language.SPANISH: "Spanish",
    Language.FRENCH: "French",
    Language.GERMAN: "German",
    Language.MANDARIN: "Mandarin Chinese",
    Language.HINDI: "Hindi",
    Language.ENGLISH: "English",
}

# Names a detector or a client may use for a supported language
_ALIASES = {
    "chinese": Language.MANDARIN,
    "mandarin chinese": Language.MANDARIN,
    "simplified chinese": Language.MANDARIN,
    "castilian": Language.SPANISH,
    "español": Language.SPANISH,
    "francais": Language.FRENCH,
    "français": Language.FRENCH,
    "deutsch": Language.GERMAN,
}

_LOOKUP: dict[str, Language] = {}
for _lang in Language:
    _LOOKUP[_lang.value] = _lang
    _LOOKUP[_lang.iso_code] = _lang
    _LOOKUP[_DISPLAY_NAMES[_lang].lower()] = _lang
_LOOKUP.update(_ALIASES)

# ISO codes collide with ordinary words ("hi", "es", "de")
_NAME_LOOKUP = {key: lang for key, lang in _LOOKUP.items() if len(key) > 2}


def normalize_language_name(value: str) -> Optional[str]:
    """Map a free-form language answer onto the closed set where possible.

    Markdown and punctuation are ignored, and phrases such as "The language
    is Spanish" or "Simplified Chinese" are scanned for a known name. A
    single unknown word is returned lower-cased so callers can report it;
    anything else unrecognised gives None.
    """
    tokens = re.sub(r"[^\w\s]", " ", value or "").lower().split()
    if not tokens:
        return None
    if len(tokens) == 1:
        language = _LOOKUP.get(tokens[0])
        return language.value if language else tokens[0]

    for size in (3, 2, 1):
        for start in range(len(tokens) - size + 1):
            language = _NAME_LOOKUP.get(" ".join(tokens[start:start + size]))
            if language:
                return language.value

    return None


def validate_language_pair(source: Language, target: Language) -> None:
    """Exactly one side of the pair is English and the sides differ.

    Raises:
        InvalidLanguagePairError: For any other combination
    """
    if source == target:
        raise InvalidLanguagePairError(
            "Source and target languages must differ",
            details=f"Both were {source.display_name}",
        )
    if Language.ENGLISH not in (source, target):
        raise InvalidLanguagePairError(
            f"Cannot translate {source.display_name} to {target.display_name}",
            details="Translations must be to or from English",
        )
