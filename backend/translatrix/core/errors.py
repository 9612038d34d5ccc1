"""Exception hierarchy for request-level failures.

Only request-level outcomes cross the orchestrator boundary. Provider errors
never appear here: adapters swallow and log them, and the orchestrator folds
them into fallback progression.
"""

from typing import Optional


class TranslatrixError(Exception):
    """Base error rendered as ``{success: false, error, details}``."""

    status_code: int = 500
    default_details: Optional[str] = None

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details if details is not None else self.default_details


# Input errors: surfaced directly, never retried


class InputError(TranslatrixError):
    status_code = 400


class MissingInputError(InputError):
    status_code = 400


class InvalidLanguagePairError(InputError):
    status_code = 400


class FileTooLargeError(InputError):
    status_code = 413


class UnsupportedMediaTypeError(InputError):
    status_code = 415


class ExtractionError(InputError):
    status_code = 422


class UnsupportedLanguageError(InputError):
    status_code = 422


class LanguageMismatchError(InputError):
    status_code = 422


# Terminal processing errors


class AllProvidersFailedError(TranslatrixError):
    """Every provider in the plan declined or returned unusable output."""

    status_code = 500
    default_details = "Translation failed. Please check API keys and try again."

    def __init__(self, attempted: Optional[list[str]] = None):
        super().__init__("All translation methods failed")
        self.attempted = attempted or []


class TranslationTimeoutError(TranslatrixError):
    status_code = 504
    default_details = "The translation took too long and was abandoned."


class ReportGenerationError(TranslatrixError):
    status_code = 500

    def __init__(self, details: str):
        super().__init__("PDF generation failed", details)
