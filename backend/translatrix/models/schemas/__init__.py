"""Pydantic schemas for API requests and responses."""

from .base import CamelModel
from .common import ErrorResponse, HealthResponse
from .report import ReportRequest
from .translation import (
    Kpis,
    Segment,
    TextTranslationRequest,
    TranslationData,
    TranslationMetadata,
    TranslationResponse,
)

__all__ = [
    "CamelModel",
    "ErrorResponse",
    "HealthResponse",
    "ReportRequest",
    "TextTranslationRequest",
    "Segment",
    "Kpis",
    "TranslationMetadata",
    "TranslationData",
    "TranslationResponse",
]
