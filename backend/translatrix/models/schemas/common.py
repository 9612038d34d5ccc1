"""Schemas shared across endpoints."""

from typing import Dict, Optional

from .base import CamelModel


class ErrorResponse(CamelModel):
    success: bool = False
    error: str
    details: Optional[str] = None


class HealthResponse(CamelModel):
    status: str
    timestamp: str
    services: Dict[str, bool]
