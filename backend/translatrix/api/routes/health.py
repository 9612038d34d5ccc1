"""Health check route."""

from datetime import datetime, timezone

from fastapi import APIRouter

from translatrix.api.dependencies import SettingsDep
from translatrix.models.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(app_settings: SettingsDep):
    """Report which providers have credentials. Performs no translation."""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
        services={
            "gemini": bool(app_settings.gemini_api_key),
            "claude": bool(app_settings.anthropic_api_key),
            "openai": bool(app_settings.openai_api_key),
            "openrouter": bool(app_settings.openrouter_api_key),
            "freeFallback": True,
        },
    )
