"""Application configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Translatrix Pro"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    frontend_port: int = 5173

    # Temporary upload storage (files are deleted after each request)
    upload_dir: Path = Path(__file__).parent.parent / "data" / "uploads"

    # Upload limits
    max_upload_size_mb: int = 50

    # Whole-request wall clock bound for /translate
    request_timeout_seconds: float = 300.0

    # Retry wrapper applied around each LLM provider call
    provider_max_attempts: int = 2
    retry_base_delay: float = 2.0
    llm_timeout_seconds: float = 60.0

    # Acceptance policies, one per provider tier
    vision_min_chars: int = 50
    text_min_chars: int = 1
    text_min_source_ratio: float = 0.3
    free_min_chars: int = 1

    # Provider plans per media category (provider ids, in priority order)
    image_plan: list[str] = ["gemini-vision", "openai-vision", "claude-vision"]
    pdf_plan: list[str] = ["claude-vision", "claude-text", "openrouter-text", "free-fallback"]
    text_plan: list[str] = ["claude-text", "openrouter-text", "free-fallback"]

    # Models (LiteLLM identifiers without provider prefix)
    gemini_model: str = "gemini-2.5-flash"
    openai_model: str = "gpt-4o-mini"
    anthropic_model: str = "claude-sonnet-4-20250514"
    openrouter_model: str = "google/gemini-2.0-flash-exp:free"
    vision_max_tokens: int = 8192
    text_max_tokens: int = 8192

    # Free fallback chain
    free_race_threshold_chars: int = 3000
    free_chunk_max_chars: int = 2000
    free_max_concurrency: int = 8
    free_request_timeout_seconds: float = 30.0
    libretranslate_url: str = "https://libretranslate.com/translate"
    libretranslate_api_key: Optional[str] = None
    mymemory_email: Optional[str] = None

    # Language detection gate
    language_check_enabled: bool = True
    language_detection_provider: str = "anthropic"
    language_detection_model: str = "claude-3-5-haiku-20241022"
    language_sample_chars: int = 500

    # CORS - dynamically built based on frontend_port
    cors_origins: list[str] = []

    # Provider API keys (presence controls which adapters are eligible)
    gemini_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    openrouter_api_key: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if not self.cors_origins:
            self.cors_origins = [
                f"http://localhost:{self.frontend_port}",
                f"http://127.0.0.1:{self.frontend_port}",
            ]

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    def get_api_key(self, provider: str) -> Optional[str]:
        """Get API key for a provider family."""
        key_map = {
            "gemini": self.gemini_api_key,
            "anthropic": self.anthropic_api_key,
            "openai": self.openai_api_key,
            "openrouter": self.openrouter_api_key,
        }
        return key_map.get(provider)


settings = Settings()

# Ensure directories exist
settings.upload_dir.mkdir(parents=True, exist_ok=True)
