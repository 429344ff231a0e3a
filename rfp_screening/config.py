"""
Application configuration using Pydantic Settings.
All environment-specific values are centralized here.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator

_PLACEHOLDER_KEYS = {"", "your-key-here", "changeme"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ── App ──────────────────────────────────────────────
    app_name: str = "RFP Bid Screening"
    debug: bool = True

    # ── LLM ──────────────────────────────────────────────
    llm_provider: str = "groq"
    groq_api_key: str = ""
    llm_model: str = "llama-3.3-70b-versatile"
    llm_temperature: float = 0.0
    llm_max_tokens: int = 2048
    llm_timeout_seconds: float = 30.0
    llm_max_retries: int = Field(default=1, ge=0)
    use_llm_extraction: bool = False
    use_llm_narration: bool = False

    # ── Scoring ──────────────────────────────────────────
    decision_scheme: str = "three_tier"  # "three_tier" | "four_tier"

    # ── Profile store ────────────────────────────────────
    profile_store_backend: str = "memory"  # "memory" | "mongo"
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "rfp_screening"
    profile_collection: str = "company_profiles"
    mongodb_timeout_ms: int = 2000

    # ── Logging ──────────────────────────────────────────
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("llm_max_retries")
    @classmethod
    def _clamp_retries(cls, value: int) -> int:
        # The remote call may be repeated at most once before falling back
        return min(value, 1)

    @property
    def llm_configured(self) -> bool:
        return self.groq_api_key.strip().lower() not in _PLACEHOLDER_KEYS


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings (singleton)."""
    return Settings()
