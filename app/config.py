"""
app/config.py — Central configuration loaded from environment variables.
All modules import settings from here; never read os.environ directly elsewhere.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── LLM ──────────────────────────────────────────────────────────────────
    openrouter_api_key: str = Field(..., description="OpenRouter API key")
    openrouter_model: str = Field(
        default="google/gemini-2.0-flash-001",
        description="OpenRouter model identifier",
    )
    llm_temperature: float = Field(
        default=0.2,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for intent classification",
    )
    llm_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Per-call timeout; a timeout is treated like any transport failure",
    )
    llm_max_retries: int = Field(
        default=0,
        ge=0,
        description="Client-level retries per classification call (0 = single shot)",
    )

    # ── Database ──────────────────────────────────────────────────────────────
    database_url: str = Field(..., description="SQLAlchemy connection URI")

    # ── Scoring ───────────────────────────────────────────────────────────────
    scoring_max_workers: int = Field(
        default=1,
        ge=1,
        le=32,
        description="Concurrent classifier calls per batch (1 = sequential)",
    )


# Singleton — import this everywhere
settings = Settings()
