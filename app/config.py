"""Application configuration management."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralised application settings derived from environment variables."""

    default_ai_provider: str = Field(
        default="googlegemini",
        description="Provider used when a request carries no (or an unknown) provider hint.",
    )

    google_ai_api_key: str | None = None
    gemini_model: str = Field(default="gemini-2.5-flash")
    gemini_base_url: str = Field(default="https://generativelanguage.googleapis.com")

    huggingface_api_key: str | None = None
    huggingface_model: str = Field(default="Meta-Llama-3.1-8B-Instruct")
    huggingface_url: str = Field(
        default="https://router.huggingface.co/sambanova/v1/chat/completions",
        description="OpenAI-compatible chat completions endpoint of the inference router.",
    )

    anthropic_api_key: str | None = None
    anthropic_model: str = Field(default="claude-sonnet-4-5-20250929")

    ai_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Deadline for a single backend invocation before falling back.",
    )

    default_language: str = Field(default="de")
    prompt_config_path: Path = Field(
        default=Path(__file__).parent / "config" / "prompts.yaml",
        description="YAML catalog with prompt framings and fallback texts.",
    )

    app_host: str = Field(default="0.0.0.0")
    app_port: int = Field(default=8000, ge=1, le=65535)

    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("logs"))

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("default_ai_provider", "default_language")
    @classmethod
    def normalize_lower(cls, value: str) -> str:
        normalized = value.strip().lower()
        if not normalized:
            raise ValueError("Value must not be blank")
        return normalized

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        valid = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
        upper = value.upper()
        if upper not in valid:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(sorted(valid))}")
        return upper


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance so it can be reused across the app."""

    settings = Settings()
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    return settings
