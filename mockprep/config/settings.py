"""
Application settings and configuration management.

Uses pydantic-settings for environment variable loading.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FallbackPolicy(str, Enum):
    """What to do when the evaluator exhausts its retries."""

    DEGRADE = "degrade"  # Complete the record with the neutral evaluation
    STRICT = "strict"    # Mark the record as errored


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "MockPrep"
    app_version: str = "0.1.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Gemini (Generative Language REST API)
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com"
    gemini_model: str = "gemini-2.5-flash-lite"
    gemini_temperature: float = 0.5
    gemini_top_p: float = 0.8
    gemini_max_output_tokens: int = 1000
    request_timeout_seconds: float = 60.0

    # Feedback pipeline
    evaluation_retries: int = Field(default=2, ge=0)
    evaluation_retry_delay_seconds: float = Field(default=1.0, ge=0)
    evaluation_retry_backoff: float = Field(default=1.5, gt=1)
    max_qa_pairs: int = Field(default=6, ge=1)
    fallback_policy: FallbackPolicy = FallbackPolicy.DEGRADE
    default_job_role: str = "Software Engineer"

    # Auth gate (tokens are issued elsewhere, we only verify them)
    jwt_secret_key: str = ""
    jwt_algorithm: str = "HS256"
    session_cookie_name: str = "session"
    access_token_expire_days: int = 7

    # Voice assistant (public values handed to the browser SDK)
    voice_assistant_id: str = ""
    voice_web_token: str = ""

    # Langfuse observability
    langfuse_enabled: bool = False
    langfuse_secret_key: str = ""
    langfuse_public_key: str = ""
    langfuse_base_url: str = "https://cloud.langfuse.com"

    # CORS - stored as comma-separated string in env
    # Uses validation_alias to read from CORS_ORIGINS env var
    cors_origins_str: str = Field(
        default="http://localhost:3000,http://localhost:8000",
        validation_alias="cors_origins"
    )

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
