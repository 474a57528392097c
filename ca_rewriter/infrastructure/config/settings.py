"""Application settings and configuration management."""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Look for .env file in the project root, then the current working directory
_env_file = Path(__file__).parent.parent.parent.parent / ".env"
if _env_file.exists():
    load_dotenv(_env_file)
else:
    load_dotenv(".env", verbose=False)


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Gemini API Configuration
    gemini_api_key: str = Field(default="", alias="GEMINI_API_KEY")
    gcp_project_id: str = Field(default="", alias="GCP_PROJECT_ID")
    gcp_region: str = Field(default="us-central1", alias="GCP_REGION")
    gemini_model: str = Field(default="gemini-2.5-flash", alias="GEMINI_MODEL")
    use_vertex_ai: bool = Field(default=False, alias="USE_VERTEX_AI")

    # Generation Configuration
    content_temperature: float = Field(
        default=0.3, alias="CA_REWRITER_CONTENT_TEMPERATURE"
    )
    batch_temperature: float = Field(default=0.3, alias="CA_REWRITER_BATCH_TEMPERATURE")
    regenerate_temperature: float = Field(
        default=0.7, alias="CA_REWRITER_REGENERATE_TEMPERATURE"
    )
    max_output_tokens: int = Field(default=8192, alias="CA_REWRITER_MAX_OUTPUT_TOKENS")
    max_retries: int = Field(default=3, alias="CA_REWRITER_MAX_RETRIES")
    retry_delay: int = Field(default=30, alias="CA_REWRITER_RETRY_DELAY")

    # Quiz Configuration
    default_mcq_count: int = Field(default=5, alias="CA_REWRITER_DEFAULT_MCQ_COUNT")
    max_mcq_count: int = Field(default=20, alias="CA_REWRITER_MAX_MCQ_COUNT")

    # Logging Configuration
    log_level: str = Field(default="INFO", alias="CA_REWRITER_LOG_LEVEL")
    log_file: str = Field(default="", alias="CA_REWRITER_LOG_FILE")

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}', expected one of {', '.join(LOG_LEVELS)}"
            )
        return level


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


def has_gemini_config(settings: Settings | None = None) -> bool:
    """Check if Gemini API configuration is available."""
    settings = settings or get_settings()
    if settings.use_vertex_ai:
        return bool(settings.gcp_project_id)
    return bool(settings.gemini_api_key)
