"""Configuration and settings for the Legal Remedy Agent.

Uses Pydantic Settings for fail-fast validation on startup.
All required environment variables are validated when settings are first loaded.
"""

import logging
import sys
from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("anthropic").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Raises ValidationError on startup if required variables are missing.
    """

    model_config = SettingsConfigDict(
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Keys (required)
    anthropic_api_key: str = Field(..., description="Anthropic API key for Claude")

    # Application Settings
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Root log level")
    default_language: str = Field(
        default="en", description="Locale used for new sessions"
    )

    # Upload Limits
    max_file_size_mb: int = Field(default=10, description="Max size per file in MB")
    max_files_per_upload: int = Field(
        default=20, description="Max number of files in one upload batch"
    )

    # LLM Settings
    llm_model: str = Field(
        default="claude-sonnet-4-20250514", description="Claude model for answers"
    )
    llm_temperature: float = Field(
        default=0.2, description="LLM temperature for grounded answers"
    )
    llm_max_tokens: int = Field(default=2048, description="Max tokens for answers")
    summary_temperature: float = Field(
        default=0.3, description="LLM temperature for conversation summaries"
    )
    summary_max_tokens: int = Field(
        default=400, description="Max tokens for conversation summaries"
    )
    llm_timeout_seconds: float = Field(
        default=60.0, description="Total timeout for one LLM call"
    )
    llm_connect_timeout_seconds: float = Field(
        default=10.0, description="Connect timeout for LLM calls"
    )

    # Session Settings
    session_ttl_hours: int = Field(
        default=24, description="Idle hours before an in-memory session is dropped"
    )

    # CORS
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ],
        description="Browser origins allowed to call the API with cookies",
    )

    # Rate Limiting
    rate_limit_per_minute: int = Field(default=20, description="Requests per minute")
    rate_limit_per_hour: int = Field(default=200, description="Requests per hour")
    rate_limit_burst: int = Field(
        default=5, description="Max requests in a 10 second window"
    )

    @field_validator("anthropic_api_key")
    @classmethod
    def validate_api_key_not_empty(cls, v: str, info) -> str:
        """Ensure API keys are not empty strings."""
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty")
        return v.strip()

    @field_validator("default_language")
    @classmethod
    def normalize_language(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator(
        "max_file_size_mb",
        "max_files_per_upload",
        "llm_max_tokens",
        "summary_max_tokens",
        "session_ttl_hours",
    )
    @classmethod
    def validate_positive(cls, v: int, info) -> int:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be positive")
        return v

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return self.max_file_size_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# CORS Configuration (origins come from settings)
CORS_CONFIG: dict[str, Any] = {
    "allow_credentials": True,
    "allow_methods": ["GET", "POST", "PUT", "OPTIONS"],
    "allow_headers": ["*"],
    "expose_headers": ["*"],
    "max_age": 600,
}

# FastAPI App Configuration
APP_CONFIG: dict[str, Any] = {
    "title": "Legal Remedy Agent",
    "description": (
        "Upload legal documents and ask questions answered strictly "
        "from their content."
    ),
    "version": "0.1.0",
    "docs_url": "/api/docs",
    "redoc_url": "/api/redoc",
    "openapi_url": "/api/openapi.json",
    "openapi_tags": [
        {
            "name": "Health",
            "description": "Health check and service status",
        },
        {
            "name": "Documents",
            "description": "Document upload and context building",
        },
        {
            "name": "Chat",
            "description": "Context-grounded Q&A, summaries and clearing",
        },
        {
            "name": "Session",
            "description": "Session state and language",
        },
    ],
}


def get_app_config() -> dict[str, Any]:
    """Get FastAPI application configuration."""
    return APP_CONFIG.copy()


def get_cors_config() -> dict[str, Any]:
    """Get CORS middleware configuration for the configured origins."""
    return {"allow_origins": list(get_settings().cors_origins), **CORS_CONFIG}
