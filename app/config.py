"""
Configuration Management Module

This module handles all application configuration using Pydantic Settings.
Configuration is loaded from environment variables with strong typing and validation.

Design Decisions:
- Use Pydantic Settings for automatic environment variable loading
- Provide sensible defaults for optional settings
- Validate configuration at startup (fail-fast approach)
- Keep comma-separated list settings as strings, expose parsed lists as properties
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All sensitive values are loaded from environment variables only,
    never hardcoded or logged.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # =========================================================================
    # OpenAI Configuration
    # =========================================================================
    openai_api_key: str = Field(
        description="OpenAI API key"
    )

    openai_model: str = Field(
        default="gpt-4o-mini",
        description="OpenAI model to use for reviews and replies"
    )

    openai_max_tokens: int = Field(
        default=4096,
        ge=100,
        le=128000,
        description="Maximum tokens for AI response"
    )

    openai_temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Temperature for AI responses"
    )

    openai_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout for a single OpenAI request"
    )

    openai_rate_limit_rpm: int = Field(
        default=60,
        ge=1,
        description="OpenAI API rate limit per minute"
    )

    # =========================================================================
    # Review Processing
    # =========================================================================
    review_chunk_size: int = Field(
        default=5000,
        ge=1,
        le=100000,
        description="Maximum characters of code sent to the model per request"
    )

    review_timeout_seconds: float = Field(
        default=300.0,
        gt=0,
        description="Upper bound for a whole review request, all chunks included"
    )

    # =========================================================================
    # MongoDB Configuration
    # =========================================================================
    mongo_uri: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection string"
    )

    mongo_database: str = Field(
        default="ai_code_reviewer",
        description="MongoDB database holding user accounts"
    )

    mongo_server_selection_timeout_ms: int = Field(
        default=5000,
        ge=100,
        description="How long to wait for a reachable MongoDB server"
    )

    mongo_ensure_indexes: bool = Field(
        default=True,
        description="Create collection indexes on startup"
    )

    # =========================================================================
    # Server Configuration
    # =========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server"
    )

    port: int = Field(
        default=5000,
        ge=1,
        le=65535,
        description="Port to bind the server"
    )

    allowed_origins: str = Field(
        default="http://localhost:5173,https://aicodereviewer.vercel.app",
        description="Comma-separated origins allowed by CORS"
    )

    # =========================================================================
    # Logging Configuration
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    log_json_format: bool = Field(
        default=True,
        description="Enable JSON logging format"
    )

    log_requests: bool = Field(
        default=False,
        description="Enable request/response logging"
    )

    # =========================================================================
    # Validators
    # =========================================================================
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("openai_api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Reject blank API keys early."""
        if not v.strip():
            raise ValueError("OPENAI_API_KEY must not be empty")
        return v.strip()

    # =========================================================================
    # Computed Properties
    # =========================================================================
    @property
    def allowed_origins_list(self) -> List[str]:
        """Get list of origins allowed by CORS."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once,
    which is important for performance and consistency.

    Returns:
        Settings instance
    """
    return Settings()
