"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # CourtListener API Configuration
    courtlistener_base_url: str = Field(
        default="https://www.courtlistener.com", description="Origin of the CourtListener site"
    )
    courtlistener_search_path: str = Field(
        default="/api/rest/v3/search/", description="Path of the full-text search endpoint"
    )
    courtlistener_user_agent: str = Field(
        default="civil-rights-search (opinion search proxy)",
        description="Client identifier sent upstream for traffic attribution",
    )
    upstream_timeout: float | None = Field(
        default=None, description="HTTP request timeout in seconds (None leaves it to the host)"
    )
    error_details_limit: int = Field(
        default=4000, ge=0, description="Maximum upstream error body characters passed through"
    )
    search_backend: Literal["courtlistener", "sample"] = Field(
        default="courtlistener", description="Upstream to query (sample serves built-in cases)"
    )

    # Application Configuration
    app_title: str = Field(default="Civil Rights Opinion Search", description="Application title")
    app_version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")
    host: str = Field(default="127.0.0.1", description="Bind address for the dev server")
    port: int = Field(default=8000, description="Bind port for the dev server")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    log_json: bool = Field(default=True, description="Use JSON log format")
    log_file: str | None = Field(default=None, description="Optional log file path")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
