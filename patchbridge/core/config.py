"""
Configuration management for the patch bridge.

This module centralizes environment-driven configuration using Pydantic's
`BaseSettings`. The API, the host transports and the correlator all read the
shared `settings` instance so a single `.env` file drives the whole process.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import AnyUrl, Field, PositiveFloat, PositiveInt, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration sourced from environment variables."""

    # General application settings
    API_TITLE: str = "Patch Bridge API"
    API_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = Field("development", pattern=r"^(development|staging|production)$")
    HOST: str = "127.0.0.1"
    PORT: PositiveInt = 3009
    LOG_LEVEL: str = Field("INFO", pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    ALLOWED_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    # Host transport
    HOST_TRANSPORT: str = Field("standalone", pattern=r"^(standalone|kafka|loopback)$")
    KAFKA_BOOTSTRAP_SERVERS: Optional[str] = None
    KAFKA_COMMAND_TOPIC: str = "patchbridge.commands"
    KAFKA_REPLY_TOPIC: str = "patchbridge.replies"
    KAFKA_CONSUMER_GROUP: Optional[str] = None

    # Query correlation
    RESPONSE_TIMEOUT_SECONDS: PositiveFloat = 5.0
    CONSOLE_BUFFER_SIZE: PositiveInt = 1000

    # Monitoring / tracing
    ENABLE_TRACING: bool = False
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[AnyUrl] = None
    OTEL_EXPORTER_OTLP_HEADERS: Optional[str] = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @field_validator("ALLOWED_ORIGINS", mode="before")
    def _split_origins(cls, value: str | List[str]) -> List[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("LOG_LEVEL", mode="before")
    def _upper_level(cls, value: str) -> str:
        return value.upper() if isinstance(value, str) else value


@lru_cache()
def get_settings() -> Settings:
    """Return a cached `Settings` instance."""

    return Settings()


# Singleton-style settings instance for modules that prefer direct access.
settings = get_settings()
