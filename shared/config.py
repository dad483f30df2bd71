"""Base configuration with pydantic-settings.

This module provides a base Settings class that services inherit from.
Each service defines its own Settings with required fields specific to it.

Usage in service:
    from shared.config import BaseSettings
    from pydantic import Field

    class Settings(BaseSettings):
        database_url: str = Field(..., description="Required for this service")

    settings = Settings()
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Base application settings.

    All fields here are optional with sensible defaults.
    Services inherit this and make required fields mandatory.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Optional fields with defaults ===

    # Logging configuration
    service_name: str = Field(
        default="unknown",
        description="Service name for structured logging",
    )
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper_v


# === Field definitions for reuse in service configs ===


def database_url_field(required: bool = True):
    """Database URL field definition."""
    if required:
        return Field(
            ...,
            description="PostgreSQL connection URL",
            examples=["postgresql+asyncpg://user:pass@db:5432/dbname"],
        )
    return Field(
        default=None,
        description="PostgreSQL connection URL (optional)",
    )


def api_url_field(required: bool = True):
    """Projects API URL field definition."""
    if required:
        return Field(
            ...,
            alias="PROJECTS_API_URL",
            description="Projects API service URL (without the /api prefix)",
            examples=["http://api:8000"],
        )
    return Field(
        default=None,
        alias="PROJECTS_API_URL",
        description="Projects API service URL (optional)",
    )


def host_field(default: str, provider: str):
    """Source-hosting host name field definition."""
    return Field(
        default=default,
        description=f"Host name served by the {provider} repository provider",
        examples=[default],
    )
