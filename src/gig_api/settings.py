"""Application configuration using Pydantic Settings.

This module centralizes runtime configuration for the gig API. Values can
be provided via environment variables (preferred) or fall back to the defaults
below. A ``Settings`` instance is intended to be retrieved via ``get_settings``
which caches the object for reuse across the process.

Environment variable prefix: ``GIG_API_`` (e.g. ``GIG_API_HOST``).
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime application settings.

    Attributes map directly to environment variables using the ``GIG_API_``
    prefix (case-insensitive). For example, ``host`` <- ``GIG_API_HOST``.
    """

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host interface to bind the server",
    )  # fmt: skip
    port: int = Field(
        default=8080,
        description="Server port",
    )  # fmt: skip
    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Application log level",
    )
    reload: bool = Field(
        default=False,
        description="Enable auto-reload in development",
    )  # fmt: skip

    # Row store settings
    sql_log: bool = Field(
        default=False,
        description="Enable SQL query logging",
    )  # fmt: skip
    database_url: str | None = Field(
        default=None,
        description="Database connection string",
    )  # fmt: skip

    # Identity provider settings
    # The provider exchanges bearer tokens for external users (GoTrue compatible API).
    identity_provider_url: str | None = Field(
        default=None,
        description="Base URL of the identity provider",
    )  # fmt: skip
    identity_provider_key: str | None = Field(
        default=None,
        description="Service key sent as the apikey header to the identity provider",
    )  # fmt: skip
    identity_provider_timeout: float = Field(
        default=10.0,
        description="Timeout in seconds for identity provider calls",
    )  # fmt: skip

    # Pagination settings
    default_page_size: int = Field(
        default=20,
        gt=0,
        description="Page size used when a request does not specify one",
    )  # fmt: skip
    max_page_size: int = Field(
        default=100,
        gt=0,
        description="Upper bound for requested page sizes",
    )  # fmt: skip

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | None) -> str:
        """Normalize and validate log level."""
        if v is None:
            return "INFO"

        v_upper = str(v).upper()

        allowed = {"TRACE", "DEBUG", "INFO", "WARNING", "ERROR"}
        if v_upper not in allowed:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {', '.join(sorted(allowed))}")

        return v_upper

    model_config = SettingsConfigDict(
        env_prefix="GIG_API_",
        case_sensitive=False,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )


@lru_cache
def get_settings() -> Settings:
    """Return the cached ``Settings`` instance.

    The first invocation reads environment variables / .env file; subsequent
    calls reuse the same object to ensure consistent config.
    """

    return Settings()


__all__ = ["Settings", "get_settings"]
