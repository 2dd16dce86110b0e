"""
Main application settings for the Sözlük aggregation client.

Settings are loaded from:
1. Environment variables prefixed with ``SOZLUK_``
2. A ``.env`` file in the working directory
3. Default values (fallback)

Usage:
    >>> from sozluk.core.config.settings import Settings
    >>> settings = Settings(RETRY_MAX_ATTEMPTS=2, CACHE_ENABLED=False)
    >>> settings.REQUEST_TIMEOUT
    15.0
"""
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sozluk.core.constants import (
    APP_NAME,
    CACHE_CHECK_PERIOD,
    CACHE_DAILY_TTL,
    CACHE_LONG_TTL,
    CACHE_MEDIUM_TTL,
    CACHE_SHORT_TTL,
    DEFAULT_ACCEPT_LANGUAGE,
    DEFAULT_BASE_URL,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_RETRY_BACKOFF,
    DEFAULT_RETRY_BACKOFF_MAX,
    DEFAULT_RETRY_MAX_ATTEMPTS,
    DEFAULT_SIMILAR_POOL_SIZE,
    DEFAULT_SUGGESTION_COUNT,
    DEFAULT_USER_AGENT,
    ENV_PREFIX,
    MAX_BATCH_SIZE,
)
from sozluk.core.version import __version__


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # ENVIRONMENT
    # =========================================================================

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    LOG_FORMAT: Literal["json", "text"] = Field(
        default="text",
        description="Console log format",
    )

    APP_NAME: str = Field(default=APP_NAME, description="Application name")

    APP_VERSION: str = Field(default=__version__, description="Application version")

    # =========================================================================
    # REMOTE SERVICE
    # =========================================================================

    BASE_URL: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base address of the dictionary service",
    )

    REQUEST_TIMEOUT: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT,
        description="Per-call timeout in seconds",
        gt=0,
    )

    USER_AGENT: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent header")

    ACCEPT_LANGUAGE: str = Field(
        default=DEFAULT_ACCEPT_LANGUAGE,
        description="Accept-Language header",
    )

    MAX_REDIRECTS: int = Field(default=DEFAULT_MAX_REDIRECTS, ge=0, le=20)

    # =========================================================================
    # RETRY POLICY
    # =========================================================================

    RETRY_MAX_ATTEMPTS: int = Field(
        default=DEFAULT_RETRY_MAX_ATTEMPTS,
        description="Total attempts per sub-dictionary query (first try included)",
        ge=1,
        le=10,
    )

    RETRY_BACKOFF: float = Field(
        default=DEFAULT_RETRY_BACKOFF,
        description="Delay before the first retry in seconds",
        ge=0,
    )

    RETRY_BACKOFF_MAX: float = Field(
        default=DEFAULT_RETRY_BACKOFF_MAX,
        description="Upper bound for the exponential delay in seconds",
        ge=0,
    )

    RETRY_EXPONENTIAL: bool = Field(
        default=True,
        description="Double the delay after every failed attempt",
    )

    # =========================================================================
    # CACHE
    # =========================================================================

    CACHE_ENABLED: bool = Field(default=True, description="Enable the in-memory cache")

    CACHE_DEFAULT_TTL: int = Field(default=CACHE_LONG_TTL, ge=1)

    CACHE_CHECK_PERIOD: int = Field(
        default=CACHE_CHECK_PERIOD,
        description="Minimum seconds between expired-entry sweeps",
        ge=0,
    )

    CACHE_PARTIAL_RESULTS: bool = Field(
        default=False,
        description="Also cache records with complete=False",
    )

    LOOKUP_CACHE_TTL: int = Field(default=CACHE_MEDIUM_TTL, ge=1)
    PROVERB_CACHE_TTL: int = Field(default=CACHE_LONG_TTL, ge=1)
    LETTER_CACHE_TTL: int = Field(default=CACHE_MEDIUM_TTL, ge=1)
    POPULAR_CACHE_TTL: int = Field(default=CACHE_LONG_TTL, ge=1)
    DAILY_WORD_CACHE_TTL: int = Field(default=CACHE_DAILY_TTL, ge=1)
    BATCH_CACHE_TTL: int = Field(default=CACHE_SHORT_TTL, ge=1)

    # =========================================================================
    # LOOKUP & MATCHING
    # =========================================================================

    COALESCE_REQUESTS: bool = Field(
        default=True,
        description="Share one in-flight fan-out between identical lookups",
    )

    SUGGESTION_COUNT: int = Field(default=DEFAULT_SUGGESTION_COUNT, ge=1)

    SIMILAR_POOL_SIZE: int = Field(default=DEFAULT_SIMILAR_POOL_SIZE, ge=1)

    MAX_BATCH_SIZE: int = Field(default=MAX_BATCH_SIZE, ge=1)

    @field_validator("BASE_URL")
    @classmethod
    def ensure_trailing_slash(cls, value: str) -> str:
        """Endpoints are joined relative to the base, which needs a trailing slash."""
        return value if value.endswith("/") else f"{value}/"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings (singleton)
    """
    return Settings()


settings = get_settings()


__all__ = ["Settings", "get_settings", "settings"]
