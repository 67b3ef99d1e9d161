"""
Configuration management for name_radar.

Uses pydantic-settings for environment-backed settings and a frozen pydantic
model for the per-run configuration consumed by the pipeline.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from name_radar.constants import (
    CRT_RATE_LIMIT,
    DEFAULT_CONCURRENCY,
    DEFAULT_SEARCH_LIMIT,
    DEFAULT_USER_AGENT,
    DNS_RATE_LIMIT,
    DNS_TIMEOUT,
    HTTP_TIMEOUT,
    PAGE_RATE_LIMIT,
    SEARCH_RATE_LIMIT,
    SOCIAL_PROBE_TIMEOUT,
    SOCIAL_RATE_LIMIT,
    WHOIS_RATE_LIMIT,
    WHOIS_TIMEOUT,
)

Engine = Literal["auto", "serpapi", "bing", "ddg", "multi"]
ProbeMode = Literal["off", "auto", "always"]


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Only values that come from the environment live here. Everything that
    shapes a single run lives in RunConfig.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars
    )

    # SerpApi Configuration
    serpapi_key: str | None = Field(
        default=None,
        description="SerpApi key (optional, enables the Google engine)",
    )

    name_radar_user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent header sent with page fetches and probes",
    )
    name_radar_cache_dir: Path = Field(
        default=Path("data/cache"),
        description="Directory for the evidence cache",
    )

    @field_validator("serpapi_key", mode="before")
    @classmethod
    def empty_string_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for optional fields."""
        if isinstance(v, str):
            v = v.strip()
            return v if v else None
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


class RateLimits(BaseModel):
    """Requests per second allowed for each external source."""

    model_config = ConfigDict(frozen=True)

    whois: float = Field(default=WHOIS_RATE_LIMIT, gt=0)
    dns: float = Field(default=DNS_RATE_LIMIT, gt=0)
    crt: float = Field(default=CRT_RATE_LIMIT, gt=0)
    page: float = Field(default=PAGE_RATE_LIMIT, gt=0)
    search: float = Field(default=SEARCH_RATE_LIMIT, gt=0)
    social: float = Field(default=SOCIAL_RATE_LIMIT, gt=0)


class Timeouts(BaseModel):
    """Per-operation timeouts in seconds."""

    model_config = ConfigDict(frozen=True)

    http: float = Field(default=HTTP_TIMEOUT, gt=0)
    whois: float = Field(default=WHOIS_TIMEOUT, gt=0)
    dns: float = Field(default=DNS_TIMEOUT, gt=0)
    social_probe: float = Field(default=SOCIAL_PROBE_TIMEOUT, gt=0)


class RunConfig(BaseModel):
    """
    Configuration for one run of the usage pipeline.

    Immutable once built; the same instance is shared by every name in a batch.
    Invalid values raise pydantic.ValidationError at construction time.
    """

    model_config = ConfigDict(frozen=True)

    engine: Engine = "auto"
    limit: int = Field(default=DEFAULT_SEARCH_LIMIT, ge=1, le=100)
    probe_mode: ProbeMode = "auto"
    strict: bool = False
    allow_mentions: bool = False
    whois_enabled: bool = True
    crt_enabled: bool = True
    social_probe_enabled: bool = True
    only_found: bool = True
    concurrency: int = Field(default=DEFAULT_CONCURRENCY, ge=1)
    timeouts: Timeouts = Field(default_factory=Timeouts)
    rate_limits: RateLimits = Field(default_factory=RateLimits)
    show_progress: bool = False
