"""
Application settings and configuration.
Uses pydantic-settings for environment variable loading.
"""

from pathlib import Path
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

DEFAULT_USER_AGENTS = [
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:122.0) Gecko/20100101 Firefox/122.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_2) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.2 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36 Edg/120.0.0.0",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=PROJECT_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Source
    default_host: str = Field(
        default="www.linkedin.com",
        description="Host serving the guest job search endpoint"
    )

    # Scraping settings
    scrape_user_agents: list[str] = Field(
        default=DEFAULT_USER_AGENTS,
        description="Pool of user agent strings, one is picked per request"
    )
    scrape_referer: str = Field(
        default="https://www.linkedin.com/jobs",
        description="Referer header sent with every request"
    )
    scrape_accept_language: str = Field(default="en-US,en;q=0.9")
    scrape_timeout_seconds: float = Field(
        default=10.0,
        description="HTTP request timeout"
    )
    scrape_delay_seconds: float = Field(
        default=2.0,
        description="Base delay between two successful batch requests"
    )
    scrape_delay_jitter_seconds: float = Field(
        default=1.0,
        description="Upper bound of the random delay added to the base delay"
    )
    scrape_max_consecutive_errors: int = Field(
        default=3,
        description="Consecutive failed batches before a run stops with partial results"
    )
    scrape_backoff_base_seconds: float = Field(
        default=2.0,
        description="Backoff after the n-th consecutive failure is base ** n seconds"
    )
    rate_limit_backoff_multiplier: float = Field(
        default=1.0,
        description="Extra factor applied to the backoff after an HTTP 429"
    )

    # Cache settings
    cache_ttl_seconds: float = Field(
        default=3600.0,
        description="How long a completed result set stays cached"
    )
    cache_sweep_interval_seconds: Optional[float] = Field(
        default=None,
        description="Minimum time between opportunistic sweeps (defaults to the TTL)"
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")


# Global settings instance
settings = Settings()
