"""Application configuration management."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server settings
    app_host: str = Field(default="0.0.0.0", description="Server bind host")
    app_port: int = Field(default=3000, description="Server bind port")

    # OpenWeatherMap settings
    openweather_api_key: str | None = Field(
        default=None,
        description="OpenWeatherMap API key (OPENWEATHER_API_KEY)",
    )
    upstream_url: str = Field(
        default="https://api.openweathermap.org/data/2.5",
        description="OpenWeatherMap API base URL",
    )
    upstream_timeout_seconds: float = Field(
        default=5.0,
        description="Upstream request timeout in seconds",
        ge=0.1,
        le=60.0,
    )
    upstream_units: str = Field(default="metric", description="Measurement units")
    upstream_lang: str = Field(default="pt_br", description="Language of descriptions")

    # Cache settings
    cache_ttl_seconds: int = Field(
        default=600,
        description="Cache TTL in seconds",
        ge=1,
        le=86400,
    )
    cache_max_size: int | None = Field(
        default=None,
        description="Maximum cache entries (unbounded when unset)",
        ge=1,
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: str = Field(
        default="json",
        description="Log format (json or text)",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
