"""Test fixtures."""

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from weather_pwa.config import Settings
from weather_pwa.main import create_app
from weather_pwa.services.cache import CacheService
from weather_pwa.services.openweather import OpenWeatherClient
from weather_pwa.services.weather import WeatherService


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        openweather_api_key="test-key",
        upstream_timeout_seconds=1.0,
        cache_ttl_seconds=600,
        log_level="DEBUG",
        log_format="text",
    )


@pytest.fixture
def unconfigured_settings() -> Settings:
    """Create settings without a provider API key."""
    return Settings(openweather_api_key=None, log_level="DEBUG", log_format="text")


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def cache_service(settings: Settings, clock: FakeClock) -> CacheService:
    """Create test cache service driven by the fake clock."""
    return CacheService(settings, timer=clock)


@pytest.fixture
def openweather_client(settings: Settings) -> OpenWeatherClient:
    """Create test OpenWeatherMap client."""
    return OpenWeatherClient(settings)


@pytest.fixture
def weather_service(
    cache_service: CacheService, openweather_client: OpenWeatherClient
) -> WeatherService:
    """Create weather service with fake-clock cache."""
    return WeatherService(cache_service, openweather_client)


@pytest.fixture
def weather_url(settings: Settings) -> str:
    """Current weather endpoint URL."""
    return f"{settings.upstream_url}/weather"


@pytest.fixture
def forecast_url(settings: Settings) -> str:
    """Forecast endpoint URL."""
    return f"{settings.upstream_url}/forecast"


@pytest.fixture
def current_payload() -> dict[str, Any]:
    """Provider payload for current weather in São Paulo."""
    return {
        "name": "São Paulo",
        "sys": {"country": "BR"},
        "main": {"temp": 25.6, "feels_like": 26.1, "humidity": 60, "pressure": 1015},
        "wind": {"speed": 3.2},
        "weather": [{"description": "céu limpo", "icon": "01d"}],
        "dt": 1700000000,
    }


@pytest.fixture
def forecast_sample() -> Callable[..., dict[str, Any]]:
    """Factory for one 3-hourly forecast feed entry."""

    def make(
        day: int,
        hour: int,
        temp: float = 20.0,
        temp_min: float = 18.0,
        temp_max: float = 22.0,
        description: str = "nublado",
        icon: str = "04d",
    ) -> dict[str, Any]:
        moment = datetime(2023, 11, day, hour, tzinfo=UTC)
        return {
            "dt": int(moment.timestamp()),
            "main": {
                "temp": temp,
                "temp_min": temp_min,
                "temp_max": temp_max,
                "humidity": 70,
                "pressure": 1012,
            },
            "weather": [{"description": description, "icon": icon}],
            "wind": {"speed": 4.1},
        }

    return make


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Create test application."""
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client."""
    return TestClient(app)
