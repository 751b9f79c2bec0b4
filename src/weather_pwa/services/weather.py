"""Weather service orchestrating cache, upstream client and normalizer."""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import structlog

from weather_pwa.api.schemas import CurrentWeather, ForecastDay
from weather_pwa.services.cache import CacheService
from weather_pwa.services.normalizer import to_current_weather, to_forecast_days
from weather_pwa.services.openweather import OpenWeatherClient

logger = structlog.get_logger()

T = TypeVar("T")


def city_key(kind: str, city: str) -> str:
    """Cache key for a city-based lookup."""
    return f"{kind}_{city.strip().lower()}"


def coords_key(kind: str, lat: float, lon: float) -> str:
    """Cache key for a coordinate lookup; values are used as given."""
    return f"{kind}_{lat}_{lon}"


class WeatherService:
    """Service for fetching weather data with caching."""

    def __init__(self, cache: CacheService, client: OpenWeatherClient) -> None:
        """Initialize service with cache and client."""
        self._cache = cache
        self._client = client

    async def get_current_by_city(self, city: str) -> CurrentWeather:
        """Get current weather for a city name."""
        return await self._lookup(
            city_key("current_city", city),
            lambda: self._client.fetch_current_by_city(city.strip()),
            to_current_weather,
            city=city,
        )

    async def get_current_by_coords(self, lat: float, lon: float) -> CurrentWeather:
        """Get current weather for coordinates."""
        return await self._lookup(
            coords_key("current_coords", lat, lon),
            lambda: self._client.fetch_current_by_coords(lat, lon),
            to_current_weather,
            lat=lat,
            lon=lon,
        )

    async def get_forecast(self, city: str) -> list[ForecastDay]:
        """Get the daily forecast (up to 5 days) for a city name."""
        return await self._lookup(
            city_key("forecast_city", city),
            lambda: self._client.fetch_forecast(city.strip()),
            to_forecast_days,
            city=city,
        )

    async def _lookup(
        self,
        key: str,
        fetch: Callable[[], Awaitable[dict[str, Any]]],
        normalize: Callable[[dict[str, Any]], T],
        **context: Any,
    ) -> T:
        """Serve ``key`` from cache, or fetch, normalize and cache it.

        Upstream errors propagate as-is and leave the cache untouched.
        """
        cached = self._cache.get(key)
        if cached is not None:
            logger.info("Cache hit for weather request", cache_key=key, cache_hit=True, **context)
            return cached

        logger.info(
            "Cache miss, fetching from upstream",
            cache_key=key,
            cache_hit=False,
            **context,
        )

        payload = await fetch()
        result = normalize(payload)

        self._cache.set(key, result)

        return result
