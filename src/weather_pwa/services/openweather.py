"""OpenWeatherMap API client."""

from typing import Any

import httpx
from prometheus_client import Counter, Histogram

from weather_pwa.config import Settings


class WeatherError(Exception):
    """Base exception for weather lookup errors."""


class ConfigurationError(WeatherError):
    """Raised when the provider API key is not configured."""


class CityNotFoundError(WeatherError):
    """Raised when the provider has no data for a city name."""

    def __init__(self, city: str) -> None:
        super().__init__(f"City not found: {city}")
        self.city = city


class UpstreamError(WeatherError):
    """Raised when the provider request fails or returns an error."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        status_text: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.status_text = status_text


class UpstreamTimeoutError(UpstreamError):
    """Raised when upstream request times out."""


# Metrics
upstream_requests = Counter(
    "upstream_requests_total",
    "Total upstream API requests",
    ["operation", "status"],
)
upstream_duration = Histogram(
    "upstream_request_duration_seconds",
    "Upstream request duration in seconds",
    ["operation"],
    buckets=[0.05, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0],
)


class OpenWeatherClient:
    """HTTP client for the OpenWeatherMap current weather and forecast APIs.

    Methods return the provider JSON payload untouched; shaping it is the
    normalizer's job.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize client with settings."""
        self._base_url = settings.upstream_url.rstrip("/")
        self._timeout = settings.upstream_timeout_seconds
        self._api_key = settings.openweather_api_key
        self._units = settings.upstream_units
        self._lang = settings.upstream_lang

    @property
    def is_configured(self) -> bool:
        """Whether an API key is available."""
        return bool(self._api_key)

    async def fetch_current_by_city(self, city: str) -> dict[str, Any]:
        """Fetch current conditions for a city name.

        Raises:
            ConfigurationError: If no API key is configured
            CityNotFoundError: If the provider does not know the city
            UpstreamError: If upstream returns any other error
        """
        return await self._get("weather", {"q": city}, operation="current_city", city=city)

    async def fetch_current_by_coords(self, lat: float, lon: float) -> dict[str, Any]:
        """Fetch current conditions for coordinates.

        The provider answers with the nearest station, so there is no
        not-found case here.

        Raises:
            ConfigurationError: If no API key is configured
            UpstreamError: If upstream returns an error
        """
        return await self._get("weather", {"lat": lat, "lon": lon}, operation="current_coords")

    async def fetch_forecast(self, city: str) -> dict[str, Any]:
        """Fetch the 5 day / 3 hour forecast feed for a city name.

        Raises:
            ConfigurationError: If no API key is configured
            CityNotFoundError: If the provider does not know the city
            UpstreamError: If upstream returns any other error
        """
        return await self._get("forecast", {"q": city}, operation="forecast_city", city=city)

    async def _get(
        self,
        endpoint: str,
        query: dict[str, str | float],
        *,
        operation: str,
        city: str | None = None,
    ) -> dict[str, Any]:
        if not self._api_key:
            raise ConfigurationError("OPENWEATHER_API_KEY is not configured")

        params: dict[str, str | float] = {
            **query,
            "appid": self._api_key,
            "units": self._units,
            "lang": self._lang,
        }
        url = f"{self._base_url}/{endpoint}"

        with upstream_duration.labels(operation=operation).time():
            try:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(url, params=params)
            except httpx.TimeoutException as e:
                upstream_requests.labels(operation=operation, status="timeout").inc()
                raise UpstreamTimeoutError(
                    f"OpenWeatherMap request timed out after {self._timeout}s"
                ) from e
            except httpx.RequestError as e:
                upstream_requests.labels(operation=operation, status="error").inc()
                raise UpstreamError(f"OpenWeatherMap request failed: {e}") from e

        if response.status_code == 404 and city is not None:
            upstream_requests.labels(operation=operation, status="not_found").inc()
            raise CityNotFoundError(city)

        if not response.is_success:
            upstream_requests.labels(operation=operation, status="error").inc()
            raise UpstreamError(
                f"OpenWeatherMap API returned {response.status_code}: {response.reason_phrase}",
                response.status_code,
                response.reason_phrase,
            )

        try:
            payload: dict[str, Any] = response.json()
        except ValueError as e:
            upstream_requests.labels(operation=operation, status="error").inc()
            raise UpstreamError(
                "OpenWeatherMap returned a non-JSON body",
                response.status_code,
                response.reason_phrase,
            ) from e

        upstream_requests.labels(operation=operation, status="success").inc()
        return payload
