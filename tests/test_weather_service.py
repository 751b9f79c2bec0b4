"""Tests for the cached weather lookup service."""

from collections.abc import Callable
from typing import Any

import pytest
import respx
from conftest import FakeClock
from httpx import Response

from weather_pwa.config import Settings
from weather_pwa.services.cache import CacheService
from weather_pwa.services.openweather import (
    CityNotFoundError,
    ConfigurationError,
    OpenWeatherClient,
    UpstreamError,
)
from weather_pwa.services.weather import WeatherService, city_key, coords_key


class TestCacheKeys:
    """Tests for cache key construction."""

    def test_city_key_normalized(self) -> None:
        """Test city names are trimmed and lowercased."""
        assert city_key("current_city", "  São Paulo ") == "current_city_são paulo"

    def test_coords_key_raw_values(self) -> None:
        """Test coordinates are not rounded."""
        assert coords_key("current_coords", -23.55, -46.63) == "current_coords_-23.55_-46.63"
        assert coords_key("current_coords", 1.0001, 2.0) != coords_key("current_coords", 1.0, 2.0)


class TestWeatherService:
    """Tests for WeatherService."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_current_by_city_cached(
        self,
        weather_service: WeatherService,
        weather_url: str,
        current_payload: dict[str, Any],
    ) -> None:
        """Test a second lookup within the TTL makes no provider call."""
        route = respx.get(weather_url).mock(return_value=Response(200, json=current_payload))

        first = await weather_service.get_current_by_city("São Paulo")
        second = await weather_service.get_current_by_city("são paulo ")

        assert first.city == "São Paulo"
        assert first.temperature == 26
        assert first.feelsLike == 26
        assert second == first
        assert route.call_count == 1

    @respx.mock
    @pytest.mark.asyncio
    async def test_refetch_after_ttl(
        self,
        weather_service: WeatherService,
        clock: FakeClock,
        weather_url: str,
        current_payload: dict[str, Any],
    ) -> None:
        """Test an expired entry forces a fresh provider call."""
        route = respx.get(weather_url).mock(return_value=Response(200, json=current_payload))

        await weather_service.get_current_by_city("Recife")
        clock.advance(599)
        await weather_service.get_current_by_city("Recife")
        assert route.call_count == 1

        clock.advance(1)
        await weather_service.get_current_by_city("Recife")
        assert route.call_count == 2

    @respx.mock
    @pytest.mark.asyncio
    async def test_kinds_do_not_share_entries(
        self,
        weather_service: WeatherService,
        weather_url: str,
        forecast_url: str,
        current_payload: dict[str, Any],
        forecast_sample: Callable[..., dict[str, Any]],
    ) -> None:
        """Test current and forecast lookups for one city are cached apart."""
        current_route = respx.get(weather_url).mock(
            return_value=Response(200, json=current_payload)
        )
        forecast_route = respx.get(forecast_url).mock(
            return_value=Response(200, json={"list": [forecast_sample(15, 12)]})
        )

        await weather_service.get_current_by_city("Recife")
        days = await weather_service.get_forecast("Recife")
        await weather_service.get_forecast("RECIFE")

        assert len(days) == 1
        assert current_route.call_count == 1
        assert forecast_route.call_count == 1

    @respx.mock
    @pytest.mark.asyncio
    async def test_coords_exact_key(
        self,
        weather_service: WeatherService,
        weather_url: str,
        current_payload: dict[str, Any],
    ) -> None:
        """Test nearby but distinct coordinates miss the cache."""
        route = respx.get(weather_url).mock(return_value=Response(200, json=current_payload))

        await weather_service.get_current_by_coords(-23.55, -46.63)
        await weather_service.get_current_by_coords(-23.55, -46.63)
        await weather_service.get_current_by_coords(-23.5500001, -46.63)

        assert route.call_count == 2

    @respx.mock
    @pytest.mark.asyncio
    async def test_not_found_is_not_cached(
        self,
        weather_service: WeatherService,
        cache_service: CacheService,
        weather_url: str,
    ) -> None:
        """Test a failed lookup leaves no entry and the retry hits the provider."""
        route = respx.get(weather_url).mock(return_value=Response(404))

        with pytest.raises(CityNotFoundError):
            await weather_service.get_current_by_city("CidadeInvalidaXYZ")
        assert cache_service.size == 0

        with pytest.raises(CityNotFoundError):
            await weather_service.get_current_by_city("CidadeInvalidaXYZ")
        assert route.call_count == 2

    @respx.mock
    @pytest.mark.asyncio
    async def test_upstream_error_propagates(
        self,
        weather_service: WeatherService,
        cache_service: CacheService,
        forecast_url: str,
    ) -> None:
        """Test upstream failures propagate unchanged without retry."""
        route = respx.get(forecast_url).mock(return_value=Response(503))

        with pytest.raises(UpstreamError) as exc_info:
            await weather_service.get_forecast("Recife")

        assert exc_info.value.status_code == 503
        assert route.call_count == 1
        assert cache_service.size == 0

    @respx.mock
    @pytest.mark.asyncio
    async def test_no_stale_fallback(
        self,
        weather_service: WeatherService,
        clock: FakeClock,
        weather_url: str,
        current_payload: dict[str, Any],
    ) -> None:
        """Test an expired entry is not served when the refresh fails."""
        respx.get(weather_url).mock(
            side_effect=[Response(200, json=current_payload), Response(500)]
        )

        await weather_service.get_current_by_city("Recife")
        clock.advance(600)

        with pytest.raises(UpstreamError):
            await weather_service.get_current_by_city("Recife")

    @pytest.mark.asyncio
    async def test_missing_api_key(
        self, unconfigured_settings: Settings, clock: FakeClock
    ) -> None:
        """Test every lookup fails with ConfigurationError and no network call."""
        service = WeatherService(
            CacheService(unconfigured_settings, timer=clock),
            OpenWeatherClient(unconfigured_settings),
        )

        with respx.mock(assert_all_called=False) as mock:
            route = mock.get(url__startswith=unconfigured_settings.upstream_url)

            with pytest.raises(ConfigurationError):
                await service.get_current_by_city("Recife")
            with pytest.raises(ConfigurationError):
                await service.get_current_by_coords(-8.05, -34.9)
            with pytest.raises(ConfigurationError):
                await service.get_forecast("Recife")

            assert route.call_count == 0
