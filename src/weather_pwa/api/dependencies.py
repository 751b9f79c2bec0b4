"""FastAPI dependencies.

Services are built once per application in ``create_app`` and kept on
``app.state``; these providers hand them to route handlers.
"""

from typing import Annotated

from fastapi import Depends, Request

from weather_pwa.services.cache import CacheService
from weather_pwa.services.openweather import OpenWeatherClient
from weather_pwa.services.weather import WeatherService


def get_cache_service(request: Request) -> CacheService:
    """Get the shared cache instance."""
    cache: CacheService = request.app.state.cache
    return cache


def get_openweather_client(request: Request) -> OpenWeatherClient:
    """Get the shared OpenWeatherMap client."""
    client: OpenWeatherClient = request.app.state.openweather_client
    return client


def get_weather_service(request: Request) -> WeatherService:
    """Get the weather service instance."""
    service: WeatherService = request.app.state.weather_service
    return service


# Type aliases for dependency injection
CacheDep = Annotated[CacheService, Depends(get_cache_service)]
ClientDep = Annotated[OpenWeatherClient, Depends(get_openweather_client)]
WeatherServiceDep = Annotated[WeatherService, Depends(get_weather_service)]
