"""API route definitions."""

from typing import Annotated, Any

import structlog
from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import HTMLResponse

from weather_pwa.api.dependencies import CacheDep, ClientDep, WeatherServiceDep
from weather_pwa.api.schemas import (
    CurrentWeather,
    ErrorDetail,
    ErrorResponse,
    ForecastDay,
    HealthResponse,
    ReadinessResponse,
)
from weather_pwa.services.openweather import (
    CityNotFoundError,
    ConfigurationError,
    UpstreamError,
    UpstreamTimeoutError,
    WeatherError,
)

logger = structlog.get_logger()

# Root router for landing page
root_router = APIRouter(tags=["root"])

# API router for weather endpoints
api_router = APIRouter(prefix="/api/v1/weather", tags=["weather"])

# Health router for health checks
health_router = APIRouter(prefix="/health", tags=["health"])

CityQuery = Annotated[
    str,
    Query(min_length=1, max_length=100, pattern=r"\S", description="City name"),
]

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    404: {"model": ErrorResponse, "description": "City not found"},
    500: {"model": ErrorResponse, "description": "Provider API key not configured"},
    502: {"model": ErrorResponse, "description": "Upstream API error"},
    504: {"model": ErrorResponse, "description": "Upstream timeout"},
}


LANDING_PAGE_HTML = """
<!DOCTYPE html>
<html lang="pt-BR">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Weather PWA API</title>
    <style>
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: #0f172a;
            color: #e2e8f0;
            max-width: 640px;
            margin: 3rem auto;
            padding: 0 1rem;
        }
        code { color: #38bdf8; }
        li { margin: 0.5rem 0; }
        a { color: #38bdf8; }
    </style>
</head>
<body>
    <h1>Weather PWA API</h1>
    <p>Tempo atual e previsão de 5 dias via OpenWeatherMap.</p>
    <ul>
        <li><code>GET /api/v1/weather/current?city=São Paulo</code></li>
        <li><code>GET /api/v1/weather/coords?lat=-23.55&amp;lon=-46.63</code></li>
        <li><code>GET /api/v1/weather/forecast?city=Rio de Janeiro</code></li>
    </ul>
    <p><a href="/docs">API Docs</a></p>
</body>
</html>
"""


def _http_error(exc: WeatherError, **context: Any) -> HTTPException:
    """Translate a lookup failure into an HTTP error response."""
    if isinstance(exc, CityNotFoundError):
        logger.info("City not found", **context)
        status_code, code, message = (
            status.HTTP_404_NOT_FOUND,
            "CITY_NOT_FOUND",
            "Cidade não encontrada",
        )
    elif isinstance(exc, ConfigurationError):
        logger.error("Provider not configured", error=str(exc), **context)
        status_code, code, message = (
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "CONFIGURATION_ERROR",
            "OPENWEATHER_API_KEY não está configurada",
        )
    elif isinstance(exc, UpstreamTimeoutError):
        logger.error("Upstream timeout", error=str(exc), **context)
        status_code, code, message = (
            status.HTTP_504_GATEWAY_TIMEOUT,
            "UPSTREAM_TIMEOUT",
            "OpenWeatherMap API request timed out",
        )
    elif isinstance(exc, UpstreamError):
        logger.error(
            "Upstream API error",
            status_code=exc.status_code,
            error=str(exc),
            **context,
        )
        status_code, code, message = (
            status.HTTP_502_BAD_GATEWAY,
            "UPSTREAM_ERROR",
            f"Erro ao buscar dados do tempo: {exc.status_text or exc}",
        )
    else:
        raise exc

    return HTTPException(
        status_code=status_code,
        detail=ErrorResponse(error=ErrorDetail(code=code, message=message)).model_dump(),
    )


@root_router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def landing_page() -> str:
    """Landing page with API information."""
    return LANDING_PAGE_HTML


@api_router.get("/current", response_model=CurrentWeather, responses=ERROR_RESPONSES)
async def get_current_by_city(
    weather_service: WeatherServiceDep,
    city: CityQuery,
) -> CurrentWeather:
    """Get current weather for a city name. Results are cached for 10 minutes."""
    try:
        return await weather_service.get_current_by_city(city)
    except WeatherError as e:
        raise _http_error(e, city=city) from e


@api_router.get("/coords", response_model=CurrentWeather, responses=ERROR_RESPONSES)
async def get_current_by_coords(
    weather_service: WeatherServiceDep,
    lat: Annotated[float, Query(ge=-90, le=90, description="Latitude")],
    lon: Annotated[float, Query(ge=-180, le=180, description="Longitude")],
) -> CurrentWeather:
    """Get current weather for coordinates (e.g. from browser geolocation)."""
    try:
        return await weather_service.get_current_by_coords(lat, lon)
    except WeatherError as e:
        raise _http_error(e, lat=lat, lon=lon) from e


@api_router.get("/forecast", response_model=list[ForecastDay], responses=ERROR_RESPONSES)
async def get_forecast(
    weather_service: WeatherServiceDep,
    city: CityQuery,
) -> list[ForecastDay]:
    """Get one forecast sample per day, closest to noon, for up to 5 days."""
    try:
        return await weather_service.get_forecast(city)
    except WeatherError as e:
        raise _http_error(e, city=city) from e


@health_router.get("/live", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    """Liveness probe - checks if the service is running."""
    return HealthResponse(status="ok")


@health_router.get("/ready", response_model=ReadinessResponse)
async def readiness(cache: CacheDep, client: ClientDep) -> ReadinessResponse:
    """Readiness probe - checks cache and provider credentials."""
    checks = {
        "cache": "ok" if cache.is_healthy() else "unhealthy",
        "provider": "ok" if client.is_configured else "unconfigured",
    }
    overall_status = "ok" if all(v == "ok" for v in checks.values()) else "unhealthy"

    response = ReadinessResponse(status=overall_status, checks=checks)

    if overall_status != "ok":
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=response.model_dump(),
        )

    return response
