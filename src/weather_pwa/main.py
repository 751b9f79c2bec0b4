"""Application entry point."""

import uvicorn
from fastapi import FastAPI
from prometheus_client import make_asgi_app

from weather_pwa import __version__
from weather_pwa.api.routes import api_router, health_router, root_router
from weather_pwa.config import Settings, get_settings
from weather_pwa.middleware.logging import LoggingMiddleware, configure_logging
from weather_pwa.services.cache import CacheService
from weather_pwa.services.openweather import OpenWeatherClient
from weather_pwa.services.weather import WeatherService


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()

    configure_logging(settings)

    app = FastAPI(
        title="Weather PWA API",
        description="Cached current weather and 5-day forecast from OpenWeatherMap",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # One cache shared by every request handled by this app
    cache = CacheService(settings)
    client = OpenWeatherClient(settings)
    app.state.settings = settings
    app.state.cache = cache
    app.state.openweather_client = client
    app.state.weather_service = WeatherService(cache, client)

    app.add_middleware(LoggingMiddleware)

    app.include_router(root_router)
    app.include_router(api_router)
    app.include_router(health_router)

    app.mount("/metrics", make_asgi_app())

    return app


def run() -> None:
    """Run the application with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "weather_pwa.main:create_app",
        factory=True,
        host=settings.app_host,
        port=settings.app_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
