"""Weather PWA backend: cached OpenWeatherMap lookups."""

__version__ = "1.0.0"
