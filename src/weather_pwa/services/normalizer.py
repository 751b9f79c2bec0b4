"""Conversion of OpenWeatherMap payloads into response models.

All functions are pure and assume a well-formed provider payload.
"""

import math
from datetime import UTC, date, datetime
from typing import Any

from weather_pwa.api.schemas import CurrentWeather, ForecastDay

FORECAST_DAYS = 5
NOON_HOUR = 12


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _observed_at(sample: dict[str, Any]) -> datetime:
    return datetime.fromtimestamp(sample["dt"], tz=UTC)


def to_current_weather(payload: dict[str, Any]) -> CurrentWeather:
    """Build current conditions from a ``/weather`` payload."""
    main = payload["main"]
    condition = payload["weather"][0]
    return CurrentWeather(
        city=payload["name"],
        country=payload["sys"]["country"],
        temperature=round_half_away(main["temp"]),
        feelsLike=round_half_away(main["feels_like"]),
        humidity=main["humidity"],
        pressure=main["pressure"],
        windSpeed=payload["wind"]["speed"],
        description=condition["description"],
        icon=condition["icon"],
        timestamp=_observed_at(payload),
    )


def _to_forecast_day(sample: dict[str, Any]) -> ForecastDay:
    main = sample["main"]
    condition = sample["weather"][0]
    observed_at = _observed_at(sample)
    return ForecastDay(
        date=observed_at.date(),
        timestamp=observed_at,
        temperature=round_half_away(main["temp"]),
        tempMin=round_half_away(main["temp_min"]),
        tempMax=round_half_away(main["temp_max"]),
        description=condition["description"],
        icon=condition["icon"],
        humidity=main["humidity"],
        windSpeed=sample["wind"]["speed"],
    )


def to_forecast_days(payload: dict[str, Any]) -> list[ForecastDay]:
    """Reduce a ``/forecast`` 3-hourly feed to one sample per day.

    Samples are grouped by UTC date. For each date the sample closest to
    noon is kept; a later sample only replaces it when strictly closer, so
    the first one seen wins a tie. The first ``FORECAST_DAYS`` dates in
    feed order are returned.
    """
    best: dict[date, tuple[int, dict[str, Any]]] = {}

    for sample in payload["list"]:
        observed_at = _observed_at(sample)
        distance = abs(observed_at.hour - NOON_HOUR)
        day = observed_at.date()
        current = best.get(day)
        if current is None or distance < current[0]:
            best[day] = (distance, sample)

    days = list(best.values())[:FORECAST_DAYS]
    return [_to_forecast_day(sample) for _, sample in days]
