"""API request and response schemas."""

import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon}@4x.png"


def icon_url(icon: str) -> str:
    """Resolve a provider icon code to its hosted image URL."""
    return ICON_URL_TEMPLATE.format(icon=icon)


class CurrentWeather(BaseModel):
    """Current weather conditions for a place."""

    model_config = ConfigDict(frozen=True)

    city: str = Field(..., description="City name as reported by the provider")
    country: str = Field(..., description="ISO country code")
    temperature: int = Field(..., description="Temperature in Celsius")
    feelsLike: int = Field(..., description="Feels-like temperature in Celsius")  # noqa: N815
    humidity: float = Field(..., description="Relative humidity in %")
    pressure: float = Field(..., description="Atmospheric pressure in hPa")
    windSpeed: float = Field(..., description="Wind speed in m/s")  # noqa: N815
    description: str = Field(..., description="Condition description")
    icon: str = Field(..., description="Provider icon code")
    timestamp: datetime.datetime = Field(..., description="Observation time (UTC)")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def iconUrl(self) -> str:  # noqa: N802
        """Image URL for the condition icon."""
        return icon_url(self.icon)


class ForecastDay(BaseModel):
    """Representative forecast sample for one calendar day."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date = Field(..., description="Calendar date (UTC)")
    timestamp: datetime.datetime = Field(..., description="Time of the chosen sample (UTC)")
    temperature: int = Field(..., description="Temperature in Celsius")
    tempMin: int = Field(..., description="Sample minimum temperature in Celsius")  # noqa: N815
    tempMax: int = Field(..., description="Sample maximum temperature in Celsius")  # noqa: N815
    description: str = Field(..., description="Condition description")
    icon: str = Field(..., description="Provider icon code")
    humidity: float = Field(..., description="Relative humidity in %")
    windSpeed: float = Field(..., description="Wind speed in m/s")  # noqa: N815

    @computed_field  # type: ignore[prop-decorator]
    @property
    def iconUrl(self) -> str:  # noqa: N802
        """Image URL for the condition icon."""
        return icon_url(self.icon)


class ErrorDetail(BaseModel):
    """Error detail."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Error response."""

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Health status")


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    status: str = Field(..., description="Readiness status")
    checks: dict[str, str] = Field(default_factory=dict, description="Component checks")
