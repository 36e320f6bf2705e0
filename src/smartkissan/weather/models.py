"""Weather data models.

``WeatherSnapshot`` is the stable internal shape every consumer works with.
The ``WeatherAPI*`` models describe the upstream forecast.json payload and
are validated once, at the integration boundary.
"""

import datetime as dt

from pydantic import BaseModel, Field


class CurrentConditions(BaseModel):
    """Conditions at the time of the request."""

    temperature: float = Field(description="Air temperature, °C")
    humidity: float = Field(description="Relative humidity, percent")
    description: str
    rainfall: float = Field(default=0.0, description="Precipitation, mm")
    feels_like: float | None = None
    wind_speed: float | None = Field(default=None, description="Wind speed, km/h")
    wind_degree: float | None = None
    wind_direction: str | None = Field(default=None, description="16-point compass label")
    icon_url: str | None = None


class ForecastDay(BaseModel):
    """One day of the multi-day forecast."""

    day: str = Field(description="Display label: Today, Tomorrow or weekday name")
    date: dt.date | None = None
    temperature: float = Field(description="Average temperature, °C")
    min_temperature: float | None = None
    max_temperature: float | None = None
    rainfall: float = Field(default=0.0, description="Total precipitation, mm")
    humidity: float | None = None
    chance_of_rain: float | None = Field(default=None, description="Percent")
    description: str
    icon_url: str | None = None


class WeatherSnapshot(BaseModel):
    """Current conditions plus forecast for one place."""

    location: str
    region: str | None = None
    country: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    current: CurrentConditions
    forecast: list[ForecastDay] = Field(default_factory=list)
    fetched_at: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.timezone.utc))

    def total_forecast_rainfall(self) -> float:
        """Sum of forecast precipitation across all days, mm."""
        return round(sum(day.rainfall for day in self.forecast), 1)


class WeatherQuery(BaseModel):
    """Location to fetch weather for: a place name or a coordinate pair."""

    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    def to_q(self) -> str | None:
        """Render the provider's ``q`` parameter, preferring coordinates."""
        if self.latitude is not None and self.longitude is not None:
            return f"{self.latitude},{self.longitude}"
        if self.location:
            return self.location
        return None


class WeatherAPICondition(BaseModel):
    text: str
    icon: str | None = None


class WeatherAPILocation(BaseModel):
    name: str
    region: str | None = None
    country: str | None = None
    lat: float | None = None
    lon: float | None = None


class WeatherAPICurrent(BaseModel):
    temp_c: float
    humidity: float
    condition: WeatherAPICondition
    precip_mm: float = 0.0
    feelslike_c: float | None = None
    wind_kph: float | None = None
    wind_degree: float | None = None


class WeatherAPIDay(BaseModel):
    avgtemp_c: float
    mintemp_c: float | None = None
    maxtemp_c: float | None = None
    totalprecip_mm: float = 0.0
    avghumidity: float | None = None
    daily_chance_of_rain: float | None = None
    condition: WeatherAPICondition


class WeatherAPIForecastDay(BaseModel):
    date: dt.date
    day: WeatherAPIDay


class WeatherAPIForecast(BaseModel):
    forecastday: list[WeatherAPIForecastDay] = Field(default_factory=list)


class WeatherAPIResponse(BaseModel):
    """Subset of the WeatherAPI.com forecast.json response we consume."""

    location: WeatherAPILocation
    current: WeatherAPICurrent
    forecast: WeatherAPIForecast = Field(default_factory=WeatherAPIForecast)
