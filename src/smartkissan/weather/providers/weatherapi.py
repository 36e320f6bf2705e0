from datetime import date, timedelta
from typing import Any

import httpx

from ...config import FORECAST_DAYS, HTTP_TIMEOUT, WEATHER_API_URL
from ...errors import UpstreamError
from ..base import WeatherProvider
from ..compass import wind_direction
from ..models import (
    CurrentConditions,
    ForecastDay,
    WeatherAPIResponse,
    WeatherQuery,
    WeatherSnapshot,
)


def _icon_url(icon: str | None) -> str | None:
    """WeatherAPI returns protocol-relative icon URLs."""
    if icon and icon.startswith("//"):
        return f"https:{icon}"
    return icon


def _day_label(day: date, today: date) -> str:
    if day == today:
        return "Today"
    if day == today + timedelta(days=1):
        return "Tomorrow"
    return day.strftime("%A")


class WeatherAPIProvider(WeatherProvider):
    """WeatherAPI.com provider implementation.

    Hidden design decisions:
    - forecast.json request encoding (key, q, days)
    - Validation of the upstream payload
    - Field-by-field mapping into ``WeatherSnapshot``
    - Wind bearing to compass label conversion
    """

    service = "weatherapi"

    def __init__(
        self,
        api_key: str | None,
        base_url: str = WEATHER_API_URL,
        days: int = FORECAST_DAYS,
        timeout: float = HTTP_TIMEOUT,
        **client_kwargs: Any
    ):
        """Initialize the WeatherAPI provider.

        Args:
            api_key: WeatherAPI.com key (requests fail fast when missing)
            base_url: API base URL
            days: Default number of forecast days
            timeout: Request timeout in seconds
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._api_key = api_key
        self._days = days
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            **client_kwargs
        )

    async def get_weather(self, query: WeatherQuery, days: int | None = None) -> WeatherSnapshot:
        """Fetch and normalize the forecast for a place."""
        if not self._api_key:
            raise UpstreamError(self.service, "API key not configured")

        q = query.to_q()
        if q is None:
            raise UpstreamError(self.service, "no location given")

        params = {"key": self._api_key, "q": q, "days": days or self._days, "aqi": "no"}
        try:
            response = await self._client.get("/forecast.json", params=params)
            response.raise_for_status()
            payload = WeatherAPIResponse.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                self.service,
                f"HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamError(self.service, f"request failed: {e!r}") from e
        except ValueError as e:
            raise UpstreamError(self.service, f"malformed response: {e}") from e

        return self._normalize(payload)

    def _normalize(self, payload: WeatherAPIResponse) -> WeatherSnapshot:
        current = payload.current
        days = payload.forecast.forecastday
        today = days[0].date if days else date.today()

        return WeatherSnapshot(
            location=payload.location.name,
            region=payload.location.region,
            country=payload.location.country,
            latitude=payload.location.lat,
            longitude=payload.location.lon,
            current=CurrentConditions(
                temperature=current.temp_c,
                humidity=current.humidity,
                description=current.condition.text,
                rainfall=current.precip_mm,
                feels_like=current.feelslike_c,
                wind_speed=current.wind_kph,
                wind_degree=current.wind_degree,
                wind_direction=(
                    wind_direction(current.wind_degree)
                    if current.wind_degree is not None else None
                ),
                icon_url=_icon_url(current.condition.icon),
            ),
            forecast=[
                ForecastDay(
                    day=_day_label(item.date, today),
                    date=item.date,
                    temperature=item.day.avgtemp_c,
                    min_temperature=item.day.mintemp_c,
                    max_temperature=item.day.maxtemp_c,
                    rainfall=item.day.totalprecip_mm,
                    humidity=item.day.avghumidity,
                    chance_of_rain=item.day.daily_chance_of_rain,
                    description=item.day.condition.text,
                    icon_url=_icon_url(item.day.condition.icon),
                )
                for item in days
            ],
        )

    async def probe(self) -> bool:
        """Cheap availability check against the current.json endpoint."""
        if not self._api_key:
            return False
        try:
            response = await self._client.get(
                "/current.json", params={"key": self._api_key, "q": "auto:ip"}
            )
        except httpx.HTTPError:
            return False
        return response.is_success

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
