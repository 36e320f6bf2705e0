from .base import WeatherProvider
from .compass import COMPASS_POINTS, wind_direction
from .factory import create_weather_provider
from .mock import mock_weather
from .models import CurrentConditions, ForecastDay, WeatherQuery, WeatherSnapshot
from .providers import WeatherAPIProvider

__all__ = [
    "COMPASS_POINTS",
    "CurrentConditions",
    "ForecastDay",
    "WeatherAPIProvider",
    "WeatherProvider",
    "WeatherQuery",
    "WeatherSnapshot",
    "create_weather_provider",
    "mock_weather",
    "wind_direction",
]
