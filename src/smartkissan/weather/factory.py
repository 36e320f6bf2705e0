from typing import Any

from .base import WeatherProvider
from .providers import WeatherAPIProvider


def create_weather_provider(provider: str = "weatherapi", **config: Any) -> WeatherProvider:
    """Create a weather provider instance.

    Args:
        provider: Provider type ("weatherapi" currently supported)
        **config: Provider-specific configuration
            For WeatherAPI:
                - api_key: str | None
                - base_url: str (default: https://api.weatherapi.com/v1)
                - days: int (default: 5)
                - timeout: float (default: 10.0)

    Returns:
        Initialized weather provider

    Raises:
        ValueError: If provider type is not supported
    """
    if provider.lower() == "weatherapi":
        return WeatherAPIProvider(**config)

    raise ValueError(
        f"Unsupported weather provider: {provider}. "
        f"Supported providers: 'weatherapi'"
    )
