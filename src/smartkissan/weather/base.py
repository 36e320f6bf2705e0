from abc import ABC, abstractmethod

from .models import WeatherQuery, WeatherSnapshot


class WeatherProvider(ABC):
    """Abstract base class for weather providers.

    This module hides the design decision of which weather service is used.
    Implementations must handle provider-specific details like:
    - Authentication
    - Request parameters and location encoding
    - Mapping the provider payload into ``WeatherSnapshot``

    Supports async context manager protocol for proper resource cleanup.
    """

    @abstractmethod
    async def get_weather(self, query: WeatherQuery, days: int | None = None) -> WeatherSnapshot:
        """Fetch current conditions and a multi-day forecast.

        Args:
            query: Place name or coordinates
            days: Forecast days (None uses the provider default)

        Returns:
            Normalized weather snapshot

        Raises:
            UpstreamError: On network failure, non-success status or malformed body
        """

    @abstractmethod
    async def probe(self) -> bool:
        """Return whether the provider currently answers requests."""

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "WeatherProvider":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
