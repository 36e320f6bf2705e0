from abc import ABC, abstractmethod

from .models import GeocodeResult


class ReverseGeocoder(ABC):
    """Abstract reverse geocoding service.

    Hides which geocoding provider is used, its request format and its
    usage-policy requirements (rate limits, identification headers).
    """

    @abstractmethod
    async def reverse(self, latitude: float, longitude: float) -> GeocodeResult:
        """Resolve coordinates to a place.

        Raises:
            UpstreamError: On network failure, non-success status or malformed body
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""


class PositionSource(ABC):
    """Source of the device's current coordinates."""

    @abstractmethod
    async def current_position(self) -> tuple[float, float]:
        """Return (latitude, longitude).

        Raises:
            GeolocationError: If the position is denied or unavailable
        """

    async def close(self) -> None:
        """Release resources held by the source."""
