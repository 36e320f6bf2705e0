from typing import Any

from .base import ReverseGeocoder
from .providers import NominatimGeocoder


def create_reverse_geocoder(provider: str = "nominatim", **config: Any) -> ReverseGeocoder:
    """Create a reverse geocoder instance.

    Args:
        provider: Provider type ("nominatim" currently supported)
        **config: Provider-specific configuration
            For Nominatim:
                - url: str (default: OpenStreetMap public endpoint)
                - user_agent: str (required by the usage policy)
                - timeout: float (default: 10.0)

    Returns:
        Initialized reverse geocoder

    Raises:
        ValueError: If provider type is not supported
    """
    if provider.lower() == "nominatim":
        return NominatimGeocoder(**config)

    raise ValueError(
        f"Unsupported geocoding provider: {provider}. "
        f"Supported providers: 'nominatim'"
    )
