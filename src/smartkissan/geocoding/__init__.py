from .base import PositionSource, ReverseGeocoder
from .factory import create_reverse_geocoder
from .models import GeocodeResult, UserLocation
from .providers import IPPositionSource, NominatimGeocoder, StaticPositionSource
from .service import LocationService

__all__ = [
    "GeocodeResult",
    "IPPositionSource",
    "LocationService",
    "NominatimGeocoder",
    "PositionSource",
    "ReverseGeocoder",
    "StaticPositionSource",
    "UserLocation",
    "create_reverse_geocoder",
]
