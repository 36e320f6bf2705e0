from .nominatim import NominatimGeocoder
from .positions import IPPositionSource, StaticPositionSource

__all__ = ["IPPositionSource", "NominatimGeocoder", "StaticPositionSource"]
