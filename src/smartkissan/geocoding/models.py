"""Location data models."""

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, Field


class GeocodeResult(BaseModel):
    """Place description for a coordinate pair."""

    display_name: str
    location_name: str | None = Field(default=None, description="City, town or village")
    region: str | None = Field(default=None, description="State or county")
    country: str | None = None
    country_code: str | None = None


class NominatimAddress(BaseModel):
    city: str | None = None
    town: str | None = None
    village: str | None = None
    state: str | None = None
    county: str | None = None
    country: str | None = None
    country_code: str | None = None


class NominatimResponse(BaseModel):
    """Subset of the Nominatim reverse response we consume."""

    display_name: str
    address: NominatimAddress = Field(default_factory=NominatimAddress)


class UserLocation(BaseModel):
    """The farmer's position, optionally enriched with a place name.

    Geolocation failures are recorded in ``error`` rather than raised; the
    coordinates then hold the fallback position.
    """

    latitude: float
    longitude: float
    location_name: str | None = None
    region: str | None = None
    country: str | None = None
    country_code: str | None = None
    error: str | None = None
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def is_fresh(self, max_age: timedelta, now: datetime | None = None) -> bool:
        """Whether the location is recent enough to reuse."""
        now = now or datetime.now(timezone.utc)
        return self.error is None and now - self.last_updated < max_age

    def describe(self) -> str:
        """Human-readable label: place name when known, else coordinates."""
        if self.location_name:
            parts = [self.location_name, self.region, self.country]
            return ", ".join(p for p in parts if p)
        return f"{self.latitude:.4f}, {self.longitude:.4f}"
