"""Farmer location lookup with caching and reverse-geocoding enrichment."""

import asyncio
import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from pydantic import ValidationError

from ..config import DEFAULT_LOCATION, GEOLOCATION_TIMEOUT, LOCATION_MAX_AGE_HOURS
from ..errors import GeolocationError, StorageError
from ..storage import LAST_LOCATION_KEY, KeyValueStore, UserPreferences
from .base import PositionSource
from .models import UserLocation

if TYPE_CHECKING:
    from ..dispatcher import RequestDispatcher

logger = logging.getLogger(__name__)


class LocationService:
    """Determines the farmer's location.

    A stored location younger than ``max_age`` is reused. Otherwise the
    position source is asked (bounded by ``timeout``) and the result is
    enriched through reverse geocoding and stored. Lookup failures are
    recorded on the returned location and leave the stored one untouched.
    """

    def __init__(
        self,
        dispatcher: "RequestDispatcher",
        source: PositionSource,
        store: KeyValueStore | None = None,
        timeout: float = GEOLOCATION_TIMEOUT,
        max_age: timedelta = timedelta(hours=LOCATION_MAX_AGE_HOURS),
        fallback: tuple[float, float] = DEFAULT_LOCATION,
    ):
        self._dispatcher = dispatcher
        self._source = source
        self._store = store
        self._timeout = timeout
        self._max_age = max_age
        self._fallback = fallback

    async def cached(self) -> UserLocation | None:
        """Return the stored location, fresh or not."""
        if self._store is None:
            return None
        try:
            raw = await self._store.get(LAST_LOCATION_KEY)
            return UserLocation.model_validate(raw) if raw else None
        except (StorageError, ValidationError) as e:
            logger.warning("Ignoring unreadable stored location: %s", e)
            return None

    async def preferred(self, preferences: UserPreferences) -> UserLocation:
        """Location to attach to chat messages.

        The stored location when the farmer opted into using their current
        location and one is known, otherwise the saved default farm location.
        No lookup is made.
        """
        if preferences.use_current_location:
            cached = await self.cached()
            if cached is not None:
                return cached
        latitude, longitude = preferences.default_location
        return UserLocation(latitude=latitude, longitude=longitude)

    async def locate(self, force: bool = False) -> UserLocation:
        """Return the farmer's location.

        Args:
            force: Skip the cache and look the position up again

        Returns:
            The location; ``error`` is set when the lookup failed, in which
            case the coordinates are the fallback position
        """
        if not force:
            cached = await self.cached()
            if cached is not None and cached.is_fresh(self._max_age):
                return cached

        try:
            latitude, longitude = await asyncio.wait_for(
                self._source.current_position(), timeout=self._timeout
            )
        except GeolocationError as e:
            logger.info("Geolocation failed: %s", e)
            return self._failed(str(e))
        except asyncio.TimeoutError:
            logger.info("Geolocation timed out after %.0fs", self._timeout)
            return self._failed("Location request timed out")

        location = await self.describe(latitude, longitude)
        if self._store is not None:
            await self._store.set(LAST_LOCATION_KEY, location.model_dump(mode="json"))
        return location

    async def describe(self, latitude: float, longitude: float) -> UserLocation:
        """Build a location for coordinates, named when reverse geocoding succeeds."""
        location = UserLocation(latitude=latitude, longitude=longitude)
        envelope = await self._dispatcher.reverse_geocode(latitude, longitude)
        if envelope.success and envelope.data is not None:
            place = envelope.data
            location = location.model_copy(update={
                "location_name": place.location_name or place.display_name.split(",")[0],
                "region": place.region,
                "country": place.country,
                "country_code": place.country_code,
            })
        return location

    def _failed(self, error: str) -> UserLocation:
        latitude, longitude = self._fallback
        return UserLocation(latitude=latitude, longitude=longitude, error=error)
