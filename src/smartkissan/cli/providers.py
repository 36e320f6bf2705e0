"""Component factory functions for the CLI.

Centralizes creation of the dispatcher, store and position source from
environment variables. Hides configuration details from command
implementations.
"""

from datetime import timedelta

from ..config import Settings
from ..dispatcher import RequestDispatcher, create_dispatcher
from ..geocoding import IPPositionSource, LocationService, PositionSource, StaticPositionSource
from ..storage import KeyValueStore, create_key_value_store


def get_settings() -> Settings:
    """Read settings from the environment (see ``Settings.from_env``)."""
    return Settings.from_env()


def get_dispatcher(settings: Settings) -> RequestDispatcher:
    return create_dispatcher(settings)


def get_store(settings: Settings) -> KeyValueStore:
    """Create the key-value store selected by SMARTKISSAN_STORE.

    Returns:
        Store instance (not yet connected)
    """
    if settings.store_backend == "sqlite":
        return create_key_value_store("sqlite", path=settings.store_path)
    return create_key_value_store(settings.store_backend)


def get_position_source(
    settings: Settings,
    latitude: float | None = None,
    longitude: float | None = None,
) -> PositionSource:
    """Use explicit coordinates when given, else approximate from the IP address."""
    if latitude is not None and longitude is not None:
        return StaticPositionSource(latitude, longitude)
    return IPPositionSource(url=settings.ip_location_url, timeout=settings.http_timeout)


def get_location_service(
    settings: Settings,
    dispatcher: RequestDispatcher,
    source: PositionSource,
    store: KeyValueStore | None,
) -> LocationService:
    return LocationService(
        dispatcher,
        source,
        store=store,
        timeout=settings.geolocation_timeout,
        max_age=timedelta(hours=settings.location_max_age_hours),
    )
