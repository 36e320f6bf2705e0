"""Configuration for the smartkissan client.

Centralizes defaults and reads overrides from environment variables.
"""

import os

from pydantic import BaseModel, Field

# Upstream endpoints
WEATHER_API_URL = "https://api.weatherapi.com/v1"
GEOCODING_URL = "https://nominatim.openstreetmap.org/reverse"
IP_LOCATION_URL = "http://ip-api.com/json"
CHAT_WS_URL = "ws://localhost:8000/ws/chat"
PROBE_URL = "https://www.google.com/generate_204"

# Nominatim rejects requests without an identifying User-Agent
USER_AGENT = "SmartKissan/0.1 (farmer dashboard client)"

# Timeouts, in seconds
HTTP_TIMEOUT = 10.0
PROBE_TIMEOUT = 3.0
CHAT_REPLY_TIMEOUT = 5.0
CHAT_CONNECT_GRACE = 1.0
GEOLOCATION_TIMEOUT = 15.0

FORECAST_DAYS = 5
LOCATION_MAX_AGE_HOURS = 24
TRANSCRIPT_LIMIT = 50  # Messages kept when persisting the chat transcript

# Default map center: Punjab, India
DEFAULT_LOCATION = (31.1471, 75.3412)


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return float(value)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return int(value)


class Settings(BaseModel):
    """Runtime settings shared by every smartkissan component."""

    weather_api_key: str | None = Field(default=None, description="WeatherAPI.com key")
    weather_api_url: str = WEATHER_API_URL
    forecast_days: int = Field(default=FORECAST_DAYS, ge=1, le=14)
    geocoding_url: str = GEOCODING_URL
    ip_location_url: str = IP_LOCATION_URL
    user_agent: str = USER_AGENT
    chat_ws_url: str | None = CHAT_WS_URL
    data_api_url: str | None = Field(
        default=None,
        description="Base URL of the crop/yield/price/satellite service; mock data when unset"
    )
    probe_url: str = PROBE_URL
    http_timeout: float = Field(default=HTTP_TIMEOUT, gt=0)
    probe_timeout: float = Field(default=PROBE_TIMEOUT, gt=0)
    chat_reply_timeout: float = Field(default=CHAT_REPLY_TIMEOUT, gt=0)
    chat_connect_grace: float = Field(default=CHAT_CONNECT_GRACE, ge=0)
    chat_fallback_enabled: bool = True
    geolocation_timeout: float = Field(default=GEOLOCATION_TIMEOUT, gt=0)
    location_max_age_hours: int = Field(default=LOCATION_MAX_AGE_HOURS, ge=0)
    transcript_limit: int = Field(default=TRANSCRIPT_LIMIT, ge=1)
    store_backend: str = "sqlite"
    store_path: str = "./smartkissan.db"
    log_level: str = "warning"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables.

        Environment variables:
            WEATHER_API_KEY / SMARTKISSAN_WEATHER_API_KEY: WeatherAPI.com key
            SMARTKISSAN_WEATHER_API_URL: Weather API base URL
            SMARTKISSAN_FORECAST_DAYS: Forecast days requested (default: 5)
            SMARTKISSAN_GEOCODING_URL: Reverse geocoding endpoint
            SMARTKISSAN_CHAT_WS_URL: Chat WebSocket URL (empty disables the channel)
            SMARTKISSAN_DATA_API_URL: Data service base URL (unset uses mock data)
            SMARTKISSAN_PROBE_URL: Reachability probe URL
            SMARTKISSAN_HTTP_TIMEOUT: HTTP timeout in seconds (default: 10)
            SMARTKISSAN_CHAT_TIMEOUT: Chat reply timeout in seconds (default: 5)
            SMARTKISSAN_CHAT_GRACE: Connect grace period in seconds (default: 1)
            SMARTKISSAN_CHAT_FALLBACK: "0" disables synthetic replies
            SMARTKISSAN_GEOLOCATION_TIMEOUT: Position lookup timeout (default: 15)
            SMARTKISSAN_STORE: Store backend, "sqlite" or "memory"
            SMARTKISSAN_STORE_PATH: SQLite database path
            SMARTKISSAN_LOG_LEVEL: debug, info, warning or error
        """
        chat_url = os.getenv("SMARTKISSAN_CHAT_WS_URL", CHAT_WS_URL)
        return cls(
            weather_api_key=(
                os.getenv("SMARTKISSAN_WEATHER_API_KEY") or os.getenv("WEATHER_API_KEY")
            ),
            weather_api_url=os.getenv("SMARTKISSAN_WEATHER_API_URL", WEATHER_API_URL),
            forecast_days=_env_int("SMARTKISSAN_FORECAST_DAYS", FORECAST_DAYS),
            geocoding_url=os.getenv("SMARTKISSAN_GEOCODING_URL", GEOCODING_URL),
            chat_ws_url=chat_url or None,
            data_api_url=os.getenv("SMARTKISSAN_DATA_API_URL") or None,
            probe_url=os.getenv("SMARTKISSAN_PROBE_URL", PROBE_URL),
            http_timeout=_env_float("SMARTKISSAN_HTTP_TIMEOUT", HTTP_TIMEOUT),
            chat_reply_timeout=_env_float("SMARTKISSAN_CHAT_TIMEOUT", CHAT_REPLY_TIMEOUT),
            chat_connect_grace=_env_float("SMARTKISSAN_CHAT_GRACE", CHAT_CONNECT_GRACE),
            chat_fallback_enabled=os.getenv("SMARTKISSAN_CHAT_FALLBACK", "1") != "0",
            geolocation_timeout=_env_float(
                "SMARTKISSAN_GEOLOCATION_TIMEOUT", GEOLOCATION_TIMEOUT
            ),
            store_backend=os.getenv("SMARTKISSAN_STORE", "sqlite"),
            store_path=os.getenv("SMARTKISSAN_STORE_PATH", "./smartkissan.db"),
            log_level=os.getenv("SMARTKISSAN_LOG_LEVEL", "warning"),
        )
