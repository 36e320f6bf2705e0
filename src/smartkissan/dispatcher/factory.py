"""Factory wiring a dispatcher from settings."""

from ..chat import ChatChannel, WebSocketTransport
from ..config import Settings
from ..geocoding.factory import create_reverse_geocoder
from ..network import NetworkMonitor
from ..weather import create_weather_provider
from .dispatcher import RequestDispatcher


def create_dispatcher(settings: Settings | None = None) -> RequestDispatcher:
    """Create a dispatcher with every integration configured from settings.

    The chat channel is created closed; it connects on the first message.

    Args:
        settings: Runtime settings (defaults to ``Settings.from_env()``)

    Returns:
        A ready-to-use dispatcher; close it with ``await dispatcher.close()``
    """
    settings = settings or Settings.from_env()

    channel = None
    if settings.chat_ws_url:
        url = settings.chat_ws_url
        channel = ChatChannel(
            lambda: WebSocketTransport(url, open_timeout=settings.http_timeout),
            reply_timeout=settings.chat_reply_timeout,
        )

    return RequestDispatcher(
        weather=create_weather_provider(
            "weatherapi",
            api_key=settings.weather_api_key,
            base_url=settings.weather_api_url,
            days=settings.forecast_days,
            timeout=settings.http_timeout,
        ),
        geocoder=create_reverse_geocoder(
            "nominatim",
            url=settings.geocoding_url,
            user_agent=settings.user_agent,
            timeout=settings.http_timeout,
        ),
        chat_channel=channel,
        network=NetworkMonitor(probe_url=settings.probe_url, timeout=settings.probe_timeout),
        data_api_url=settings.data_api_url,
        timeout=settings.http_timeout,
        connect_grace=settings.chat_connect_grace,
        chat_fallback_enabled=settings.chat_fallback_enabled,
    )
