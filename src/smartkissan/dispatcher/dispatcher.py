"""Request dispatcher: one async operation per data domain.

Every operation tries the real upstream first and substitutes fallback data
when it fails, so callers always get an ``Envelope`` to render. Upstream
failures are logged here and never raised to callers.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter

from ..agronomy import (
    CropRecommendation,
    NdviAnalysis,
    PricePoint,
    SatelliteData,
    YieldPrediction,
    analyze_ndvi,
    current_season,
    recommend_crops,
    simulate_ndvi_series,
)
from ..agronomy import mock_data
from ..chat import ChatClient, ChatReply, ChatSession, ContextBuilder, ReplySource
from ..chat.channel import ChatChannel
from ..config import CHAT_CONNECT_GRACE, DEFAULT_LOCATION, HTTP_TIMEOUT, TRANSCRIPT_LIMIT
from ..errors import UpstreamError
from ..geocoding.base import ReverseGeocoder
from ..geocoding.models import GeocodeResult, UserLocation
from ..network import ExternalAPIDescriptor, ExternalAPIRegistry, NetworkMonitor
from ..storage import KeyValueStore
from ..weather import WeatherProvider, WeatherQuery, WeatherSnapshot, mock_weather
from .models import Envelope, Provenance
from .result import Err, Ok, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

_NOT_CONFIGURED = "data service not configured"

_CROPS = TypeAdapter(list[CropRecommendation])
_YIELDS = TypeAdapter(list[YieldPrediction])
_PRICES = TypeAdapter(list[PricePoint])


def _fresh(items: list[M]) -> list[M]:
    return [item.model_copy(deep=True) for item in items]


def _coordinate(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def weather_query(params: dict[str, Any] | None) -> WeatherQuery:
    """Build a weather query from loose parameters.

    Accepts ``location`` (place name) and/or ``latitude``/``longitude``
    (also ``lat``/``lon``/``lng``). Coordinates that are not numbers are
    ignored. Without either, the default location is used.
    """
    params = params or {}
    latitude = _coordinate(params.get("latitude", params.get("lat")))
    longitude = _coordinate(params.get("longitude", params.get("lon", params.get("lng"))))
    location = params.get("location")
    location = str(location).strip() if location is not None else None
    if latitude is None or longitude is None:
        latitude = longitude = None
        if not location:
            latitude, longitude = DEFAULT_LOCATION
    return WeatherQuery(location=location or None, latitude=latitude, longitude=longitude)


class RequestDispatcher:
    """Façade over weather, geocoding, agronomy data and the chat assistant.

    Hidden design decisions:
    - Which upstream serves each domain, and with which request format
    - The fallback payload for each operation
    - Offline short-circuiting (no upstream call while the network is down)
    """

    def __init__(
        self,
        weather: WeatherProvider | None = None,
        geocoder: ReverseGeocoder | None = None,
        chat_channel: ChatChannel | None = None,
        network: NetworkMonitor | None = None,
        data_api_url: str | None = None,
        timeout: float = HTTP_TIMEOUT,
        connect_grace: float = CHAT_CONNECT_GRACE,
        chat_fallback_enabled: bool = True,
        **client_kwargs: Any
    ):
        """Initialize the dispatcher.

        Args:
            weather: Weather provider (None always serves mock weather)
            geocoder: Reverse geocoder (None always reports no match)
            chat_channel: Chat channel (None always answers synthetically)
            network: Connectivity monitor consulted before upstream calls
            data_api_url: Base URL of the agronomy data service (None uses mock data)
            timeout: Data service request timeout in seconds
            connect_grace: Seconds a chat send waits for a pending connect
            chat_fallback_enabled: Whether chat falls back to synthetic replies
            **client_kwargs: Additional kwargs for the data service httpx.AsyncClient
        """
        self._weather = weather
        self._geocoder = geocoder
        self._network = network
        self._data_client = (
            httpx.AsyncClient(base_url=data_api_url.rstrip("/"), timeout=timeout, **client_kwargs)
            if data_api_url else None
        )
        self._chat = ChatClient(
            chat_channel,
            context_builder=ContextBuilder(self._live_weather),
            network=network,
            connect_grace=connect_grace,
            fallback_enabled=chat_fallback_enabled,
        )

    @property
    def chat(self) -> ChatClient:
        return self._chat

    @property
    def network(self) -> NetworkMonitor | None:
        return self._network

    # Integration boundary

    async def _call(self, service: str, operation: Callable[[], Awaitable[T]]) -> Result[T]:
        if self._network is not None and not self._network.is_online:
            return Err(UpstreamError(service, "offline"))
        try:
            return Ok(await operation())
        except UpstreamError as e:
            return Err(e)

    async def _get_data(self, path: str, params: dict[str, Any], adapter: TypeAdapter[T]) -> T:
        if self._data_client is None:
            raise UpstreamError("data", _NOT_CONFIGURED)
        query = {k: v for k, v in params.items() if v is not None}
        try:
            response = await self._data_client.get(path, params=query)
            response.raise_for_status()
            return adapter.validate_json(response.content)
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                "data", f"HTTP {e.response.status_code}", status_code=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamError("data", f"request failed: {e!r}") from e
        except ValueError as e:
            raise UpstreamError("data", f"malformed response: {e}") from e

    def _envelope(
        self,
        operation: str,
        result: Result[T],
        fallback: T,
        source: Provenance = Provenance.LIVE,
    ) -> Envelope[T]:
        if isinstance(result, Ok):
            return Envelope(success=True, data=result.value, source=source)

        error = result.error
        if error.message == _NOT_CONFIGURED:
            logger.debug("%s: serving mock data", operation)
        else:
            logger.warning("%s failed, serving fallback: %s", operation, error)
        return Envelope(success=False, data=fallback, source=Provenance.MOCK, error=str(error))

    # Agronomy data

    async def get_crop_recommendations(
        self, params: dict[str, Any] | None = None
    ) -> Envelope[list[CropRecommendation]]:
        """Crops suited to the farmer's soil and location.

        Order of preference: data service, the weather heuristic when a
        location is given, the mock list.
        """
        params = params or {}
        result = await self._call(
            "data",
            lambda: self._get_data(
                "/crop-recommendations",
                {"soilType": params.get("soilType"), "location": params.get("location")},
                _CROPS,
            ),
        )
        if isinstance(result, Ok):
            return Envelope(success=True, data=result.value, source=Provenance.LIVE)

        has_location = any(params.get(k) is not None for k in ("location", "latitude", "lat"))
        if has_location and self._weather is not None:
            snapshot = await self._live_weather(weather_query(params))
            if snapshot is not None:
                season = current_season().value
                names = recommend_crops(snapshot.current.temperature, snapshot.current.humidity)
                crops = [
                    CropRecommendation(id=i, name=name, season=season)
                    for i, name in enumerate(names, 1)
                ]
                return Envelope(success=True, data=crops, source=Provenance.HEURISTIC)

        fallback = _fresh(mock_data.CROP_RECOMMENDATIONS)
        return self._envelope("get_crop_recommendations", result, fallback)

    async def get_yield_predictions(
        self, params: dict[str, Any] | None = None
    ) -> Envelope[list[YieldPrediction]]:
        params = params or {}
        result = await self._call(
            "data",
            lambda: self._get_data(
                "/yield-predictions",
                {"crop": params.get("crop"), "location": params.get("location")},
                _YIELDS,
            ),
        )
        fallback = _fresh(mock_data.YIELD_PREDICTIONS)
        return self._envelope("get_yield_predictions", result, fallback)

    async def get_price_forecasts(
        self, params: dict[str, Any] | None = None
    ) -> Envelope[list[PricePoint]]:
        params = params or {}
        result = await self._call(
            "data",
            lambda: self._get_data(
                "/price-forecasts",
                {"crop": params.get("crop"), "period": params.get("period")},
                _PRICES,
            ),
        )
        fallback = _fresh(mock_data.PRICE_FORECASTS)
        return self._envelope("get_price_forecasts", result, fallback)

    async def get_satellite_data(
        self, params: dict[str, Any] | None = None
    ) -> Envelope[SatelliteData]:
        params = params or {}
        result = await self._call(
            "data",
            lambda: self._get_data(
                "/satellite-data",
                {"location": params.get("location"), "date": params.get("date")},
                TypeAdapter(SatelliteData),
            ),
        )
        fallback = mock_data.SATELLITE_DATA.model_copy(deep=True)
        return self._envelope("get_satellite_data", result, fallback)

    async def get_ndvi_analysis(
        self, params: dict[str, Any] | None = None
    ) -> Envelope[NdviAnalysis]:
        """NDVI history and health assessment for a field.

        Falls back to a simulated series; pass ``seed`` for a reproducible one.
        """
        params = params or {}
        result = await self._call(
            "data",
            lambda: self._get_data(
                "/ndvi",
                {"location": params.get("location")},
                TypeAdapter(NdviAnalysis),
            ),
        )
        fallback = analyze_ndvi(simulate_ndvi_series(seed=params.get("seed")))
        return self._envelope("get_ndvi_analysis", result, fallback)

    # Weather and geocoding

    async def _live_weather(self, query: WeatherQuery) -> WeatherSnapshot | None:
        if self._weather is None:
            return None
        result = await self._call("weather", lambda: self._weather.get_weather(query))
        if isinstance(result, Err):
            logger.warning("Live weather unavailable: %s", result.error)
            return None
        return result.value

    async def get_weather(self, params: dict[str, Any] | None = None) -> Envelope[WeatherSnapshot]:
        """Current conditions and forecast for a place name or coordinates."""
        query = weather_query(params)
        if self._weather is None:
            result: Result[WeatherSnapshot] = Err(UpstreamError("weather", "no provider configured"))
        else:
            result = await self._call("weather", lambda: self._weather.get_weather(query))
        label = query.location or query.to_q() or "Unknown location"
        return self._envelope("get_weather", result, mock_weather(label))

    async def reverse_geocode(
        self, latitude: float, longitude: float
    ) -> Envelope[GeocodeResult | None]:
        """Place name for coordinates; ``success=False`` with no data when unknown."""
        if self._geocoder is None:
            result: Result[GeocodeResult] = Err(UpstreamError("geocoding", "no geocoder configured"))
        else:
            result = await self._call(
                "geocoding", lambda: self._geocoder.reverse(latitude, longitude)
            )
        return self._envelope("reverse_geocode", result, None)

    # Chat

    async def send_chat_message(
        self,
        text: str,
        language: str = "en",
        location: UserLocation | None = None,
        crops_of_interest: list[str] | None = None,
    ) -> Envelope[ChatReply | None]:
        """Ask the assistant; synthetic replies are tagged as such."""
        reply = await self._chat.ask(text, language, location, crops_of_interest)
        if reply is None:
            return Envelope(
                success=False, data=None, source=Provenance.SYNTHETIC, error="no reply"
            )
        if reply.source is ReplySource.LIVE:
            return Envelope(success=True, data=reply, source=Provenance.LIVE)
        return Envelope(success=False, data=reply, source=Provenance.SYNTHETIC)

    async def _ask(
        self, text: str, language: str, location: UserLocation | None
    ) -> ChatReply | None:
        return (await self.send_chat_message(text, language, location)).data

    def open_chat_session(
        self,
        store: KeyValueStore | None = None,
        language: str = "en",
        location: UserLocation | None = None,
        limit: int = TRANSCRIPT_LIMIT,
    ) -> ChatSession:
        """Create a transcript whose messages go through this dispatcher."""
        return ChatSession(self._ask, store=store, language=language, location=location, limit=limit)

    # Integrations

    def api_registry(self) -> ExternalAPIRegistry:
        """Registry of the configured integrations, each with a liveness probe."""
        registry = ExternalAPIRegistry()
        if self._weather is not None:
            registry.register(
                ExternalAPIDescriptor(id="weather", name="WeatherAPI.com", category="weather"),
                self._weather.probe,
            )
        if self._geocoder is not None:
            registry.register(
                ExternalAPIDescriptor(id="geocoding", name="Nominatim", category="geocoding"),
                self._probe_geocoder,
            )
        if self._chat.channel is not None:
            registry.register(
                ExternalAPIDescriptor(id="assistant", name="Chat assistant", category="assistant"),
                self._chat.channel.connect,
            )
        if self._data_client is not None:
            registry.register(
                ExternalAPIDescriptor(id="data", name="Agronomy data service", category="agronomy"),
                self._probe_data,
            )
        return registry

    async def _probe_geocoder(self) -> bool:
        latitude, longitude = DEFAULT_LOCATION
        return (await self.reverse_geocode(latitude, longitude)).success

    async def _probe_data(self) -> bool:
        try:
            response = await self._data_client.get("/")
        except httpx.HTTPError:
            return False
        return response.status_code < 500

    async def close(self) -> None:
        """Close every client owned by the dispatcher."""
        await self._chat.close()
        if self._weather is not None:
            await self._weather.close()
        if self._geocoder is not None:
            await self._geocoder.close()
        if self._data_client is not None:
            await self._data_client.aclose()
        if self._network is not None:
            await self._network.close()

    async def __aenter__(self) -> "RequestDispatcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
