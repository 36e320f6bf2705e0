"""Context attached to prompts sent to the live assistant.

Enrichment depends on the classified intent and only happens when the
farmer's location is known: weather questions carry a live weather
snapshot, crop questions a soil profile and forecast rainfall, market
questions a price table.
"""

import logging
from collections.abc import Awaitable, Callable

from ..agronomy import current_season
from ..agronomy.mock_data import MARKET_PRICES, SOIL_PROFILE
from ..geocoding.models import UserLocation
from ..weather.models import WeatherQuery, WeatherSnapshot
from .models import ChatContext, IntentCategory

logger = logging.getLogger(__name__)

WeatherLookup = Callable[[WeatherQuery], Awaitable[WeatherSnapshot | None]]


class ContextBuilder:
    """Builds the ``ChatContext`` for an outbound prompt."""

    def __init__(self, weather_lookup: WeatherLookup | None = None):
        """Initialize the builder.

        Args:
            weather_lookup: Returns live weather for a query, or None when
                unavailable
        """
        self._weather_lookup = weather_lookup

    async def build(
        self,
        category: IntentCategory,
        language: str = "en",
        location: UserLocation | None = None,
        crops_of_interest: list[str] | None = None,
    ) -> ChatContext:
        context = ChatContext(
            region=(location.region or location.describe()) if location else "India",
            language_preference=language,
            crops_of_interest=list(crops_of_interest or []),
            current_season=current_season().value,
        )
        if location is None:
            return context

        if category is IntentCategory.WEATHER:
            snapshot = await self._weather(location)
            if snapshot is not None:
                context.weather = snapshot.model_dump(mode="json", exclude={"fetched_at"})
        elif category is IntentCategory.CROP:
            context.soil = SOIL_PROFILE.model_dump()
            snapshot = await self._weather(location)
            if snapshot is not None:
                context.recent_rainfall_mm = snapshot.total_forecast_rainfall()
        elif category is IntentCategory.MARKET:
            context.market_prices = dict(MARKET_PRICES)

        return context

    async def _weather(self, location: UserLocation) -> WeatherSnapshot | None:
        if self._weather_lookup is None:
            return None
        query = WeatherQuery(latitude=location.latitude, longitude=location.longitude)
        return await self._weather_lookup(query)
