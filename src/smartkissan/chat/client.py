"""Chat client: live assistant first, synthetic responder as fallback."""

import logging

from ..config import CHAT_CONNECT_GRACE
from ..errors import ChannelClosedError
from ..geocoding.models import UserLocation
from ..network import NetworkMonitor
from .channel import ChatChannel
from .context import ContextBuilder
from .intent import classify_intent
from .models import ChatContext, ChatReply, IntentCategory, MessageType, ReplySource
from .responder import synthetic_reply

logger = logging.getLogger(__name__)

_MESSAGE_TYPES = {
    IntentCategory.WEATHER: MessageType.WEATHER,
    IntentCategory.CROP: MessageType.CROP,
    IntentCategory.MARKET: MessageType.MARKET,
}


class ChatClient:
    """Sends user messages to the assistant and always produces one reply.

    When the channel is closed the client starts a connect attempt and waits
    a short grace period; if the channel is still not open, or the reply
    times out, or the network is offline, the synthetic responder answers
    instead. With ``fallback_enabled=False`` those cases yield no reply.
    """

    def __init__(
        self,
        channel: ChatChannel | None,
        context_builder: ContextBuilder | None = None,
        network: NetworkMonitor | None = None,
        connect_grace: float = CHAT_CONNECT_GRACE,
        fallback_enabled: bool = True,
    ):
        self._channel = channel
        self._context_builder = context_builder or ContextBuilder()
        self._network = network
        self._connect_grace = connect_grace
        self._fallback_enabled = fallback_enabled

    @property
    def channel(self) -> ChatChannel | None:
        return self._channel

    async def ask(
        self,
        text: str,
        language: str = "en",
        location: UserLocation | None = None,
        crops_of_interest: list[str] | None = None,
    ) -> ChatReply | None:
        """Get the assistant's reply to a message.

        Args:
            text: User message
            language: Reply language ("en", "hi", "kn")
            location: Farmer location, when known
            crops_of_interest: Crops the farmer grows

        Returns:
            The reply, or None when no live reply arrived and fallback is disabled
        """
        category = classify_intent(text)

        if self._network is not None and not self._network.is_online:
            logger.info("Offline; answering locally")
            return self._fallback(category, language, location)

        if self._channel is None:
            return self._fallback(category, language, location)

        if not self._channel.is_open:
            self._channel.start_connect()
            if not await self._channel.wait_until_open(self._connect_grace):
                logger.info("Chat channel not open after %.1fs grace", self._connect_grace)
                return self._fallback(category, language, location)

        context = await self._context_builder.build(
            category, language, location, crops_of_interest
        )
        try:
            reply = await self._channel.request(text, context)
        except ChannelClosedError as e:
            logger.warning("Chat request failed: %s", e)
            reply = None

        if reply is None:
            return self._fallback(category, language, location)

        return ChatReply(
            text=reply,
            category=category,
            source=ReplySource.LIVE,
            type=_MESSAGE_TYPES.get(category, MessageType.TEXT),
            rich_data=_rich_data(category, context),
        )

    def _fallback(
        self,
        category: IntentCategory,
        language: str,
        location: UserLocation | None,
    ) -> ChatReply | None:
        if not self._fallback_enabled:
            return None
        label = location.describe() if location is not None else None
        return ChatReply(
            text=synthetic_reply(category, language, label),
            category=category,
            source=ReplySource.SYNTHETIC,
        )

    async def close(self) -> None:
        if self._channel is not None:
            await self._channel.close()


def _rich_data(category: IntentCategory, context: ChatContext) -> dict | None:
    if category is IntentCategory.WEATHER:
        return context.weather
    if category is IntentCategory.MARKET:
        return context.market_prices
    if category is IntentCategory.CROP and context.soil is not None:
        return {"soil": context.soil, "recent_rainfall_mm": context.recent_rainfall_mm}
    return None
