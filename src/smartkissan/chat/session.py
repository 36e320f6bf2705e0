"""Chat transcript for one user session.

The transcript is append-only: messages are never reordered or removed
individually, only cleared in bulk. Replies are appended at the tail in the
order they arrive; replies that come back after their request timed out
never reach the session.
"""

import logging
from collections.abc import Awaitable, Callable

from pydantic import ValidationError

from ..config import TRANSCRIPT_LIMIT
from ..errors import StorageError
from ..geocoding.models import UserLocation
from ..storage import CHAT_MESSAGES_KEY, KeyValueStore
from .models import ChatMessage, ChatReply, MessageSender, MessageStatus
from .responder import greeting

logger = logging.getLogger(__name__)

AskFn = Callable[[str, str, UserLocation | None], Awaitable[ChatReply | None]]


class ChatSession:
    """Ordered chat transcript with send, retry and persistence."""

    def __init__(
        self,
        ask: AskFn,
        store: KeyValueStore | None = None,
        language: str = "en",
        location: UserLocation | None = None,
        limit: int = TRANSCRIPT_LIMIT,
    ):
        """Initialize a session with a greeting message.

        Args:
            ask: Produces the assistant reply for (text, language, location)
            store: Where the transcript is persisted (None keeps it in memory)
            language: Reply language
            location: Farmer location passed with every message
            limit: Number of most recent messages persisted
        """
        self._ask = ask
        self._store = store
        self._limit = limit
        self.language = language
        self.location = location
        self._messages: list[ChatMessage] = [self._greeting()]

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    def _greeting(self) -> ChatMessage:
        return ChatMessage(text=greeting(self.language), sender=MessageSender.ASSISTANT)

    async def load(self) -> None:
        """Replace the transcript with the persisted one, if any."""
        if self._store is None:
            return
        try:
            raw = await self._store.get(CHAT_MESSAGES_KEY)
            if raw:
                self._messages = [ChatMessage.model_validate(item) for item in raw]
        except (StorageError, ValidationError, TypeError) as e:
            logger.warning("Ignoring unreadable chat history: %s", e)

    async def send(self, text: str) -> ChatMessage | None:
        """Append a user message and the assistant's reply.

        Args:
            text: Message text (blank messages are ignored)

        Returns:
            The assistant message, or None if the send failed or was ignored
        """
        text = text.strip()
        if not text:
            return None

        message = ChatMessage(text=text, sender=MessageSender.USER, status=MessageStatus.SENDING)
        self._messages.append(message)
        await self._persist()
        return await self._deliver(message)

    async def retry(self, message_id: str) -> ChatMessage | None:
        """Re-submit a failed user message.

        Raises:
            ValueError: If no failed user message has this id
        """
        message = next((m for m in self._messages if m.id == message_id), None)
        if (
            message is None
            or message.sender is not MessageSender.USER
            or message.status is not MessageStatus.FAILED
        ):
            raise ValueError(f"No failed message with id {message_id!r}")

        message.status = MessageStatus.SENDING
        return await self._deliver(message)

    async def _deliver(self, message: ChatMessage) -> ChatMessage | None:
        reply = await self._ask(message.text, self.language, self.location)
        if reply is None:
            message.status = MessageStatus.FAILED
            await self._persist()
            return None

        message.status = MessageStatus.SENT
        answer = ChatMessage(
            text=reply.text,
            sender=MessageSender.ASSISTANT,
            timestamp=reply.timestamp,
            type=reply.type,
            rich_data=reply.rich_data,
        )
        self._messages.append(answer)
        await self._persist()
        return answer

    async def clear(self) -> None:
        """Drop the whole transcript and start over with a greeting."""
        self._messages = [self._greeting()]
        await self._persist()

    async def _persist(self) -> None:
        if self._store is None:
            return
        recent = self._messages[-self._limit:]
        try:
            await self._store.set(
                CHAT_MESSAGES_KEY, [m.model_dump(mode="json") for m in recent]
            )
        except StorageError as e:
            logger.warning("Could not save chat history: %s", e)
