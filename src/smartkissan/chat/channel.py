"""Chat correlation channel.

A persistent connection to the chat backend that matches replies to
requests by correlation id.

Hidden design decisions:
- Connection lifecycle (Closed -> Connecting -> Open -> Closed), with at
  most one connect attempt in flight
- The pending-request table and its cleanup
- The reply/timeout race: whichever side removes the pending entry first
  resolves the caller; the other side finds nothing and does nothing
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from enum import Enum

from pydantic import ValidationError
from uuid_extensions import uuid7

from ..config import CHAT_REPLY_TIMEOUT
from ..errors import ChannelClosedError, TransportError
from .models import ChatContext, InboundFrame, OutboundFrame, PendingChatRequest
from .transport import ChatTransport

logger = logging.getLogger(__name__)


class ChannelState(str, Enum):
    CLOSED = "closed"
    CONNECTING = "connecting"
    OPEN = "open"


class ChatChannel:
    """Request/reply channel over a ``ChatTransport``.

    A new transport is created for every connect attempt, so a channel can
    be reopened after the connection drops.
    """

    def __init__(
        self,
        transport_factory: Callable[[], ChatTransport],
        reply_timeout: float = CHAT_REPLY_TIMEOUT,
    ):
        """Initialize the channel (no connection is made yet).

        Args:
            transport_factory: Creates an unconnected transport
            reply_timeout: Seconds to wait for a reply before giving up
        """
        self._transport_factory = transport_factory
        self._reply_timeout = reply_timeout
        self._transport: ChatTransport | None = None
        self._state = ChannelState.CLOSED
        self._connecting = False
        self._connect_task: asyncio.Task[None] | None = None
        self._reader_task: asyncio.Task[None] | None = None
        self._pending: dict[str, PendingChatRequest] = {}

    @property
    def state(self) -> ChannelState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is ChannelState.OPEN

    @property
    def pending_count(self) -> int:
        """Number of requests still waiting for a reply or a timeout."""
        return len(self._pending)

    def start_connect(self) -> None:
        """Begin connecting in the background.

        Does nothing when already open or when an attempt is in flight.
        """
        if self._state is ChannelState.OPEN or self._connecting:
            return
        self._connecting = True
        self._state = ChannelState.CONNECTING
        self._connect_task = asyncio.create_task(self._connect())

    async def connect(self) -> bool:
        """Connect and wait for the attempt to finish.

        Returns:
            Whether the channel is open
        """
        self.start_connect()
        if self._connect_task is not None:
            await asyncio.wait({self._connect_task})
        return self.is_open

    async def wait_until_open(self, timeout: float) -> bool:
        """Wait up to ``timeout`` seconds for a pending connect attempt.

        The attempt itself keeps running if the wait times out.

        Returns:
            Whether the channel is open
        """
        if self.is_open:
            return True
        if self._connect_task is not None and not self._connect_task.done():
            await asyncio.wait({self._connect_task}, timeout=timeout)
        return self.is_open

    async def _connect(self) -> None:
        transport = self._transport_factory()
        try:
            await transport.connect()
        except TransportError as e:
            logger.warning("Chat connection failed: %s", e)
            self._state = ChannelState.CLOSED
            return
        finally:
            self._connecting = False

        self._transport = transport
        self._state = ChannelState.OPEN
        self._reader_task = asyncio.create_task(self._read_loop(transport))
        logger.info("Chat channel open")

    async def _read_loop(self, transport: ChatTransport) -> None:
        while True:
            try:
                raw = await transport.receive()
            except TransportError as e:
                logger.info("Chat channel closed: %s", e)
                break
            self._dispatch(raw)

        if self._transport is transport:
            self._transport = None
            self._state = ChannelState.CLOSED

    def _dispatch(self, raw: str) -> None:
        try:
            frame = InboundFrame.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Dropping malformed chat frame: %s", e)
            return

        pending = self._pending.pop(frame.id, None)
        if pending is None:
            logger.debug("Dropping reply for unknown or expired request %s", frame.id)
            return
        if not pending.future.done():
            pending.future.set_result(frame.text)

    def _expire(self, correlation_id: str) -> None:
        pending = self._pending.pop(correlation_id, None)
        if pending is not None and not pending.future.done():
            logger.info("Chat request %s timed out", correlation_id)
            pending.future.set_result(None)

    async def request(
        self,
        message: str,
        context: ChatContext,
        timeout: float | None = None,
    ) -> str | None:
        """Send a message and wait for its correlated reply.

        Args:
            message: User message text
            context: Situational context for the assistant
            timeout: Seconds to wait (None uses the channel default)

        Returns:
            Reply text, or None if the timeout fired first. A reply arriving
            after the timeout is discarded.

        Raises:
            ChannelClosedError: If the channel is not open or the send fails
        """
        transport = self._transport
        if self._state is not ChannelState.OPEN or transport is None:
            raise ChannelClosedError("Chat channel is not open")

        loop = asyncio.get_running_loop()
        correlation_id = str(uuid7())
        future: asyncio.Future[str | None] = loop.create_future()
        self._pending[correlation_id] = PendingChatRequest(
            correlation_id=correlation_id,
            future=future,
            sent_at=datetime.now(timezone.utc),
        )

        frame = OutboundFrame(id=correlation_id, message=message, context=context)
        try:
            await transport.send(frame.model_dump_json(exclude_none=True))
        except TransportError as e:
            self._pending.pop(correlation_id, None)
            await self._drop_transport(transport)
            raise ChannelClosedError(f"Send failed: {e}") from e

        timer = loop.call_later(
            self._reply_timeout if timeout is None else timeout,
            self._expire,
            correlation_id,
        )
        try:
            return await future
        finally:
            timer.cancel()
            self._pending.pop(correlation_id, None)

    async def _drop_transport(self, transport: ChatTransport) -> None:
        if self._transport is transport:
            self._transport = None
            self._state = ChannelState.CLOSED
        await transport.close()

    async def close(self) -> None:
        """Close the connection and stop the reader.

        Requests still pending resolve through their timers.
        """
        for task in (self._connect_task, self._reader_task):
            if task is not None and not task.done():
                task.cancel()
        transport, self._transport = self._transport, None
        self._state = ChannelState.CLOSED
        self._connecting = False
        if transport is not None:
            await transport.close()
        for task in (self._connect_task, self._reader_task):
            if task is not None:
                await asyncio.gather(task, return_exceptions=True)
        self._connect_task = None
        self._reader_task = None
