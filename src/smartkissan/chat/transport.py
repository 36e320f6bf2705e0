"""Message transports for the chat channel.

The channel only needs to connect, send text frames, receive text frames and
close; this module hides which wire protocol provides that.
"""

from abc import ABC, abstractmethod

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from ..errors import TransportError


class ChatTransport(ABC):
    """Abstract bidirectional text-frame transport."""

    @abstractmethod
    async def connect(self) -> None:
        """Open the connection.

        Raises:
            TransportError: If the connection cannot be established
        """

    @abstractmethod
    async def send(self, data: str) -> None:
        """Send one text frame.

        Raises:
            TransportError: If the connection is closed or broken
        """

    @abstractmethod
    async def receive(self) -> str:
        """Wait for the next text frame.

        Raises:
            TransportError: When the connection closes
        """

    @abstractmethod
    async def close(self) -> None:
        """Close the connection. Safe to call more than once."""


class WebSocketTransport(ChatTransport):
    """WebSocket transport built on the ``websockets`` client."""

    def __init__(self, url: str, open_timeout: float = 10.0):
        self._url = url
        self._open_timeout = open_timeout
        self._ws = None

    async def connect(self) -> None:
        try:
            self._ws = await websockets.connect(self._url, open_timeout=self._open_timeout)
        except (OSError, WebSocketException) as e:
            raise TransportError(f"Could not connect to {self._url}: {e!r}") from e

    async def send(self, data: str) -> None:
        if self._ws is None:
            raise TransportError("WebSocket is not connected")
        try:
            await self._ws.send(data)
        except (OSError, WebSocketException) as e:
            raise TransportError(f"Send failed: {e!r}") from e

    async def receive(self) -> str:
        if self._ws is None:
            raise TransportError("WebSocket is not connected")
        try:
            frame = await self._ws.recv()
        except ConnectionClosed as e:
            raise TransportError(f"Connection closed: {e}") from e
        except OSError as e:
            raise TransportError(f"Receive failed: {e!r}") from e
        if isinstance(frame, bytes):
            return frame.decode("utf-8", errors="replace")
        return frame

    async def close(self) -> None:
        if self._ws is not None:
            ws, self._ws = self._ws, None
            await ws.close()
