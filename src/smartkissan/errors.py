"""Exception hierarchy for smartkissan.

Integration errors are caught at the dispatcher boundary and never reach
callers of the public API; they exist so internal code and tests can tell
failure kinds apart.
"""


class SmartKissanError(Exception):
    """Base class for all smartkissan errors."""


class UpstreamError(SmartKissanError):
    """An upstream HTTP integration failed.

    Covers network failures, non-success status codes and response bodies
    that do not match the expected schema.
    """

    def __init__(self, service: str, message: str, status_code: int | None = None):
        super().__init__(f"{service}: {message}")
        self.service = service
        self.message = message
        self.status_code = status_code


class TransportError(SmartKissanError):
    """The chat transport could not connect, send or receive."""


class ChannelClosedError(SmartKissanError):
    """A request was issued on a chat channel that is not open."""


class GeolocationError(SmartKissanError):
    """The device position could not be determined."""


class StorageError(SmartKissanError):
    """The key-value store is unavailable or holds an unreadable value."""
