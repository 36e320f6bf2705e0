"""Abstract base class for local key-value storage.

This module defines the interface for persisted client state (preferences,
chat transcript, assistant flags, last known location). The abstraction
hides:
- Storage format
- Persistence mechanism (in-memory, SQLite)
- Connection management
"""

from abc import ABC, abstractmethod
from typing import Any


class KeyValueStore(ABC):
    """Opaque key-value storage for JSON-serializable values."""

    @abstractmethod
    async def connect(self) -> None:
        """Initialize the store."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the store gracefully."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the value stored under ``key``, or None.

        Raises:
            StorageError: If the stored value cannot be decoded
        """

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value under ``key``."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove ``key`` if present."""

    @abstractmethod
    async def keys(self) -> list[str]:
        """List stored keys in sorted order."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    async def __aenter__(self) -> "KeyValueStore":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()
