"""In-memory key-value store.

Values are stored as JSON text so reads behave like the persistent backend.
Data is lost when the application exits.
"""

import json
from typing import Any

from ..errors import StorageError
from .base import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Session-only store, suitable for tests and one-off CLI runs."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    async def connect(self) -> None:
        """Initialize store (no-op for in-memory)."""
        pass

    async def disconnect(self) -> None:
        """Close store (no-op for in-memory)."""
        pass

    async def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt value for key {key!r}") from e

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def keys(self) -> list[str]:
        return sorted(self._data)

    @property
    def backend_type(self) -> str:
        return "memory"
