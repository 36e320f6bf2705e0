"""Typed access to preferences held in a key-value store.

Values are read at startup and written back on every change. Missing or
unreadable entries fall back to defaults instead of failing.
"""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import StorageError
from .base import KeyValueStore
from .models import (
    ASSISTANT_SETTINGS_KEY,
    PREFERENCES_KEY,
    AssistantSettings,
    UserPreferences,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class PreferencesRepository:
    """Loads, updates and saves ``UserPreferences`` and ``AssistantSettings``."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    async def _load(self, key: str, model: type[M]) -> M:
        try:
            raw = await self._store.get(key)
        except StorageError as e:
            logger.warning("Ignoring unreadable %s: %s", key, e)
            return model()
        if raw is None:
            return model()
        try:
            return model.model_validate(raw)
        except ValidationError as e:
            logger.warning("Ignoring invalid %s: %s", key, e)
            return model()

    async def load_preferences(self) -> UserPreferences:
        return await self._load(PREFERENCES_KEY, UserPreferences)

    async def save_preferences(self, preferences: UserPreferences) -> None:
        await self._store.set(PREFERENCES_KEY, preferences.model_dump(mode="json", by_alias=True))

    async def update_preferences(self, **changes: Any) -> UserPreferences:
        """Apply a partial update and persist the result.

        Args:
            **changes: Field names (or their camelCase aliases) to change

        Returns:
            The updated preferences

        Raises:
            ValidationError: If a changed value is invalid
        """
        aliases = {
            name: field.alias or name
            for name, field in UserPreferences.model_fields.items()
        }
        current = await self.load_preferences()
        merged = {
            **current.model_dump(by_alias=True),
            **{aliases.get(key, key): value for key, value in changes.items()},
        }
        updated = UserPreferences.model_validate(merged)
        await self.save_preferences(updated)
        return updated

    async def load_assistant_settings(self) -> AssistantSettings:
        return await self._load(ASSISTANT_SETTINGS_KEY, AssistantSettings)

    async def save_assistant_settings(self, settings: AssistantSettings) -> None:
        await self._store.set(
            ASSISTANT_SETTINGS_KEY, settings.model_dump(mode="json", by_alias=True)
        )
