"""Local key-value storage for client state."""

from .base import KeyValueStore
from .factory import create_key_value_store
from .models import (
    ASSISTANT_SETTINGS_KEY,
    CHAT_MESSAGES_KEY,
    LAST_LOCATION_KEY,
    PREFERENCES_KEY,
    AssistantSettings,
    Language,
    UserPreferences,
)
from .repository import PreferencesRepository

__all__ = [
    "ASSISTANT_SETTINGS_KEY",
    "CHAT_MESSAGES_KEY",
    "LAST_LOCATION_KEY",
    "PREFERENCES_KEY",
    "AssistantSettings",
    "KeyValueStore",
    "Language",
    "PreferencesRepository",
    "UserPreferences",
    "create_key_value_store",
]
