"""Persisted client state models and their storage keys."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..config import DEFAULT_LOCATION

PREFERENCES_KEY = "userPreferences"
ASSISTANT_SETTINGS_KEY = "assistantSettings"
CHAT_MESSAGES_KEY = "chatMessages"
LAST_LOCATION_KEY = "lastKnownLocation"


class Language(str, Enum):
    """Languages the assistant answers in."""

    ENGLISH = "en"
    HINDI = "hi"
    KANNADA = "kn"


class UserPreferences(BaseModel):
    """Dashboard preferences."""

    model_config = ConfigDict(populate_by_name=True)

    language: Language = Language.ENGLISH
    dark_mode: bool = Field(default=False, alias="darkMode")
    notifications_enabled: bool = Field(default=True, alias="notificationsEnabled")
    use_current_location: bool = Field(default=False, alias="useCurrentLocation")
    default_location: tuple[float, float] = Field(default=DEFAULT_LOCATION, alias="defaultLocation")


class AssistantSettings(BaseModel):
    """Chat assistant feature flags."""

    model_config = ConfigDict(populate_by_name=True)

    voice_mode: bool = Field(default=False, alias="voiceMode")
