from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class NetworkStatus(str, Enum):
    """Connectivity as seen by the client."""

    ONLINE = "online"
    OFFLINE = "offline"


class ExternalAPIDescriptor(BaseModel):
    """Liveness flag for one upstream integration."""

    id: str
    name: str
    category: str = Field(description="weather, geocoding, assistant or agronomy")
    is_available: bool = False
    last_checked: datetime | None = None
