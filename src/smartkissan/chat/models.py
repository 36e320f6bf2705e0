"""Data models for the chat assistant.

Covers the transcript (``ChatMessage``), the wire frames exchanged with the
chat backend, and the bookkeeping record for requests awaiting a reply.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from uuid_extensions import uuid7


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MessageSender(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class MessageStatus(str, Enum):
    SENDING = "sending"
    SENT = "sent"
    FAILED = "failed"


class MessageType(str, Enum):
    TEXT = "text"
    WEATHER = "weather"
    CROP = "crop"
    MARKET = "market"
    IMAGE = "image"
    LOCATION = "location"


class IntentCategory(str, Enum):
    """Topic of a user message, in classification order."""

    WEATHER = "weather"
    CROP = "crop"
    MARKET = "market"
    PEST = "pest"
    GENERAL = "general"


class ReplySource(str, Enum):
    LIVE = "live"            # Answered by the chat backend
    SYNTHETIC = "synthetic"  # Canned reply from the local responder


class ChatMessage(BaseModel):
    """One entry of the chat transcript.

    Only ``status`` changes after creation (sending -> sent | failed).
    """

    id: str = Field(default_factory=lambda: str(uuid7()))
    text: str
    sender: MessageSender
    timestamp: datetime = Field(default_factory=_now)
    status: MessageStatus | None = None
    type: MessageType | None = None
    rich_data: Any | None = None


class ChatContext(BaseModel):
    """Situational context sent upstream with every prompt."""

    domain: str = "agriculture"
    region: str = "India"
    language_preference: str = "en"
    expertise_level: str = "farmer"
    crops_of_interest: list[str] = Field(default_factory=list)
    current_season: str
    include_local_knowledge: bool = True
    weather: dict[str, Any] | None = None
    soil: dict[str, Any] | None = None
    recent_rainfall_mm: float | None = None
    market_prices: dict[str, float] | None = None


class OutboundFrame(BaseModel):
    """Frame sent to the chat backend."""

    id: str
    message: str
    context: ChatContext


class InboundFrame(BaseModel):
    """Frame received from the chat backend.

    The backend answers with either ``response`` or ``message``.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    response: str | None = None
    message: str | None = None

    @model_validator(mode="after")
    def _require_text(self) -> "InboundFrame":
        if self.response is None and self.message is None:
            raise ValueError("frame carries neither 'response' nor 'message'")
        return self

    @property
    def text(self) -> str:
        return self.response if self.response is not None else self.message  # type: ignore[return-value]


class ChatReply(BaseModel):
    """Assistant answer to one user message."""

    text: str
    category: IntentCategory
    source: ReplySource
    correlation_id: str | None = None
    type: MessageType | None = None
    rich_data: Any | None = None
    timestamp: datetime = Field(default_factory=_now)


@dataclass
class PendingChatRequest:
    """A request sent over the channel that has not been resolved yet.

    The future is resolved exactly once: with the reply text, or with None
    when the reply timer fires first.
    """

    correlation_id: str
    future: "asyncio.Future[str | None]"
    sent_at: datetime
