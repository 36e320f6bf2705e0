"""Chat assistant: correlation channel, intent classification and transcript."""

from .channel import ChannelState, ChatChannel
from .client import ChatClient
from .context import ContextBuilder
from .intent import INTENT_KEYWORDS, classify_intent
from .models import (
    ChatContext,
    ChatMessage,
    ChatReply,
    InboundFrame,
    IntentCategory,
    MessageSender,
    MessageStatus,
    MessageType,
    OutboundFrame,
    PendingChatRequest,
    ReplySource,
)
from .responder import greeting, synthetic_reply
from .session import ChatSession
from .transport import ChatTransport, WebSocketTransport

__all__ = [
    "INTENT_KEYWORDS",
    "ChannelState",
    "ChatChannel",
    "ChatClient",
    "ChatContext",
    "ChatMessage",
    "ChatReply",
    "ChatSession",
    "ChatTransport",
    "ContextBuilder",
    "InboundFrame",
    "IntentCategory",
    "MessageSender",
    "MessageStatus",
    "MessageType",
    "OutboundFrame",
    "PendingChatRequest",
    "ReplySource",
    "WebSocketTransport",
    "classify_intent",
    "greeting",
    "synthetic_reply",
]
