"""
YouTube live chat client.

Resolves a channel, live id or handle to a running broadcast, polls its
chat feed and publishes normalized ChatItems on asyncio queues.
"""

from ytlivechat.api.errors import (
    ApiKeyMissing,
    ClientVersionMissing,
    ConfigurationError,
    ContinuationMissing,
    DecodeError,
    FetchError,
    HTTPStatusError,
    IdentifierMissing,
    LiveNotFound,
    NetworkError,
    ReplayFinished,
    SessionResolutionError,
    YouTubeChatError,
)
from ytlivechat.api.parser import parse_chat_data
from ytlivechat.api.watch_page import parse_live_page
from ytlivechat.models.message import (
    Author,
    Badge,
    ChatItem,
    EmojiPart,
    ImageItem,
    RendererKind,
    SuperChat,
    TextPart,
)
from ytlivechat.models.stream import LiveIdentifier, SessionParameters
from ytlivechat.shared.config.system import LiveChatConfig, load_live_chat_config
from ytlivechat.workers.chat_worker import ChatState, LiveChat

__all__ = [
    "LiveChat",
    "ChatState",
    "LiveIdentifier",
    "SessionParameters",
    "LiveChatConfig",
    "load_live_chat_config",
    "ChatItem",
    "Author",
    "Badge",
    "TextPart",
    "EmojiPart",
    "ImageItem",
    "SuperChat",
    "RendererKind",
    "parse_chat_data",
    "parse_live_page",
    "YouTubeChatError",
    "IdentifierMissing",
    "ConfigurationError",
    "SessionResolutionError",
    "LiveNotFound",
    "ReplayFinished",
    "ApiKeyMissing",
    "ClientVersionMissing",
    "ContinuationMissing",
    "FetchError",
    "NetworkError",
    "HTTPStatusError",
    "DecodeError",
]
