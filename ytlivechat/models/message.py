from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class RendererKind(str, Enum):
    """The renderer variant an action item was published as."""

    TEXT_MESSAGE = "text_message"
    PAID_MESSAGE = "paid_message"
    PAID_STICKER = "paid_sticker"
    MEMBERSHIP = "membership"


@dataclass(frozen=True)
class ImageItem:
    url: str
    alt: str = ""


@dataclass(frozen=True)
class Badge:
    """Custom (membership) badge shown next to an author's name."""

    thumbnail: ImageItem
    label: str


@dataclass(frozen=True)
class Author:
    name: str
    channel_id: str
    thumbnail: Optional[ImageItem] = None
    badge: Optional[Badge] = None


@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class EmojiPart:
    """
    An emoji inside a message.

    `emoji_text` is the shortcut (":customEmoji:") for channel emoji and
    the glyph sequence itself for standard emoji.
    """

    thumbnail: ImageItem
    emoji_text: str
    is_custom: bool = False

    @property
    def alt_text(self) -> str:
        return self.thumbnail.alt


MessagePart = Union[TextPart, EmojiPart]


@dataclass(frozen=True)
class SuperChat:
    amount: str
    color: str
    sticker: Optional[ImageItem] = None


@dataclass(frozen=True)
class ChatItem:
    """
    Normalized YouTube live chat item.

    Produced by the action parser from one `addChatItemAction`; the four
    role flags are independent of each other and of `author.badge`.
    """

    id: str
    author: Author
    timestamp: datetime
    message: Tuple[MessagePart, ...] = ()
    super_chat: Optional[SuperChat] = None
    is_membership: bool = False
    is_verified: bool = False
    is_owner: bool = False
    is_moderator: bool = False
    kind: RendererKind = field(default=RendererKind.TEXT_MESSAGE, compare=False)

    @property
    def text(self) -> str:
        return "".join(
            part.text if isinstance(part, TextPart) else part.emoji_text
            for part in self.message
        )

    def to_event(self) -> Dict[str, Any]:
        """
        Produce a flat, JSON-serializable event shape without coupling to
        downstream consumers.
        """
        return {
            "platform": "youtube",
            "type": self.kind.value,
            "message_id": self.id,
            "user": {
                "id": self.author.channel_id,
                "name": self.author.name,
                "avatar_url": self.author.thumbnail.url if self.author.thumbnail else None,
                "badge": self.author.badge.label if self.author.badge else None,
                "is_owner": self.is_owner,
                "is_moderator": self.is_moderator,
                "is_member": self.is_membership,
                "is_verified": self.is_verified,
            },
            "text": self.text,
            "message": [_part_to_dict(part) for part in self.message],
            "superchat": {
                "amount": self.super_chat.amount,
                "color": self.super_chat.color,
                "sticker_url": (
                    self.super_chat.sticker.url if self.super_chat.sticker else None
                ),
            }
            if self.super_chat
            else None,
            "timestamp": self.timestamp.astimezone(timezone.utc).isoformat(),
        }


def _part_to_dict(part: MessagePart) -> Dict[str, Any]:
    if isinstance(part, TextPart):
        return {"type": "text", "text": part.text}
    return {
        "type": "emoji",
        "emoji_text": part.emoji_text,
        "alt": part.alt_text,
        "url": part.thumbnail.url,
        "is_custom": part.is_custom,
    }
