"""
Normalization of `get_live_chat` responses into ChatItems.

Pure functions only: no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ytlivechat.models.message import (
    Author,
    Badge,
    ChatItem,
    EmojiPart,
    ImageItem,
    MessagePart,
    RendererKind,
    SuperChat,
    TextPart,
)
from ytlivechat.models.payload import (
    Action,
    GetLiveChatResponse,
    MessageRun,
    RendererBase,
    Thumbnail,
)
from ytlivechat.shared.logging.logger import get_logger

log = get_logger("youtube.parser")

# Checked in order; an item carries exactly one of these.
RENDERER_KEYS: Tuple[Tuple[str, RendererKind], ...] = (
    ("liveChatTextMessageRenderer", RendererKind.TEXT_MESSAGE),
    ("liveChatPaidMessageRenderer", RendererKind.PAID_MESSAGE),
    ("liveChatPaidStickerRenderer", RendererKind.PAID_STICKER),
    ("liveChatMembershipItemRenderer", RendererKind.MEMBERSHIP),
)

CONTINUATION_KEYS = (
    "invalidationContinuationData",
    "timedContinuationData",
    "reloadContinuationData",
)

ICON_FLAGS = {
    "OWNER": "is_owner",
    "VERIFIED": "is_verified",
    "MODERATOR": "is_moderator",
}


@dataclass(frozen=True)
class ClassifiedAction:
    kind: RendererKind
    renderer: RendererBase


def _obj(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


# ------------------------------------------------------------------ #
# Classification
# ------------------------------------------------------------------ #

def classify_action(action: Action) -> Optional[ClassifiedAction]:
    """
    Decide which renderer variant an action carries.

    Returns None for anything that is not a chat item we normalize
    (ticker items, viewer engagement banners, deletions, ...).
    """
    item = _obj(_obj(_obj(action).get("addChatItemAction")).get("item"))
    for key, kind in RENDERER_KEYS:
        renderer = item.get(key)
        if isinstance(renderer, dict):
            return ClassifiedAction(kind=kind, renderer=renderer)
    return None


# ------------------------------------------------------------------ #
# Leaf conversions
# ------------------------------------------------------------------ #

def convert_color_to_hex6(color: Any) -> str:
    """
    Convert a packed ARGB integer to "#RRGGBB". Unparseable values
    become black rather than failing the item.

    >>> convert_color_to_hex6(0xFFFFCA28)
    '#FFCA28'
    """
    try:
        value = int(color)
    except (TypeError, ValueError):
        log.debug(f"Unparseable color {color!r}; using #000000")
        value = 0
    return "#" + format(value & 0xFFFFFFFF, "08X")[2:]


def parse_timestamp(raw: Any) -> datetime:
    """Microseconds-since-epoch string to an aware UTC datetime, else now."""
    try:
        usec = int(str(raw))
    except (TypeError, ValueError):
        return datetime.now(timezone.utc)

    seconds, micros = divmod(usec, 1_000_000)
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc).replace(
            microsecond=micros
        )
    except (OverflowError, OSError, ValueError):
        return datetime.now(timezone.utc)


def _last_thumbnail(thumbnails: Sequence[Thumbnail], alt: str) -> Optional[ImageItem]:
    # thumbnails are served smallest first; the last one is the largest
    entries = _list(thumbnails)
    if not entries:
        return None
    return ImageItem(url=str(_obj(entries[-1]).get("url") or ""), alt=alt)


def parse_messages(runs: Sequence[MessageRun]) -> Tuple[MessagePart, ...]:
    parts: List[MessagePart] = []
    for run in _list(runs):
        run = _obj(run)
        text = run.get("text")
        emoji = run.get("emoji")
        if isinstance(text, str) and text:
            parts.append(TextPart(text=text))
        elif isinstance(emoji, dict):
            parts.append(_parse_emoji(emoji))
    return tuple(parts)


def _parse_emoji(emoji: Dict[str, Any]) -> EmojiPart:
    shortcuts = _list(emoji.get("shortcuts"))
    shortcut = str(shortcuts[0]) if shortcuts else ""
    is_custom = bool(emoji.get("isCustomEmoji"))

    # emoji images use the first (smallest) thumbnail, unlike author photos
    thumbnails = _list(_obj(emoji.get("image")).get("thumbnails"))
    url = str(_obj(thumbnails[0]).get("url") or "") if thumbnails else ""

    return EmojiPart(
        thumbnail=ImageItem(url=url, alt=shortcut),
        emoji_text=shortcut if is_custom else str(emoji.get("emojiId") or ""),
        is_custom=is_custom,
    )


def _message_runs(classified: ClassifiedAction) -> List[MessageRun]:
    renderer = classified.renderer
    if classified.kind is RendererKind.MEMBERSHIP:
        return _list(_obj(renderer.get("headerSubtext")).get("runs"))
    if classified.kind is RendererKind.PAID_STICKER:
        return []
    return _list(_obj(renderer.get("message")).get("runs"))


def _classify_badges(renderer: RendererBase) -> Dict[str, Any]:
    flags: Dict[str, Any] = {
        "is_membership": False,
        "is_owner": False,
        "is_verified": False,
        "is_moderator": False,
        "badge": None,
    }

    for entry in _list(renderer.get("authorBadges")):
        badge = _obj(_obj(entry).get("liveChatAuthorBadgeRenderer"))
        tooltip = str(badge.get("tooltip") or "")
        custom = badge.get("customThumbnail")

        if isinstance(custom, dict):
            thumbnail = _last_thumbnail(custom.get("thumbnails"), tooltip)
            flags["badge"] = Badge(
                thumbnail=thumbnail or ImageItem(url="", alt=tooltip),
                label=tooltip,
            )
            flags["is_membership"] = True
            continue

        icon_type = _obj(badge.get("icon")).get("iconType")
        flag = ICON_FLAGS.get(icon_type) if isinstance(icon_type, str) else None
        if flag:
            flags[flag] = True

    return flags


def _parse_super_chat(classified: ClassifiedAction) -> Optional[SuperChat]:
    renderer = classified.renderer
    amount = str(_obj(renderer.get("purchaseAmountText")).get("simpleText") or "")

    if classified.kind is RendererKind.PAID_STICKER:
        sticker = _obj(renderer.get("sticker"))
        label = str(
            _obj(_obj(sticker.get("accessibility")).get("accessibilityData")).get("label")
            or ""
        )
        return SuperChat(
            amount=amount,
            color=convert_color_to_hex6(renderer.get("backgroundColor") or 0),
            sticker=_last_thumbnail(sticker.get("thumbnails"), label),
        )

    if classified.kind is RendererKind.PAID_MESSAGE:
        return SuperChat(
            amount=amount,
            color=convert_color_to_hex6(renderer.get("bodyBackgroundColor") or 0),
        )

    return None


# ------------------------------------------------------------------ #
# Public API
# ------------------------------------------------------------------ #

def parse_action(action: Action) -> Optional[ChatItem]:
    """Normalize one action, or None when it is not a chat item variant."""
    classified = classify_action(action)
    if classified is None:
        return None

    renderer = classified.renderer
    author_name = str(_obj(renderer.get("authorName")).get("simpleText") or "")
    badges = _classify_badges(renderer)

    author = Author(
        name=author_name,
        channel_id=str(renderer.get("authorExternalChannelId") or ""),
        thumbnail=_last_thumbnail(
            _obj(renderer.get("authorPhoto")).get("thumbnails"), author_name
        ),
        badge=badges.pop("badge"),
    )

    return ChatItem(
        id=str(renderer.get("id") or ""),
        author=author,
        timestamp=parse_timestamp(renderer.get("timestampUsec")),
        message=parse_messages(_message_runs(classified)),
        super_chat=_parse_super_chat(classified),
        kind=classified.kind,
        **badges,
    )


def parse_continuation(response: GetLiveChatResponse) -> str:
    """Next continuation token, or "" when the response carries none."""
    live = _obj(_obj(_obj(response).get("continuationContents")).get("liveChatContinuation"))
    continuations = _list(live.get("continuations"))
    if not continuations:
        return ""

    first = _obj(continuations[0])
    for key in CONTINUATION_KEYS:
        data = first.get(key)
        if isinstance(data, dict):
            return str(data.get("continuation") or "")
    return ""


def parse_chat_data(response: GetLiveChatResponse) -> Tuple[List[ChatItem], str]:
    """
    Convert a `get_live_chat` response into chat items and the next
    continuation token. Items keep network order.
    """
    live = _obj(_obj(_obj(response).get("continuationContents")).get("liveChatContinuation"))

    items: List[ChatItem] = []
    skipped = 0
    for action in _list(live.get("actions")):
        item = parse_action(action)
        if item is None:
            skipped += 1
            continue
        items.append(item)

    if skipped:
        log.debug(f"Skipped {skipped} non-chat action(s)")

    return items, parse_continuation(response)
