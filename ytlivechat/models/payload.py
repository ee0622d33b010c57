"""
Shapes of the `get_live_chat` response that the parser reads.

Only the fields we consume are described. Every dict is declared
total=False because YouTube omits keys freely; the parser must treat each
one as optional.
"""

from typing import List, TypedDict


class Thumbnail(TypedDict, total=False):
    url: str
    width: int
    height: int


class Thumbnails(TypedDict, total=False):
    thumbnails: List[Thumbnail]


class AccessibilityData(TypedDict, total=False):
    label: str


class Accessibility(TypedDict, total=False):
    accessibilityData: AccessibilityData


class Image(TypedDict, total=False):
    thumbnails: List[Thumbnail]
    accessibility: Accessibility


class Emoji(TypedDict, total=False):
    emojiId: str
    shortcuts: List[str]
    searchTerms: List[str]
    image: Image
    isCustomEmoji: bool


class MessageRun(TypedDict, total=False):
    text: str
    emoji: Emoji


class Runs(TypedDict, total=False):
    runs: List[MessageRun]


class SimpleText(TypedDict, total=False):
    simpleText: str


class Icon(TypedDict, total=False):
    iconType: str


class AuthorBadgeRenderer(TypedDict, total=False):
    customThumbnail: Thumbnails
    icon: Icon
    tooltip: str
    accessibility: Accessibility


class AuthorBadge(TypedDict, total=False):
    liveChatAuthorBadgeRenderer: AuthorBadgeRenderer


class RendererBase(TypedDict, total=False):
    """Fields shared by every chat item renderer."""

    id: str
    timestampUsec: str
    authorName: SimpleText
    authorPhoto: Thumbnails
    authorBadges: List[AuthorBadge]
    authorExternalChannelId: str


class TextMessageRenderer(RendererBase, total=False):
    message: Runs


class PaidMessageRenderer(TextMessageRenderer, total=False):
    purchaseAmountText: SimpleText
    headerBackgroundColor: int
    bodyBackgroundColor: int


class PaidStickerRenderer(RendererBase, total=False):
    purchaseAmountText: SimpleText
    sticker: Image
    backgroundColor: int
    moneyChipBackgroundColor: int


class MembershipItemRenderer(RendererBase, total=False):
    headerSubtext: Runs


class ActionItem(TypedDict, total=False):
    liveChatTextMessageRenderer: TextMessageRenderer
    liveChatPaidMessageRenderer: PaidMessageRenderer
    liveChatPaidStickerRenderer: PaidStickerRenderer
    liveChatMembershipItemRenderer: MembershipItemRenderer


class AddChatItemAction(TypedDict, total=False):
    item: ActionItem
    clientId: str


class Action(TypedDict, total=False):
    addChatItemAction: AddChatItemAction


class ContinuationData(TypedDict, total=False):
    continuation: str
    timeoutMs: int


class Continuation(TypedDict, total=False):
    invalidationContinuationData: ContinuationData
    timedContinuationData: ContinuationData
    reloadContinuationData: ContinuationData


class LiveChatContinuation(TypedDict, total=False):
    continuations: List[Continuation]
    actions: List[Action]


class ContinuationContents(TypedDict, total=False):
    liveChatContinuation: LiveChatContinuation


class GetLiveChatResponse(TypedDict, total=False):
    continuationContents: ContinuationContents
