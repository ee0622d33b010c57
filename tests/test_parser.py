"""Tests for get_live_chat response normalization."""
from datetime import datetime, timezone

import pytest

from conftest import chat_response, icon_badge, load_json, member_badge, text_action
from ytlivechat.api.parser import (
    classify_action,
    convert_color_to_hex6,
    parse_action,
    parse_chat_data,
    parse_continuation,
    parse_timestamp,
)
from ytlivechat.models.message import EmojiPart, ImageItem, RendererKind, TextPart


@pytest.mark.unit
class TestParseChatData:
    """Fixture responses end to end."""

    def test_normal_message(self):
        items, continuation = parse_chat_data(load_json("get_live_chat.normal.json"))

        assert continuation == "test-continuation:01"
        assert len(items) == 1
        item = items[0]
        assert item.id == "id"
        assert item.kind is RendererKind.TEXT_MESSAGE
        assert item.author.name == "authorName"
        assert item.author.channel_id == "channelId"
        assert item.message == (TextPart(text="Hello, World!"),)
        assert item.super_chat is None
        assert item.timestamp == datetime(2021, 1, 1, tzinfo=timezone.utc)

    def test_author_thumbnail_is_largest(self):
        items, _ = parse_chat_data(load_json("get_live_chat.normal.json"))

        assert items[0].author.thumbnail == ImageItem(
            url="https://author.thumbnail.url", alt="authorName"
        )

    def test_text_custom_and_global_emoji_keep_order(self):
        items, continuation = parse_chat_data(load_json("get_live_chat.emoji.json"))

        assert continuation == "test-continuation:02"
        assert [item.id for item in items] == [
            "text-id",
            "custom-emoji-id",
            "global-emoji-id",
        ]

        assert items[0].message == (TextPart(text="plain text"),)

        custom = items[1].message[0]
        assert isinstance(custom, EmojiPart)
        assert custom.emoji_text == ":customEmoji:"
        assert custom.is_custom is True
        assert custom.alt_text == ":customEmoji:"
        # emoji images use the first thumbnail
        assert custom.thumbnail.url == "https://yt3.ggpht.com/custom=w24-h24"

        glyph = items[2].message[0]
        assert isinstance(glyph, EmojiPart)
        assert glyph.emoji_text == "👏🏿"
        assert glyph.is_custom is False

    def test_timestamp_keeps_microseconds(self):
        items, _ = parse_chat_data(load_json("get_live_chat.emoji.json"))

        assert items[0].timestamp == datetime(
            2021, 1, 1, 0, 0, 0, 123456, tzinfo=timezone.utc
        )

    def test_super_chat(self):
        items, _ = parse_chat_data(load_json("get_live_chat.super-chat.json"))

        item = items[0]
        assert item.kind is RendererKind.PAID_MESSAGE
        assert item.super_chat is not None
        assert item.super_chat.amount == "￥1,000"
        assert item.super_chat.color == "#FFCA28"
        assert item.super_chat.sticker is None
        assert item.message == (TextPart(text="Thank you!"),)

    def test_super_sticker(self):
        items, _ = parse_chat_data(load_json("get_live_chat.super-sticker.json"))

        item = items[0]
        assert item.kind is RendererKind.PAID_STICKER
        assert item.message == ()
        assert item.super_chat.amount == "￥90"
        assert item.super_chat.color == "#1565C0"
        assert item.super_chat.sticker == ImageItem(
            url="//lh3.googleusercontent.com/sticker=s80", alt="Clapping hands"
        )

    def test_membership_reads_header_subtext(self):
        items, _ = parse_chat_data(load_json("get_live_chat.membership.json"))

        item = items[0]
        assert item.kind is RendererKind.MEMBERSHIP
        assert item.is_membership is True
        assert item.message == (
            TextPart(text="上級エンジニア"),
            TextPart(text=" へようこそ！"),
        )
        assert item.author.badge.label == "新規メンバー"
        assert item.author.badge.thumbnail.url == "https://yt3.ggpht.com/badge=s32-c-k"

    def test_no_chat(self):
        items, continuation = parse_chat_data(load_json("get_live_chat.no-chat.json"))

        assert items == []
        assert continuation == "test-continuation:01"

    def test_empty_response(self):
        assert parse_chat_data({}) == ([], "")


@pytest.mark.unit
class TestBadges:
    def test_member_badge(self):
        item = parse_action(text_action(badges=[member_badge()]))

        assert item.is_membership is True
        assert item.author.badge.label == "メンバー（6 か月）"
        assert item.author.badge.thumbnail == ImageItem(
            url="https://yt3.ggpht.com/badge=s32-c-k", alt="メンバー（6 か月）"
        )
        assert not (item.is_owner or item.is_moderator or item.is_verified)

    @pytest.mark.parametrize(
        "icon_type, flag",
        [
            ("OWNER", "is_owner"),
            ("VERIFIED", "is_verified"),
            ("MODERATOR", "is_moderator"),
        ],
    )
    def test_icon_badges(self, icon_type, flag):
        item = parse_action(text_action(badges=[icon_badge(icon_type)]))

        assert getattr(item, flag) is True
        assert item.is_membership is False
        assert item.author.badge is None

    def test_member_and_verified_are_independent(self):
        item = parse_action(
            text_action(badges=[member_badge(), icon_badge("VERIFIED")])
        )

        assert item.is_membership is True
        assert item.is_verified is True

    def test_flags_are_not_cleared_by_later_badges(self):
        item = parse_action(
            text_action(badges=[icon_badge("MODERATOR"), icon_badge("UNKNOWN"), member_badge()])
        )

        assert item.is_moderator is True
        assert item.is_membership is True

    def test_unknown_icon_is_ignored(self):
        item = parse_action(text_action(badges=[icon_badge("SPONSOR_PLUS")]))

        assert not (item.is_owner or item.is_moderator or item.is_verified)


@pytest.mark.unit
class TestClassification:
    def test_unknown_variants_are_skipped(self):
        actions = [
            {"addLiveChatTickerItemAction": {"item": {}}},
            {"addChatItemAction": {"item": {"liveChatViewerEngagementMessageRenderer": {}}}},
            {"markChatItemAsDeletedAction": {"targetItemId": "x"}},
            text_action(item_id="kept"),
        ]
        items, _ = parse_chat_data(chat_response(actions))

        assert [item.id for item in items] == ["kept"]

    def test_classify_action(self):
        classified = classify_action(text_action())

        assert classified.kind is RendererKind.TEXT_MESSAGE
        assert classified.renderer["id"] == "id"
        assert classify_action({"addChatItemAction": {}}) is None

    def test_missing_author_fields(self):
        action = {
            "addChatItemAction": {
                "item": {"liveChatTextMessageRenderer": {"id": "bare"}}
            }
        }
        item = parse_action(action)

        assert item.id == "bare"
        assert item.author.name == ""
        assert item.author.thumbnail is None
        assert item.message == ()

    def test_runs_without_text_or_emoji_are_dropped(self):
        item = parse_action(text_action(runs=[{"text": ""}, {"bold": True}, {"text": "ok"}]))

        assert item.message == (TextPart(text="ok"),)


@pytest.mark.unit
class TestContinuation:
    def test_empty_list(self):
        assert parse_continuation(chat_response([], continuation=None)) == ""

    def test_invalidation_shape(self):
        assert parse_continuation(chat_response([], continuation="inv")) == "inv"

    def test_timed_shape(self):
        response = {
            "continuationContents": {
                "liveChatContinuation": {
                    "continuations": [{"timedContinuationData": {"continuation": "timed"}}]
                }
            }
        }
        assert parse_continuation(response) == "timed"

    def test_only_first_entry_is_read(self):
        response = {
            "continuationContents": {
                "liveChatContinuation": {
                    "continuations": [
                        {"somethingElse": {"continuation": "ignored"}},
                        {"timedContinuationData": {"continuation": "second"}},
                    ]
                }
            }
        }
        assert parse_continuation(response) == ""


@pytest.mark.unit
class TestLeafConversions:
    def test_color_drops_alpha(self):
        assert convert_color_to_hex6(0xFFFFCA28) == "#FFCA28"

    def test_color_pads_small_values(self):
        assert convert_color_to_hex6(0x000000FF) == "#0000FF"

    @pytest.mark.parametrize("raw", ["not-a-color", None, {}])
    def test_color_falls_back_to_black(self, raw):
        assert convert_color_to_hex6(raw) == "#000000"

    def test_bad_color_keeps_other_items(self):
        paid = {
            "addChatItemAction": {
                "item": {
                    "liveChatPaidMessageRenderer": {
                        "id": "paid",
                        "purchaseAmountText": {"simpleText": "$5.00"},
                        "bodyBackgroundColor": "not-a-color",
                    }
                }
            }
        }
        items, _ = parse_chat_data(chat_response([paid, text_action(item_id="after")]))

        assert [item.id for item in items] == ["paid", "after"]
        assert items[0].super_chat.color == "#000000"

    def test_timestamp(self):
        assert parse_timestamp("1609459200500000") == datetime(
            2021, 1, 1, 0, 0, 0, 500000, tzinfo=timezone.utc
        )

    @pytest.mark.parametrize("raw", [None, "", "not-a-number"])
    def test_timestamp_falls_back_to_now(self, raw):
        before = datetime.now(timezone.utc)
        parsed = parse_timestamp(raw)
        after = datetime.now(timezone.utc)

        assert before <= parsed <= after


@pytest.mark.unit
def test_to_event_shape():
    items, _ = parse_chat_data(load_json("get_live_chat.super-chat.json"))
    event = items[0].to_event()

    assert event["platform"] == "youtube"
    assert event["type"] == "paid_message"
    assert event["message_id"] == "super-chat-id"
    assert event["user"]["name"] == "supporter"
    assert event["text"] == "Thank you!"
    assert event["superchat"] == {
        "amount": "￥1,000",
        "color": "#FFCA28",
        "sticker_url": None,
    }
    assert event["timestamp"] == "2021-01-01T00:00:00+00:00"
