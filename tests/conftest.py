import json
from pathlib import Path

import httpx
import pytest

from ytlivechat.api.http import YouTubeHttpClient
from ytlivechat.models.stream import SessionParameters

FIXTURES = Path(__file__).parent / "fixtures"


def load_json(name: str) -> dict:
    return json.loads((FIXTURES / name).read_text(encoding="utf-8"))


def load_text(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


def text_action(item_id="id", runs=None, badges=None, **extra) -> dict:
    """Build a minimal addChatItemAction carrying a text message renderer."""
    renderer = {
        "id": item_id,
        "timestampUsec": "1609459200000000",
        "authorName": {"simpleText": "authorName"},
        "authorPhoto": {"thumbnails": [{"url": "https://author.thumbnail.url"}]},
        "authorExternalChannelId": "channelId",
        "message": {"runs": runs if runs is not None else [{"text": "Hello, World!"}]},
    }
    if badges is not None:
        renderer["authorBadges"] = badges
    renderer.update(extra)
    return {"addChatItemAction": {"item": {"liveChatTextMessageRenderer": renderer}}}


def icon_badge(icon_type: str) -> dict:
    return {
        "liveChatAuthorBadgeRenderer": {
            "icon": {"iconType": icon_type},
            "tooltip": icon_type.title(),
        }
    }


def member_badge(tooltip="メンバー（6 か月）") -> dict:
    return {
        "liveChatAuthorBadgeRenderer": {
            "customThumbnail": {
                "thumbnails": [
                    {"url": "https://yt3.ggpht.com/badge=s16-c-k"},
                    {"url": "https://yt3.ggpht.com/badge=s32-c-k"},
                ]
            },
            "tooltip": tooltip,
        }
    }


def chat_response(actions, continuation="test-continuation:01") -> dict:
    continuations = (
        [{"invalidationContinuationData": {"continuation": continuation}}]
        if continuation
        else []
    )
    return {
        "continuationContents": {
            "liveChatContinuation": {
                "continuations": continuations,
                "actions": actions,
            }
        }
    }


@pytest.fixture
def session() -> SessionParameters:
    return SessionParameters(
        live_id="liveId",
        api_key="apiKey",
        client_version="clientVersion",
        continuation="continuation",
    )


@pytest.fixture
def mock_http():
    """
    Build a YouTubeHttpClient backed by httpx.MockTransport.

    Usage: client, requests = mock_http(handler) where `handler` maps an
    httpx.Request to an httpx.Response; `requests` records every request.
    """

    def factory(handler):
        requests = []

        def _record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        client = YouTubeHttpClient(transport=httpx.MockTransport(_record))
        return client, requests

    return factory
