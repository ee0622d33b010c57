from typing import Any, Dict, List, Tuple

from ytlivechat.api.http import YouTubeHttpClient
from ytlivechat.api.parser import parse_chat_data
from ytlivechat.models.message import ChatItem
from ytlivechat.models.stream import SessionParameters
from ytlivechat.shared.config.system import DEFAULT_BASE_URL

CHAT_PATH = "/youtubei/v1/live_chat/get_live_chat"
CLIENT_NAME = "WEB"


def build_chat_url(session: SessionParameters, base_url: str = DEFAULT_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}{CHAT_PATH}?key={session.api_key}"


def build_chat_payload(session: SessionParameters) -> Dict[str, Any]:
    return {
        "context": {
            "client": {
                "clientVersion": session.client_version,
                "clientName": CLIENT_NAME,
            },
        },
        "continuation": session.continuation,
    }


async def fetch_chat(
    session: SessionParameters,
    *,
    http: YouTubeHttpClient,
    base_url: str = DEFAULT_BASE_URL,
) -> Tuple[List[ChatItem], str]:
    """
    Fetch one page of live chat for the session's current continuation.

    Returns the normalized items and the next continuation token ("" when
    YouTube did not send one). Errors propagate; nothing is retried here.
    """
    data = await http.post_json(
        build_chat_url(session, base_url),
        build_chat_payload(session),
    )
    return parse_chat_data(data)
