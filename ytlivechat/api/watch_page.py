import re
from typing import Optional

from ytlivechat.api.errors import (
    ApiKeyMissing,
    ClientVersionMissing,
    ContinuationMissing,
    LiveNotFound,
    ReplayFinished,
)
from ytlivechat.api.http import YouTubeHttpClient
from ytlivechat.models.stream import LiveIdentifier, SessionParameters
from ytlivechat.shared.config.system import DEFAULT_BASE_URL
from ytlivechat.shared.logging.logger import get_logger

log = get_logger("youtube.watch_page")

CANONICAL_RE = re.compile(
    r'<link rel="canonical" href="https://www\.youtube\.com/watch\?v=(.+?)">'
)
REPLAY_RE = re.compile(r"""['"]isReplay['"]:\s*(true)""")
API_KEY_RE = re.compile(r"""['"]INNERTUBE_API_KEY['"]:\s*['"](.+?)['"]""")
CLIENT_VERSION_RE = re.compile(r"""['"]clientVersion['"]:\s*['"]([\d.]+?)['"]""")
CONTINUATION_RE = re.compile(r"""['"]continuation['"]:\s*['"](.+?)['"]""")


def build_watch_url(identifier: LiveIdentifier, base_url: str = DEFAULT_BASE_URL) -> str:
    return base_url.rstrip("/") + identifier.watch_path()


def _search(pattern: re.Pattern, html: str) -> Optional[str]:
    match = pattern.search(html)
    return match.group(1) if match else None


def parse_live_page(html: str) -> SessionParameters:
    """
    Extract session parameters from raw watch page markup.

    Check order matters: the canonical link first, then the replay marker
    (a finished broadcast fails even when every other field is present),
    then API key, client version and continuation.
    """
    live_id = _search(CANONICAL_RE, html)
    if not live_id:
        raise LiveNotFound()

    if REPLAY_RE.search(html):
        raise ReplayFinished(live_id)

    api_key = _search(API_KEY_RE, html)
    if not api_key:
        raise ApiKeyMissing()

    client_version = _search(CLIENT_VERSION_RE, html)
    if not client_version:
        raise ClientVersionMissing()

    continuation = _search(CONTINUATION_RE, html)
    if not continuation:
        raise ContinuationMissing()

    return SessionParameters(
        live_id=live_id,
        api_key=api_key,
        client_version=client_version,
        continuation=continuation,
    )


async def fetch_live_page(
    identifier: LiveIdentifier,
    *,
    http: YouTubeHttpClient,
    base_url: str = DEFAULT_BASE_URL,
) -> SessionParameters:
    """Load the watch page for `identifier` and resolve a polling session."""
    url = build_watch_url(identifier, base_url)
    log.debug(f"Loading watch page {url}")

    html = await http.get_text(url)
    session = parse_live_page(html)

    log.info(
        f"Resolved live chat session (live_id={session.live_id}, "
        f"client_version={session.client_version})"
    )
    return session
