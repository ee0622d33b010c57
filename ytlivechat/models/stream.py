from dataclasses import dataclass
from typing import Optional

from ytlivechat.api.errors import IdentifierMissing


@dataclass(frozen=True)
class LiveIdentifier:
    """
    Which broadcast to follow.

    Exactly one of channel_id, live_id or handle is expected. A channel
    resolves to whatever that channel is currently streaming, a live id
    pins one broadcast, and a handle ("@name" or "name") behaves like a
    channel.
    """

    channel_id: Optional[str] = None
    live_id: Optional[str] = None
    handle: Optional[str] = None

    def __post_init__(self):
        if not (self.channel_id or self.live_id or self.handle):
            raise IdentifierMissing()

    @property
    def normalized_handle(self) -> Optional[str]:
        if not self.handle:
            return None
        return self.handle if self.handle.startswith("@") else f"@{self.handle}"

    def watch_path(self) -> str:
        """Path of the watch page this identifier resolves through."""
        if self.channel_id:
            return f"/channel/{self.channel_id}/live"
        if self.live_id:
            return f"/watch?v={self.live_id}"
        return f"/{self.normalized_handle}/live"


@dataclass
class SessionParameters:
    """
    Parameters scraped from the watch page for one polling session.

    Only `continuation` changes after creation; the polling worker advances
    it after each successful fetch.
    """

    live_id: str
    api_key: str
    client_version: str
    continuation: str
