"""Error kinds raised by the live chat client."""

from __future__ import annotations

from typing import Optional


class YouTubeChatError(RuntimeError):
    """Base class for every live chat failure."""


class IdentifierMissing(YouTubeChatError, ValueError):
    """Raised at construction time when no channel, live id or handle is given."""

    def __init__(self, message: str = "Required channel_id or live_id or handle."):
        super().__init__(message)


class ConfigurationError(YouTubeChatError):
    """The polling loop ticked without resolved session parameters."""


# ======================================================================
# Session resolution
# ======================================================================

class SessionResolutionError(YouTubeChatError):
    """The watch page did not yield usable session parameters."""


class LiveNotFound(SessionResolutionError):
    def __init__(self, message: str = "Live Stream was not found"):
        super().__init__(message)


class ReplayFinished(SessionResolutionError):
    """The broadcast has ended and only a replay is available."""

    def __init__(self, live_id: str):
        self.live_id = live_id
        super().__init__(f"{live_id} is finished live")


class ApiKeyMissing(SessionResolutionError):
    def __init__(self, message: str = "API Key was not found"):
        super().__init__(message)


class ClientVersionMissing(SessionResolutionError):
    def __init__(self, message: str = "Client Version was not found"):
        super().__init__(message)


class ContinuationMissing(SessionResolutionError):
    def __init__(self, message: str = "Continuation was not found"):
        super().__init__(message)


# ======================================================================
# Transport
# ======================================================================

class FetchError(YouTubeChatError):
    """A single request to YouTube failed."""


class NetworkError(FetchError):
    """The request never produced a response (DNS, TLS, timeout, reset)."""


class HTTPStatusError(FetchError):
    def __init__(self, status: int, url: Optional[str] = None):
        self.status = status
        self.url = url
        target = f" for {url}" if url else ""
        super().__init__(f"Unexpected HTTP status {status}{target}")


class DecodeError(FetchError):
    """The response body was not the JSON object we expected."""


__all__ = [
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
