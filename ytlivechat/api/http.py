import json
from typing import Any, Dict, Optional

import httpx

from ytlivechat.api.errors import DecodeError, HTTPStatusError, NetworkError
from ytlivechat.shared.config.system import DEFAULT_USER_AGENT
from ytlivechat.shared.logging.logger import get_logger

log = get_logger("youtube.http")


class YouTubeHttpClient:
    """
    Thin httpx wrapper used by the watch page and chat fetchers.

    Responsibilities:
    - Send the browser user-agent YouTube expects
    - Map transport failures, non-2xx statuses and bad JSON to domain errors
    - Never retry; callers decide what a failure means
    """

    def __init__(
        self,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.user_agent = user_agent
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent},
            follow_redirects=True,
            transport=self._transport,
        )

    @staticmethod
    def _check_status(response: httpx.Response) -> None:
        if not response.is_success:
            raise HTTPStatusError(response.status_code, str(response.request.url))

    async def get_text(self, url: str) -> str:
        async with self._client() as client:
            try:
                response = await client.get(url)
            except httpx.HTTPError as e:
                raise NetworkError(f"GET {url} failed: {e}") from e

        log.debug(f"GET {url} -> {response.status_code}")
        self._check_status(response)
        return response.text

    async def post_json(self, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        async with self._client() as client:
            try:
                response = await client.post(url, json=payload)
            except httpx.HTTPError as e:
                raise NetworkError(f"POST {url} failed: {e}") from e

        log.debug(f"POST {url} -> {response.status_code}")
        self._check_status(response)

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"Invalid JSON from {url}: {e}") from e

        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object from {url}")

        return data
