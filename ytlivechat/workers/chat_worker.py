import asyncio
from enum import Enum
from typing import Any, AsyncGenerator, Awaitable, Callable, List, Optional, Tuple

from ytlivechat.api.chat import fetch_chat
from ytlivechat.api.errors import ConfigurationError
from ytlivechat.api.http import YouTubeHttpClient
from ytlivechat.api.watch_page import fetch_live_page
from ytlivechat.models.message import ChatItem
from ytlivechat.models.stream import LiveIdentifier, SessionParameters
from ytlivechat.shared.config.system import LiveChatConfig
from ytlivechat.shared.logging.logger import get_logger

log = get_logger("youtube.chat_worker")

LivePageFetcher = Callable[[LiveIdentifier], Awaitable[SessionParameters]]
ChatFetcher = Callable[[SessionParameters], Awaitable[Tuple[List[ChatItem], str]]]


class ChatState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


class LiveChat:
    """
    Polling engine for one YouTube live chat.

    Responsibilities:
    - Resolve the session from the watch page on start()
    - Poll get_live_chat on a fixed interval, threading the continuation
    - Publish items, errors, start and end events to bounded queues
    - Never block the poll loop on a slow consumer (full queue = drop)

    Events:
    - items:   ChatItem, in network order
    - errors:  YouTubeChatError (or unexpected Exception) instances
    - started: the resolved live id, once per successful start()
    - ended:   the reason passed to stop()
    """

    def __init__(
        self,
        identifier: LiveIdentifier,
        *,
        interval_ms: Optional[int] = None,
        config: Optional[LiveChatConfig] = None,
        http: Optional[YouTubeHttpClient] = None,
    ):
        self.identifier = identifier
        self.config = config or LiveChatConfig()

        interval = interval_ms if interval_ms is not None else self.config.interval_ms
        self.interval = (
            interval / 1000.0 if interval and interval > 0 else self.config.interval_seconds
        )

        self.http = http or YouTubeHttpClient(
            user_agent=self.config.user_agent,
            timeout=self.config.request_timeout,
        )

        # Replaceable fetch hooks (tests swap these for fakes)
        self.fetch_live_page_func: LivePageFetcher = self._fetch_live_page
        self.fetch_chat_func: ChatFetcher = self._fetch_chat

        self.items: asyncio.Queue = asyncio.Queue(maxsize=self.config.item_queue_size)
        self.errors: asyncio.Queue = asyncio.Queue(maxsize=self.config.error_queue_size)
        self.started: asyncio.Queue = asyncio.Queue(maxsize=1)
        self.ended: asyncio.Queue = asyncio.Queue(maxsize=1)

        self.live_id: Optional[str] = identifier.live_id
        self.state = ChatState.IDLE
        self.last_stop_reason: Optional[str] = None

        self._session: Optional[SessionParameters] = None
        self._task: Optional[asyncio.Task] = None
        self._stop_event: Optional[asyncio.Event] = None
        self._starting = False

    # ------------------------------------------------------------------ #
    # Introspection
    # ------------------------------------------------------------------ #

    @property
    def running(self) -> bool:
        return self.state is ChatState.RUNNING

    @property
    def session(self) -> Optional[SessionParameters]:
        return self._session

    @property
    def _tag(self) -> str:
        return f"[YouTube][{self.live_id or self.identifier.watch_path()}]"

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    async def start(self) -> bool:
        """
        Resolve the session and begin polling.

        Returns False (and publishes the error) when the watch page cannot
        be resolved, or when the chat is already running.
        """
        if self.running or self._starting:
            log.warning(f"{self._tag} Live chat already running — ignoring duplicate start")
            return False

        self._starting = True
        try:
            session = await self.fetch_live_page_func(self.identifier)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            log.warning(f"{self._tag} Live chat session could not be resolved: {e}")
            self._publish(self.errors, e, "error")
            return False
        finally:
            self._starting = False

        self._session = session
        self.live_id = session.live_id
        self.state = ChatState.RUNNING
        self.last_stop_reason = None

        stop_event = asyncio.Event()
        self._stop_event = stop_event
        self._publish(self.started, session.live_id, "start")

        self._task = asyncio.create_task(
            self._run(stop_event),
            name=f"ytlivechat:{session.live_id}",
        )

        log.info(
            f"{self._tag} Starting live chat polling (interval={self.interval}s)"
        )
        return True

    async def stop(self, reason: str = "stopped") -> None:
        """
        Stop polling and publish `reason` to the end queue.

        A fetch already in flight is allowed to finish, but its results are
        discarded and no further cycle begins. No-op when idle.
        """
        if not self.running:
            return

        task = self._task
        self._halt(reason)

        if task is not None and task is not asyncio.current_task():
            await asyncio.wait({task})

    def _halt(self, reason: str) -> None:
        self.state = ChatState.IDLE
        self.last_stop_reason = reason

        if self._stop_event is not None:
            self._stop_event.set()

        self._stop_event = None
        self._task = None
        self._session = None

        self._publish(self.ended, reason, "end")
        log.info(f"{self._tag} Live chat polling stopped ({reason})")

    # ------------------------------------------------------------------ #
    # Poll loop
    # ------------------------------------------------------------------ #

    async def _run(self, stop_event: asyncio.Event) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time() + self.interval

        while not stop_event.is_set():
            try:
                await asyncio.wait_for(
                    stop_event.wait(),
                    timeout=max(0.0, next_tick - loop.time()),
                )
            except asyncio.TimeoutError:
                pass

            if stop_event.is_set():
                break

            await self._execute(stop_event)
            next_tick = self._next_tick(next_tick, loop.time())

    def _next_tick(self, previous: float, now: float) -> float:
        """
        Advance the fixed-rate schedule by one interval.

        Ticks missed while a fetch overran collapse into a single tick that
        fires immediately; the schedule stays on the original grid.
        """
        next_tick = previous + self.interval
        if next_tick <= now:
            missed = int((now - next_tick) // self.interval)
            next_tick += missed * self.interval
        return next_tick

    async def _execute(self, stop_event: asyncio.Event) -> None:
        session = self._session
        if session is None:
            message = "Not found options"
            self._publish(self.errors, ConfigurationError(message), "error")
            self._halt(message)
            return

        try:
            items, continuation = await self.fetch_chat_func(session)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if stop_event.is_set():
                return
            log.warning(f"{self._tag} chat poll error: {e}")
            self._publish(self.errors, e, "error")
            return

        if stop_event.is_set():
            log.debug(f"{self._tag} Discarding {len(items)} item(s) fetched after stop")
            return

        for item in items:
            self._publish(self.items, item, "item")

        if continuation:
            session.continuation = continuation
        else:
            log.debug(f"{self._tag} No new continuation; keeping current token")

        log.debug(f"{self._tag} Poll complete (items={len(items)})")

    def _publish(self, queue: asyncio.Queue, value: Any, label: str) -> None:
        try:
            queue.put_nowait(value)
        except asyncio.QueueFull:
            log.debug(f"{self._tag} {label} queue full — dropping event")

    # ------------------------------------------------------------------ #
    # Consumer helpers
    # ------------------------------------------------------------------ #

    async def iter_items(self) -> AsyncGenerator[ChatItem, None]:
        """Yield chat items until the chat stops and the item queue drains."""
        while self.running or not self.items.empty():
            try:
                item = await asyncio.wait_for(self.items.get(), timeout=self.interval)
            except asyncio.TimeoutError:
                continue
            yield item

    # ------------------------------------------------------------------ #
    # Default fetch hooks
    # ------------------------------------------------------------------ #

    async def _fetch_live_page(self, identifier: LiveIdentifier) -> SessionParameters:
        return await fetch_live_page(
            identifier, http=self.http, base_url=self.config.base_url
        )

    async def _fetch_chat(self, session: SessionParameters) -> Tuple[List[ChatItem], str]:
        return await fetch_chat(session, http=self.http, base_url=self.config.base_url)
