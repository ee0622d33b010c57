"""
YouTube live chat smoke test.

Follows one broadcast and prints every chat item until Ctrl-C.
"""

import argparse
import asyncio
import json
import os
from typing import List, Optional

from dotenv import load_dotenv

from ytlivechat.api.errors import IdentifierMissing
from ytlivechat.models.message import ChatItem
from ytlivechat.models.stream import LiveIdentifier
from ytlivechat.runtime.version import as_string
from ytlivechat.shared.config.system import load_live_chat_config
from ytlivechat.shared.logging.logger import enable_file_logging, get_logger
from ytlivechat.workers.chat_worker import LiveChat

log = get_logger("youtube.poc")


def _env(key: str) -> str:
    return os.getenv(key, "").strip()


def format_item(item: ChatItem) -> str:
    line = f"💬 {item.author.name} → {item.text}"
    if item.super_chat:
        line = f"{line} [{item.super_chat.amount} {item.super_chat.color}]"
    return line


def build_identifier(args) -> LiveIdentifier:
    channel = args.channel or _env("YOUTUBE_CHANNEL_ID")
    live = args.live or _env("YOUTUBE_LIVE_ID")
    handle = args.handle or _env("YOUTUBE_HANDLE")

    # command line wins over environment; keep only the first source given
    if args.channel or args.live or args.handle:
        channel, live, handle = args.channel, args.live, args.handle

    return LiveIdentifier(
        channel_id=channel or None,
        live_id=live or None,
        handle=handle or None,
    )


async def _drain_errors(chat: LiveChat) -> None:
    while True:
        error = await chat.errors.get()
        log.warning(f"Live chat error: {error}")


async def _run(args) -> int:
    load_dotenv()

    try:
        identifier = build_identifier(args)
    except IdentifierMissing:
        raise RuntimeError(
            "Missing broadcast. Provide --channel, --live or --handle "
            "(or set YOUTUBE_CHANNEL_ID / YOUTUBE_LIVE_ID / YOUTUBE_HANDLE)"
        ) from None

    config = load_live_chat_config(path=args.config) if args.config else load_live_chat_config()
    if config.log_dir:
        enable_file_logging(config.log_dir)

    log.info(f"Starting {as_string()}")
    chat = LiveChat(identifier, interval_ms=args.interval, config=config)

    if not await chat.start():
        error = chat.errors.get_nowait() if not chat.errors.empty() else None
        log.error(f"Could not start live chat: {error}")
        return 1

    log.info(f"Live chat POC connected to {chat.live_id}, listening for messages")
    errors_task = asyncio.create_task(_drain_errors(chat))

    try:
        async for item in chat.iter_items():
            if args.json:
                print(json.dumps(item.to_event(), ensure_ascii=False))
            else:
                print(format_item(item))
    except asyncio.CancelledError:
        raise
    finally:
        errors_task.cancel()
        await chat.stop("poc shutdown")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="YouTube live chat smoke test (watch page + get_live_chat polling)"
    )
    parser.add_argument("--channel", help="Channel id (UC...) currently streaming")
    parser.add_argument("--live", help="Live video id")
    parser.add_argument("--handle", help="Channel handle, with or without @")
    parser.add_argument("--interval", type=int, default=None, help="Poll interval in ms")
    parser.add_argument("--config", help="Path to a JSON config file")
    parser.add_argument("--json", action="store_true", help="Print items as JSON events")
    parser.add_argument("--version", action="version", version=as_string())

    args = parser.parse_args(argv)
    try:
        return asyncio.run(_run(args))
    except KeyboardInterrupt:
        log.info("KeyboardInterrupt received, shutting down POC")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
