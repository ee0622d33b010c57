import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

_LOGGERS: Dict[str, logging.Logger] = {}
_FILE_HANDLER: Optional[logging.FileHandler] = None

_FORMATTER = logging.Formatter(
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)


def _open_file_handler(directory: str, runtime: str) -> logging.FileHandler:
    path = Path(directory)
    path.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    logfile = path / f"{runtime}-{timestamp}.log"

    handler = logging.FileHandler(logfile, encoding="utf-8")
    handler.setFormatter(_FORMATTER)
    return handler


def enable_file_logging(log_dir: str, *, runtime: str = "ytlivechat") -> None:
    """
    Send every logger (existing and future) to one per-run log file.

    Called once by entry points after configuration is loaded; a second
    call is ignored.
    """
    global _FILE_HANDLER
    if _FILE_HANDLER is not None:
        return

    _FILE_HANDLER = _open_file_handler(log_dir, runtime)
    for logger in _LOGGERS.values():
        logger.addHandler(_FILE_HANDLER)


def get_logger(name: str, *, runtime: str = "ytlivechat") -> logging.Logger:
    """
    Create or retrieve a named logger.

    Parameters:
    - name: logger namespace (e.g. youtube.chat, youtube.watch_page)
    - runtime: log file prefix and logger namespace root

    Console-only unless file logging is enabled, either through
    enable_file_logging() or the YTLIVECHAT_LOG_DIR environment variable.
    """
    cache_key = f"{runtime}:{name}"
    if cache_key in _LOGGERS:
        return _LOGGERS[cache_key]

    logger = logging.getLogger(cache_key)
    logger.setLevel(logging.DEBUG)

    # ------------------------------
    # Console handler
    # ------------------------------
    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(_FORMATTER)
    logger.addHandler(console)

    # ------------------------------
    # File handler (one per run)
    # ------------------------------
    directory = os.getenv("YTLIVECHAT_LOG_DIR")
    if directory and _FILE_HANDLER is None:
        enable_file_logging(directory, runtime=runtime)
    if _FILE_HANDLER is not None:
        logger.addHandler(_FILE_HANDLER)

    logger.propagate = False
    _LOGGERS[cache_key] = logger

    return logger
