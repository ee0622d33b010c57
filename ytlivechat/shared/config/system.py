"""
Live chat runtime configuration.

Design rules:
- Import-safe (no side effects)
- JSON-only configuration file, environment variables override it
- Invalid values are ignored per-key, not globally
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

from ytlivechat.shared.logging.logger import get_logger

log = get_logger("shared.config.system")

DEFAULT_INTERVAL_MS = 1000
DEFAULT_BASE_URL = "https://www.youtube.com"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

_ENV_KEYS = {
    "interval_ms": "YTLIVECHAT_INTERVAL_MS",
    "base_url": "YTLIVECHAT_BASE_URL",
    "user_agent": "YTLIVECHAT_USER_AGENT",
    "request_timeout": "YTLIVECHAT_TIMEOUT",
    "log_dir": "YTLIVECHAT_LOG_DIR",
}


@dataclass(frozen=True)
class LiveChatConfig:
    interval_ms: int = DEFAULT_INTERVAL_MS
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = 15.0
    item_queue_size: int = 100
    error_queue_size: int = 10
    log_dir: Optional[str] = None

    @property
    def interval_seconds(self) -> float:
        # zero or negative means "use the default"
        interval = self.interval_ms if self.interval_ms > 0 else DEFAULT_INTERVAL_MS
        return interval / 1000.0


def _load_json(path: Path) -> Dict[str, Any]:
    if not path.exists():
        log.warning(f"live chat config not found at {path}; using defaults")
        return {}

    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        log.warning(f"Failed to load live chat config ({e}); using defaults")
        return {}

    if not isinstance(data, dict):
        log.warning("live chat config root is not an object; ignoring file")
        return {}
    return data


def _coerce_int(name: str, value: Any, default: int) -> int:
    if isinstance(value, bool):
        log.warning(f"{name} must be an integer; using {default}")
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        log.warning(f"{name} must be an integer; using {default}")
        return default


def _coerce_float(name: str, value: Any, default: float) -> float:
    if isinstance(value, bool):
        log.warning(f"{name} must be a number; using {default}")
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        log.warning(f"{name} must be a number; using {default}")
        return default


def _coerce_str(name: str, value: Any, default: Optional[str]) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    log.warning(f"{name} must be a non-empty string; using default")
    return default


def _apply(config: LiveChatConfig, raw: Dict[str, Any]) -> LiveChatConfig:
    updates: Dict[str, Any] = {}

    if "interval_ms" in raw:
        updates["interval_ms"] = _coerce_int(
            "interval_ms", raw["interval_ms"], config.interval_ms
        )
    if "item_queue_size" in raw:
        updates["item_queue_size"] = _coerce_int(
            "item_queue_size", raw["item_queue_size"], config.item_queue_size
        )
    if "error_queue_size" in raw:
        updates["error_queue_size"] = _coerce_int(
            "error_queue_size", raw["error_queue_size"], config.error_queue_size
        )
    if "request_timeout" in raw:
        updates["request_timeout"] = _coerce_float(
            "request_timeout", raw["request_timeout"], config.request_timeout
        )
    if "base_url" in raw:
        base_url = _coerce_str("base_url", raw["base_url"], config.base_url)
        updates["base_url"] = base_url.rstrip("/") if base_url else config.base_url
    if "user_agent" in raw:
        updates["user_agent"] = _coerce_str(
            "user_agent", raw["user_agent"], config.user_agent
        )
    if "log_dir" in raw:
        updates["log_dir"] = _coerce_str("log_dir", raw["log_dir"], config.log_dir)

    for key in ("item_queue_size", "error_queue_size"):
        if key in updates and updates[key] < 1:
            log.warning(f"{key} must be positive; using {getattr(config, key)}")
            updates[key] = getattr(config, key)

    return replace(config, **updates)


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for field_name, env_key in _ENV_KEYS.items():
        value = os.getenv(env_key)
        if value is not None and value.strip():
            overrides[field_name] = value.strip()
    return overrides


def load_live_chat_config(
    raw: Optional[Dict[str, Any]] = None,
    *,
    path: Optional[Path] = None,
) -> LiveChatConfig:
    """
    Build a LiveChatConfig from a JSON object (or file) plus environment.

    Precedence: defaults < raw / file < YTLIVECHAT_* environment variables.
    """
    if raw is None:
        raw = _load_json(Path(path)) if path is not None else {}
    if not isinstance(raw, dict):
        log.warning("live chat config is not an object; using defaults")
        raw = {}

    config = _apply(LiveChatConfig(), raw)
    return _apply(config, _env_overrides())
