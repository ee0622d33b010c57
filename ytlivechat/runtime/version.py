"""Runtime version metadata for ytlivechat.

This module is import-safe and exposes version identifiers for the command
line tool without executing side effects on import.
"""

from __future__ import annotations

PROJECT_NAME = "ytlivechat"
VERSION = "0.3.0"
BUILD = "2026.10"

__all__ = [
    "PROJECT_NAME",
    "VERSION",
    "BUILD",
    "as_string",
]


def as_string() -> str:
    return f"{PROJECT_NAME} {VERSION} (Build {BUILD})"
