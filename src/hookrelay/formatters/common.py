"""Helpers shared by the formatters."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

MAX_TEXT_LENGTH = 1000
ELLIPSIS = "..."


def truncate(text: str, limit: int = MAX_TEXT_LENGTH) -> str:
    """Cut text longer than ``limit`` to exactly ``limit`` chars, ending in an ellipsis."""
    if len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def section(payload: Any, key: str) -> dict[str, Any]:
    """Return ``payload[key]`` when it is an object, else an empty dict."""
    if not isinstance(payload, dict):
        return {}
    value = payload.get(key)
    return value if isinstance(value, dict) else {}


def text(payload: dict[str, Any], key: str, default: str = "") -> str:
    """Return ``payload[key]`` as a string, or ``default`` when missing or null."""
    value = payload.get(key)
    if value is None:
        return default
    return str(value)
