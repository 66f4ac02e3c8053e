"""Shared datetime helpers for enforcing UTC awareness."""

from __future__ import annotations

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

DISPLAY_FORMAT = "%Y/%m/%d %H:%M:%S"


def ensure_utc(value: datetime) -> datetime:
    """Return a timezone-aware datetime in UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def utc_now() -> datetime:
    """Return the current UTC datetime."""

    return datetime.now(UTC)


def format_local(value: datetime, timezone: str = "Asia/Shanghai") -> str:
    """Render a timestamp in the given display timezone, e.g. ``2025/10/16 20:00:00``."""

    return ensure_utc(value).astimezone(ZoneInfo(timezone)).strftime(DISPLAY_FORMAT)
