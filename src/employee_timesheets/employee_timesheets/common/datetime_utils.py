from __future__ import annotations

import time
from datetime import date, datetime
from typing import Any, Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an HTML datetime-local / ISO-8601 string (``2024-05-01T09:30``)."""
    return datetime.fromisoformat(value.strip())


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def epoch_millis() -> int:
    return int(time.time() * 1000)


def format_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def format_datetime(value: datetime) -> str:
    """Datastore representation, kept at millisecond precision."""
    return value.isoformat(sep=" ", timespec="milliseconds")


def to_date(value: Any) -> Optional[date]:
    """Normalize DATE values across drivers.

    MySQL returns ``datetime.date``; SQLite hands back the stored ISO string.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_iso_date(value[:10])
    raise TypeError(f"Unsupported DATE value type: {type(value)!r}")


def to_datetime(value: Any) -> Optional[datetime]:
    """Normalize DATETIME values across drivers (``datetime`` or ISO string)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return parse_iso_datetime(value)
    raise TypeError(f"Unsupported DATETIME value type: {type(value)!r}")
