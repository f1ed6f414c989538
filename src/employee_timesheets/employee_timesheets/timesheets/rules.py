from __future__ import annotations

from datetime import datetime
from typing import Optional

WINDOW_MESSAGE = "Start time must be before end time."


def check_window(start_time: datetime, end_time: datetime) -> Optional[str]:
    """A timesheet must start strictly before it ends."""
    if start_time >= end_time:
        return WINDOW_MESSAGE
    return None
