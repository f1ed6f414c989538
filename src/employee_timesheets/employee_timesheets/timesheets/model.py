from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import SortOrder


@dataclass(frozen=True)
class Timesheet:
    timesheet_id: int
    employee_id: int
    start_time: datetime
    end_time: datetime
    summary: Optional[str] = None
    full_name: Optional[str] = None  # joined from employees


@dataclass(frozen=True)
class TimesheetListing:
    rows: Sequence[Timesheet]
    search: str
    sort: str
    order: SortOrder
