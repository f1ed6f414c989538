from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..common.query_builder import ListQuery
from .model import Timesheet

# Public sort key -> SQL column of the timesheets/employees join.
TIMESHEET_SORT_COLUMNS = {
    "full_name": "e.full_name",
    "start_time": "t.start_time",
}
TIMESHEET_DEFAULT_SORT = "start_time"


class TimesheetRepository(Protocol):
    def get_by_id(self, timesheet_id: int) -> Optional[Timesheet]:
        raise NotImplementedError

    def list_all(self, query: ListQuery) -> Sequence[Timesheet]:
        raise NotImplementedError

    def create(self, *, employee_id: int, start_time: datetime, end_time: datetime, summary: Optional[str]) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        timesheet_id: int,
        employee_id: int,
        start_time: datetime,
        end_time: datetime,
        summary: Optional[str],
    ) -> bool:
        raise NotImplementedError
