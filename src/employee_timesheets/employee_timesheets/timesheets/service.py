from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import parse_iso_datetime
from ..common.query_builder import ListQuery
from ..common.results import ActionResult
from ..common.validators import optional_text, parse_int, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import Timesheet, TimesheetListing
from .repository import TimesheetRepository
from .rules import check_window

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _TimesheetInput:
    employee_id: int
    start_time: datetime
    end_time: datetime
    summary: Optional[str]


def _parse_time(value: Optional[str], field_name: str) -> datetime:
    raw = require_non_empty(value, field_name)
    try:
        parsed = parse_iso_datetime(raw)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date and time")
    if parsed.tzinfo is not None:
        # Times are stored as naive local wall-clock values.
        raise ValidationError(f"{field_name} must not include a UTC offset")
    return parsed


class TimesheetService:
    """Use cases: list, read, create and update timesheets."""

    def __init__(self, timesheets: TimesheetRepository, employees: EmployeeRepository):
        self._timesheets = timesheets
        self._employees = employees

    def list_all(self, query: ListQuery) -> TimesheetListing:
        return TimesheetListing(
            rows=self._timesheets.list_all(query),
            search=query.search,
            sort=query.sort,
            order=query.order,
        )

    def get(self, timesheet_id: int) -> Timesheet:
        timesheet = self._timesheets.get_by_id(int(timesheet_id))
        if not timesheet:
            raise NotFoundError("Timesheet not found")
        return timesheet

    def _validated(
        self,
        *,
        employee_id: Optional[str],
        start_time: Optional[str],
        end_time: Optional[str],
        summary: Optional[str],
    ) -> _TimesheetInput:
        employee = parse_int(require_non_empty(employee_id, "Employee"), "Employee")
        started = _parse_time(start_time, "Start time")
        ended = _parse_time(end_time, "End time")
        violation = check_window(started, ended)
        if violation:
            raise ValidationError(violation)

        if not self._employees.exists(employee):
            raise ValidationError("Selected employee does not exist.")

        return _TimesheetInput(employee_id=employee, start_time=started, end_time=ended, summary=optional_text(summary))

    def create(
        self,
        *,
        employee_id: Optional[str],
        start_time: Optional[str],
        end_time: Optional[str],
        summary: Optional[str] = None,
    ) -> int:
        data = self._validated(employee_id=employee_id, start_time=start_time, end_time=end_time, summary=summary)
        timesheet_id = self._timesheets.create(
            employee_id=data.employee_id,
            start_time=data.start_time,
            end_time=data.end_time,
            summary=data.summary,
        )
        logger.info("Created timesheet %s for employee %s", timesheet_id, data.employee_id)
        return timesheet_id

    def update(
        self,
        timesheet_id: int,
        *,
        employee_id: Optional[str],
        start_time: Optional[str],
        end_time: Optional[str],
        summary: Optional[str] = None,
    ) -> ActionResult:
        self.get(timesheet_id)

        try:
            data = self._validated(employee_id=employee_id, start_time=start_time, end_time=end_time, summary=summary)
        except ValidationError as e:
            logger.info("Rejected update of timesheet %s: %s", timesheet_id, e)
            return ActionResult.failed(str(e))

        self._timesheets.update(
            timesheet_id=int(timesheet_id),
            employee_id=data.employee_id,
            start_time=data.start_time,
            end_time=data.end_time,
            summary=data.summary,
        )
        logger.info("Updated timesheet %s", timesheet_id)
        return ActionResult.succeeded("Timesheet updated successfully!")
