from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from sqlalchemy import text

from ..common.datetime_utils import format_datetime, to_datetime
from ..common.query_builder import ListQuery, build_select
from ..database.connection import DatabaseConnection
from ..database.sql_base import db_connection, fetchall, fetchone
from .model import Timesheet
from .repository import TIMESHEET_SORT_COLUMNS, TimesheetRepository

_SELECT_JOINED = """
SELECT t.id, t.employee_id, t.start_time, t.end_time, t.summary, e.full_name
FROM timesheets t
JOIN employees e ON t.employee_id = e.id
"""


def _row_to_timesheet(r: Dict[str, Any]) -> Timesheet:
    return Timesheet(
        timesheet_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        start_time=to_datetime(r["start_time"]),
        end_time=to_datetime(r["end_time"]),
        summary=r.get("summary"),
        full_name=r.get("full_name"),
    )


class SQLTimesheetRepository(TimesheetRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, timesheet_id: int) -> Optional[Timesheet]:
        with db_connection(self._conn_factory) as conn:
            row = fetchone(conn.execute(text(_SELECT_JOINED + "WHERE t.id = :timesheet_id"), {"timesheet_id": timesheet_id}))
            return _row_to_timesheet(row) if row else None

    def list_all(self, query: ListQuery) -> Sequence[Timesheet]:
        sql, params = build_select(
            select_from=_SELECT_JOINED.strip(),
            search_column="e.full_name",
            sort_columns=TIMESHEET_SORT_COLUMNS,
            tiebreak_column="t.id",
            query=query,
        )
        with db_connection(self._conn_factory) as conn:
            return [_row_to_timesheet(r) for r in fetchall(conn.execute(text(sql), params))]

    def create(self, *, employee_id: int, start_time: datetime, end_time: datetime, summary: Optional[str]) -> int:
        with db_connection(self._conn_factory) as conn:
            result = conn.execute(
                text(
                    """
                    INSERT INTO timesheets(employee_id, start_time, end_time, summary)
                    VALUES(:employee_id, :start_time, :end_time, :summary)
                    """
                ),
                {
                    "employee_id": employee_id,
                    "start_time": format_datetime(start_time),
                    "end_time": format_datetime(end_time),
                    "summary": summary,
                },
            )
            return int(result.lastrowid)

    def update(
        self,
        *,
        timesheet_id: int,
        employee_id: int,
        start_time: datetime,
        end_time: datetime,
        summary: Optional[str],
    ) -> bool:
        with db_connection(self._conn_factory) as conn:
            result = conn.execute(
                text(
                    """
                    UPDATE timesheets
                    SET employee_id = :employee_id, start_time = :start_time, end_time = :end_time, summary = :summary
                    WHERE id = :timesheet_id
                    """
                ),
                {
                    "timesheet_id": timesheet_id,
                    "employee_id": employee_id,
                    "start_time": format_datetime(start_time),
                    "end_time": format_datetime(end_time),
                    "summary": summary,
                },
            )
            return result.rowcount > 0
