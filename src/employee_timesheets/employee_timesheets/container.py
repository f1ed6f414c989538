from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .database.connection import DBConfig, DatabaseConnection
from .employees.service import EmployeeService
from .employees.sql_employee_repository import SQLEmployeeRepository
from .timesheets.service import TimesheetService
from .timesheets.sql_timesheet_repository import SQLTimesheetRepository
from .uploads.storage import AttachmentStorage


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: SQLEmployeeRepository
    timesheets_repo: SQLTimesheetRepository
    attachment_storage: AttachmentStorage

    employee_service: EmployeeService
    timesheet_service: TimesheetService


def build_container(
    *,
    database_url: str,
    upload_root: Path,
    engine_options: Optional[Dict[str, Any]] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig(url=database_url, engine_options=dict(engine_options or {})))

    employees_repo = SQLEmployeeRepository(conn)
    timesheets_repo = SQLTimesheetRepository(conn)
    attachment_storage = AttachmentStorage(Path(upload_root))

    employee_service = EmployeeService(employees_repo, attachment_storage)
    timesheet_service = TimesheetService(timesheets_repo, employees_repo)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        timesheets_repo=timesheets_repo,
        attachment_storage=attachment_storage,
        employee_service=employee_service,
        timesheet_service=timesheet_service,
    )
