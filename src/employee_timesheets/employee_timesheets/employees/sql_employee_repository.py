from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from sqlalchemy import text

from ..common.datetime_utils import format_date, to_date
from ..common.query_builder import ListQuery, build_count, build_select
from ..database.connection import DatabaseConnection
from ..database.sql_base import db_connection, fetchall, fetchone
from .model import Employee, EmployeeChoice, EmployeeListRow
from .repository import EMPLOYEE_SORT_COLUMNS, EmployeeRepository


def _to_decimal(value: Any) -> Decimal:
    # SQLite hands back int/float for NUMERIC columns, MySQL a Decimal.
    return value if isinstance(value, Decimal) else Decimal(str(value))


def _row_to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(r["id"]),
        full_name=r["full_name"],
        email=r["email"],
        phone=r["phone"],
        date_of_birth=to_date(r.get("date_of_birth")),
        job_title=r["job_title"],
        department=r["department"],
        salary=_to_decimal(r["salary"]),
        start_date=to_date(r.get("start_date")),
        end_date=to_date(r.get("end_date")),
        photo_path=r.get("photo_path"),
        document_path=r.get("document_path"),
    )


class SQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_connection(self._conn_factory) as conn:
            result = conn.execute(
                text(
                    """
                    SELECT id, full_name, email, phone, date_of_birth, job_title, department,
                           salary, start_date, end_date, photo_path, document_path
                    FROM employees
                    WHERE id = :employee_id
                    """
                ),
                {"employee_id": employee_id},
            )
            row = fetchone(result)
            return _row_to_employee(row) if row else None

    def exists(self, employee_id: int) -> bool:
        with db_connection(self._conn_factory) as conn:
            result = conn.execute(text("SELECT 1 AS found FROM employees WHERE id = :employee_id"), {"employee_id": employee_id})
            return fetchone(result) is not None

    def list_page(self, query: ListQuery, *, page_size: int) -> Sequence[EmployeeListRow]:
        sql, params = build_select(
            select_from="SELECT id, full_name, email, job_title, department, salary FROM employees",
            search_column="full_name",
            sort_columns=EMPLOYEE_SORT_COLUMNS,
            tiebreak_column="id",
            query=query,
            page_size=page_size,
        )
        with db_connection(self._conn_factory) as conn:
            rows = fetchall(conn.execute(text(sql), params))
            return [
                EmployeeListRow(
                    employee_id=int(r["id"]),
                    full_name=r["full_name"],
                    email=r["email"],
                    job_title=r["job_title"],
                    department=r["department"],
                    salary=_to_decimal(r["salary"]),
                )
                for r in rows
            ]

    def count(self, query: ListQuery) -> int:
        sql, params = build_count(count_from="employees", search_column="full_name", query=query)
        with db_connection(self._conn_factory) as conn:
            row = fetchone(conn.execute(text(sql), params))
            return int(row["count"]) if row else 0

    def list_choices(self) -> Sequence[EmployeeChoice]:
        with db_connection(self._conn_factory) as conn:
            rows = fetchall(conn.execute(text("SELECT id, full_name FROM employees ORDER BY full_name, id")))
            return [EmployeeChoice(employee_id=int(r["id"]), full_name=r["full_name"]) for r in rows]

    def create(
        self,
        *,
        full_name: str,
        email: str,
        phone: str,
        date_of_birth: date,
        job_title: str,
        department: str,
        salary: Decimal,
        start_date: date,
        end_date: Optional[date],
        photo_path: Optional[str],
        document_path: Optional[str],
    ) -> int:
        with db_connection(self._conn_factory) as conn:
            result = conn.execute(
                text(
                    """
                    INSERT INTO employees(full_name, email, phone, date_of_birth, job_title, department,
                                          salary, start_date, end_date, photo_path, document_path)
                    VALUES(:full_name, :email, :phone, :date_of_birth, :job_title, :department,
                           :salary, :start_date, :end_date, :photo_path, :document_path)
                    """
                ),
                {
                    "full_name": full_name,
                    "email": email,
                    "phone": phone,
                    "date_of_birth": format_date(date_of_birth),
                    "job_title": job_title,
                    "department": department,
                    "salary": str(salary),
                    "start_date": format_date(start_date),
                    "end_date": format_date(end_date),
                    "photo_path": photo_path,
                    "document_path": document_path,
                },
            )
            return int(result.lastrowid)

    def update(
        self,
        *,
        employee_id: int,
        full_name: str,
        email: str,
        phone: str,
        job_title: str,
        department: str,
        salary: Decimal,
        start_date: date,
        end_date: Optional[date],
    ) -> bool:
        with db_connection(self._conn_factory) as conn:
            result = conn.execute(
                text(
                    """
                    UPDATE employees
                    SET full_name = :full_name, email = :email, phone = :phone, job_title = :job_title,
                        department = :department, salary = :salary, start_date = :start_date, end_date = :end_date
                    WHERE id = :employee_id
                    """
                ),
                {
                    "employee_id": employee_id,
                    "full_name": full_name,
                    "email": email,
                    "phone": phone,
                    "job_title": job_title,
                    "department": department,
                    "salary": str(salary),
                    "start_date": format_date(start_date),
                    "end_date": format_date(end_date),
                },
            )
            return result.rowcount > 0
