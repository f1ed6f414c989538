from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import SortOrder


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: plain data object, no datastore access here.
    """

    employee_id: int
    full_name: str
    email: str
    phone: str
    date_of_birth: Optional[date]
    job_title: str
    department: str
    salary: Decimal
    start_date: Optional[date]
    end_date: Optional[date] = None
    photo_path: Optional[str] = None
    document_path: Optional[str] = None


@dataclass(frozen=True)
class EmployeeListRow:
    employee_id: int
    full_name: str
    email: str
    job_title: str
    department: str
    salary: Decimal


@dataclass(frozen=True)
class EmployeeChoice:
    employee_id: int
    full_name: str


@dataclass(frozen=True)
class EmployeePage:
    rows: Sequence[EmployeeListRow]
    total: int
    page: int
    page_size: int
    page_count: int
    search: str
    sort: str
    order: SortOrder
