from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..common.query_builder import ListQuery
from .model import Employee, EmployeeChoice, EmployeeListRow

# Public sort key -> SQL column. Only these expressions ever reach ORDER BY.
EMPLOYEE_SORT_COLUMNS = {
    "full_name": "full_name",
    "email": "email",
    "job_title": "job_title",
    "department": "department",
    "salary": "salary",
}
EMPLOYEE_DEFAULT_SORT = "full_name"


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): the service layer depends on this interface, not on a concrete datastore.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def exists(self, employee_id: int) -> bool:
        raise NotImplementedError

    def list_page(self, query: ListQuery, *, page_size: int) -> Sequence[EmployeeListRow]:
        raise NotImplementedError

    def count(self, query: ListQuery) -> int:
        raise NotImplementedError

    def list_choices(self) -> Sequence[EmployeeChoice]:
        raise NotImplementedError

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
        raise NotImplementedError

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
        raise NotImplementedError
