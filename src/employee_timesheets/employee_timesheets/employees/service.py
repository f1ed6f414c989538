from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional, Sequence

from werkzeug.datastructures import FileStorage

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.query_builder import ListQuery, page_count
from ..common.results import ActionResult
from ..common.validators import optional_text, parse_decimal, require_non_empty
from ..core.constants import EMPLOYEES_PAGE_SIZE
from ..core.enums import AttachmentKind
from ..core.exceptions import NotFoundError, ValidationError
from ..uploads.storage import AttachmentStore
from .model import Employee, EmployeeChoice, EmployeePage
from .repository import EmployeeRepository
from .rules import check_creation, check_update

logger = logging.getLogger(__name__)


def _parse_required_date(value: Optional[str], field_name: str) -> date:
    raw = require_non_empty(value, field_name)
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def _parse_optional_date(value: Optional[str], field_name: str) -> Optional[date]:
    raw = optional_text(value)
    if raw is None:
        return None
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


class EmployeeService:
    """Use cases: list, read, create and update employee records."""

    def __init__(
        self,
        employees: EmployeeRepository,
        attachments: AttachmentStore,
        *,
        today: Callable[[], date] = lambda: now_local().date(),
        page_size: int = EMPLOYEES_PAGE_SIZE,
    ):
        self._employees = employees
        self._attachments = attachments
        self._today = today
        self._page_size = page_size

    def list_page(self, query: ListQuery) -> EmployeePage:
        total = self._employees.count(query)
        rows = self._employees.list_page(query, page_size=self._page_size)
        return EmployeePage(
            rows=rows,
            total=total,
            page=query.page,
            page_size=self._page_size,
            page_count=page_count(total, self._page_size),
            search=query.search,
            sort=query.sort,
            order=query.order,
        )

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def list_choices(self) -> Sequence[EmployeeChoice]:
        return self._employees.list_choices()

    def create(
        self,
        *,
        full_name: Optional[str],
        email: Optional[str],
        phone: Optional[str],
        date_of_birth: Optional[str],
        job_title: Optional[str],
        department: Optional[str],
        salary: Optional[str],
        start_date: Optional[str],
        end_date: Optional[str] = None,
        photo: Optional[FileStorage] = None,
        document: Optional[FileStorage] = None,
    ) -> int:
        birth_date = _parse_required_date(date_of_birth, "Date of birth")
        salary_value = parse_decimal(salary)
        violation = check_creation(date_of_birth=birth_date, salary=salary_value, today=self._today())
        if violation:
            raise ValidationError(violation)

        full_name = require_non_empty(full_name, "Full name")
        email = require_non_empty(email, "Email")
        phone = require_non_empty(phone, "Phone")
        job_title = require_non_empty(job_title, "Job title")
        department = require_non_empty(department, "Department")
        started = _parse_required_date(start_date, "Start date")
        ended = _parse_optional_date(end_date, "End date")

        written: List[str] = []
        try:
            photo_path = self._attachments.save(AttachmentKind.PHOTO, photo)
            if photo_path:
                written.append(photo_path)
            document_path = self._attachments.save(AttachmentKind.DOCUMENT, document)
            if document_path:
                written.append(document_path)

            employee_id = self._employees.create(
                full_name=full_name,
                email=email,
                phone=phone,
                date_of_birth=birth_date,
                job_title=job_title,
                department=department,
                salary=salary_value,
                start_date=started,
                end_date=ended,
                photo_path=photo_path,
                document_path=document_path,
            )
        except Exception:
            for path in written:
                self._attachments.discard(path)
            raise

        logger.info("Created employee %s (%s)", employee_id, full_name)
        return employee_id

    def update(
        self,
        employee_id: int,
        *,
        full_name: Optional[str],
        email: Optional[str],
        phone: Optional[str],
        job_title: Optional[str],
        department: Optional[str],
        salary: Optional[str],
        start_date: Optional[str],
        end_date: Optional[str] = None,
    ) -> ActionResult:
        self.get(employee_id)

        full_name = optional_text(full_name)
        email = optional_text(email)
        phone = optional_text(phone)
        salary_value = parse_decimal(salary)
        try:
            started = _parse_optional_date(start_date, "Start date")
            ended = _parse_optional_date(end_date, "End date")
        except ValidationError as e:
            return ActionResult.failed(str(e))

        violation = check_update(
            full_name=full_name,
            email=email,
            phone=phone,
            start_date=started,
            salary=salary_value,
        )
        if violation:
            logger.info("Rejected update of employee %s: %s", employee_id, violation)
            return ActionResult.failed(violation)

        self._employees.update(
            employee_id=int(employee_id),
            full_name=full_name,
            email=email,
            phone=phone,
            job_title=(job_title or "").strip(),
            department=(department or "").strip(),
            salary=salary_value,
            start_date=started,
            end_date=ended,
        )
        logger.info("Updated employee %s", employee_id)
        return ActionResult.succeeded("Employee updated successfully!")
