"""Business rules checked before an employee write is committed.

Each rule returns ``None`` when the candidate values are accepted, otherwise
the message describing the violated rule.
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.constants import MAX_SALARY, MIN_EMPLOYEE_AGE, MIN_SALARY

UNDERAGE_MESSAGE = f"Employee must be at least {MIN_EMPLOYEE_AGE} years old."
LOW_SALARY_MESSAGE = f"Salary must be at least ${MIN_SALARY}."
UPDATE_MESSAGE = f"All required fields must be filled, and salary must be at least ${MIN_SALARY}."
HIGH_SALARY_MESSAGE = f"Salary must not exceed ${MAX_SALARY}."


def age_in_years(date_of_birth: date, today: date) -> int:
    # Calendar-year subtraction, birthdays are not taken into account.
    return today.year - date_of_birth.year


def check_creation(*, date_of_birth: date, salary: Optional[Decimal], today: date) -> Optional[str]:
    if age_in_years(date_of_birth, today) < MIN_EMPLOYEE_AGE:
        return UNDERAGE_MESSAGE
    if salary is None or salary < MIN_SALARY:
        return LOW_SALARY_MESSAGE
    if salary > MAX_SALARY:
        return HIGH_SALARY_MESSAGE
    return None


def check_update(
    *,
    full_name: Optional[str],
    email: Optional[str],
    phone: Optional[str],
    start_date: Optional[date],
    salary: Optional[Decimal],
) -> Optional[str]:
    if not full_name or not email or not phone or start_date is None:
        return UPDATE_MESSAGE
    if salary is None or salary < MIN_SALARY:
        return UPDATE_MESSAGE
    if salary > MAX_SALARY:
        return HIGH_SALARY_MESSAGE
    return None
