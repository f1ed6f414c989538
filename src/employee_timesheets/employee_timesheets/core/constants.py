"""Business constants.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

MIN_EMPLOYEE_AGE = 18
MIN_SALARY = Decimal("3000")
# Largest value the NUMERIC(12, 2) salary column holds.
MAX_SALARY = Decimal("9999999999.99")

EMPLOYEES_PAGE_SIZE = 5

PHOTOS_DIR = "uploads/photos"
DOCUMENTS_DIR = "uploads/documents"
