from __future__ import annotations

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, MetaData, Numeric, String, Table, Text
from sqlalchemy.dialects import mysql

metadata = MetaData()

# Millisecond precision on MySQL; SQLite keeps the ISO text as written.
_DateTimeMs = DateTime().with_variant(mysql.DATETIME(fsp=3), "mysql")

employees = Table(
    "employees",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("full_name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("phone", String(64), nullable=False),
    Column("date_of_birth", Date, nullable=False),
    Column("job_title", String(255), nullable=False),
    Column("department", String(255), nullable=False),
    Column("salary", Numeric(12, 2), nullable=False),
    Column("start_date", Date, nullable=False),
    Column("end_date", Date, nullable=True),
    Column("photo_path", String(512), nullable=True),
    Column("document_path", String(512), nullable=True),
)

timesheets = Table(
    "timesheets",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("employee_id", Integer, ForeignKey("employees.id"), nullable=False, index=True),
    Column("start_time", _DateTimeMs, nullable=False),
    Column("end_time", _DateTimeMs, nullable=False),
    Column("summary", Text, nullable=True),
)
