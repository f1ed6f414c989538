from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List, Optional

from sqlalchemy import inspect

from .connection import DatabaseConnection
from .schema import metadata
from .sql_base import db_connection

logger = logging.getLogger(__name__)


def split_sql_statements(sql: str) -> Iterator[str]:
    """Yield the statements of a seed script.

    A ``;`` inside a quoted literal does not end a statement, and whole-line
    ``--`` comments are dropped.
    """
    body = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))
    start = 0
    quote: Optional[str] = None
    i = 0
    while i < len(body):
        ch = body[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                if body[i + 1:i + 2] == quote:
                    # doubled quote, still inside the literal
                    i += 2
                    continue
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            statement = body[start:i].strip()
            if statement:
                yield statement
            start = i + 1
        i += 1

    tail = body[start:].strip()
    if tail:
        yield tail


def apply_schema(conn_factory: DatabaseConnection) -> None:
    """Create missing tables (idempotent)."""
    with db_connection(conn_factory) as conn:
        metadata.create_all(conn, checkfirst=True)


def list_tables(conn_factory: DatabaseConnection) -> List[str]:
    with db_connection(conn_factory) as conn:
        return sorted(inspect(conn).get_table_names())


def apply_seed_sql(conn_factory: DatabaseConnection, *, seed_path: Path) -> int:
    """Run every statement of a seed file; returns how many were executed."""
    sql = seed_path.read_text(encoding="utf-8")
    count = 0
    with db_connection(conn_factory) as conn:
        for stmt in split_sql_statements(sql):
            conn.exec_driver_sql(stmt)
            count += 1
    logger.info("Applied %d seed statements from %s", count, seed_path.name)
    return count
