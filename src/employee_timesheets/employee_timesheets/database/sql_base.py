from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy.engine import Connection, CursorResult
from sqlalchemy.exc import SQLAlchemyError

from ..core.exceptions import StorageError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_connection(conn_factory: DatabaseConnection) -> Iterator[Connection]:
    try:
        with conn_factory.statement_lock:
            conn = conn_factory.connection()
            if conn.invalidated:
                # Discard the dead transaction; the next statement reconnects.
                conn.rollback()
            try:
                yield conn
            except SQLAlchemyError:
                # Also clears an invalidated handle so it can reconnect.
                conn.rollback()
                raise
    except SQLAlchemyError as exc:
        logger.error("Datastore operation failed: %s", exc)
        raise StorageError("Datastore operation failed") from exc


def fetchone(result: CursorResult) -> Optional[Dict[str, Any]]:
    row = result.mappings().first()
    return dict(row) if row else None


def fetchall(result: CursorResult) -> List[Dict[str, Any]]:
    return [dict(row) for row in result.mappings().all()]
