from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.employee_timesheets.employee_timesheets.database.bootstrap import apply_schema, list_tables
from src.employee_timesheets.employee_timesheets.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection.get_instance(DBConfig(url=settings.DATABASE_URL))
    try:
        apply_schema(conn)
        tables = list_tables(conn)
        print(f"OK: Created schema -> {conn.url} (tables={', '.join(tables)})")
    finally:
        DatabaseConnection.reset_instance()


if __name__ == "__main__":
    main()
