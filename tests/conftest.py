from __future__ import annotations

from datetime import datetime

import pytest

from src.employee_timesheets.employee_timesheets.database.connection import DatabaseConnection
from src.employee_timesheets.employee_timesheets.main import create_app


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 6, 15, 9, 30, 0)


@pytest.fixture
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    DatabaseConnection.reset_instance()
    flask_app = create_app(
        {
            "DATABASE_URL": "sqlite:///:memory:",
            "UPLOAD_ROOT": str(tmp_path / "public"),
        }
    )
    yield flask_app
    DatabaseConnection.reset_instance()


@pytest.fixture
def container(app):
    return app.extensions["container"]


@pytest.fixture
def client(app):
    return app.test_client()
