from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from flask import Flask, render_template

from config import get_settings_module

from .container import build_container
from .core.exceptions import NotFoundError, StorageError
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .employees.controller import register as register_employees
from .timesheets.controller import register as register_timesheets
from .uploads.controller import register as register_uploads

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]

_SETTING_NAMES = (
    "SECRET_KEY",
    "DEBUG",
    "TESTING",
    "DATABASE_URL",
    "UPLOAD_ROOT",
    "MAX_CONTENT_LENGTH",
    "AUTO_INIT_DB",
    "AUTO_SEED_DB",
    "LOG_LEVEL",
)


def _load_settings(overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    values = {name: getattr(settings, name) for name in _SETTING_NAMES if hasattr(settings, name)}
    values["SETTINGS_MODULE"] = settings_module
    values.update(overrides or {})
    return values


def create_app(overrides: Optional[Dict[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    settings = _load_settings(overrides)

    logging.basicConfig(
        level=str(settings.get("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = Flask(__name__, template_folder=str(REPO_ROOT / "templates"))
    app.config.update(settings)
    app.secret_key = settings["SECRET_KEY"]

    upload_root = Path(settings.get("UPLOAD_ROOT") or REPO_ROOT / "public")
    container = build_container(database_url=settings["DATABASE_URL"], upload_root=upload_root)
    logger.info("[employee-timesheets] settings=%s upload_root=%s", settings["SETTINGS_MODULE"], upload_root)

    if settings.get("AUTO_INIT_DB"):
        apply_schema(container.conn)
        logger.info("[employee-timesheets] schema ready (tables=%d)", len(list_tables(container.conn)))
    if settings.get("AUTO_SEED_DB"):
        apply_seed_sql(container.conn, seed_path=REPO_ROOT / "database" / "seed.sql")
        logger.info("[employee-timesheets] demo seed ready")

    @app.errorhandler(NotFoundError)
    def handle_not_found(e: NotFoundError):
        return render_template("error.html", message=str(e)), 404

    @app.errorhandler(StorageError)
    def handle_storage_error(e: StorageError):
        logger.exception("Request failed on storage: %s", e)
        return render_template("error.html", message="Something went wrong while saving or loading data."), 500

    register_employees(app, container)
    register_timesheets(app, container)
    register_uploads(app, container)

    app.extensions["container"] = container
    return app
