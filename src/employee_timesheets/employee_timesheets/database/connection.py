from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine, make_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBConfig:
    url: str
    engine_options: Dict[str, Any] = field(default_factory=dict)


class DatabaseConnection:
    """Process-wide datastore handle.

    One SQLAlchemy connection is opened on first use and reused by every
    request. Statements run in autocommit mode, so each one is atomic on its
    own and nothing spans statements.
    """

    _instance: Optional["DatabaseConnection"] = None
    _instance_lock = threading.Lock()

    def __init__(self, config: DBConfig):
        self._config = config
        self._engine: Optional[Engine] = None
        self._connection: Optional[Connection] = None
        self._init_lock = threading.Lock()
        # A DBAPI connection must not be used by two threads at once.
        self.statement_lock = threading.RLock()

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = DatabaseConnection(config)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        with cls._instance_lock:
            if cls._instance is not None:
                cls._instance.close()
            cls._instance = None

    @property
    def url(self) -> str:
        """Datastore URL with the password masked, safe for logs."""
        return make_url(self._config.url).render_as_string(hide_password=True)

    def _create_engine(self) -> Engine:
        options = dict(self._config.engine_options)
        if make_url(self._config.url).get_backend_name() == "sqlite":
            connect_args = dict(options.pop("connect_args", {}))
            connect_args.setdefault("check_same_thread", False)
            options["connect_args"] = connect_args
        # Set on the engine so a reconnected DBAPI connection is autocommit too.
        options.setdefault("isolation_level", "AUTOCOMMIT")
        return create_engine(self._config.url, **options)

    def connection(self) -> Connection:
        if self._connection is None:
            with self._init_lock:
                if self._connection is None:
                    engine = self._create_engine()
                    self._connection = engine.connect()
                    self._engine = engine
                    logger.info("Opened datastore connection (%s)", self.url)
        return self._connection

    def close(self) -> None:
        with self._init_lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None
            if self._engine is not None:
                self._engine.dispose()
                self._engine = None
