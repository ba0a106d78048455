"""Database engine setup for SQLite with WAL mode.

SQLite is the single logical store: WAL mode lets report readers run
alongside a settlement writer, and ACID transactions keep the two balance
updates and the job flip together.

pysqlite's own implicit transaction handling is switched off so that
SQLAlchemy emits ``BEGIN`` itself. A connection carrying the
``sqlite_begin="IMMEDIATE"`` execution option takes the write lock at
``BEGIN``; two writers then queue on the busy timeout instead of both
reading the same snapshot.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine

from settlectl.infrastructure.database.schema import metadata

_BEGIN_MODES = frozenset({"DEFERRED", "IMMEDIATE", "EXCLUSIVE"})


def create_db_engine(db_path: Path, *, busy_timeout: float = 30.0) -> Engine:
    """Create a SQLite engine with WAL mode, foreign keys, and explicit BEGIN."""
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"timeout": busy_timeout, "check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _begin(conn: Connection) -> None:
        mode = str(conn.get_execution_options().get("sqlite_begin", "DEFERRED")).upper()
        if mode not in _BEGIN_MODES:
            msg = f"Unknown SQLite BEGIN mode: {mode!r}"
            raise ValueError(msg)
        conn.exec_driver_sql(f"BEGIN {mode}")

    return engine


def init_database(db_path: Path, *, busy_timeout: float = 30.0) -> Engine:
    """Initialize the settlement database at *db_path*.

    Creates the parent directory and all tables from
    :data:`schema.metadata`. Idempotent — safe to call on an existing
    database.

    Returns the engine ready for use.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path, busy_timeout=busy_timeout)
    metadata.create_all(engine)
    return engine
