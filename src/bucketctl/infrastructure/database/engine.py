"""SQLite engine construction.

SQLAlchemy Core only: the repository maps rows to aggregates itself,
so there is no session or identity map. Every new DBAPI connection gets
WAL journaling (readers never block the single writer), enforced
foreign keys, and a busy timeout for concurrent CLI invocations.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from bucketctl.infrastructure.database.schema import metadata

_PRAGMAS = (
    "PRAGMA busy_timeout=5000",
    "PRAGMA journal_mode=WAL",
    "PRAGMA foreign_keys=ON",
)


def _apply_pragmas(dbapi_conn: Any, _record: Any) -> None:
    cursor = dbapi_conn.cursor()
    try:
        for pragma in _PRAGMAS:
            cursor.execute(pragma)
    finally:
        cursor.close()


def create_db_engine(db_path: Path) -> Engine:
    engine = create_engine(f"sqlite:///{db_path}")
    event.listen(engine, "connect", _apply_pragmas)
    return engine


def init_database(db_path: Path) -> Engine:
    """Open (creating if needed) the database at *db_path* and ensure its tables.

    Safe to call against an existing database.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path)
    metadata.create_all(engine)
    return engine
