"""SQLite database engine and schema via SQLAlchemy Core."""

from bucketctl.infrastructure.database.engine import create_db_engine, init_database
from bucketctl.infrastructure.database.schema import buckets, items, metadata

__all__ = [
    "buckets",
    "create_db_engine",
    "init_database",
    "items",
    "metadata",
]
