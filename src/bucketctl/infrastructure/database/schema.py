"""SQLAlchemy Core table definitions for the bucketctl database.

Items use a composite primary key (bucket_id, id): item ids are only
unique inside their owning bucket.
"""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, Integer, MetaData, Table, Text

metadata = MetaData()

buckets = Table(
    "buckets",
    metadata,
    # Rowid alias: inserts that omit the id get one from SQLite.
    Column("id", Integer, primary_key=True),
    Column("name", Text),
    Column("description", Text),
    Column("size", Integer, nullable=False, default=0, server_default="0"),
)

items = Table(
    "items",
    metadata,
    Column(
        "bucket_id",
        Integer,
        ForeignKey("buckets.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("name", Text),
    Column("description", Text),
    # Insertion order within a bucket, independent of client-supplied ids.
    Column("position", Integer, nullable=False, default=0, server_default="0"),
)

Index("ix_items_bucket", items.c.bucket_id)
