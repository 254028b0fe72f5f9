"""SQLite-backed repository for the bucket aggregate.

Each public call is one ``engine.begin()`` transaction: either the
whole aggregate write lands or none of it does. Every write transaction
starts with a write statement, so SQLite's writer lock is held (waiting
up to the busy timeout) before anything is read inside it. Identity
assignment happens here, never in the domain model:

- bucket ids: caller-supplied id if present, else SQLite's rowid.
- item ids: caller-supplied id if present, else ``max(id) + 1`` within
  the owning bucket, read inside the writing transaction (ids of items
  removed in the same write are never reused).

Updates touch only the item rows the aggregate reports as added,
changed, or removed; rows written by other callers are left alone.

The ``*_async`` methods run the blocking call in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, delete, func, insert, or_, select, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from bucketctl.domain.bucket import Bucket, Item
from bucketctl.domain.criteria import Direction, Filter, Operator, Ordering
from bucketctl.infrastructure.database.schema import buckets, items

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Connection
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


def _condition_clause(field: str, operator: Operator, value: Any) -> ColumnElement[bool]:
    """Translate one condition with the same NULL handling as ``Condition.matches``."""
    column = buckets.c[field]
    if value is None:
        return column.is_(None) if operator is Operator.EQ else column.is_not(None)
    match operator:
        case Operator.EQ:
            return column == value
        case Operator.NE:
            # NULL differs from every value.
            return or_(column != value, column.is_(None))
        case Operator.LT:
            return column < value
        case Operator.LE:
            return column <= value
        case Operator.GT:
            return column > value
        case Operator.GE:
            return column >= value
        case Operator.CONTAINS:
            # instr() is case-sensitive and treats the needle literally.
            return func.instr(column, value) > 0
    raise AssertionError(f"unhandled operator {operator}")


class SqlBucketRepository:
    """Encapsulates SQL for the bucket aggregate."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # ------------------------------------------------------------------
    # Blocking API
    # ------------------------------------------------------------------

    def add(self, bucket: Bucket) -> None:
        values = {"name": bucket.name, "description": bucket.description, "size": bucket.size}
        with self._engine.begin() as conn:
            if bucket.id is None:
                result = conn.execute(insert(buckets).values(**values))
                bucket.id = int(result.inserted_primary_key[0])
            else:
                stmt = sqlite_insert(buckets).values(id=bucket.id, **values)
                conn.execute(
                    stmt.on_conflict_do_update(index_elements=[buckets.c.id], set_=values)
                )
            stored_max = self._max_item_id(conn, bucket.id)
            self._insert_items(conn, bucket.id, bucket.items, stored_max=stored_max)
        bucket.mark_saved()
        logger.debug("Added bucket %s with %d items", bucket.id, len(bucket.items))

    def get(self, bucket_id: int) -> Bucket | None:
        with self._engine.connect() as conn:
            row = conn.execute(select(buckets).where(buckets.c.id == bucket_id)).first()
            if row is None:
                return None
            return self._load(conn, [row])[0]

    def get_all(
        self,
        filter: Filter | None = None,
        *,
        limit: int | None = None,
        offset: int | None = None,
        ordering: Ordering | None = None,
    ) -> list[Bucket]:
        stmt = select(buckets)
        if filter:
            stmt = stmt.where(
                and_(*(_condition_clause(c.field, c.operator, c.value) for c in filter.conditions))
            )
        if ordering:
            for clause in ordering.clauses:
                column = buckets.c[clause.field]
                descending = clause.direction is Direction.DESC
                stmt = stmt.order_by(column.desc() if descending else column.asc())
        # Ties and unspecified order fall back to identity order.
        stmt = stmt.order_by(buckets.c.id.asc())
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)

        with self._engine.connect() as conn:
            rows = conn.execute(stmt).fetchall()
            result = self._load(conn, rows)
        logger.debug("Loaded %d buckets (limit=%s offset=%s)", len(result), limit, offset)
        return result

    def remove(self, bucket: Bucket) -> None:
        with self._engine.begin() as conn:
            conn.execute(delete(items).where(items.c.bucket_id == bucket.id))
            conn.execute(delete(buckets).where(buckets.c.id == bucket.id))
        logger.debug("Removed bucket %s", bucket.id)

    def update(self, bucket: Bucket) -> None:
        added, changed, removed = bucket.added_items, bucket.changed_items, bucket.removed_items
        with self._engine.begin() as conn:
            conn.execute(
                update(buckets)
                .where(buckets.c.id == bucket.id)
                .values(name=bucket.name, description=bucket.description, size=bucket.size)
            )
            stored_max = self._max_item_id(conn, bucket.id)
            if removed:
                conn.execute(
                    delete(items).where(
                        items.c.bucket_id == bucket.id,
                        items.c.id.in_([item.id for item in removed]),
                    )
                )
            for item in changed:
                conn.execute(
                    update(items)
                    .where(items.c.bucket_id == bucket.id, items.c.id == item.id)
                    .values(name=item.name, description=item.description)
                )
            self._insert_items(conn, bucket.id, added, stored_max=stored_max)
        bucket.mark_saved()
        logger.debug(
            "Updated bucket %s (+%d ~%d -%d items)",
            bucket.id,
            len(added),
            len(changed),
            len(removed),
        )

    # ------------------------------------------------------------------
    # Non-blocking API
    # ------------------------------------------------------------------

    async def add_async(self, bucket: Bucket) -> None:
        await asyncio.to_thread(self.add, bucket)

    async def get_async(self, bucket_id: int) -> Bucket | None:
        return await asyncio.to_thread(self.get, bucket_id)

    async def get_all_async(
        self,
        filter: Filter | None = None,
        *,
        limit: int | None = None,
        offset: int | None = None,
        ordering: Ordering | None = None,
    ) -> list[Bucket]:
        return await asyncio.to_thread(
            self.get_all, filter, limit=limit, offset=offset, ordering=ordering
        )

    async def remove_async(self, bucket: Bucket) -> None:
        await asyncio.to_thread(self.remove, bucket)

    async def update_async(self, bucket: Bucket) -> None:
        await asyncio.to_thread(self.update, bucket)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _max_item_id(conn: Connection, bucket_id: int) -> int:
        stored = conn.execute(
            select(func.max(items.c.id)).where(items.c.bucket_id == bucket_id)
        ).scalar()
        return int(stored or 0)

    @staticmethod
    def _insert_items(
        conn: Connection, bucket_id: int, new_items: list[Item], *, stored_max: int
    ) -> None:
        """Append *new_items* after the stored ones, assigning missing ids.

        A caller-supplied id that already exists overwrites that row.
        """
        if not new_items:
            return
        last_position = conn.execute(
            select(func.max(items.c.position)).where(items.c.bucket_id == bucket_id)
        ).scalar()
        position = -1 if last_position is None else int(last_position)
        next_id = max([stored_max, *(i.id for i in new_items if i.id is not None)])

        for item in new_items:
            if item.id is None:
                next_id += 1
                item.id = next_id
            position += 1
            stmt = sqlite_insert(items).values(
                bucket_id=bucket_id,
                id=item.id,
                name=item.name,
                description=item.description,
                position=position,
            )
            conn.execute(
                stmt.on_conflict_do_update(
                    index_elements=[items.c.bucket_id, items.c.id],
                    set_={"name": stmt.excluded.name, "description": stmt.excluded.description},
                )
            )

    def _load(self, conn: Connection, rows: Any) -> list[Bucket]:
        """Map bucket rows to aggregates, attaching items in stored order."""
        if not rows:
            return []
        ids = [row.id for row in rows]
        item_rows = conn.execute(
            select(items)
            .where(items.c.bucket_id.in_(ids))
            .order_by(items.c.bucket_id, items.c.position)
        ).fetchall()

        by_bucket: dict[int, list[Item]] = {bucket_id: [] for bucket_id in ids}
        for row in item_rows:
            by_bucket[row.bucket_id].append(
                Item(id=row.id, name=row.name, description=row.description)
            )

        return [
            Bucket(
                id=row.id,
                name=row.name,
                description=row.description,
                size=row.size,
                items=by_bucket[row.id],
            )
            for row in rows
        ]
