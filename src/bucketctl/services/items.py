"""ItemService: item operations scoped to an owning bucket.

Items are never loaded or persisted on their own: every handler loads
the owning bucket, changes it, and writes the whole aggregate back.

Capacity gate: creating an item (``add_item`` or the create branch of
``update_item``) is refused when the bucket's declared size is not positive.
The size is consulted, never decremented or reconciled with the item
count.
"""

from __future__ import annotations

from bucketctl.domain.bucket import Bucket, Item
from bucketctl.domain.errors import (
    BucketctlError,
    BucketFullError,
    ItemNotFoundError,
    NotFoundError,
)
from bucketctl.services.base import BaseService
from bucketctl.services.contracts import (
    ItemListResultData,
    ItemResultData,
    RemoveResultData,
    UpsertItemResultData,
    UpsertOutcome,
    dump_validated,
)
from bucketctl.services.messages import AddItem, GetItem, GetItems, RemoveItem, UpdateItem
from bucketctl.services.result import ServiceResult
from bucketctl.services.telemetry import traced


def _check_capacity(bucket: Bucket) -> None:
    if bucket.size <= 0:
        raise BucketFullError(bucket.id or 0, bucket.size)


class ItemService(BaseService):
    """Handlers for the item-level operations."""

    @traced
    async def add_item(self, command: AddItem) -> ServiceResult:
        """Append an item to a bucket; storage assigns its id."""
        op = "add_item"
        try:
            bucket = await self._require_bucket(command.bucket_id)
            _check_capacity(bucket)
        except BucketctlError as exc:
            return ServiceResult.failure(op, exc)

        item = bucket.add_item(Item(name=command.name, description=command.description))
        await self._repository.update_async(bucket)

        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                ItemResultData, {"bucket_id": command.bucket_id, "item": item.to_dict()}
            ),
        )

    @traced
    async def get_items(self, query: GetItems) -> ServiceResult:
        op = "get_items"
        try:
            bucket = await self._require_bucket(query.bucket_id)
        except NotFoundError as exc:
            return ServiceResult.failure(op, exc)

        found = bucket.items
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                ItemListResultData,
                {
                    "bucket_id": query.bucket_id,
                    "count": len(found),
                    "items": [item.to_dict() for item in found],
                },
            ),
        )

    @traced
    async def get_item(self, query: GetItem) -> ServiceResult:
        op = "get_item"
        try:
            bucket = await self._require_bucket(query.bucket_id)
            item = bucket.find_item(query.item_id)
            if item is None:
                raise ItemNotFoundError(query.bucket_id, query.item_id)
        except NotFoundError as exc:
            return ServiceResult.failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                ItemResultData, {"bucket_id": query.bucket_id, "item": item.to_dict()}
            ),
        )

    @traced
    async def update_item(self, command: UpdateItem) -> ServiceResult:
        """Upsert an item inside its bucket, keyed by the supplied item id."""
        op = "update_item"
        try:
            bucket = await self._require_bucket(command.bucket_id)
            item = bucket.find_item(command.item_id)
            if item is None:
                _check_capacity(bucket)
                item = bucket.add_item(
                    Item(id=command.item_id, name=command.name, description=command.description)
                )
                outcome = UpsertOutcome.CREATED
            else:
                bucket.update_item(item, name=command.name, description=command.description)
                outcome = UpsertOutcome.UPDATED
        except BucketctlError as exc:
            return ServiceResult.failure(op, exc)

        await self._repository.update_async(bucket)

        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                UpsertItemResultData,
                {"outcome": outcome, "bucket_id": command.bucket_id, "item": item.to_dict()},
            ),
        )

    @traced
    async def remove_item(self, command: RemoveItem) -> ServiceResult:
        """Delete an item. Absent bucket or item is a no-op."""
        op = "remove_item"
        bucket = await self._repository.get_async(command.bucket_id)
        if bucket is not None:
            item = bucket.find_item(command.item_id)
            if item is not None:
                bucket.remove_item(item)
                await self._repository.update_async(bucket)

        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                RemoveResultData,
                {"bucket_id": command.bucket_id, "item_id": command.item_id},
            ),
        )
