"""BucketService: add, query, upsert, and remove buckets.

Pipeline per handler: VALIDATE → LOAD → APPLY → PERSIST → RESPOND.
Classified failures come back as ``ok=False`` results; storage faults
propagate to the caller unchanged.
"""

from __future__ import annotations

from bucketctl.domain.bucket import Bucket
from bucketctl.domain.criteria import Filter, Ordering
from bucketctl.domain.errors import DomainError, NotFoundError, OrderingError
from bucketctl.services.base import BaseService
from bucketctl.services.contracts import (
    BucketListResultData,
    BucketResultData,
    RemoveResultData,
    UpsertBucketResultData,
    UpsertOutcome,
    dump_validated,
)
from bucketctl.services.messages import (
    AddBucket,
    GetBucket,
    GetBuckets,
    RemoveBucket,
    UpdateBucket,
)
from bucketctl.services.result import ServiceResult
from bucketctl.services.telemetry import trace_span, traced


def _resolve_criteria(query: GetBuckets) -> tuple[Filter, Ordering | None]:
    """Turn textual descriptors into validated ones (raises OrderingError)."""
    if query.filter is None:
        criteria = Filter.match_all(Bucket)
    elif isinstance(query.filter, Filter):
        criteria = query.filter
    else:
        criteria = Filter.parse(Bucket, query.filter)

    if query.ordering is None or isinstance(query.ordering, Ordering):
        ordering = query.ordering
    else:
        ordering = Ordering.parse(Bucket, query.ordering)
    return criteria, ordering


class BucketService(BaseService):
    """Handlers for the bucket-level operations."""

    @traced
    async def add_bucket(self, command: AddBucket) -> ServiceResult:
        """Create a bucket; storage assigns its id."""
        op = "add_bucket"
        try:
            bucket = Bucket(name=command.name, description=command.description, size=command.size)
        except DomainError as exc:
            return ServiceResult.failure(op, exc)

        await self._repository.add_async(bucket)
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(BucketResultData, {"bucket": bucket.to_dict()}),
        )

    @traced
    async def get_buckets(self, query: GetBuckets) -> ServiceResult:
        """Filter, order, then slice buckets (each with its items)."""
        op = "get_buckets"
        try:
            criteria, ordering = _resolve_criteria(query)
        except OrderingError as exc:
            return ServiceResult.failure(op, exc)

        with trace_span("repository.get_all") as span:
            found = await self._repository.get_all_async(
                criteria, limit=query.limit, offset=query.offset, ordering=ordering
            )
            if span is not None:
                span.annotate(rows=len(found))

        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                BucketListResultData,
                {
                    "count": len(found),
                    "limit": query.limit,
                    "offset": query.offset,
                    "buckets": [bucket.to_dict() for bucket in found],
                },
            ),
        )

    @traced
    async def get_bucket(self, query: GetBucket) -> ServiceResult:
        op = "get_bucket"
        try:
            bucket = await self._require_bucket(query.bucket_id)
        except NotFoundError as exc:
            return ServiceResult.failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(BucketResultData, {"bucket": bucket.to_dict()}),
        )

    @traced
    async def update_bucket(self, command: UpdateBucket) -> ServiceResult:
        """Upsert: overwrite an existing bucket, or create one with the supplied id.

        Every mutable field is replaced; items are left untouched.
        """
        op = "update_bucket"
        existing = await self._repository.get_async(command.bucket_id)

        try:
            if existing is None:
                bucket = Bucket(
                    id=command.bucket_id,
                    name=command.name,
                    description=command.description,
                    size=command.size,
                )
                outcome = UpsertOutcome.CREATED
            else:
                bucket = existing
                bucket.size = command.size
                bucket.name = command.name
                bucket.description = command.description
                outcome = UpsertOutcome.UPDATED
        except DomainError as exc:
            return ServiceResult.failure(op, exc)

        if outcome is UpsertOutcome.CREATED:
            await self._repository.add_async(bucket)
        else:
            await self._repository.update_async(bucket)

        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                UpsertBucketResultData, {"outcome": outcome, "bucket": bucket.to_dict()}
            ),
        )

    @traced
    async def remove_bucket(self, command: RemoveBucket) -> ServiceResult:
        """Delete a bucket and its items. Absent buckets are a no-op."""
        op = "remove_bucket"
        bucket = await self._repository.get_async(command.bucket_id)
        if bucket is not None:
            await self._repository.remove_async(bucket)

        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(RemoveResultData, {"bucket_id": command.bucket_id}),
        )
