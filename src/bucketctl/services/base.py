"""BaseService: abstract foundation for all bucketctl services.

Every service receives a :class:`BucketRepository` at construction time
and talks to storage only through its ``*_async`` methods. Each handler
performs at most one read-then-write sequence; there is no locking and
no retry, so concurrent upserts on one id are last-write-wins.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bucketctl.domain.errors import BucketNotFoundError

if TYPE_CHECKING:
    from bucketctl.domain.bucket import Bucket
    from bucketctl.domain.repository import BucketRepository


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class BucketService(BaseService):
            @traced
            async def get_bucket(self, query: GetBucket) -> ServiceResult:
                bucket = await self._require_bucket(query.bucket_id)
                ...
    """

    def __init__(self, repository: BucketRepository) -> None:
        self._repository = repository

    async def _require_bucket(self, bucket_id: int) -> Bucket:
        """Load a bucket or raise :class:`BucketNotFoundError`."""
        bucket = await self._repository.get_async(bucket_id)
        if bucket is None:
            raise BucketNotFoundError(bucket_id)
        return bucket
