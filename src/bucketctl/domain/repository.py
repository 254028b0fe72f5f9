"""Storage capability required by the service layer.

Implementations live in the infrastructure layer. Every operation has a
blocking form and a ``*_async`` twin; services only use the async twins.
Storage faults raised by an implementation are never translated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from bucketctl.domain.bucket import Bucket
    from bucketctl.domain.criteria import Filter, Ordering


@runtime_checkable
class BucketRepository(Protocol):
    """Persistence for whole bucket aggregates (items travel with their bucket)."""

    def add(self, bucket: Bucket) -> None:
        """Insert *bucket* and its items, assigning any missing ids in place."""
        ...

    def get(self, bucket_id: int) -> Bucket | None:
        """Load one bucket with its items, or None."""
        ...

    def get_all(
        self,
        filter: Filter | None = None,
        *,
        limit: int | None = None,
        offset: int | None = None,
        ordering: Ordering | None = None,
    ) -> list[Bucket]:
        """Filter, then order, then slice. ``None`` means no restriction."""
        ...

    def remove(self, bucket: Bucket) -> None:
        """Delete *bucket*; its items go with it."""
        ...

    def update(self, bucket: Bucket) -> None:
        """Persist in-place changes, including added and removed items."""
        ...

    async def add_async(self, bucket: Bucket) -> None: ...

    async def get_async(self, bucket_id: int) -> Bucket | None: ...

    async def get_all_async(
        self,
        filter: Filter | None = None,
        *,
        limit: int | None = None,
        offset: int | None = None,
        ordering: Ordering | None = None,
    ) -> list[Bucket]: ...

    async def remove_async(self, bucket: Bucket) -> None: ...

    async def update_async(self, bucket: Bucket) -> None: ...
