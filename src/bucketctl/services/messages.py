"""Command and query messages, one per handled operation.

Messages are frozen values built by a transport and routed to their
handler by :class:`bucketctl.services.dispatch.Dispatcher`. Update
messages carry every mutable field: anything not supplied arrives as
its default and overwrites stored data.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from bucketctl.domain.criteria import Filter, Ordering


class Message(BaseModel):
    """Base for every command and query."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


# --- Buckets ---


class AddBucket(Message):
    name: str | None = None
    description: str | None = None
    size: int = 0


class GetBuckets(Message):
    """Bulk bucket query.

    ``filter`` and ``ordering`` accept either built descriptors or their
    textual forms (``("size>=3",)`` and ``"size:desc,name"``).
    """

    filter: Filter | tuple[str, ...] | None = None
    limit: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)
    ordering: Ordering | str | None = None


class GetBucket(Message):
    bucket_id: int


class UpdateBucket(Message):
    bucket_id: int
    name: str | None = None
    description: str | None = None
    size: int = 0


class RemoveBucket(Message):
    bucket_id: int


# --- Items ---


class AddItem(Message):
    bucket_id: int
    name: str | None = None
    description: str | None = None


class GetItems(Message):
    bucket_id: int


class GetItem(Message):
    bucket_id: int
    item_id: int


class UpdateItem(Message):
    bucket_id: int
    item_id: int
    name: str | None = None
    description: str | None = None


class RemoveItem(Message):
    bucket_id: int
    item_id: int
