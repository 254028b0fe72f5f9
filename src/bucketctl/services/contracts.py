"""Typed payload contracts for the service boundary.

These models validate operation payload shapes before they leave the
service layer so key regressions (for example ``bucket`` vs ``buckets``)
fail fast in tests and during development.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class UpsertOutcome(StrEnum):
    """Which branch an upsert took."""

    CREATED = "created"
    UPDATED = "updated"


class ItemData(BaseModel):
    """One item row."""

    id: int
    name: str | None = None
    description: str | None = None


class BucketData(BaseModel):
    """One bucket with its items in insertion order."""

    id: int
    name: str | None = None
    description: str | None = None
    size: int = Field(ge=0)
    items: list[ItemData] = Field(default_factory=list)


class BucketResultData(BaseModel):
    """Payload contract for ``add_bucket`` and ``get_bucket``."""

    bucket: BucketData


class BucketListResultData(BaseModel):
    """Payload contract for ``get_buckets``."""

    count: int
    limit: int | None = None
    offset: int | None = None
    buckets: list[BucketData]


class UpsertBucketResultData(BaseModel):
    """Payload contract for ``update_bucket``."""

    outcome: UpsertOutcome
    bucket: BucketData


class ItemResultData(BaseModel):
    """Payload contract for ``add_item`` and ``get_item``."""

    bucket_id: int
    item: ItemData


class ItemListResultData(BaseModel):
    """Payload contract for ``get_items``."""

    bucket_id: int
    count: int
    items: list[ItemData]


class UpsertItemResultData(BaseModel):
    """Payload contract for ``update_item``."""

    outcome: UpsertOutcome
    bucket_id: int
    item: ItemData


class RemoveResultData(BaseModel):
    """Payload contract for ``remove_bucket`` and ``remove_item``."""

    bucket_id: int
    item_id: int | None = None
