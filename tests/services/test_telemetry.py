"""Tests for telemetry spans and the @traced decorator."""

from __future__ import annotations

import pytest

from bucketctl.services.buckets import BucketService
from bucketctl.services.messages import AddBucket, GetBuckets
from bucketctl.services.result import ServiceResult
from bucketctl.services.telemetry import (
    Span,
    _current_span,
    _enabled,
    enable_telemetry,
    trace_span,
    traced,
)


class TestSpan:
    def test_elapsed_zero_until_finished(self) -> None:
        span = Span("x")
        assert span.elapsed_ms == 0.0
        span.finish()
        assert span.elapsed_ms >= 0.0

    def test_finish_is_sticky(self) -> None:
        span = Span("x")
        span.finish()
        first = span.finished_ns
        span.finish()
        assert span.finished_ns == first

    def test_as_dict_nests_children(self) -> None:
        parent = Span("parent")
        child = parent.child("child")
        child.annotate(rows=3)
        child.finish()
        parent.finish()

        data = parent.as_dict()
        assert data["name"] == "parent"
        assert "annotations" not in data
        assert data["children"][0]["name"] == "child"
        assert data["children"][0]["annotations"] == {"rows": 3}


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        assert not _enabled.get()
        with trace_span("noop") as span:
            assert span is None

    def test_enabled_without_parent_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("orphan") as span:
            assert span is None


@pytest.mark.asyncio
class TestTraced:
    async def test_disabled_leaves_meta_untouched(self, bucket_service: BucketService) -> None:
        result = await bucket_service.add_bucket(AddBucket(name="plain"))
        assert result.meta is None

    async def test_enabled_injects_telemetry(self, bucket_service: BucketService) -> None:
        enable_telemetry()
        result = await bucket_service.get_buckets(GetBuckets())
        assert result.meta is not None
        telemetry = result.meta["telemetry"]
        assert telemetry["name"] == "BucketService.get_buckets"
        assert telemetry["children"][0]["name"] == "repository.get_all"
        assert telemetry["children"][0]["annotations"] == {"rows": 0}

    async def test_enabled_keeps_failures(self) -> None:
        @traced
        async def handler() -> ServiceResult:
            return ServiceResult(ok=False, op="handler", meta={"existing": 1})

        enable_telemetry()
        result = await handler()
        assert result.ok is False
        assert result.meta is not None
        assert result.meta["existing"] == 1
        assert "telemetry" in result.meta

    async def test_exception_propagates(self) -> None:
        @traced
        async def handler() -> ServiceResult:
            raise RuntimeError("storage down")

        enable_telemetry()
        with pytest.raises(RuntimeError, match="storage down"):
            await handler()
        assert _current_span.get() is None
