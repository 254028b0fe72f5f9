"""Tests for the payload contracts."""

import pytest
from pydantic import ValidationError

from bucketctl.services.contracts import (
    BucketResultData,
    UpsertBucketResultData,
    UpsertOutcome,
    dump_validated,
)


class TestDumpValidated:
    def test_normalizes_payload(self) -> None:
        data = dump_validated(BucketResultData, {"bucket": {"id": 1, "size": 2}})
        assert data == {
            "bucket": {"id": 1, "name": None, "description": None, "size": 2, "items": []}
        }

    def test_rejects_wrong_key(self) -> None:
        with pytest.raises(ValidationError):
            dump_validated(BucketResultData, {"buckets": [{"id": 1, "size": 2}]})

    def test_rejects_negative_size(self) -> None:
        with pytest.raises(ValidationError):
            dump_validated(BucketResultData, {"bucket": {"id": 1, "size": -1}})

    def test_outcome_is_string_enum(self) -> None:
        data = dump_validated(
            UpsertBucketResultData,
            {"outcome": UpsertOutcome.CREATED, "bucket": {"id": 1, "size": 0}},
        )
        assert data["outcome"] == "created"
