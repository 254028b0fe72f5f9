"""Tests for result formatting."""

import json

from bucketctl.domain.errors import BucketNotFoundError
from bucketctl.output.formatters import OutputSettings, format_result
from bucketctl.services.result import ServiceResult

BUCKET = {
    "id": 1,
    "name": "B1",
    "description": None,
    "size": 2,
    "items": [{"id": 1, "name": "I1", "description": "first"}],
}


class TestHuman:
    def test_single_bucket(self) -> None:
        result = ServiceResult(ok=True, op="get_bucket", data={"bucket": BUCKET})
        output = format_result(result)
        assert output.splitlines() == [
            "OK: get_bucket",
            "  bucket: #1 name=B1 size=2 items=1",
            "    - #1 name=I1 description=first",
        ]

    def test_list(self) -> None:
        data = {"count": 1, "limit": 10, "offset": None, "buckets": [BUCKET]}
        output = format_result(ServiceResult(ok=True, op="get_buckets", data=data))
        assert "  count: 1" in output
        assert "  limit: 10" in output
        assert "offset" not in output
        assert "    - #1 name=B1 size=2 items=1" in output

    def test_error(self) -> None:
        result = ServiceResult.failure("get_bucket", BucketNotFoundError(999))
        assert format_result(result) == (
            "ERROR: get_bucket: No bucket found with ID: 999 (BUCKET_NOT_FOUND)"
        )

    def test_quiet_hides_data(self) -> None:
        result = ServiceResult(ok=True, op="get_bucket", data={"bucket": BUCKET})
        assert format_result(result, settings=OutputSettings(quiet=True)) == "OK: get_bucket"

    def test_verbose_shows_meta(self) -> None:
        result = ServiceResult(ok=True, op="x", meta={"telemetry": {"name": "x"}})
        output = format_result(result, settings=OutputSettings(verbose=True))
        assert 'meta: {"telemetry":{"name":"x"}}' in output


class TestJson:
    def test_dumps_whole_result(self) -> None:
        result = ServiceResult(ok=True, op="get_bucket", data={"bucket": BUCKET})
        parsed = json.loads(format_result(result, settings=OutputSettings(json_output=True)))
        assert parsed["ok"] is True
        assert parsed["data"]["bucket"]["items"][0]["name"] == "I1"

    def test_error_payload(self) -> None:
        result = ServiceResult.failure("get_bucket", BucketNotFoundError(5))
        parsed = json.loads(format_result(result, settings=OutputSettings(json_output=True)))
        assert parsed["error"]["code"] == "BUCKET_NOT_FOUND"
        assert parsed["error"]["detail"]["status"] == 404
