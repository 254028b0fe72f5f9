"""Tests for the item command group."""

from __future__ import annotations

import json
from typing import Any

import pytest
from click.testing import CliRunner

from bucketctl.cli import cli


def _json(runner: CliRunner, *args: str) -> dict[str, Any]:
    result = runner.invoke(cli, ["--json", *args])
    return json.loads(result.stdout)


@pytest.fixture
def bucket_id(cli_runner: CliRunner, _isolated_root: None) -> int:
    data = _json(cli_runner, "bucket", "add", "--name", "B1", "--size", "1")
    return data["data"]["bucket"]["id"]


class TestItemAdd:
    def test_add_and_get(self, cli_runner: CliRunner, bucket_id: int) -> None:
        added = _json(cli_runner, "item", "add", str(bucket_id), "--name", "I1")
        assert added["ok"] is True
        item_id = added["data"]["item"]["id"]

        fetched = _json(cli_runner, "item", "get", str(bucket_id), str(item_id))
        assert fetched["data"]["item"]["name"] == "I1"

    def test_zero_size_bucket(self, cli_runner: CliRunner, bucket_id: int) -> None:
        cli_runner.invoke(cli, ["bucket", "update", str(bucket_id), "--size", "0"])
        result = cli_runner.invoke(cli, ["item", "add", str(bucket_id), "--name", "x"])
        assert result.exit_code == 1
        assert "BUCKET_FULL" in result.output

    @pytest.mark.usefixtures("_isolated_root")
    def test_missing_bucket(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["item", "add", "42"])
        assert result.exit_code == 1
        assert "BUCKET_NOT_FOUND" in result.output


class TestItemList:
    def test_insertion_order(self, cli_runner: CliRunner, bucket_id: int) -> None:
        for name in ("b", "a"):
            cli_runner.invoke(cli, ["item", "add", str(bucket_id), "--name", name])
        data = _json(cli_runner, "item", "list", str(bucket_id))
        assert [i["name"] for i in data["data"]["items"]] == ["b", "a"]


class TestItemUpdate:
    def test_upsert(self, cli_runner: CliRunner, bucket_id: int) -> None:
        created = _json(cli_runner, "item", "update", str(bucket_id), "9", "--name", "nine")
        assert created["data"]["outcome"] == "created"
        assert created["data"]["item"]["id"] == 9

        updated = _json(cli_runner, "item", "update", str(bucket_id), "9")
        assert updated["data"]["outcome"] == "updated"
        assert updated["data"]["item"]["name"] is None


class TestItemPatch:
    def test_keeps_unspecified_fields(self, cli_runner: CliRunner, bucket_id: int) -> None:
        cli_runner.invoke(
            cli, ["item", "add", str(bucket_id), "--name", "I1", "--description", "old"]
        )
        data = _json(cli_runner, "item", "patch", str(bucket_id), "1", "--description", "new")
        assert data["data"]["item"] == {"id": 1, "name": "I1", "description": "new"}

    def test_requires_a_change(self, cli_runner: CliRunner, bucket_id: int) -> None:
        result = cli_runner.invoke(cli, ["item", "patch", str(bucket_id), "1"])
        assert result.exit_code == 1
        assert "No changes specified" in result.output

    def test_missing_item(self, cli_runner: CliRunner, bucket_id: int) -> None:
        result = cli_runner.invoke(cli, ["item", "patch", str(bucket_id), "5", "--name", "x"])
        assert result.exit_code == 1
        assert "ITEM_NOT_FOUND" in result.output


class TestItemRemove:
    def test_remove_is_idempotent(self, cli_runner: CliRunner, bucket_id: int) -> None:
        cli_runner.invoke(cli, ["item", "add", str(bucket_id), "--name", "x"])
        first = cli_runner.invoke(cli, ["item", "remove", str(bucket_id), "1"])
        second = cli_runner.invoke(cli, ["item", "remove", str(bucket_id), "1"])
        assert first.exit_code == second.exit_code == 0
        assert first.output == second.output

        data = _json(cli_runner, "item", "list", str(bucket_id))
        assert data["data"]["items"] == []
