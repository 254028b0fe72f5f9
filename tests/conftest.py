"""Shared pytest fixtures and test helpers for bucketctl tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from bucketctl.infrastructure.database.engine import init_database
from bucketctl.infrastructure.repositories import SqlBucketRepository
from bucketctl.services.buckets import BucketService
from bucketctl.services.dispatch import Dispatcher
from bucketctl.services.items import ItemService
from bucketctl.services.telemetry import _current_span, disable_telemetry


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Iterator[None]:
    """CLI tests may enable telemetry in the test process; undo it."""
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """CLI tests reconfigure logging against the runner's streams; restore it."""
    root = logging.getLogger()
    app_logger = logging.getLogger("bucketctl")
    handlers, level, app_level = list(root.handlers), root.level, app_logger.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    app_logger.setLevel(app_level)
    structlog.reset_defaults()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Iterator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path / ".bucketctl" / "bucketctl.db")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def repository(db_engine: Engine) -> SqlBucketRepository:
    return SqlBucketRepository(db_engine)


@pytest.fixture
def bucket_service(repository: SqlBucketRepository) -> BucketService:
    return BucketService(repository)


@pytest.fixture
def item_service(repository: SqlBucketRepository) -> ItemService:
    return ItemService(repository)


@pytest.fixture
def dispatcher(repository: SqlBucketRepository) -> Dispatcher:
    return Dispatcher(repository)


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp project root so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test
    classes.
    """
    monkeypatch.delenv("BUCKETCTL_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers (used across service test modules)
# ---------------------------------------------------------------------------


async def add_bucket(service: BucketService, **kwargs: Any) -> dict[str, Any]:
    """Create a bucket via BucketService, asserting success."""
    from bucketctl.services.messages import AddBucket

    result = await service.add_bucket(AddBucket(**kwargs))
    assert result.ok, result.error
    return result.data["bucket"]


async def add_item(service: ItemService, bucket_id: int, **kwargs: Any) -> dict[str, Any]:
    """Create an item via ItemService, asserting success."""
    from bucketctl.services.messages import AddItem

    result = await service.add_item(AddItem(bucket_id=bucket_id, **kwargs))
    assert result.ok, result.error
    return result.data["item"]
