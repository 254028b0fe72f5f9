"""Per-invocation state shared by every bucketctl command.

The root group builds one :class:`AppContext` and stores it as
``ctx.obj``; commands receive it through ``@click.pass_obj``.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import click

from bucketctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from bucketctl.config.settings import BucketSettings
    from bucketctl.services.dispatch import Dispatcher
    from bucketctl.services.messages import Message
    from bucketctl.services.result import ServiceResult


class AppContext:
    """Settings, logging, and a lazily opened database for one CLI run.

    Nothing touches storage until the first :meth:`send`, so ``--help``,
    ``--version`` and ``--examples`` leave the project directory alone.
    """

    def __init__(self, settings: BucketSettings) -> None:
        from bucketctl.config.logging import configure_logging
        from bucketctl.services.telemetry import enable_telemetry

        self.settings = settings
        self._engine: Engine | None = None
        self._dispatcher: Dispatcher | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    @property
    def dispatcher(self) -> Dispatcher:
        if self._dispatcher is None:
            from bucketctl.infrastructure.database.engine import init_database
            from bucketctl.infrastructure.repositories import SqlBucketRepository
            from bucketctl.services.dispatch import Dispatcher

            self._engine = init_database(self.settings.database_path)
            self._dispatcher = Dispatcher(SqlBucketRepository(self._engine))
        return self._dispatcher

    def send(self, message: Message) -> ServiceResult:
        """Run *message* through the dispatcher on a fresh event loop."""
        return asyncio.run(self.dispatcher.send(message))

    def close(self) -> None:
        from bucketctl.services.telemetry import disable_telemetry

        if self.settings.verbose:
            disable_telemetry()
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._dispatcher = None

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and set the exit status.

        Successes go to stdout and return; their warnings go to stderr
        unless ``--json`` already carries them. Failures go to stderr and
        exit with status 1.
        """
        rendering = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        text = format_result(result, settings=rendering)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if not rendering.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
