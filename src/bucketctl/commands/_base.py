"""Click classes that add an ``--examples`` flag to bucketctl commands.

Pass ``examples="..."`` to ``@group.command()`` (or to ``@click.group``
with ``cls=BucketGroup``); ``--examples`` then prints that text and exits
without running the command or touching the database.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click


def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    examples = getattr(ctx.command, "examples", None) or ""
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(textwrap.dedent(examples).strip("\n"))
    ctx.exit(0)


class _ExamplesMixin:
    """Stores ``examples`` and registers the eager flag when present."""

    params: list[click.Parameter]

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=_print_examples,
                    help="Show usage examples and exit.",
                )
            )


class BucketCommand(_ExamplesMixin, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class BucketGroup(_ExamplesMixin, click.Group):
    """Group whose subcommands are :class:`BucketCommand` by default."""

    command_class = BucketCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
