"""Subcommand modules for bucketctl.

Provides register_commands() which uses deferred imports to keep
``bucketctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups on the root CLI group."""
    from bucketctl.commands.bucket import bucket
    from bucketctl.commands.item import item

    cli.add_command(bucket)
    cli.add_command(item)
