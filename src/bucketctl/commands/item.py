"""Command group: item add/list/get/update/patch/remove."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bucketctl.commands._base import BucketGroup

if TYPE_CHECKING:
    from bucketctl.commands._context import AppContext


@click.group(
    cls=BucketGroup,
    examples="""\
  bucketctl item add 1 --name "Invoice"
  bucketctl item list 1
  bucketctl item get 1 2
  bucketctl item update 1 9 --name "Receipt" --description "March"
  bucketctl item patch 1 9 --description "April"
  bucketctl item remove 1 9""",
)
def item() -> None:
    """Create, query, update, and remove items inside a bucket."""


@item.command()
@click.argument("bucket_id", type=int)
@click.option("--name", default=None, help="Item name.")
@click.option("--description", default=None, help="Item description.")
@click.pass_obj
def add(app: AppContext, bucket_id: int, name: str | None, description: str | None) -> None:
    """Create an item in BUCKET_ID."""
    from bucketctl.services.messages import AddItem

    app.emit(app.send(AddItem(bucket_id=bucket_id, name=name, description=description)))


@item.command(name="list")
@click.argument("bucket_id", type=int)
@click.pass_obj
def list_cmd(app: AppContext, bucket_id: int) -> None:
    """List the items of BUCKET_ID in insertion order."""
    from bucketctl.services.messages import GetItems

    app.emit(app.send(GetItems(bucket_id=bucket_id)))


@item.command()
@click.argument("bucket_id", type=int)
@click.argument("item_id", type=int)
@click.pass_obj
def get(app: AppContext, bucket_id: int, item_id: int) -> None:
    """Show one item."""
    from bucketctl.services.messages import GetItem

    app.emit(app.send(GetItem(bucket_id=bucket_id, item_id=item_id)))


@item.command()
@click.argument("bucket_id", type=int)
@click.argument("item_id", type=int)
@click.option("--name", default=None, help="Item name.")
@click.option("--description", default=None, help="Item description.")
@click.pass_obj
def update(
    app: AppContext,
    bucket_id: int,
    item_id: int,
    name: str | None,
    description: str | None,
) -> None:
    """Replace an item's fields, creating it under ITEM_ID if absent.

    Omitted options reset the field to empty.
    """
    from bucketctl.services.messages import UpdateItem

    app.emit(
        app.send(
            UpdateItem(bucket_id=bucket_id, item_id=item_id, name=name, description=description)
        )
    )


@item.command()
@click.argument("bucket_id", type=int)
@click.argument("item_id", type=int)
@click.option("--name", default=None, help="New item name.")
@click.option("--description", default=None, help="New item description.")
@click.pass_obj
def patch(
    app: AppContext,
    bucket_id: int,
    item_id: int,
    name: str | None,
    description: str | None,
) -> None:
    """Change only the supplied fields of an existing item."""
    from bucketctl.services.messages import GetItem, UpdateItem

    if name is None and description is None:
        click.echo("No changes specified. Use --help for options.", err=True)
        raise SystemExit(1)

    current = app.send(GetItem(bucket_id=bucket_id, item_id=item_id))
    if not current.ok:
        app.emit(current)
        return

    stored = current.data["item"]
    app.emit(
        app.send(
            UpdateItem(
                bucket_id=bucket_id,
                item_id=item_id,
                name=name if name is not None else stored["name"],
                description=description if description is not None else stored["description"],
            )
        )
    )


@item.command()
@click.argument("bucket_id", type=int)
@click.argument("item_id", type=int)
@click.pass_obj
def remove(app: AppContext, bucket_id: int, item_id: int) -> None:
    """Delete an item (no error if the bucket or item is absent)."""
    from bucketctl.services.messages import RemoveItem

    app.emit(app.send(RemoveItem(bucket_id=bucket_id, item_id=item_id)))
