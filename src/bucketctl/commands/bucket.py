"""Command group: bucket add/list/get/update/remove."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bucketctl.commands._base import BucketGroup

if TYPE_CHECKING:
    from bucketctl.commands._context import AppContext


@click.group(
    cls=BucketGroup,
    examples="""\
  bucketctl bucket add --name "Inbox" --size 5
  bucketctl bucket list --order size:desc --where "size>=3" --limit 20
  bucketctl bucket get 1
  bucketctl bucket update 7 --name "Archive" --size 0
  bucketctl bucket remove 7""",
)
def bucket() -> None:
    """Create, query, update, and remove buckets."""


@bucket.command()
@click.option("--name", default=None, help="Bucket name.")
@click.option("--description", default=None, help="Bucket description.")
@click.option("--size", type=int, default=0, show_default=True, help="Declared capacity.")
@click.pass_obj
def add(app: AppContext, name: str | None, description: str | None, size: int) -> None:
    """Create a bucket."""
    from bucketctl.services.messages import AddBucket

    app.emit(app.send(AddBucket(name=name, description=description, size=size)))


@bucket.command(
    name="list",
    examples="""\
  bucketctl bucket list
  bucketctl bucket list --limit 5 --offset 10
  bucketctl bucket list --order "size:desc,name"
  bucketctl bucket list --where "name~report" --where "size>0" """,
)
@click.option("--limit", type=click.IntRange(min=0), default=None, help="Maximum buckets.")
@click.option("--offset", type=click.IntRange(min=0), default=None, help="Buckets to skip.")
@click.option("--order", "ordering", default=None, help="Sort order: field[:asc|desc],...")
@click.option("--where", multiple=True, help="Filter: field<op>value (= != < <= > >= ~).")
@click.pass_obj
def list_cmd(
    app: AppContext,
    limit: int | None,
    offset: int | None,
    ordering: str | None,
    where: tuple[str, ...],
) -> None:
    """List buckets with their items."""
    from bucketctl.services.messages import GetBuckets

    query_config = app.settings.query
    if limit is None:
        limit = query_config.default_limit
    if limit > query_config.max_limit:
        raise click.BadParameter(
            f"must be at most {query_config.max_limit}", param_hint="'--limit'"
        )

    app.emit(app.send(GetBuckets(filter=where, limit=limit, offset=offset, ordering=ordering)))


@bucket.command()
@click.argument("bucket_id", type=int)
@click.pass_obj
def get(app: AppContext, bucket_id: int) -> None:
    """Show one bucket with its items."""
    from bucketctl.services.messages import GetBucket

    app.emit(app.send(GetBucket(bucket_id=bucket_id)))


@bucket.command()
@click.argument("bucket_id", type=int)
@click.option("--name", default=None, help="Bucket name.")
@click.option("--description", default=None, help="Bucket description.")
@click.option("--size", type=int, default=0, show_default=True, help="Declared capacity.")
@click.pass_obj
def update(
    app: AppContext,
    bucket_id: int,
    name: str | None,
    description: str | None,
    size: int,
) -> None:
    """Replace a bucket's fields, creating it under BUCKET_ID if absent.

    Omitted options reset the field to its default.
    """
    from bucketctl.services.messages import UpdateBucket

    app.emit(
        app.send(
            UpdateBucket(bucket_id=bucket_id, name=name, description=description, size=size)
        )
    )


@bucket.command()
@click.argument("bucket_id", type=int)
@click.pass_obj
def remove(app: AppContext, bucket_id: int) -> None:
    """Delete a bucket and its items (no error if absent)."""
    from bucketctl.services.messages import RemoveBucket

    app.emit(app.send(RemoveBucket(bucket_id=bucket_id)))
