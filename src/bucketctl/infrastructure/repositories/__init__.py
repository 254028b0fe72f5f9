"""Repository implementations over the SQLite database."""

from bucketctl.infrastructure.repositories.bucket import SqlBucketRepository

__all__ = ["SqlBucketRepository"]
