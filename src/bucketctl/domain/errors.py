"""Error taxonomy for the bucket aggregate and its query descriptors.

Every failure the core can produce derives from :class:`BucketctlError`.
Each subclass carries a stable ``code`` and a ``status`` hint so that
transports can classify failures without inspecting messages:

- :class:`DomainError`: aggregate invariant violated at the point of mutation.
- :class:`NotFoundError`: a required bucket or item is absent.
- :class:`OrderingError`: a query descriptor names an unknown field,
  direction, or comparator.
- :class:`ConflictError`: the request contradicts current aggregate state.

Storage faults are deliberately absent: they propagate unmodified.
"""

from __future__ import annotations

from typing import Any, ClassVar


class BucketctlError(Exception):
    """Base exception for every classified failure."""

    code: ClassVar[str] = "ERROR"
    status: ClassVar[int] = 500

    def __init__(self, message: str, detail: dict[str, Any] | None = None) -> None:
        self.message = message
        self.detail = detail or {}
        super().__init__(message)


# --- Domain invariants ---


class DomainError(BucketctlError):
    """An aggregate invariant was violated."""

    code = "DOMAIN_ERROR"
    status = 409


class InvalidSizeError(DomainError):
    """Raised when a bucket size would become negative."""

    code = "INVALID_SIZE"

    def __init__(self, size: int) -> None:
        super().__init__(f"Bucket size cannot be negative: {size}", {"size": size})


# --- Not found ---


class NotFoundError(BucketctlError):
    """A required entity does not exist."""

    code = "NOT_FOUND"
    status = 404


class BucketNotFoundError(NotFoundError):
    code = "BUCKET_NOT_FOUND"

    def __init__(self, bucket_id: int) -> None:
        super().__init__(f"No bucket found with ID: {bucket_id}", {"bucket_id": bucket_id})


class ItemNotFoundError(NotFoundError):
    code = "ITEM_NOT_FOUND"

    def __init__(self, bucket_id: int, item_id: int) -> None:
        super().__init__(
            f"No item found with ID: {item_id} in bucket {bucket_id}",
            {"bucket_id": bucket_id, "item_id": item_id},
        )


# --- Ordering / filtering ---


class OrderingError(BucketctlError):
    """A query descriptor is malformed."""

    code = "INVALID_ORDERING"
    status = 400


class InvalidPropertyError(OrderingError):
    code = "INVALID_PROPERTY"

    def __init__(self, entity: str, field: str, allowed: list[str]) -> None:
        super().__init__(
            f"{entity} has no property {field!r}. Allowed: {allowed}",
            {"entity": entity, "field": field, "allowed": allowed},
        )


class InvalidDirectionError(OrderingError):
    code = "INVALID_DIRECTION"

    def __init__(self, direction: str) -> None:
        super().__init__(
            f"Invalid ordering direction: {direction!r}. Allowed: ['asc', 'desc']",
            {"direction": direction},
        )


class InvalidOperatorError(OrderingError):
    code = "INVALID_OPERATOR"

    def __init__(self, operator: str, allowed: list[str]) -> None:
        super().__init__(
            f"Invalid filter operator: {operator!r}. Allowed: {allowed}",
            {"operator": operator, "allowed": allowed},
        )


class InvalidValueError(OrderingError):
    code = "INVALID_VALUE"

    def __init__(self, field: str, value: Any, expected: str) -> None:
        super().__init__(
            f"Value {value!r} for {field!r} is not a valid {expected}",
            {"field": field, "value": value, "expected": expected},
        )


# --- Conflicts ---


class ConflictError(BucketctlError):
    """The request conflicts with the current state of the aggregate."""

    code = "CONFLICT"
    status = 409


class BucketFullError(ConflictError):
    """Raised when adding an item to a bucket with no remaining size."""

    code = "BUCKET_FULL"

    def __init__(self, bucket_id: int, size: int) -> None:
        super().__init__(
            f"Bucket {bucket_id} has no remaining capacity (size={size})",
            {"bucket_id": bucket_id, "size": size},
        )
