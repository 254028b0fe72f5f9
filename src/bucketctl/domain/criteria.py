"""Ordering and filtering descriptors for bulk queries.

Descriptors are plain data: a field name plus a direction (ordering) or
a field name plus a comparator and value (filtering). Storage adapters
interpret them; nothing here evaluates arbitrary expressions.

Every field is validated against the target entity's ``FIELDS`` map at
construction, so a bad descriptor fails before any query runs.

Textual forms (used by transports)::

    Ordering.parse(Bucket, "size:desc,name")
    Condition.parse(Bucket, "size>=3")
    Condition.parse(Bucket, "name~report")
"""

from __future__ import annotations

import operator as _op
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Protocol

from bucketctl.domain.errors import (
    InvalidDirectionError,
    InvalidOperatorError,
    InvalidPropertyError,
    InvalidValueError,
)


class Entity(Protocol):
    FIELDS: dict[str, type]


def _check_field(entity: type[Entity], field: str) -> str:
    if field not in entity.FIELDS:
        raise InvalidPropertyError(entity.__name__, field, sorted(entity.FIELDS))
    return field


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


class Direction(StrEnum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def from_value(cls, value: str | Direction) -> Direction:
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidDirectionError(str(value)) from None


@dataclass(frozen=True)
class OrderClause:
    """Sort by ``field`` in ``direction``."""

    field: str
    direction: Direction = Direction.ASC


class Ordering:
    """Validated, ordered list of sort clauses for one entity type.

    An empty ordering means "unspecified order".
    """

    def __init__(
        self,
        entity: type[Entity],
        clauses: Iterable[OrderClause | tuple[str, str | Direction] | str] = (),
    ) -> None:
        self.entity = entity
        built: list[OrderClause] = []
        for clause in clauses:
            if isinstance(clause, OrderClause):
                field, direction = clause.field, clause.direction
            elif isinstance(clause, str):
                field, direction = clause, Direction.ASC
            else:
                field, direction = clause
            built.append(
                OrderClause(_check_field(entity, field), Direction.from_value(direction))
            )
        self.clauses: tuple[OrderClause, ...] = tuple(built)

    @classmethod
    def parse(cls, entity: type[Entity], text: str) -> Ordering:
        """Parse ``"field[:dir],field[:dir]"``; direction defaults to ascending."""
        clauses: list[tuple[str, str]] = []
        for part in text.split(","):
            part = part.strip()
            if not part:
                continue
            field, _, direction = part.partition(":")
            clauses.append((field.strip(), direction or Direction.ASC))
        return cls(entity, clauses)

    def __bool__(self) -> bool:
        return bool(self.clauses)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ordering):
            return NotImplemented
        return self.entity is other.entity and self.clauses == other.clauses

    def __repr__(self) -> str:
        body = ", ".join(f"{c.field}:{c.direction}" for c in self.clauses)
        return f"Ordering({self.entity.__name__}, [{body}])"


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------


class Operator(StrEnum):
    EQ = "eq"
    NE = "ne"
    LT = "lt"
    LE = "le"
    GT = "gt"
    GE = "ge"
    CONTAINS = "contains"


# Longest symbols first so "<=" wins over "<".
_SYMBOLS: dict[str, Operator] = {
    "!=": Operator.NE,
    "<=": Operator.LE,
    ">=": Operator.GE,
    "=": Operator.EQ,
    "<": Operator.LT,
    ">": Operator.GT,
    "~": Operator.CONTAINS,
}

_CONDITION_RE = re.compile(
    r"^\s*(?P<field>[A-Za-z_][A-Za-z0-9_]*)\s*(?P<op>!=|<=|>=|=|<|>|~)\s*(?P<value>.*?)\s*$"
)

_COMPARATORS: dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.EQ: _op.eq,
    Operator.NE: _op.ne,
    Operator.LT: _op.lt,
    Operator.LE: _op.le,
    Operator.GT: _op.gt,
    Operator.GE: _op.ge,
    Operator.CONTAINS: lambda left, right: right in left,
}


def _coerce(field: str, expected: type, value: Any) -> Any:
    if value is None or isinstance(value, expected):
        return value
    if expected is int and isinstance(value, float) and not value.is_integer():
        raise InvalidValueError(field, value, expected.__name__)
    try:
        return expected(value)
    except (TypeError, ValueError):
        raise InvalidValueError(field, value, expected.__name__) from None


@dataclass(frozen=True)
class Condition:
    """``field <operator> value`` against one entity type."""

    field: str
    operator: Operator
    value: Any

    @classmethod
    def of(
        cls, entity: type[Entity], field: str, operator: str | Operator, value: Any
    ) -> Condition:
        _check_field(entity, field)
        try:
            op = Operator(str(operator).lower())
        except ValueError:
            raise InvalidOperatorError(str(operator), [o.value for o in Operator]) from None
        expected = entity.FIELDS[field]
        if op is Operator.CONTAINS and expected is not str:
            raise InvalidOperatorError(op.value, [o.value for o in Operator if o != op])
        return cls(field, op, _coerce(field, expected, value))

    @classmethod
    def parse(cls, entity: type[Entity], text: str) -> Condition:
        match = _CONDITION_RE.match(text)
        if match is None:
            raise InvalidOperatorError(text, list(_SYMBOLS))
        return cls.of(entity, match["field"], _SYMBOLS[match["op"]], match["value"])

    def matches(self, candidate: Any) -> bool:
        actual = getattr(candidate, self.field)
        if actual is None or self.value is None:
            if self.operator is Operator.EQ:
                return actual is self.value
            if self.operator is Operator.NE:
                return actual is not self.value
            return False
        return _COMPARATORS[self.operator](actual, self.value)


class Filter:
    """Conjunction of conditions. An empty filter matches every record."""

    def __init__(self, entity: type[Entity], conditions: Iterable[Condition] = ()) -> None:
        self.entity = entity
        self.conditions: tuple[Condition, ...] = tuple(conditions)
        for condition in self.conditions:
            _check_field(entity, condition.field)

    @classmethod
    def parse(cls, entity: type[Entity], texts: Iterable[str]) -> Filter:
        return cls(entity, [Condition.parse(entity, text) for text in texts if text.strip()])

    @classmethod
    def match_all(cls, entity: type[Entity]) -> Filter:
        return cls(entity)

    def matches(self, candidate: Any) -> bool:
        return all(condition.matches(candidate) for condition in self.conditions)

    def __bool__(self) -> bool:
        return bool(self.conditions)

    def __repr__(self) -> str:
        body = ", ".join(f"{c.field} {c.operator} {c.value!r}" for c in self.conditions)
        return f"Filter({self.entity.__name__}, [{body}])"
