"""Handler telemetry: timing spans collected while ``--verbose`` is on.

A handler decorated with :func:`traced` opens a root span; code inside it
may open nested spans with :func:`trace_span`. When the handler returns,
the span tree is attached to ``ServiceResult.meta["telemetry"]`` and one
``span.complete`` event is logged. With telemetry off, each call costs a
single ContextVar lookup. Spans observe a handler; they never change its
outcome.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec

import structlog

from bucketctl.services.result import ServiceResult

_enabled: ContextVar[bool] = ContextVar("bucketctl_telemetry", default=False)
_current_span: ContextVar[Span | None] = ContextVar("bucketctl_span", default=None)

log = structlog.get_logger("bucketctl.telemetry")


@dataclass
class Span:
    """One timed region, possibly containing nested regions."""

    name: str
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    started_ns: int = field(default_factory=time.perf_counter_ns, repr=False)
    finished_ns: int | None = field(default=None, repr=False)

    @property
    def elapsed_ms(self) -> float:
        """Wall time in milliseconds; 0.0 while the span is still open."""
        if self.finished_ns is None:
            return 0.0
        return (self.finished_ns - self.started_ns) / 1_000_000

    def child(self, name: str) -> Span:
        span = Span(name)
        self.children.append(span)
        return span

    def finish(self) -> None:
        if self.finished_ns is None:
            self.finished_ns = time.perf_counter_ns()

    def annotate(self, **values: Any) -> None:
        self.annotations.update(values)

    def as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.elapsed_ms, 2)}
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        if self.children:
            data["children"] = [child.as_dict() for child in self.children]
        return data


@contextmanager
def _activate(span: Span) -> Iterator[Span]:
    token = _current_span.set(span)
    try:
        yield span
    finally:
        span.finish()
        _current_span.reset(token)


@contextmanager
def trace_span(name: str) -> Iterator[Span | None]:
    """Open a span nested in the active one.

    Yields None when telemetry is off or no handler span is active.
    """
    parent = _current_span.get() if _enabled.get() else None
    if parent is None:
        yield None
        return
    with _activate(parent.child(name)) as span:
        yield span


_P = ParamSpec("_P")


def traced(
    func: Callable[_P, Awaitable[ServiceResult]],
) -> Callable[_P, Awaitable[ServiceResult]]:
    """Time an async handler and attach its span tree to the result."""

    @functools.wraps(func)
    async def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> ServiceResult:
        if not _enabled.get():
            return await func(*args, **kwargs)

        root = Span(func.__qualname__)
        ok = False
        try:
            with _activate(root):
                result = await func(*args, **kwargs)
            ok = result.ok
        finally:
            log.debug(
                "span.complete",
                span_name=root.name,
                duration_ms=round(root.elapsed_ms, 2),
                ok=ok,
                children=len(root.children),
            )
        meta = {**(result.meta or {}), "telemetry": root.as_dict()}
        return result.model_copy(update={"meta": meta})

    return wrapper


def enable_telemetry() -> None:
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)

