"""Human/JSON output helpers.

The CLI renders ServiceResult for humans (one line per bucket or item)
or machines (--json dumps the whole result).
"""

from __future__ import annotations

import json as _json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from bucketctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Rendering flags taken from the root CLI options."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def _describe(record: dict[str, Any]) -> str:
    parts = [f"#{record.get('id')}"]
    for key in ("name", "size", "description"):
        value = record.get(key)
        if value is not None and value != "":
            parts.append(f"{key}={value}")
    if "items" in record:
        parts.append(f"items={len(record['items'])}")
    return " ".join(parts)


def _format_data_human(data: dict[str, Any]) -> str:
    """Format result data: records one per line, other keys as key-value pairs."""
    lines: list[str] = []
    for key, value in data.items():
        if key in ("bucket", "item") and isinstance(value, dict):
            lines.append(f"  {key}: {_describe(value)}")
            for child in value.get("items", []):
                lines.append(f"    - {_describe(child)}")
        elif key in ("buckets", "items") and isinstance(value, list):
            lines.append(f"  {key}:")
            lines.extend(f"    - {_describe(record)}" for record in value)
        elif value is not None:
            lines.append(f"  {key}: {value}")
    return "\n".join(lines)


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    if not result.ok:
        if result.error is None:
            return f"ERROR: {result.op}: Unknown error"
        return f"ERROR: {result.op}: {result.error.message} ({result.error.code})"

    parts = [f"OK: {result.op}"]
    if result.data and not settings.quiet:
        parts.append(_format_data_human(result.data))
    if settings.verbose and result.meta:
        parts.append(f"  meta: {_json.dumps(result.meta, separators=(',', ':'))}")
    return "\n".join(parts)
