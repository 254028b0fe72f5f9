"""Locate ``bucketctl.toml``.

Lookup order: the file named by ``BUCKETCTL_CONFIG``, else the nearest
``bucketctl.toml`` in the start directory or any of its parents.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "bucketctl.toml"
CONFIG_ENV_VAR = "BUCKETCTL_CONFIG"


def _search_dirs(start: Path) -> Iterator[Path]:
    here = start.resolve()
    yield here
    yield from here.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file to use, or None when there is none.

    An env override pointing at a missing file disables discovery
    instead of falling back to walk-up.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    for directory in _search_dirs(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
