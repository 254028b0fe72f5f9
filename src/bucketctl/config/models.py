"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, bucketctl.toml only contains overrides.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

# --- bucketctl.toml sections ---


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    # Relative paths resolve against the project root.
    path: Path = Path(".bucketctl/bucketctl.db")


class QueryConfig(BaseModel):
    """[query] section."""

    model_config = {"frozen": True}

    default_limit: int = Field(default=10, ge=1)
    max_limit: int = Field(default=100, ge=1)

