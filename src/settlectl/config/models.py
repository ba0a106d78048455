"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, settlectl.toml only contains
overrides. A fresh checkout needs no config file at all.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, PositiveFloat, PositiveInt

# --- settlectl.toml sections ---


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    path: Path = Path(".settlectl") / "settlectl.db"
    busy_timeout_seconds: PositiveFloat = 30.0


class ReportsConfig(BaseModel):
    """[reports] section."""

    model_config = {"frozen": True}

    default_limit: PositiveInt = 2
    date_format: str = "%m-%d-%Y"
