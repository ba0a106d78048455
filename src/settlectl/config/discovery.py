"""Locate the settlectl.toml in effect for a working directory.

``SETTLECTL_CONFIG`` names a file explicitly; otherwise the nearest
``settlectl.toml`` in the directory or one of its ancestors wins. The
file's directory becomes the settings root that the database path is
resolved against.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "settlectl.toml"
CONFIG_ENV_VAR = "SETTLECTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file for *start* (default: cwd), or None.

    An explicit ``SETTLECTL_CONFIG`` that points at a missing file yields
    None rather than falling back to the walk-up search.
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
