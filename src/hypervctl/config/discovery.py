"""Locating ``hypervctl.toml``.

``HYPERVCTL_CONFIG`` names the file outright; otherwise the nearest
``hypervctl.toml`` in the working directory or one of its parents is used.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "hypervctl.toml"
CONFIG_ENV_VAR = "HYPERVCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start*, or None.

    A ``HYPERVCTL_CONFIG`` value that is not an existing file disables
    the directory search.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        named = Path(override)
        return named if named.is_file() else None

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
